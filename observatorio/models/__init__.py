"""Data models module."""

from observatorio.models.legislation import (
    AnalisisIA,
    Coautor,
    Diputado,
    Mocion,
    MocionEnriquecida,
)

from observatorio.models.dataset import (
    DashboardData,
    ProcessedData,
)

__all__ = [
    # Source tables
    "Mocion",
    "Coautor",
    "Diputado",
    "AnalisisIA",
    "MocionEnriquecida",
    # Dataset
    "DashboardData",
    "ProcessedData",
]
