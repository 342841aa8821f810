"""
Dataset models.

DashboardData holds the four normalized source tables as read from the
database; ProcessedData is everything derived from them for the target
deputy. Both are immutable once built.
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from observatorio.models.legislation import AnalisisIA, Coautor, Diputado, Mocion, MocionEnriquecida


class DashboardData(BaseModel):
    """The four source tables after column normalization."""
    model_config = ConfigDict(frozen=True)

    mociones: Tuple[Mocion, ...] = ()
    coautores: Tuple[Coautor, ...] = ()
    diputados: Tuple[Diputado, ...] = ()
    analisis_ia: Tuple[AnalisisIA, ...] = ()

    def counts(self) -> dict[str, int]:
        """Row count per table"""
        return {
            "mociones": len(self.mociones),
            "coautores": len(self.coautores),
            "diputados": len(self.diputados),
            "analisis_ia": len(self.analisis_ia),
        }


class ProcessedData(BaseModel):
    """
    Derived view of the target deputy's legislative record.

    Attributes:
        mociones: Target's bills enriched with year, period and AI analysis
        boletin_ids: Bill ids co-signed by the target, in co-authorship order
        found_name: Name variant used to match the target
        target_resolved: False when no known variant was found and the
            default spelling was used
        total: Number of target bills
        leyes_count: Bills that became law or finished processing
        tasa_exito: leyes_count / total as a percentage
        promedio_anual: Bills per active year, one decimal
        top_ally: Most frequent co-author other than the target
    """
    model_config = ConfigDict(frozen=True)

    mociones: Tuple[MocionEnriquecida, ...] = ()
    boletin_ids: Tuple[str, ...] = ()
    found_name: str
    target_resolved: bool = True

    total: int = 0
    leyes_count: int = 0
    tasa_exito: float = 0.0
    promedio_anual: float = 0.0
    top_ally: str = "N/A"
