"""Shared pytest fixtures for Observatorio tests."""

import pytest

from observatorio.database.connection import build_dashboard_data

TARGET = "Jose Antonio Kast Rist"


@pytest.fixture
def raw_tables() -> dict:
    """Raw source tables with the column drift seen across migrations."""
    return {
        "mociones": [
            {
                "n_boletin": "100-07",
                "nombre_iniciativa": "Modifica el Código Sanitario",
                "fecha_de_ingreso": "2015-06-01",
                "estado_del_proyecto_de_ley": "Publicado en Diario Oficial",
                "comision_inicial": "Comisión de Salud",
                "publicado_en_diario_oficial": "2016-06-01",
            },
            {
                "num_boletin": "200-07",
                "nombre_iniciativa": "Aumenta penas por robo",
                "fecha_ingreso": "2010-02-15",
                "estado_proyecto_ley": "En tramitación",
                "etapa": "Segundo trámite constitucional",
                "comision": "Comisión de Constitución, Legislación y Justicia",
            },
            {
                "id_boletin": "300-07",
                "nombre_iniciativa": "Sanciona el maltrato",
                "fecha_de_ingreso": None,
                "fecha_ingreso": "2010-03-15",
                "estado_del_proyecto_de_ley": "Archivado",
                "comision_inicial": "Comisión de Seguridad Ciudadana",
            },
            {
                "n_boletin": "400-07",
                "nombre_iniciativa": "Moción ajena",
                "fecha_de_ingreso": "2012-01-10",
                "estado_del_proyecto_de_ley": "Publicado en Diario Oficial",
                "comision_inicial": "Comisión de Hacienda",
            },
        ],
        "coautores": [
            {"n_boletin": "100-07", "diputado": TARGET},
            {"n_boletin": "100-07", "diputado": "Ena von Baer"},
            {"n_boletin": "100-07", "diputado": "Ivan Moreira"},
            {"num_boletin": "200-07", "diputado": TARGET},
            {"num_boletin": "200-07", "diputado": "Ivan Moreira"},
            {"n_boletin": "300-07", "diputado": TARGET},
            {"n_boletin": "300-07", "diputado": "Ena von Baer"},
            {"n_boletin": "300-07", "diputado": "Ivan Moreira"},
            {"n_boletin": "400-07", "diputado": "Ena von Baer"},
        ],
        "diputados": [
            {"diputado": TARGET, "partido": "Unión Demócrata Independiente"},
            {"diputado": "Ivan Moreira", "partido_politico": "UDI"},
            {"diputado": "Ena von Baer", "partido": "Partido Liberal", "sexo": "F"},
        ],
        "analisis_ia": [
            {
                "id_boletin": "100-07",
                "resumen_ejecutivo": "Actualiza normas sanitarias.",
                "tipo_iniciativa": "Propositiva",
                "sentimiento_score": 0.4,
                "tags_temas": '["salud", "sanitario"]',
            },
            {
                "num_boletin": "300-07",
                "resumen_ejecutivo": None,
                "tipo_iniciativa": "Punitiva",
                "sentimiento_score": -0.6,
                "tags_temas": "seguridad, animales",
            },
        ],
    }


@pytest.fixture
def dashboard_data(raw_tables):
    """Normalized and validated DashboardData."""
    return build_dashboard_data(raw_tables)
