"""Tests for the dataset processor."""

import logging

import pytest

from observatorio.analysis.processor import process_data, resolve_target_name
from observatorio.database.connection import build_dashboard_data
from observatorio.models import Coautor, DashboardData, Mocion

TARGET = "Jose Antonio Kast Rist"


class TestResolveTargetName:
    """Tests for resolve_target_name."""

    def test_first_variant_present(self):
        coautores = [Coautor(n_boletin="1-07", diputado="José Antonio Kast Rist")]
        assert resolve_target_name(coautores) == ("José Antonio Kast Rist", True)

    def test_variant_priority(self):
        """The earliest known variant wins when several are present."""
        coautores = [
            Coautor(n_boletin="1-07", diputado="Kast Rist Jose Antonio"),
            Coautor(n_boletin="2-07", diputado=TARGET),
        ]
        assert resolve_target_name(coautores) == (TARGET, True)

    def test_fallback_is_logged(self, caplog):
        """An unknown spelling falls back to the default and logs a warning."""
        coautores = [Coautor(n_boletin="1-07", diputado="J. A. Kast")]
        with caplog.at_level(logging.WARNING):
            name, resolved = resolve_target_name(coautores)
        assert name == TARGET
        assert resolved is False
        assert "falling back" in caplog.text


class TestProcessData:
    """Tests for process_data."""

    def test_only_target_bills(self, dashboard_data):
        """Only bills co-signed by the target are kept."""
        result = process_data(dashboard_data)
        assert {m.n_boletin for m in result.mociones} == {"100-07", "200-07", "300-07"}
        assert set(result.boletin_ids) == {"100-07", "200-07", "300-07"}
        assert all(m.n_boletin in result.boletin_ids for m in result.mociones)

    def test_boletin_ids_match_coauthorships(self, dashboard_data):
        """boletin_ids are exactly the co-authorship rows of the resolved name."""
        result = process_data(dashboard_data)
        expected = [c.n_boletin for c in dashboard_data.coautores if c.diputado == result.found_name]
        assert list(result.boletin_ids) == expected

    def test_end_to_end_published_bill(self, dashboard_data):
        """A published health bill from 2015 is enriched and counted as law."""
        result = process_data(dashboard_data)
        mocion = next(m for m in result.mociones if m.n_boletin == "100-07")
        assert mocion.anio == 2015
        assert mocion.periodo == "2014 - 2018"
        assert mocion.stage_value == 4
        assert mocion.stage_label == "Tramitación Terminada / Ley"
        assert mocion.categoria == "Salud"
        assert mocion.is_ley
        assert result.leyes_count == 1

    def test_drifted_columns(self, dashboard_data):
        """Bills stored under legacy column names are enriched too."""
        result = process_data(dashboard_data)
        mocion = next(m for m in result.mociones if m.n_boletin == "200-07")
        assert mocion.periodo == "2006 - 2010"
        assert mocion.stage_value == 2
        assert mocion.categoria == "Constitución y Justicia"

        archived = next(m for m in result.mociones if m.n_boletin == "300-07")
        assert archived.periodo == "2010 - 2014"
        assert archived.stage_value == 0

    def test_analysis_left_join(self, dashboard_data):
        """Analysis is attached by either id column; missing analysis stays null."""
        result = process_data(dashboard_data)
        by_id = {m.n_boletin: m for m in result.mociones}

        assert by_id["100-07"].tipo_iniciativa_ia == "Propositiva"
        assert by_id["100-07"].tags_temas == ["salud", "sanitario"]
        assert by_id["300-07"].sentimiento_score == -0.6
        assert by_id["300-07"].tags_temas == ["seguridad", "animales"]

        assert by_id["200-07"].resumen_ejecutivo is None
        assert by_id["200-07"].tipo_iniciativa_ia is None
        assert by_id["200-07"].sentimiento_score is None
        assert by_id["200-07"].tags_temas == []

    def test_metrics(self, dashboard_data):
        result = process_data(dashboard_data)
        assert result.found_name == TARGET
        assert result.target_resolved is True
        assert result.total == 3
        assert result.tasa_exito == pytest.approx(100 / 3)
        # Years 2015 and 2010
        assert result.promedio_anual == 1.5
        assert result.top_ally == "Ivan Moreira"

    def test_empty_dataset(self):
        """No bills means zero rates, not a division error."""
        result = process_data(DashboardData())
        assert result.total == 0
        assert result.tasa_exito == 0
        assert result.promedio_anual == 0
        assert result.top_ally == "N/A"
        assert result.target_resolved is False

    def test_bills_without_dates(self):
        """Bills without a valid date count but add no active year."""
        data = DashboardData(
            mociones=(Mocion(n_boletin="1-07", fecha_de_ingreso="no es fecha"),),
            coautores=(Coautor(n_boletin="1-07", diputado=TARGET),),
        )
        result = process_data(data)
        assert result.total == 1
        assert result.mociones[0].anio is None
        assert result.mociones[0].periodo == "Desconocido"
        assert result.promedio_anual == 0

    def test_top_ally_tie_first_seen(self):
        """Ties go to the co-author seen first."""
        data = DashboardData(
            mociones=(Mocion(n_boletin="1-07"),),
            coautores=(
                Coautor(n_boletin="1-07", diputado=TARGET),
                Coautor(n_boletin="1-07", diputado="Beatriz"),
                Coautor(n_boletin="1-07", diputado="Alberto"),
            ),
        )
        assert process_data(data).top_ally == "Beatriz"

    def test_idempotent(self, raw_tables):
        """Processing the same input twice gives equal results."""
        first = process_data(build_dashboard_data(raw_tables))
        second = process_data(build_dashboard_data(raw_tables))
        assert first == second

    def test_input_unchanged(self, dashboard_data):
        before = dashboard_data.model_dump()
        process_data(dashboard_data)
        assert dashboard_data.model_dump() == before

    def test_custom_variants(self, dashboard_data):
        """Another deputy can be analysed by passing other variants."""
        result = process_data(dashboard_data, variants=["Ena von Baer"])
        assert result.found_name == "Ena von Baer"
        assert {m.n_boletin for m in result.mociones} == {"100-07", "300-07", "400-07"}
