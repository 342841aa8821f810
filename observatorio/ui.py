"""
Shared Streamlit helpers for the dashboard pages.

Every page calls require_data() first: it loads the dataset once per
server process, reloads it when it gets stale, and stops the page with a
single error message if the load failed.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from observatorio.analysis.legislative import format_date_human, get_initiative_type_color
from observatorio.analysis.queries import deputy_party, get_coauthors_for_boletines
from observatorio.config.settings import configure_logging, get_settings
from observatorio.database.connection import load_dashboard_data_sync
from observatorio.database.normalization import get_party_color
from observatorio.models import Coautor, MocionEnriquecida
from observatorio.state import DashboardState, DashboardStore

DEFAULT_MAX_AGE_SECONDS = 3600


# ============================================================================
# Data Loading (cached per server process)
# ============================================================================

@st.cache_resource
def get_store() -> DashboardStore:
    """Create the dashboard store (cached for all sessions)"""
    try:
        configure_logging()
    except ValidationError:
        # Missing settings are reported by the load itself
        logging.basicConfig(level=logging.INFO)
    return DashboardStore()


def _max_age() -> int:
    try:
        return get_settings().CACHE_TTL_SECONDS
    except ValidationError:
        return DEFAULT_MAX_AGE_SECONDS


def require_data() -> DashboardState:
    """
    Get a ready dashboard state or stop the page.

    Returns:
        DashboardState with status READY
    """
    store = get_store()
    state = store.state

    if state.is_loading or state.is_stale(_max_age()):
        with st.spinner("Cargando datos legislativos..."):
            state = store.reload(load_dashboard_data_sync)

    if not state.is_ready:
        st.error(f"Error cargando datos: {state.error}")
        st.info("💡 Revisa DATABASE_URL en tu archivo .env y vuelve a cargar la página")
        if st.button("🔄 Reintentar"):
            store.clear()
            st.rerun()
        st.stop()

    if not state.data.target_resolved:
        st.warning(
            f"⚠️ No se encontró al diputado en las coautorías; "
            f"se usa el nombre por defecto '{state.data.found_name}'."
        )

    return state


# ============================================================================
# UI Components
# ============================================================================

def page_header(title: str, subtitle: str):
    st.title(title)
    st.markdown(subtitle)
    st.divider()


def kpi_row(metrics: Sequence[Tuple[str, object, Optional[str]]]):
    """Display (label, value, help) metrics side by side"""
    columns = st.columns(len(metrics))
    for col, (label, value, help_text) in zip(columns, metrics):
        with col:
            st.metric(label, value, help=help_text)


def frequency_frame(rows: Iterable, name: str = "name", count: str = "count") -> pd.DataFrame:
    """DataFrame from FrequencyRow-like tuples"""
    return pd.DataFrame([(r[0], r[1]) for r in rows], columns=[name, count])


def mociones_frame(mociones: Iterable[MocionEnriquecida]) -> pd.DataFrame:
    """Table view of bills for st.dataframe"""
    return pd.DataFrame([
        {
            "Boletín": m.n_boletin,
            "Título": m.nombre_iniciativa,
            "Ingreso": format_date_human(m.fecha_de_ingreso),
            "Estado": m.estado_del_proyecto_de_ley,
            "Etapa": m.stage_label,
            "Comisión": m.comision_inicial,
            "Tema": m.categoria.value,
            "Periodo": m.periodo,
        }
        for m in mociones
    ])


def display_mocion_card(
    mocion: MocionEnriquecida,
    coautores: Sequence[Coautor],
    found_name: str,
    parties: Dict[str, Optional[str]],
    show_summary: bool = True
):
    """Display a bill with its progress, AI analysis and co-authors"""
    badge = "🟢 Ley" if mocion.is_ley else mocion.stage_label
    with st.container():
        col1, col2 = st.columns([3, 1])

        with col1:
            st.markdown(f"### Boletín {mocion.n_boletin}")
            st.caption(mocion.nombre_iniciativa or "Sin título")

        with col2:
            st.metric("Avance", f"{mocion.stage_value}/4", help=badge)

        st.progress(mocion.stage_value / 4, text=mocion.stage_label)

        details_col1, details_col2 = st.columns(2)
        with details_col1:
            st.write("**Ingreso:**", format_date_human(mocion.fecha_de_ingreso))
            st.write("**Estado:**", mocion.estado_del_proyecto_de_ley or "N/A")
            st.write("**Tema:**", mocion.categoria.value)
        with details_col2:
            if mocion.tipo_iniciativa_ia:
                color = get_initiative_type_color(mocion.tipo_iniciativa_ia)
                st.markdown(
                    f"**Tipo IA:** <span style='color:{color}'>{mocion.tipo_iniciativa_ia}</span>",
                    unsafe_allow_html=True,
                )
            if mocion.sentimiento_score is not None:
                st.write("**Sentimiento:**", f"{mocion.sentimiento_score:+.2f}")
            if mocion.tags_temas:
                st.write("**Temas:**", ", ".join(mocion.tags_temas))

        if show_summary and mocion.resumen_ejecutivo:
            with st.expander("Resumen ejecutivo (IA)"):
                st.write(mocion.resumen_ejecutivo)

        coauthors = get_coauthors_for_boletines(coautores, [mocion.n_boletin], found_name)
        if coauthors:
            with st.expander(f"Coautores ({len(coauthors)})"):
                st.markdown(_coauthor_badges(coauthors, parties), unsafe_allow_html=True)

        st.divider()


def _coauthor_badges(coauthors: List[Coautor], parties: Dict[str, Optional[str]]) -> str:
    badges = []
    for c in coauthors:
        party = deputy_party(c.diputado, parties)
        color = get_party_color(party)
        badges.append(f"<span style='color:{color}'>●</span> {c.diputado} ({party})")
    return "<br>".join(badges)


def render_sidebar():
    """Common sidebar with data reload"""
    with st.sidebar:
        st.markdown("## 🔄 Datos")
        state = get_store().state
        if state.loaded_at:
            st.caption(f"📅 Cargados: {state.loaded_at.strftime('%d/%m/%Y %H:%M')} UTC")
        if st.button("Recargar datos"):
            get_store().clear()
            st.rerun()

        st.divider()
        st.markdown("## ℹ️ Acerca de")
        st.markdown("Análisis de la trayectoria legislativa a partir de mociones, coautorías y análisis IA.")
        st.caption("Built with Streamlit + PostgreSQL")
