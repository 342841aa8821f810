"""
Observatorio Legislativo - Main Streamlit Application

General overview of the target deputy's legislative record.
"""
import plotly.express as px
import streamlit as st

from observatorio.analysis.queries import commission_counts, status_counts, year_counts
from observatorio.config.constants import CHART_COLORS
from observatorio.ui import frequency_frame, kpi_row, page_header, render_sidebar, require_data


# ============================================================================
# Page Configuration
# ============================================================================

st.set_page_config(
    page_title="Observatorio Legislativo",
    page_icon="🏛️",
    layout="wide",
    initial_sidebar_state="expanded"
)


# ============================================================================
# Charts
# ============================================================================

def display_status_donut(mociones):
    """Display bill status distribution"""
    df = frequency_frame(status_counts(mociones, limit=8), "estado", "mociones")
    if df.empty:
        st.info("Sin estados registrados")
        return

    fig = px.pie(
        df,
        names="estado",
        values="mociones",
        hole=0.45,
        color_discrete_sequence=CHART_COLORS,
        title="Estado de los proyectos"
    )
    fig.update_layout(height=420, legend=dict(orientation="h"))
    st.plotly_chart(fig, use_container_width=True)


def display_top_commissions(mociones):
    """Display top 10 initial commissions"""
    df = frequency_frame(commission_counts(mociones, limit=10), "comision", "mociones")
    if df.empty:
        return

    fig = px.bar(
        df.iloc[::-1],
        x="mociones",
        y="comision",
        orientation="h",
        title="Comisiones de origen más frecuentes",
        labels={"mociones": "Mociones", "comision": ""},
        color_discrete_sequence=[CHART_COLORS[2]]
    )
    fig.update_layout(height=420)
    st.plotly_chart(fig, use_container_width=True)


def display_yearly_production(mociones):
    """Display bills per year"""
    df = frequency_frame(year_counts(mociones), "anio", "mociones")
    if df.empty:
        return

    fig = px.bar(
        df,
        x="anio",
        y="mociones",
        title="Producción legislativa anual",
        labels={"anio": "Año", "mociones": "Mociones"},
        color_discrete_sequence=[CHART_COLORS[0]]
    )
    fig.update_layout(height=350, xaxis=dict(type="category"))
    st.plotly_chart(fig, use_container_width=True)


# ============================================================================
# Main Application
# ============================================================================

def main():
    """Main application"""
    render_sidebar()
    state = require_data()
    data = state.data

    page_header(
        "🏛️ Análisis de Trayectoria Legislativa",
        f"Un recorrido por la actividad y efectividad de **{data.found_name}** en el Congreso Nacional."
    )

    top_ally = " ".join(data.top_ally.split(" ")[:2])
    kpi_row([
        ("Total Iniciativas", data.total, "Carrera parlamentaria"),
        ("Aprobados / Terminados", data.leyes_count, f"Tasa de éxito: {data.tasa_exito:.1f}%"),
        ("Promedio Anual", data.promedio_anual, "Mociones por año activo"),
        ("Aliado Histórico", top_ally, f"Mayor colaborador: {data.top_ally}"),
    ])

    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        display_status_donut(data.mociones)
    with col2:
        display_top_commissions(data.mociones)

    display_yearly_production(data.mociones)


if __name__ == "__main__":
    main()
