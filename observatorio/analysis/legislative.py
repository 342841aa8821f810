"""
Legislative classification rules.

Pure functions that turn free text from the bills table into categories:
thematic area of the initial commission, numeric progress of a bill,
legislative period and success. Every function accepts None and always
returns a defined value.
"""
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Optional, Union
import re

from observatorio.config.constants import (
    LEGISLATIVE_PERIODS,
    PERIOD_START_MONTH,
    PERIOD_UNKNOWN,
    PERIOD_OTHER,
)


DateLike = Union[str, date, datetime, None]


# ============================================================================
# Commission Categories
# ============================================================================

class Categoria(str, Enum):
    """Thematic area of a commission."""
    CONSTITUCION = "Constitución y Justicia"
    ECONOMIA = "Economía y Hacienda"
    SEGURIDAD = "Seguridad y Defensa"
    FAMILIA = "Familia y Social"
    EDUCACION = "Educación y Cultura"
    SALUD = "Salud"
    TRABAJO = "Trabajo y Previsión"
    MEDIO_AMBIENTE = "Medio Ambiente y Recursos"
    VIVIENDA = "Vivienda e Infraestructura"
    DDHH = "DD.HH. y Nacionalidad"
    GOBIERNO = "Gobierno Interior"
    OTRAS = "Otras"


# Evaluated in order; keyword groups overlap so the first match wins
COMMISSION_RULES = [
    (("constituc", "legislaci", "justicia"), Categoria.CONSTITUCION),
    (("econom", "hacienda", "presupuesto"), Categoria.ECONOMIA),
    (("seguridad", "defensa", "inteligencia"), Categoria.SEGURIDAD),
    (("familia", "mujer", "adulto mayor", "desarrollo"), Categoria.FAMILIA),
    (("educaci", "cultura", "deportes"), Categoria.EDUCACION),
    (("salud",), Categoria.SALUD),
    (("trabajo", "previsión"), Categoria.TRABAJO),
    (("ambiente", "recursos", "pesca", "agricultura", "minería"), Categoria.MEDIO_AMBIENTE),
    (("vivienda", "obras", "transporte", "telecomunicaciones"), Categoria.VIVIENDA),
    (("derechos humanos", "nacionalidad"), Categoria.DDHH),
    (("gobierno", "interior", "regional"), Categoria.GOBIERNO),
]


def categorize_commission(commission: Optional[str]) -> Categoria:
    """
    Classify a commission name into one of the twelve thematic areas.

    Examples:
        >>> categorize_commission("Comisión de Constitución, Legislación y Justicia")
        Categoria.CONSTITUCION
        >>> categorize_commission(None)
        Categoria.OTRAS
    """
    if not commission:
        return Categoria.OTRAS

    name = commission.lower()
    for keywords, categoria in COMMISSION_RULES:
        if any(keyword in name for keyword in keywords):
            return categoria

    return Categoria.OTRAS


# ============================================================================
# Legislative Progress
# ============================================================================

class Etapa(IntEnum):
    """How far a bill advanced. 0 and 4 are terminal."""
    ARCHIVADO = 0
    PRIMER_TRAMITE = 1
    SEGUNDO_TRAMITE = 2
    TERCER_TRAMITE = 3
    TERMINADA = 4


STAGE_LABELS = {
    Etapa.ARCHIVADO: "Archivado / Retirado",
    Etapa.PRIMER_TRAMITE: "Primer Trámite",
    Etapa.SEGUNDO_TRAMITE: "Segundo Trámite",
    Etapa.TERCER_TRAMITE: "Tercer Trámite / Mixta",
    Etapa.TERMINADA: "Tramitación Terminada / Ley",
}
UNKNOWN_STAGE_LABEL = "Desconocido"

# Status rules are checked before stage rules
STATUS_RULES = [
    (("publicado", "ley", "tramitación terminada"), Etapa.TERMINADA),
    (("archivado", "retirado"), Etapa.ARCHIVADO),
]
STAGE_RULES = [
    (("tercer", "mixta", "veto"), Etapa.TERCER_TRAMITE),
    (("segundo", "revisora"), Etapa.SEGUNDO_TRAMITE),
]


def map_stage_numeric(etapa: Optional[str], estado: Optional[str]) -> int:
    """
    Convert stage and status text into a progress value from 0 to 4.

    Args:
        etapa: Procedural stage text (etapa_del_proyecto)
        estado: Legal status text (estado_del_proyecto_de_ley)

    Returns:
        Etapa value; anything unmatched is a first reading (1)
    """
    stage_text = (etapa or "").lower()
    status_text = (estado or "").lower()

    for keywords, value in STATUS_RULES:
        if any(keyword in status_text for keyword in keywords):
            return value
    for keywords, value in STAGE_RULES:
        if any(keyword in stage_text for keyword in keywords):
            return value

    return Etapa.PRIMER_TRAMITE


def map_stage_label(value: int) -> str:
    """Human label of a progress value ("Desconocido" outside 0-4)."""
    return STAGE_LABELS.get(value, UNKNOWN_STAGE_LABEL)


# ============================================================================
# Success
# ============================================================================

SUCCESS_PATTERN = re.compile(r"ley|publicado|tramitación terminada", re.IGNORECASE)


def is_success(estado: Optional[str]) -> bool:
    """True if the status says the bill became law or finished processing."""
    return bool(estado) and SUCCESS_PATTERN.search(estado) is not None


# ============================================================================
# Dates and Periods
# ============================================================================

def parse_date(value: DateLike) -> Optional[date]:
    """
    Parse a date column value.

    Accepts date/datetime objects and ISO strings ("2015-06-01",
    "2015-06-01T00:00:00", "2015-06-01 00:00:00+00"). Returns None for
    anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def get_year(value: DateLike) -> Optional[int]:
    """Year of a date column value, None if missing or invalid."""
    parsed = parse_date(value)
    return parsed.year if parsed else None


def get_period(value: DateLike) -> str:
    """
    Legislative period a date belongs to.

    Chilean terms start in March, so a date in January or February of a
    term's final year still belongs to the previous term.

    Examples:
        >>> get_period("2010-02-15")
        "2006 - 2010"
        >>> get_period("2010-03-15")
        "2010 - 2014"
        >>> get_period("not a date")
        "Desconocido"
    """
    parsed = parse_date(value)
    if parsed is None:
        return PERIOD_UNKNOWN

    for start, label in LEGISLATIVE_PERIODS:
        end = start + 4
        if start <= parsed.year < end:
            return label
        if parsed.year == end and parsed.month < PERIOD_START_MONTH:
            return label

    return PERIOD_OTHER


def format_date_human(value: DateLike) -> str:
    """Format a date as DD/MM/YYYY ("N/A" if missing)."""
    parsed = parse_date(value)
    if parsed is None:
        return "N/A"
    return parsed.strftime("%d/%m/%Y")


# ============================================================================
# AI Initiative Type
# ============================================================================

INITIATIVE_TYPE_COLORS = {
    "punitiva": "#c0392b",
    "propositiva": "#2ecc71",
    "administrativa": "#3498db",
}
DEFAULT_INITIATIVE_COLOR = "#95A5A6"


def get_initiative_type_color(tipo: Optional[str]) -> str:
    """Accent colour for the AI initiative type (Punitiva, Propositiva, ...)."""
    if not tipo:
        return DEFAULT_INITIATIVE_COLOR
    text = tipo.lower()
    for keyword, color in INITIATIVE_TYPE_COLORS.items():
        if keyword in text:
            return color
    return DEFAULT_INITIATIVE_COLOR
