"""
Data Normalization Module

Centralized functions to reconcile raw table rows into our canonical shape.
The source tables were migrated several times and each run named columns a
little differently (num_boletin / id_boletin / n_boletin, partido /
partido_politico, ...). Everything read from the database goes through
normalize_row() before any other processing.

Usage:
    from observatorio.database.normalization import normalize_table, normalize_party

    rows = normalize_table(raw_rows)
    party = normalize_party(row.get("partido"))
"""
from typing import Optional, Dict, Any, Iterable, List, Mapping, NamedTuple
import json


# ============================================================================
# Column Alias Resolution
# ============================================================================

class FieldAlias(NamedTuple):
    """
    Where a canonical column can come from.

    Attributes:
        canonical: Name every downstream consumer reads
        sources: Raw column names, highest priority first
        skip_null: If True, a source holding None is skipped and the next
            one is tried
        skip_blank: Like skip_null, but "" is skipped too

    With neither flag the first source present wins whatever its value.
    """
    canonical: str
    sources: tuple
    skip_null: bool = False
    skip_blank: bool = False


FIELD_ALIASES: List[FieldAlias] = [
    FieldAlias("n_boletin", ("num_boletin", "id_boletin", "n°_boletin", "n_boletin"), skip_null=True),
    FieldAlias("partido", ("partido", "partido_politico")),
    FieldAlias("fecha_de_ingreso", ("fecha_de_ingreso", "fecha_ingreso"), skip_blank=True),
    FieldAlias("tipo_de_proyecto", ("tipo_de_proyecto", "tipo_iniciativa", "tipo_proyecto")),
    FieldAlias("etapa_del_proyecto", ("etapa_del_proyecto", "etapa")),
    FieldAlias("estado_del_proyecto_de_ley", ("estado_del_proyecto_de_ley", "estado_proyecto_ley")),
    FieldAlias("comision_inicial", ("comision_inicial", "comision")),
]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _resolve_alias(row: Mapping[str, Any], alias: FieldAlias) -> Optional[str]:
    """Return the raw column that feeds alias.canonical, or None."""
    for source in alias.sources:
        if source not in row:
            continue
        if alias.skip_null and row[source] is None:
            continue
        if alias.skip_blank and _is_blank(row[source]):
            continue
        return source
    return None


def normalize_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalize column names of a single raw row.

    Canonical columns are filled from their aliases; every other column is
    passed through untouched. The input row is not modified.

    Args:
        row: Raw row from any of the four source tables

    Returns:
        New dict with canonical column names populated

    Examples:
        >>> normalize_row({"num_boletin": "100-07", "titulo": "x"})
        {"num_boletin": "100-07", "titulo": "x", "n_boletin": "100-07"}
        >>> normalize_row({"partido_politico": "RN"})["partido"]
        "RN"
    """
    normalized = dict(row)

    for alias in FIELD_ALIASES:
        source = _resolve_alias(row, alias)
        if source is not None:
            normalized[alias.canonical] = row[source]

    return normalized


def normalize_table(rows: Optional[Iterable[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    """Normalize every row of a raw table (None is an empty table)."""
    return [normalize_row(row) for row in rows or []]


# ============================================================================
# Party Normalization
# ============================================================================

NO_PARTY = "Sin Partido"

# Full party name -> abbreviation
PARTY_MAPPINGS = {
    "Unión Demócrata Independiente": "UDI",
    "Renovación Nacional": "RN",
    "Democracia Cristiana": "DC",
    "Partido Socialista": "PS",
    "Partido Por la Democracia": "PPD",
    "Partido Radical Social Demócrata": "PRSD",
    "Partido Comunista": "PC",
    "Evolución Política": "Evópoli",
    "Partido Republicano de Chile": "Republicanos",
    "Independiente": "IND",
    "Independientes": "IND",
}


def normalize_party(party: Optional[str]) -> str:
    """
    Normalize party affiliation to its standard abbreviation.

    Args:
        party: Raw party string (e.g., "Renovación Nacional", "UDI")

    Returns:
        Abbreviation, "Sin Partido" for missing values, or the trimmed
        input when the party is not one we know

    Examples:
        >>> normalize_party("Unión Demócrata Independiente")
        "UDI"
        >>> normalize_party(None)
        "Sin Partido"
        >>> normalize_party("Partido Liberal")
        "Partido Liberal"
    """
    if not party or not party.strip():
        return NO_PARTY

    party_clean = party.strip()

    # Direct lookup
    if party_clean in PARTY_MAPPINGS:
        return PARTY_MAPPINGS[party_clean]

    # Keyword lookup, order matters
    upper = party_clean.upper()
    if "UDI" in upper:
        return "UDI"
    if "RENOVACION" in upper or "RENOVACIÓN" in upper or upper == "RN":
        return "RN"
    if "SOCIALISTA" in upper or upper == "PS":
        return "PS"
    if "RADICAL" in upper:
        return "PRSD"
    if ("DEMOCRACIA" in upper and "CRISTIANA" in upper) or upper == "DC":
        return "DC"
    if "COMUNISTA" in upper or upper == "PC":
        return "PC"
    if "INDEPENDIENTE" in upper:
        return "IND"
    if "REPUBLICANO" in upper:
        return "Republicanos"

    return party_clean


DEFAULT_PARTY_COLOR = "#95A5A6"

PARTY_COLORS = {
    "UDI": "#1B3A8C",
    "RN": "#2E86C1",
    "DC": "#27AE60",
    "PS": "#E74C3C",
    "PPD": "#F39C12",
    "PRSD": "#8E44AD",
    "PC": "#C0392B",
    "Evópoli": "#3498DB",
    "Republicanos": "#D35400",
    "IND": "#95A5A6",
    NO_PARTY: "#7F8C8D",
}


def get_party_color(party: Optional[str]) -> str:
    """Get the hex colour of a party abbreviation (grey if unknown)."""
    return PARTY_COLORS.get(party or "", DEFAULT_PARTY_COLOR)


# ============================================================================
# Topic Tags
# ============================================================================

def parse_tags(value: Any) -> List[str]:
    """
    Parse the tags_temas column into a list of tags.

    The analysis table stored tags as a JSON array string, a plain array or
    a comma separated string depending on the run. All three are accepted.

    Args:
        value: Raw column value

    Returns:
        List of stripped, non-empty tags ([] for anything unusable)

    Examples:
        >>> parse_tags('["seguridad", "penal"]')
        ["seguridad", "penal"]
        >>> parse_tags("seguridad, penal")
        ["seguridad", "penal"]
        >>> parse_tags(None)
        []
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        items = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            parsed = json.loads(text)
        except ValueError:
            items = text.split(",")
        else:
            if isinstance(parsed, list):
                items = parsed
            elif isinstance(parsed, str):
                items = parsed.split(",")
            else:
                # Objects, numbers and booleans are not tag encodings
                return []
    else:
        return []

    tags = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip()
        if tag:
            tags.append(tag)
    return tags
