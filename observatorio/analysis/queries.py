"""
Query helpers.

Projections computed on demand from the processed dataset. Pages call these
on every render, so they stay pure and cheap: co-author subsets, frequency
tables and the per-view aggregates (ally and party rankings, theme, status
and year counts, laws, featured bills, search).
"""
from datetime import date
from typing import Dict, Hashable, Iterable, List, NamedTuple, Optional, Sequence

from observatorio.analysis.legislative import (
    Etapa,
    categorize_commission,
    is_success,
    map_stage_label,
)
from observatorio.config.constants import FEATURED_COUNT, UNKNOWN_COMMISSION
from observatorio.database.normalization import get_party_color, normalize_party
from observatorio.models.legislation import Coautor, Diputado, MocionEnriquecida


# ============================================================================
# Core Helpers
# ============================================================================

class FrequencyRow(NamedTuple):
    """One row of a frequency table."""
    name: Hashable
    count: int


def value_counts(keys: Iterable[Hashable], limit: Optional[int] = None) -> List[FrequencyRow]:
    """
    Count occurrences of each key, most frequent first.

    Ties keep the order in which keys were first seen.

    Args:
        keys: Sequence of keys (party names, categories, ...)
        limit: Keep only the top N rows

    Returns:
        List of FrequencyRow(name, count)
    """
    counts: Dict[Hashable, int] = {}
    for key in keys:
        counts[key] = counts.get(key, 0) + 1

    rows = sorted(
        (FrequencyRow(name, count) for name, count in counts.items()),
        key=lambda row: row.count,
        reverse=True,
    )
    if limit is not None:
        rows = rows[:limit]
    return rows


def get_coauthors_for_boletines(
    coautores: Iterable[Coautor],
    boletin_ids: Iterable[str],
    excluded_name: str
) -> List[Coautor]:
    """
    Co-authorship rows of the given bills, without the excluded deputy.

    Used to list everyone who signed with the target on a set of bills.
    """
    id_set = set(boletin_ids)
    return [c for c in coautores if c.n_boletin in id_set and c.diputado != excluded_name]


# ============================================================================
# Alliances
# ============================================================================

class AllyRow(NamedTuple):
    diputado: str
    partido: str
    count: int


class PartyRow(NamedTuple):
    name: str
    count: int
    color: str


def party_lookup(diputados: Iterable[Diputado]) -> Dict[str, Optional[str]]:
    """Map deputy name -> raw party (None if unknown)."""
    return {d.diputado: d.party_name for d in diputados}


def deputy_party(name: str, parties: Dict[str, Optional[str]]) -> str:
    """Normalized party of a deputy; deputies without a row have no party."""
    return normalize_party(parties.get(name))


def ally_ranking(
    coautores: Iterable[Coautor],
    boletin_ids: Iterable[str],
    found_name: str,
    diputados: Iterable[Diputado],
    limit: Optional[int] = None
) -> List[AllyRow]:
    """
    Rank the target's co-authors by number of shared bills.

    Args:
        coautores: All co-authorship rows
        boletin_ids: Target bill ids
        found_name: Target's resolved name (excluded)
        diputados: Deputy rows, to resolve parties
        limit: Keep only the top N allies

    Returns:
        AllyRow(diputado, partido, count), most frequent first
    """
    parties = party_lookup(diputados)
    coauthors = get_coauthors_for_boletines(coautores, boletin_ids, found_name)
    return [
        AllyRow(row.name, deputy_party(row.name, parties), row.count)
        for row in value_counts((c.diputado for c in coauthors), limit=limit)
    ]


def party_ranking(allies: Iterable[AllyRow]) -> List[PartyRow]:
    """Sum ally co-authorships per party, most frequent first."""
    totals: Dict[str, int] = {}
    for ally in allies:
        totals[ally.partido] = totals.get(ally.partido, 0) + ally.count

    rows = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [PartyRow(name, count, get_party_color(name)) for name, count in rows]


# ============================================================================
# Counts
# ============================================================================

def theme_counts(mociones: Iterable[MocionEnriquecida]) -> List[FrequencyRow]:
    return value_counts(categorize_commission(m.comision_inicial).value for m in mociones)


def status_counts(mociones: Iterable[MocionEnriquecida], limit: Optional[int] = None) -> List[FrequencyRow]:
    """Bills per legal status (bills without status are skipped)."""
    return value_counts(
        (m.estado_del_proyecto_de_ley for m in mociones if m.estado_del_proyecto_de_ley),
        limit=limit,
    )


def commission_counts(mociones: Iterable[MocionEnriquecida], limit: Optional[int] = 10) -> List[FrequencyRow]:
    """Bills per initial commission ("Desconocida" when missing)."""
    return value_counts((m.comision_inicial or UNKNOWN_COMMISSION for m in mociones), limit=limit)


def top_commission(mociones: Iterable[MocionEnriquecida]) -> str:
    """Most frequent initial commission ("Desconocida" if there are no bills)."""
    top = commission_counts(mociones, limit=1)
    return top[0].name if top else UNKNOWN_COMMISSION


def year_counts(mociones: Iterable[MocionEnriquecida]) -> List[FrequencyRow]:
    """Bills per ingestion year, in chronological order."""
    rows = value_counts(m.anio for m in mociones if m.anio)
    return sorted(rows, key=lambda row: row.name)


def stage_distribution(mociones: Iterable[MocionEnriquecida]) -> List[FrequencyRow]:
    """Bills per progress label, most frequent first."""
    return value_counts(m.stage_label for m in mociones)


def stage_funnel(mociones: Sequence[MocionEnriquecida]) -> List[FrequencyRow]:
    """Bills per progress stage in stage order, zero counts included."""
    counts = {row.name: row.count for row in value_counts(m.stage_value for m in mociones)}
    return [FrequencyRow(map_stage_label(stage), counts.get(stage, 0)) for stage in Etapa]


# ============================================================================
# Laws
# ============================================================================

def laws(mociones: Iterable[MocionEnriquecida]) -> List[MocionEnriquecida]:
    """Bills that became law or finished processing."""
    return [m for m in mociones if is_success(m.estado_del_proyecto_de_ley)]


def average_processing_days(mociones: Iterable[MocionEnriquecida]) -> Optional[int]:
    """
    Mean days from ingestion to publication in the Diario Oficial.

    Only bills with both dates count. Returns None if there are none.
    """
    days = [
        (m.publicado_en_diario_oficial - m.fecha_de_ingreso).days
        for m in mociones
        if m.publicado_en_diario_oficial and m.fecha_de_ingreso
    ]
    if not days:
        return None
    return round(sum(days) / len(days))


# ============================================================================
# Periods and Themes
# ============================================================================

class GroupSummary(NamedTuple):
    mociones: List[MocionEnriquecida]
    total: int
    leyes: int
    tasa_exito: float


def _summarize(mociones: List[MocionEnriquecida]) -> GroupSummary:
    total = len(mociones)
    leyes = len(laws(mociones))
    tasa = leyes / total * 100 if total else 0.0
    return GroupSummary(mociones, total, leyes, tasa)


def period_summary(mociones: Iterable[MocionEnriquecida], periodo: str) -> GroupSummary:
    """Bills of one legislative period with their totals."""
    return _summarize([m for m in mociones if m.periodo == periodo])


def theme_summary(mociones: Iterable[MocionEnriquecida], categoria: str) -> GroupSummary:
    """Bills of one thematic area with their totals."""
    return _summarize([m for m in mociones if m.categoria == categoria])


# ============================================================================
# Featured Bills
# ============================================================================

def _featured_priority(mocion: MocionEnriquecida):
    score = (10 if mocion.is_ley else 0) + (5 if mocion.resumen_ejecutivo else 0)
    ingreso = mocion.fecha_de_ingreso or date.min
    return (score, ingreso)


def featured_mociones(
    mociones: Sequence[MocionEnriquecida],
    featured_ids: Sequence[str],
    count: int = FEATURED_COUNT
) -> List[MocionEnriquecida]:
    """
    Resolve the featured bills.

    Picks the configured ids in order; if some are missing from the dataset
    the remaining slots are filled with laws first, then bills with an AI
    summary, newest first.
    """
    by_id = {m.n_boletin: m for m in mociones}
    featured = [by_id[i] for i in featured_ids if i in by_id][:count]

    if len(featured) < count:
        used = {m.n_boletin for m in featured}
        extras = sorted(
            (m for m in mociones if m.n_boletin not in used),
            key=_featured_priority,
            reverse=True,
        )
        featured.extend(extras[:count - len(featured)])

    return featured


# ============================================================================
# Explorer
# ============================================================================

def filter_mociones(
    mociones: Iterable[MocionEnriquecida],
    search: Optional[str] = None,
    estado: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None
) -> List[MocionEnriquecida]:
    """
    Search and filter bills, newest first.

    Args:
        search: Case-insensitive text matched against title, boletín and AI summary
        estado: Exact legal status
        date_from: Earliest ingestion date (inclusive)
        date_to: Latest ingestion date (inclusive)
    """
    results = list(mociones)

    if search:
        query = search.lower()
        results = [
            m for m in results
            if query in (m.nombre_iniciativa or "").lower()
            or query in m.n_boletin.lower()
            or query in (m.resumen_ejecutivo or "").lower()
        ]

    if estado:
        results = [m for m in results if m.estado_del_proyecto_de_ley == estado]

    if date_from:
        results = [m for m in results if m.fecha_de_ingreso and m.fecha_de_ingreso >= date_from]
    if date_to:
        results = [m for m in results if m.fecha_de_ingreso and m.fecha_de_ingreso <= date_to]

    return sorted(results, key=lambda m: m.fecha_de_ingreso or date.min, reverse=True)
