"""
Dataset processor.

Turns the four normalized tables into the target deputy's processed
dataset: resolves the name the target is stored under, keeps the bills
they co-signed, merges the AI analysis onto them and computes the summary
metrics every page shows.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from observatorio.analysis.legislative import get_period, get_year, is_success
from observatorio.analysis.queries import get_coauthors_for_boletines, value_counts
from observatorio.config.constants import NO_ALLY, TARGET_VARIANTS
from observatorio.models import (
    AnalisisIA,
    Coautor,
    DashboardData,
    Mocion,
    MocionEnriquecida,
    ProcessedData,
)

logger = logging.getLogger(__name__)


def resolve_target_name(
    coautores: Iterable[Coautor],
    variants: Sequence[str] = TARGET_VARIANTS
) -> Tuple[str, bool]:
    """
    Find the spelling the target deputy is stored under.

    Args:
        coautores: Co-authorship rows
        variants: Known spellings, preferred first

    Returns:
        (name, resolved). When no variant appears in the co-authorships the
        first variant is returned with resolved=False.
    """
    names = {c.diputado for c in coautores}
    for variant in variants:
        if variant in names:
            return variant, True

    logger.warning(
        f"None of the target name variants {list(variants)} appear in coautores; "
        f"falling back to '{variants[0]}' (the dataset may attribute zero bills)"
    )
    return variants[0], False


def build_analysis_index(analisis: Iterable[AnalisisIA]) -> Dict[str, AnalisisIA]:
    """Index AI analysis rows by bill id (later rows win)."""
    index = {}
    for row in analisis:
        if row.boletin:
            index[row.boletin] = row
    return index


def enrich_mocion(mocion: Mocion, analisis: Optional[AnalisisIA]) -> MocionEnriquecida:
    """Attach year, period and AI analysis to a bill (left join)."""
    values = mocion.model_dump()
    values.update(
        anio=get_year(mocion.fecha_de_ingreso),
        periodo=get_period(mocion.fecha_de_ingreso),
        resumen_ejecutivo=analisis.resumen_ejecutivo if analisis else None,
        tipo_iniciativa_ia=analisis.tipo_iniciativa if analisis else None,
        sentimiento_score=analisis.sentimiento_score if analisis else None,
        tags_temas=list(analisis.tags_temas) if analisis else [],
    )
    return MocionEnriquecida.model_validate(values)


def _success_rate(successes: int, total: int) -> float:
    if total == 0:
        return 0.0
    return successes / total * 100


def _yearly_average(total: int, years: Iterable[Optional[int]]) -> float:
    distinct = {year for year in years if year}
    if not distinct:
        return 0.0
    return round(total / len(distinct) * 10) / 10


def process_data(
    data: DashboardData,
    variants: Sequence[str] = TARGET_VARIANTS
) -> ProcessedData:
    """
    Process the normalized tables into the target deputy's dataset.

    Steps:
        1. Resolve the target's name among the co-authorships
        2. Collect the bill ids the target co-signed
        3. Index the AI analysis by bill id
        4. Enrich each target bill (year, period, analysis)
        5. Compute totals, success rate, yearly average and top ally

    Never mutates its input; calling it twice on the same data returns
    equal results.

    Args:
        data: Normalized source tables
        variants: Known spellings of the target's name

    Returns:
        ProcessedData for the target deputy
    """
    logger.info(f"Processing {len(data.mociones)} mociones, {len(data.coautores)} coautores")

    found_name, resolved = resolve_target_name(data.coautores, variants)

    boletin_ids: List[str] = [c.n_boletin for c in data.coautores if c.diputado == found_name]
    boletin_set = set(boletin_ids)
    logger.info(f"Target found as '{found_name}' with {len(boletin_ids)} coautorías")

    analysis_index = build_analysis_index(data.analisis_ia)

    mociones = [
        enrich_mocion(m, analysis_index.get(m.n_boletin))
        for m in data.mociones
        if m.n_boletin in boletin_set
    ]
    logger.info(f"Target mociones after filtering: {len(mociones)}")

    total = len(mociones)
    leyes_count = sum(1 for m in mociones if is_success(m.estado_del_proyecto_de_ley))

    allies = value_counts(
        c.diputado for c in get_coauthors_for_boletines(data.coautores, boletin_set, found_name)
    )
    top_ally = allies[0].name if allies else NO_ALLY

    return ProcessedData(
        mociones=tuple(mociones),
        boletin_ids=tuple(boletin_ids),
        found_name=found_name,
        target_resolved=resolved,
        total=total,
        leyes_count=leyes_count,
        tasa_exito=_success_rate(leyes_count, total),
        promedio_anual=_yearly_average(total, (m.anio for m in mociones)),
        top_ally=top_ally,
    )
