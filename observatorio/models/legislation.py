"""
Legislation data models.

Defines the canonical shape of the four source tables (bills,
co-authorships, deputies and AI analysis) and the enriched bill the
dashboard works with. Rows are validated right after column normalization;
unknown columns are kept as extra attributes.
"""
from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from observatorio.analysis.legislative import (
    Categoria,
    categorize_commission,
    is_success,
    map_stage_label,
    map_stage_numeric,
    parse_date,
)
from observatorio.database.normalization import parse_tags


class SourceRecord(BaseModel):
    """Base for rows read from the database: immutable, open to extra columns."""
    model_config = ConfigDict(frozen=True, extra="allow")


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class Mocion(SourceRecord):
    """
    A bill (moción) from the mociones table.
    """

    # Boletín, e.g. "3515-07"
    n_boletin: str = Field(..., description="Bill identifier, join key across tables")
    nombre_iniciativa: Optional[str] = None

    # Dates
    fecha_de_ingreso: Optional[date] = None
    publicado_en_diario_oficial: Optional[date] = None

    # Status and classification
    estado_del_proyecto_de_ley: Optional[str] = None
    tipo_de_proyecto: Optional[str] = None
    comision_inicial: Optional[str] = None
    etapa_del_proyecto: Optional[str] = None

    @field_validator("n_boletin", mode="before")
    @classmethod
    def _coerce_boletin(cls, value: Any) -> Any:
        return _to_str(value)

    @field_validator("nombre_iniciativa", "estado_del_proyecto_de_ley", "tipo_de_proyecto",
                     "comision_inicial", "etapa_del_proyecto", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _to_str(value)

    @field_validator("fecha_de_ingreso", "publicado_en_diario_oficial", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Optional[date]:
        # Unparseable dates degrade to None instead of failing validation
        return parse_date(value)

    def __str__(self) -> str:
        title = self.nombre_iniciativa or "Sin título"
        return f"Boletín {self.n_boletin}: {title[:60]}"


class Coautor(SourceRecord):
    """A deputy who signed a bill."""
    n_boletin: str
    diputado: str

    @field_validator("n_boletin", "diputado", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _to_str(value)


class Diputado(SourceRecord):
    """A row of the deputies dimension table."""
    diputado: str
    partido: Optional[str] = None
    sexo: Optional[str] = None
    region: Optional[str] = None
    distrito: Optional[str] = None

    @field_validator("diputado", "partido", "sexo", "region", "distrito", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _to_str(value)

    @property
    def party_name(self) -> Optional[str]:
        """Raw party, falling back to the legacy partido_politico column."""
        return self.partido or _to_str((self.model_extra or {}).get("partido_politico"))


class AnalisisIA(SourceRecord):
    """
    Heuristic NLP annotations of a bill.

    Older runs keyed the table by id_boletin, newer ones by num_boletin;
    after normalization either may be set.
    """
    id_boletin: Optional[str] = None
    n_boletin: Optional[str] = None
    resumen_ejecutivo: Optional[str] = None
    tipo_iniciativa: Optional[str] = None
    sentimiento_score: Optional[float] = Field(None, ge=-1.0, le=1.0)
    tags_temas: List[str] = Field(default_factory=list)

    @field_validator("id_boletin", "n_boletin", "resumen_ejecutivo", "tipo_iniciativa", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _to_str(value)

    @field_validator("sentimiento_score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> Optional[float]:
        try:
            score = float(value)
        except (TypeError, ValueError):
            return None
        if not -1.0 <= score <= 1.0:
            return None
        return score

    @field_validator("tags_temas", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> List[str]:
        return parse_tags(value)

    @property
    def boletin(self) -> Optional[str]:
        """Bill this analysis belongs to."""
        return self.id_boletin or self.n_boletin


class MocionEnriquecida(Mocion):
    """
    A bill of the target deputy merged with its AI analysis.

    Analysis fields are None (tags empty) when the bill was never analysed.
    """
    anio: Optional[int] = None
    periodo: str

    resumen_ejecutivo: Optional[str] = None
    tipo_iniciativa_ia: Optional[str] = None
    sentimiento_score: Optional[float] = None
    tags_temas: List[str] = Field(default_factory=list)

    @property
    def stage_value(self) -> int:
        """Progress value 0-4."""
        return map_stage_numeric(self.etapa_del_proyecto, self.estado_del_proyecto_de_ley)

    @property
    def stage_label(self) -> str:
        return map_stage_label(self.stage_value)

    @property
    def categoria(self) -> Categoria:
        """Thematic area of the initial commission."""
        return categorize_commission(self.comision_inicial)

    @property
    def is_ley(self) -> bool:
        return is_success(self.estado_del_proyecto_de_ley)
