"""Compile list filters into one boolean expression over Post.ID.

Every active facet becomes an EXISTS subquery correlated on the outer
``Post.ID``. Values inside a facet are OR-ed (``IN``); facets are AND-ed.
With no active facet the expression is ``true()`` and constrains nothing.
"""

import operator
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from sqlalchemy import and_, bindparam, exists, true
from sqlalchemy.sql.elements import ColumnElement

from ..database.schema import (
    META_PERIOD_END,
    META_PERIOD_START,
    META_PUBLICATION_DATE,
    TAXONOMY_POST_TAG,
    Post,
    PostMeta,
    Term,
    TermRelationship,
    TermTaxonomy,
)
from ..database.taxonomy_repo import denylisted_term_ids
from ..errors import InvalidArgumentError
from ..utils.logging import get_logger
from ..utils.time import short_date_format, site_timezone

logger = get_logger(__name__)

TERM_FACETS = ("types", "themes", "regions")


class DateRange(BaseModel):
    """Optional bounds as Unix timestamps; 0 or None means unbounded."""
    model_config = ConfigDict(extra="forbid")

    min: Optional[int] = None
    max: Optional[int] = None

    @field_validator("min", "max")
    @classmethod
    def _zero_is_unbounded(cls, value: Optional[int]) -> Optional[int]:
        return value or None

    @property
    def is_active(self) -> bool:
        return self.min is not None or self.max is not None


class ListFilters(BaseModel):
    """Selection facets for document lists. Unknown facet names are rejected."""
    model_config = ConfigDict(extra="forbid")

    types: List[int] = []
    themes: List[int] = []
    regions: List[int] = []
    tags: List[str] = []
    pub_range: DateRange = DateRange()
    period_range: DateRange = DateRange()

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ListFilters":
        """Validate a plain mapping, raising InvalidArgumentError on bad input."""
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as exc:
            raise InvalidArgumentError(f"Invalid list filters: {exc}") from exc

    def active_facets(self) -> List[str]:
        names = [name for name in (*TERM_FACETS, "tags") if getattr(self, name)]
        names.extend(name for name in ("pub_range", "period_range") if getattr(self, name).is_active)
        return names


@dataclass(frozen=True)
class CompiledCriteria:
    expression: ColumnElement
    bindings: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_unconstrained(self) -> bool:
        return not self.bindings


def _term_ids_exist(facet: str, term_ids: List[int]) -> ColumnElement:
    return exists().where(
        TermRelationship.object_id == Post.ID,
        TermRelationship.term_taxonomy_id.in_(
            bindparam(f"{facet}_ids", [int(t) for t in term_ids], expanding=True)
        ),
    )


def _tag_names_exist(tags: List[str]) -> ColumnElement:
    return exists().where(
        TermRelationship.object_id == Post.ID,
        Term.term_id == TermRelationship.term_taxonomy_id,
        TermTaxonomy.term_taxonomy_id == TermRelationship.term_taxonomy_id,
        TermTaxonomy.taxonomy == bindparam("tags_taxonomy", TAXONOMY_POST_TAG),
        Term.name.in_(bindparam("tags_names", [str(t) for t in tags], expanding=True)),
        Term.term_id.not_in(denylisted_term_ids()),
    )


def _meta_date_exists(
    name: str,
    meta_key: str,
    compare: Callable[[Any, Any], ColumnElement],
    timestamp: int,
    tz: tzinfo,
) -> ColumnElement:
    return exists().where(
        PostMeta.post_id == Post.ID,
        PostMeta.meta_key == bindparam(f"{name}_key", meta_key),
        compare(PostMeta.meta_value, bindparam(name, short_date_format(timestamp, tz))),
    )


def compile_criteria(filters: Optional[ListFilters] = None, tz: Optional[tzinfo] = None) -> CompiledCriteria:
    """
    Compile list filters into a single expression plus its bind parameters.

    Args:
        filters: Facet selection; None or empty means no constraint
        tz: Timezone used to turn timestamps into YYYYMMDD (site default if None)

    Returns:
        CompiledCriteria whose expression can be passed to resolve_filtered_ids
    """
    filters = filters or ListFilters()
    tz = tz or site_timezone()

    expression: ColumnElement = true()

    # Period: data must not end before min, nor start after max
    if filters.period_range.min is not None:
        expression = and_(expression, _meta_date_exists(
            "period_min", META_PERIOD_END, operator.ge, filters.period_range.min, tz,
        ))
    if filters.period_range.max is not None:
        expression = and_(expression, _meta_date_exists(
            "period_max", META_PERIOD_START, operator.le, filters.period_range.max, tz,
        ))

    if filters.pub_range.min is not None:
        expression = and_(expression, _meta_date_exists(
            "pub_min", META_PUBLICATION_DATE, operator.ge, filters.pub_range.min, tz,
        ))
    if filters.pub_range.max is not None:
        expression = and_(expression, _meta_date_exists(
            "pub_max", META_PUBLICATION_DATE, operator.le, filters.pub_range.max, tz,
        ))

    for facet in TERM_FACETS:
        values = getattr(filters, facet)
        if values:
            expression = and_(expression, _term_ids_exist(facet, values))

    if filters.tags:
        expression = and_(expression, _tag_names_exist(filters.tags))

    bindings = dict(expression.compile().params)
    logger.debug(f"Compiled criteria for facets {filters.active_facets()}: {sorted(bindings)}")
    return CompiledCriteria(expression=expression, bindings=bindings)
