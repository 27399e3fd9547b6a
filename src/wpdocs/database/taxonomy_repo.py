"""Repository functions for categories, tags and document category links."""

from typing import Iterable, List

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import Session

from .db_client import translate_store_errors
from .rows import CategoryEntryRow, CategoryLinkRow, FamilyRow, TagCountRow
from .schema import (
    TAXONOMY_POST_TAG,
    BlacklistedTag,
    CategoryFamily,
    DataWarehouseLink,
    IclTranslation,
    Term,
    TermRelationship,
    TermTaxonomy,
)


def denylisted_term_ids() -> Select:
    """Subquery of tag term ids that must never be exposed."""
    return select(BlacklistedTag.term_id)


@translate_store_errors
def fetch_category_links(session: Session, ids: Iterable[int]) -> List[CategoryLinkRow]:
    """
    Get tag and category links for a batch of documents.

    A row is either a tag (taxonomy == post_tag, labelled by term name) or a
    category whose parent term is a category family. Denylisted terms are
    excluded.

    Args:
        session: SQLAlchemy session
        ids: Document ids

    Returns:
        CategoryLinkRow list in term order
    """
    ids = sorted({int(i) for i in ids})
    if not ids:
        return []

    rows = (
        session.query(
            TermRelationship.object_id,
            TermRelationship.term_taxonomy_id,
            Term.name,
            TermTaxonomy.taxonomy,
            CategoryFamily.label,
        )
        .outerjoin(Term, Term.term_id == TermRelationship.term_taxonomy_id)
        .outerjoin(TermTaxonomy, TermTaxonomy.term_taxonomy_id == TermRelationship.term_taxonomy_id)
        .outerjoin(CategoryFamily, CategoryFamily.term_id == TermTaxonomy.parent)
        .filter(
            or_(TermTaxonomy.taxonomy == TAXONOMY_POST_TAG, CategoryFamily.label.isnot(None)),
            Term.term_id.not_in(denylisted_term_ids()),
            TermRelationship.object_id.in_(ids),
        )
        .order_by(TermRelationship.term_order, TermRelationship.object_id, TermRelationship.term_taxonomy_id)
        .all()
    )
    return [
        CategoryLinkRow(
            id=int(row.object_id),
            family=row.label,
            taxonomy=row.taxonomy,
            target_id=int(row.term_taxonomy_id),
            label=row.name,
        )
        for row in rows
    ]


@translate_store_errors
def fetch_category_families(session: Session, lang: str) -> List[FamilyRow]:
    """Get the category families (types, themes, regions) for a language."""
    rows = (
        session.query(CategoryFamily.label.label("family"), Term.name)
        .outerjoin(Term, Term.term_id == CategoryFamily.term_id)
        .filter(CategoryFamily.lang == str(lang))
        .order_by(CategoryFamily.term_id)
        .all()
    )
    return [FamilyRow(family=row.family, label=row.name or "") for row in rows]


@translate_store_errors
def fetch_category_entries(session: Session, lang: str) -> List[CategoryEntryRow]:
    """
    Get the categories of a language, grouped by family.

    Args:
        session: SQLAlchemy session
        lang: Language code

    Returns:
        CategoryEntryRow list ordered by family label
    """
    rows = (
        session.query(
            Term.term_id,
            Term.name,
            CategoryFamily.label.label("family"),
            DataWarehouseLink.id_dw,
            TermTaxonomy.description,
        )
        .outerjoin(TermTaxonomy, TermTaxonomy.term_id == Term.term_id)
        .outerjoin(DataWarehouseLink, DataWarehouseLink.id_wp == Term.term_id)
        .outerjoin(CategoryFamily, TermTaxonomy.parent == CategoryFamily.term_id)
        .filter(CategoryFamily.lang == str(lang))
        .order_by(CategoryFamily.label, Term.term_id)
        .all()
    )
    return [
        CategoryEntryRow(
            id=int(row.term_id),
            label=row.name or "",
            family=row.family,
            description=row.description or "",
            external_ref=row.id_dw,
        )
        for row in rows
    ]


@translate_store_errors
def fetch_tag_counts(
    session: Session,
    lang: str,
    offset: int = 0,
    limit: int = 20,
) -> List[TagCountRow]:
    """
    Get the tag cloud for a language: tag names with their usage count.

    Args:
        session: SQLAlchemy session
        lang: Language code
        offset: Number of tags to skip
        limit: Maximum number of tags; <= 0 disables pagination

    Returns:
        TagCountRow list, most used first
    """
    query = (
        session.query(Term.name, TermTaxonomy.count)
        .outerjoin(TermTaxonomy, TermTaxonomy.term_id == Term.term_id)
        .outerjoin(IclTranslation, IclTranslation.element_id == Term.term_id)
        .filter(
            TermTaxonomy.taxonomy == TAXONOMY_POST_TAG,
            TermTaxonomy.count > 0,
            Term.term_id.not_in(denylisted_term_ids()),
            IclTranslation.language_code == str(lang),
        )
        .distinct()
        .order_by(TermTaxonomy.count.desc(), Term.name)
    )
    if limit > 0:
        query = query.offset(abs(int(offset))).limit(int(limit))

    return [TagCountRow(name=row.name, count=int(row.count)) for row in query.all()]
