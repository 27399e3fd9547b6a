"""Repository functions for documents (posts and pages) and their metadata."""

from typing import Iterable, List, Optional

from sqlalchemy import and_, distinct, func, select, true
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from ..utils.logging import get_logger
from .db_client import translate_store_errors
from .rows import AttachmentRow, BodyRow, DocumentRow, FilteredIds, MetaRow, TranslationRow
from .schema import (
    ELEMENT_TYPE_POST_PATTERN,
    META_SHORT_TITLE,
    POST_STATUS_PUBLISH,
    POST_TYPE_ATTACHMENT,
    POST_TYPE_PAGE,
    POST_TYPE_POST,
    IclTranslation,
    Post,
    PostMeta,
)

logger = get_logger(__name__)

# Canonical document order, shared by list and detail queries
DOCUMENT_ORDER = (Post.menu_order.asc(), Post.post_date_gmt.desc(), Post.ID.asc())


def _post_translation_join() -> ColumnElement:
    return and_(
        IclTranslation.element_id == Post.ID,
        IclTranslation.element_type.like(ELEMENT_TYPE_POST_PATTERN),
    )


def _normalize_ids(ids: Iterable[int]) -> List[int]:
    return sorted({int(i) for i in ids})


@translate_store_errors
def fetch_documents_by_ids(
    session: Session,
    ids: Iterable[int],
    include_body: bool = False,
) -> List[DocumentRow]:
    """
    Get published posts and pages by id.

    Args:
        session: SQLAlchemy session
        ids: Document ids
        include_body: Whether to fetch post_content (full fidelity)

    Returns:
        DocumentRow list in canonical order (menu order, newest first)
    """
    ids = _normalize_ids(ids)
    if not ids:
        return []

    columns = [
        Post.ID,
        Post.post_type,
        Post.post_date_gmt,
        Post.post_modified_gmt,
        IclTranslation.language_code,
        Post.post_title,
    ]
    if include_body:
        columns.append(Post.post_content)

    rows = (
        session.query(*columns)
        .outerjoin(IclTranslation, _post_translation_join())
        .filter(
            Post.post_type.in_([POST_TYPE_POST, POST_TYPE_PAGE]),
            Post.post_status == POST_STATUS_PUBLISH,
            Post.ID.in_(ids),
        )
        .order_by(*DOCUMENT_ORDER)
        .all()
    )
    return [
        DocumentRow(
            id=int(row.ID),
            post_type=row.post_type,
            created=row.post_date_gmt,
            modified=row.post_modified_gmt,
            lang=row.language_code,
            title=row.post_title or "",
            body=(row.post_content or "") if include_body else None,
        )
        for row in rows
    ]


@translate_store_errors
def fetch_metadata(session: Session, ids: Iterable[int]) -> List[MetaRow]:
    """Get every postmeta row for a batch of documents."""
    ids = _normalize_ids(ids)
    if not ids:
        return []

    rows = (
        session.query(PostMeta.post_id, PostMeta.meta_key, PostMeta.meta_value)
        .filter(PostMeta.post_id.in_(ids))
        .order_by(PostMeta.meta_id)
        .all()
    )
    return [MetaRow(id=int(row.post_id), key=row.meta_key, value=row.meta_value) for row in rows]


@translate_store_errors
def fetch_translations(
    session: Session,
    doc_id: int,
    exclude_lang: Optional[str],
) -> List[TranslationRow]:
    """
    Get the other-language versions of a document.

    Rows come from the document's WPML translation group; the short-title
    meta is joined so callers can pick a label.

    Args:
        session: SQLAlchemy session
        doc_id: Document id
        exclude_lang: The document's own language

    Returns:
        TranslationRow list, grouped by language
    """
    trid = (
        select(IclTranslation.trid)
        .where(
            IclTranslation.element_id == int(doc_id),
            IclTranslation.element_type.like(ELEMENT_TYPE_POST_PATTERN),
        )
        .limit(1)
        .scalar_subquery()
    )
    query = (
        session.query(
            IclTranslation.language_code,
            IclTranslation.element_id,
            Post.post_title,
            PostMeta.meta_value,
        )
        .select_from(Post)
        .join(IclTranslation, _post_translation_join())
        .outerjoin(
            PostMeta,
            and_(PostMeta.post_id == Post.ID, PostMeta.meta_key == META_SHORT_TITLE),
        )
        .filter(IclTranslation.trid == trid)
    )
    if exclude_lang is not None:
        query = query.filter(IclTranslation.language_code != exclude_lang)

    rows = query.order_by(IclTranslation.language_code, Post.ID, PostMeta.meta_id).all()
    return [
        TranslationRow(
            lang=row.language_code,
            target_id=int(row.element_id),
            title=row.post_title or "",
            short_title=row.meta_value,
        )
        for row in rows
    ]


@translate_store_errors
def fetch_attachments(session: Session, parent_id: int) -> List[AttachmentRow]:
    """Get the attachments of a post, in menu order."""
    rows = (
        session.query(Post.post_title, Post.post_mime_type, Post.guid)
        .filter(
            Post.post_type == POST_TYPE_ATTACHMENT,
            Post.post_parent == int(parent_id),
        )
        .order_by(Post.menu_order, Post.ID)
        .all()
    )
    return [
        AttachmentRow(label=row.post_title or "", mime_type=row.post_mime_type or "", url=row.guid or "")
        for row in rows
    ]


@translate_store_errors
def fetch_bodies_by_ids(session: Session, ids: Iterable[int]) -> List[BodyRow]:
    """Get post_content of published posts by id."""
    ids = _normalize_ids(ids)
    if not ids:
        return []

    rows = (
        session.query(Post.ID, Post.post_content)
        .filter(Post.post_status == POST_STATUS_PUBLISH, Post.ID.in_(ids))
        .order_by(Post.menu_order, Post.ID)
        .all()
    )
    return [BodyRow(id=int(row.ID), body=row.post_content or "") for row in rows]


@translate_store_errors
def resolve_filtered_ids(
    session: Session,
    lang: str,
    criteria: Optional[ColumnElement] = None,
    offset: int = 0,
    limit: int = 10,
) -> FilteredIds:
    """
    Get one page of published post ids matching the criteria, plus the total.

    Args:
        session: SQLAlchemy session
        lang: Language code
        criteria: Boolean expression correlated on Post.ID (see filters.criteria)
        offset: Number of matches to skip
        limit: Page size; <= 0 returns every match

    Returns:
        FilteredIds with the page of ids and the count ignoring pagination
    """
    conditions = [
        Post.post_status == POST_STATUS_PUBLISH,
        Post.post_type == POST_TYPE_POST,
        IclTranslation.language_code == str(lang),
        criteria if criteria is not None else true(),
    ]

    count = (
        session.query(func.count(distinct(Post.ID)))
        .select_from(Post)
        .join(IclTranslation, _post_translation_join())
        .filter(*conditions)
        .scalar()
    )

    query = (
        session.query(Post.ID, Post.menu_order, Post.post_date_gmt)
        .join(IclTranslation, _post_translation_join())
        .filter(*conditions)
        .distinct()
        .order_by(*DOCUMENT_ORDER)
    )
    if limit > 0:
        query = query.offset(abs(int(offset))).limit(int(limit))

    ids = [int(row.ID) for row in query.all()]
    logger.debug(f"Filtered ids for lang={lang}: {len(ids)} of {count}")
    return FilteredIds(ids=ids, count=int(count or 0))
