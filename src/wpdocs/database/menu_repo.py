"""Repository functions for languages and the page menu."""

from typing import Iterable, List

from sqlalchemy import and_
from sqlalchemy.orm import Session

from .db_client import translate_store_errors
from .rows import ChildRow, MenuRootRow
from .schema import (
    META_SHORT_TITLE,
    POST_STATUS_PUBLISH,
    POST_TYPE_PAGE,
    IclLocaleMap,
    MenuEntry,
    Post,
    PostMeta,
)


@translate_store_errors
def list_language_codes(session: Session) -> List[str]:
    """Get the available language codes, sorted and deduplicated."""
    rows = session.query(IclLocaleMap.code).distinct().order_by(IclLocaleMap.code).all()
    return [row.code for row in rows]


@translate_store_errors
def fetch_menu_roots(session: Session, lang: str) -> List[MenuRootRow]:
    """Get the top-level menu pages for a language, in menu order."""
    rows = (
        session.query(MenuEntry.post_id, MenuEntry.label)
        .filter(MenuEntry.lang == str(lang))
        .order_by(MenuEntry.id)
        .all()
    )
    return [MenuRootRow(id=int(row.post_id), label=row.label or "") for row in rows]


@translate_store_errors
def fetch_children(session: Session, parent_ids: Iterable[int]) -> List[ChildRow]:
    """
    Get published child pages of any of the given parents.

    The short-title meta is joined per child; a child with several
    short-title rows appears once per row.

    Args:
        session: SQLAlchemy session
        parent_ids: Parent page ids

    Returns:
        ChildRow list ordered by parent, then menu order
    """
    parent_ids = sorted({int(pid) for pid in parent_ids})
    if not parent_ids:
        return []

    rows = (
        session.query(
            Post.ID,
            Post.post_parent,
            Post.post_title,
            PostMeta.meta_value,
        )
        .outerjoin(
            PostMeta,
            and_(PostMeta.post_id == Post.ID, PostMeta.meta_key == META_SHORT_TITLE),
        )
        .filter(
            Post.post_status == POST_STATUS_PUBLISH,
            Post.post_type == POST_TYPE_PAGE,
            Post.post_parent.in_(parent_ids),
        )
        .order_by(Post.post_parent, Post.menu_order, Post.ID, PostMeta.meta_id)
        .all()
    )
    return [
        ChildRow(
            id=int(row.ID),
            parent_id=int(row.post_parent),
            title=row.post_title or "",
            short_title=row.meta_value,
        )
        for row in rows
    ]
