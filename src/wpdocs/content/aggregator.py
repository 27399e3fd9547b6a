"""Assemble Document read models from independently fetched row sets.

Phase one runs one batch query each for base rows, category links and
metadata. In full fidelity, phase two runs per document: translations,
attachments and linked boxes. Any store failure propagates as
BackingStoreError; no partial list is ever returned.
"""

from datetime import tzinfo
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from ..database.post_repo import (
    fetch_attachments,
    fetch_bodies_by_ids,
    fetch_documents_by_ids,
    fetch_metadata,
    fetch_translations,
)
from ..database.rows import CategoryLinkRow, DocumentRow, MetaRow
from ..database.schema import (
    META_ABSTRACT,
    META_DESCRIPTION,
    META_IMAGE,
    META_LINKED_SIDEPOSTS,
    META_PERIOD_DESCRIPTION,
    META_PUBLICATION_DATE,
    META_SHORT_TITLE,
    META_SUBTITLE,
    POST_TYPE_POST,
    TAXONOMY_POST_TAG,
)
from ..database.taxonomy_repo import fetch_category_links
from ..utils.logging import get_logger
from ..utils.time import as_utc, parse_publication_date, site_timezone
from .assets import AssetSizeLookup, NullSizeLookup
from .boxes import decode_linked_sideposts
from .labels import LabelResolver
from .models import Attachment, Box, Document, TranslationRef

logger = get_logger(__name__)

CATEGORY_FAMILIES = ("types", "themes", "regions")

Buckets = Dict[str, list]


def _empty_buckets() -> Buckets:
    return {"types": [], "themes": [], "regions": [], "tags": []}


def _coerce_ids(ids: Union[int, Iterable[int], None]) -> List[int]:
    if ids is None:
        return []
    if isinstance(ids, int):
        ids = [ids]
    seen: Dict[int, None] = {}
    for doc_id in ids:
        seen.setdefault(int(doc_id), None)
    return list(seen)


def bucket_category_links(ids: Iterable[int], rows: Iterable[CategoryLinkRow]) -> Dict[int, Buckets]:
    """
    Group category link rows by document.

    Every requested id gets all four buckets, even with no rows. Tags are
    collected by label, categories by taxonomy id under their family.
    """
    buckets = {int(doc_id): _empty_buckets() for doc_id in ids}
    for row in rows:
        bucket = buckets.setdefault(row.id, _empty_buckets())
        if row.taxonomy == TAXONOMY_POST_TAG:
            if row.label:
                bucket["tags"].append(row.label)
        elif row.family in CATEGORY_FAMILIES:
            bucket[row.family].append(row.target_id)
        else:
            logger.warning(f"Ignoring category {row.target_id} of {row.id} in unknown family '{row.family}'")
    return buckets


def bucket_metadata(rows: Iterable[MetaRow]) -> Dict[int, Dict[str, str]]:
    """Group meta rows into id -> key -> value (the last row for a key wins)."""
    meta: Dict[int, Dict[str, str]] = {}
    for row in rows:
        if row.key is None:
            continue
        meta.setdefault(row.id, {})[row.key] = row.value
    return meta


def _text(meta: Dict[str, str], key: str) -> str:
    return meta.get(key) or ""


def _translations(session: Session, row: DocumentRow) -> Dict[str, TranslationRef]:
    resolver: LabelResolver[str] = LabelResolver()
    for translation in fetch_translations(session, row.id, row.lang):
        resolver.add(translation.lang, translation.target_id, translation.title, translation.short_title)
    return {
        lang: TranslationRef(id=resolver.id_of(lang), label=resolver.label_of(lang))
        for lang in resolver.keys()
    }


def _attachment_size(size_lookup: AssetSizeLookup, url: str) -> Union[int, str]:
    try:
        size = size_lookup.size_of(url)
    except Exception as exc:
        logger.warning(f"Size lookup failed for {url}: {exc}")
        return ""
    return size if size is not None else ""


def relative_upload_url(url: str, base_url: Optional[str]) -> str:
    """Strip the uploads base URL, leaving the path under the uploads directory."""
    if not base_url:
        return url
    base_url = base_url.rstrip("/")
    if url.startswith(base_url + "/"):
        return url[len(base_url):]
    return url


def _attachments(
    session: Session,
    doc_id: int,
    size_lookup: AssetSizeLookup,
    base_url: Optional[str],
) -> List[Attachment]:
    return [
        Attachment(
            label=attachment.label,
            mime_type=attachment.mime_type,
            url=relative_upload_url(attachment.url, base_url),
            size=_attachment_size(size_lookup, attachment.url),
        )
        for attachment in fetch_attachments(session, doc_id)
    ]


def _boxes(session: Session, meta: Dict[str, str]) -> List[Box]:
    links = decode_linked_sideposts(meta.get(META_LINKED_SIDEPOSTS))
    if not links:
        return []

    # One box per target, kept at its first position; a repeated target takes the later title
    titles: Dict[int, str] = {}
    for link in links:
        titles[link.target_id] = link.title

    bodies = {body.id: body.body for body in fetch_bodies_by_ids(session, titles)}
    return [Box(title=title, body=bodies.get(target_id, "")) for target_id, title in titles.items()]


def _build_document(
    session: Session,
    row: DocumentRow,
    buckets: Buckets,
    meta: Dict[str, str],
    full: bool,
    size_lookup: AssetSizeLookup,
    tz: tzinfo,
    uploads_base_url: Optional[str],
) -> Document:
    created = as_utc(row.created)
    published = parse_publication_date(meta.get(META_PUBLICATION_DATE), tz)
    if published is not None:
        created = published

    fields = dict(
        id=row.id,
        type=row.post_type,
        created=created,
        modified=as_utc(row.modified),
        lang=row.lang,
        title=row.title,
        short_title=_text(meta, META_SHORT_TITLE),
        sub_title=_text(meta, META_SUBTITLE),
        period=_text(meta, META_PERIOD_DESCRIPTION),
        description=_text(meta, META_DESCRIPTION),
        abstract=_text(meta, META_ABSTRACT),
        image=_text(meta, META_IMAGE),
        types=list(buckets["types"]),
        themes=list(buckets["themes"]),
        regions=list(buckets["regions"]),
        tags=list(buckets["tags"]),
        translations={},
    )

    if full:
        fields["body"] = row.body or ""
        fields["translations"] = _translations(session, row)
        fields["attachments"] = []
        fields["boxes"] = []
        if row.post_type == POST_TYPE_POST:
            fields["attachments"] = _attachments(session, row.id, size_lookup, uploads_base_url)
            fields["boxes"] = _boxes(session, meta)

    return Document(**fields)


def aggregate_documents(
    session: Session,
    ids: Union[int, Iterable[int], None],
    full: bool = False,
    *,
    size_lookup: Optional[AssetSizeLookup] = None,
    tz: Optional[tzinfo] = None,
    uploads_base_url: Optional[str] = None,
) -> List[Document]:
    """
    Build documents for a set of ids.

    Full mode is slower (several queries per document) and is meant for
    single-document views; lists use light mode.

    Args:
        session: SQLAlchemy session
        ids: Document ids (a single id is accepted)
        full: Add body, translations, attachments and boxes
        size_lookup: Attachment size lookup (sizes are "" without one)
        tz: Site timezone for publication dates
        uploads_base_url: Prefix stripped from attachment URLs (kept whole if None)

    Returns:
        Documents in canonical order (menu order, then newest first);
        ids that are missing or unpublished are silently absent
    """
    ids = _coerce_ids(ids)
    if not ids:
        return []

    tz = tz or site_timezone()
    size_lookup = size_lookup or NullSizeLookup()

    rows = fetch_documents_by_ids(session, ids, include_body=full)
    categories = bucket_category_links(ids, fetch_category_links(session, ids))
    meta = bucket_metadata(fetch_metadata(session, ids))

    documents = [
        _build_document(
            session,
            row,
            categories.get(row.id) or _empty_buckets(),
            meta.get(row.id, {}),
            full,
            size_lookup,
            tz,
            uploads_base_url,
        )
        for row in rows
    ]
    logger.debug(f"Aggregated {len(documents)} of {len(ids)} requested documents (full={full})")
    return documents
