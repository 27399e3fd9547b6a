"""Content API: languages, menus, categories, tags and documents."""

from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from ..config.loader import get_site_timezone_name, get_uploads_config
from ..content.aggregator import aggregate_documents
from ..content.assets import AssetSizeLookup, build_size_lookup
from ..content.category_tree import build_category_tree
from ..content.menu_tree import expand_menu
from ..content.models import CategoryFamilyNode, Document, FilteredList, MenuNode, TagCount
from ..database.menu_repo import fetch_menu_roots, list_language_codes
from ..database.post_repo import resolve_filtered_ids
from ..database.taxonomy_repo import fetch_tag_counts
from ..filters.criteria import ListFilters, compile_criteria
from ..utils.logging import get_logger
from ..utils.time import site_timezone

logger = get_logger(__name__)

FiltersArg = Union[ListFilters, Mapping[str, Any], None]


class ContentService:
    """
    Read-only facade over the documents database.

    One instance serves one request: it holds the request's session and
    nothing else that changes between calls.
    """

    def __init__(
        self,
        session: Session,
        config: Optional[Dict[str, Any]] = None,
        size_lookup: Optional[AssetSizeLookup] = None,
    ):
        self.session = session
        self.tz = site_timezone(get_site_timezone_name(config))
        uploads = get_uploads_config(config)
        self.uploads_base_url = uploads["base_url"]
        self.size_lookup = size_lookup or build_size_lookup(uploads)

    def languages(self) -> List[str]:
        """Available language codes."""
        return list_language_codes(self.session)

    def pages(self, lang: str) -> Dict[str, List[MenuNode]]:
        """Static pages tree for a language, from the menu roots down."""
        roots = [MenuNode(id=root.id, label=root.label) for root in fetch_menu_roots(self.session, lang)]
        return {lang: expand_menu(self.session, roots)}

    def categories(self, lang: str) -> Dict[str, Dict[str, CategoryFamilyNode]]:
        return {lang: build_category_tree(self.session, lang)}

    def tags(self, lang: str, offset: int = 0, limit: int = 20) -> Dict[str, List[TagCount]]:
        """
        Tag cloud for a language.

        Args:
            lang: Language code
            offset: Offset (starting from 0)
            limit: Number of returned tags (<= 0 means no limit)
        """
        rows = fetch_tag_counts(self.session, lang, offset=abs(int(offset)), limit=int(limit))
        return {lang: [TagCount(name=row.name, count=row.count) for row in rows]}

    def document(self, doc_id: int) -> Optional[Document]:
        """Full content of a single document, or None if it doesn't exist."""
        documents = aggregate_documents(
            self.session,
            [doc_id],
            full=True,
            size_lookup=self.size_lookup,
            tz=self.tz,
            uploads_base_url=self.uploads_base_url,
        )
        return documents[0] if documents else None

    def list_documents(
        self,
        lang: str,
        filters: FiltersArg = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Dict[str, FilteredList]:
        """
        Filtered, paginated document list.

        Facets are combined with AND; the values of one facet with OR. An
        empty facet means "anything".

        Args:
            lang: Language code
            filters: ListFilters or an equivalent mapping
            offset: Offset (starting from 0, negative values are made positive)
            limit: Number of returned documents (<= 0 means no limit)

        Returns:
            {lang: FilteredList} where count ignores offset and limit
        """
        if not isinstance(filters, ListFilters):
            filters = ListFilters.from_mapping(filters)

        compiled = compile_criteria(filters, tz=self.tz)
        found = resolve_filtered_ids(
            self.session,
            lang,
            compiled.expression,
            offset=abs(int(offset)),
            limit=int(limit),
        )
        documents = aggregate_documents(
            self.session,
            found.ids,
            full=False,
            size_lookup=self.size_lookup,
            tz=self.tz,
        )
        return {lang: FilteredList(list=documents, count=found.count)}

    list = list_documents
