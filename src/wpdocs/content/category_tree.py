"""Two-level category tree: families, then their categories."""

import re
from typing import Dict

from sqlalchemy.orm import Session

from ..database.taxonomy_repo import fetch_category_entries, fetch_category_families
from ..utils.logging import get_logger
from .models import CategoryEntry, CategoryFamilyNode

logger = get_logger(__name__)

# Some category names carry a stray locale suffix, e.g. "Lavoro @it"
LOCALE_SUFFIX_RE = re.compile(r"\s*@\w{2}\s*$")


def strip_locale_suffix(label: str) -> str:
    return LOCALE_SUFFIX_RE.sub("", label or "")


def build_category_tree(session: Session, lang: str) -> Dict[str, CategoryFamilyNode]:
    """
    Build the category tree for a language.

    Args:
        session: SQLAlchemy session
        lang: Language code

    Returns:
        Ordered mapping family key (types, themes, regions) -> family node
        with its categories as pages
    """
    labels: Dict[str, str] = {}
    pages: Dict[str, list] = {}
    for family in fetch_category_families(session, lang):
        labels[family.family] = family.label
        pages[family.family] = []

    for entry in fetch_category_entries(session, lang):
        if entry.family not in pages:
            logger.warning(f"Category {entry.id} belongs to unlisted family '{entry.family}'")
            labels[entry.family] = ""
            pages[entry.family] = []
        pages[entry.family].append(
            CategoryEntry(
                id=entry.id,
                label=strip_locale_suffix(entry.label),
                description=entry.description,
                external_ref=entry.external_ref,
            )
        )

    return {
        family: CategoryFamilyNode(label=labels[family], pages=entries)
        for family, entries in pages.items()
    }
