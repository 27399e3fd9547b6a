"""Expand menu roots into a page tree, one batch query per level."""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Sequence, Set

from sqlalchemy.orm import Session

from ..database.menu_repo import fetch_children
from ..database.rows import ChildRow
from ..errors import InvalidArgumentError
from ..utils.logging import get_logger
from .labels import LabelResolver
from .models import MenuNode

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChildEntry:
    id: int
    label: str


def group_children(rows: Iterable[ChildRow]) -> Dict[int, List[ChildEntry]]:
    """
    Group child rows by parent, deduplicating each child by id.

    Order follows the first row of each child. The label follows the
    short-title rule (see labels.LabelResolver).
    """
    resolvers: Dict[int, LabelResolver[int]] = {}
    for row in rows:
        resolvers.setdefault(row.parent_id, LabelResolver()).add(row.id, row.id, row.title, row.short_title)

    return {
        parent_id: [ChildEntry(id=child_id, label=resolver.label_of(child_id)) for child_id in resolver.keys()]
        for parent_id, resolver in resolvers.items()
    }


def _discover_levels(session: Session, root_ids: Sequence[int]) -> Dict[int, List[ChildEntry]]:
    """Fetch every level below the roots; returns parent id -> ordered children."""
    children_by_parent: Dict[int, List[ChildEntry]] = {}
    expanded: Set[int] = set()
    frontier: List[int] = list(dict.fromkeys(root_ids))
    depth = 0

    while frontier:
        expanded.update(frontier)
        grouped = group_children(fetch_children(session, frontier))
        children_by_parent.update(grouped)

        next_frontier: List[int] = []
        for parent_id in frontier:
            for child in grouped.get(parent_id, []):
                if child.id in expanded:
                    logger.warning(f"Page {child.id} already expanded; not following cycle from {parent_id}")
                    continue
                next_frontier.append(child.id)
        frontier = list(dict.fromkeys(next_frontier))
        depth += 1

    logger.debug(f"Menu expanded {len(expanded)} pages over {depth} levels")
    return children_by_parent


def _build_node(
    node_id: int,
    label: str,
    children_by_parent: Dict[int, List[ChildEntry]],
    ancestors: FrozenSet[int],
) -> MenuNode:
    path = ancestors | {node_id}
    pages = [
        _build_node(child.id, child.label, children_by_parent, path)
        for child in children_by_parent.get(node_id, [])
        if child.id not in path
    ]
    return MenuNode(id=node_id, label=label, pages=pages)


def expand_menu(session: Session, roots: List[MenuNode]) -> List[MenuNode]:
    """
    Attach the published child pages below each root, recursively.

    Args:
        session: SQLAlchemy session
        roots: Ordered root nodes (id and label; existing pages are ignored)

    Returns:
        New MenuNode list in root order, every node carrying its pages

    Raises:
        InvalidArgumentError: If roots is not a list
    """
    if not isinstance(roots, list):
        raise InvalidArgumentError("Parent pages must be a list")
    if not roots:
        return roots

    children_by_parent = _discover_levels(session, [root.id for root in roots])
    return [_build_node(root.id, root.label, children_by_parent, frozenset()) for root in roots]
