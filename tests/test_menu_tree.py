"""Tests for the level-by-level menu tree expansion."""

import pytest

from wpdocs.content import menu_tree
from wpdocs.content.menu_tree import expand_menu, group_children
from wpdocs.content.models import MenuNode
from wpdocs.database.rows import ChildRow
from wpdocs.errors import InvalidArgumentError


class FakeChildren:
    """Stand-in for fetch_children that records each batch of parent ids."""

    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    def __call__(self, session, parent_ids):
        parent_ids = list(parent_ids)
        self.calls.append(parent_ids)
        return [row for row in self.rows if row.parent_id in parent_ids]


@pytest.fixture
def fake_children(monkeypatch):
    def install(rows):
        fake = FakeChildren(rows)
        monkeypatch.setattr(menu_tree, "fetch_children", fake)
        return fake
    return install


def test_duplicate_child_rows_collapse_and_short_title_wins(fake_children):
    """Test dedup + short-title precedence, and that expansion stops at the leaf."""
    fake = fake_children([
        ChildRow(id=2, parent_id=1, title="Child"),
        ChildRow(id=2, parent_id=1, title="Child", short_title="C"),
    ])

    tree = expand_menu(None, [MenuNode(id=1, label="Root")])

    assert tree == [MenuNode(id=1, label="Root", pages=[MenuNode(id=2, label="C", pages=[])])]
    assert fake.calls == [[1], [2]]


def test_each_level_is_fetched_in_one_batch(fake_children):
    fake = fake_children([
        ChildRow(id=3, parent_id=1, title="A"),
        ChildRow(id=4, parent_id=2, title="B"),
        ChildRow(id=5, parent_id=3, title="A1"),
        ChildRow(id=6, parent_id=4, title="B1"),
    ])

    tree = expand_menu(None, [MenuNode(id=1, label="One"), MenuNode(id=2, label="Two")])

    assert fake.calls == [[1, 2], [3, 4], [5, 6]]
    assert [node.id for node in tree] == [1, 2]
    assert tree[0].pages[0].pages[0] == MenuNode(id=5, label="A1")
    assert tree[1].pages[0].pages[0] == MenuNode(id=6, label="B1")


def test_empty_roots_are_returned_without_fetching(fake_children):
    fake = fake_children([])
    roots = []
    assert expand_menu(None, roots) is roots
    assert fake.calls == []


def test_non_list_roots_are_rejected():
    with pytest.raises(InvalidArgumentError):
        expand_menu(None, MenuNode(id=1, label="Root"))


def test_cycles_terminate(fake_children):
    """Test that a page pointing back to an ancestor is not expanded again."""
    fake = fake_children([
        ChildRow(id=2, parent_id=1, title="Two"),
        ChildRow(id=1, parent_id=2, title="One"),
    ])

    tree = expand_menu(None, [MenuNode(id=1, label="One")])

    assert tree == [MenuNode(id=1, label="One", pages=[MenuNode(id=2, label="Two")])]
    assert fake.calls == [[1], [2]]


def test_first_short_title_wins():
    grouped = group_children([
        ChildRow(id=2, parent_id=1, title="Title", short_title="First"),
        ChildRow(id=2, parent_id=1, title="Title", short_title="Second"),
        ChildRow(id=3, parent_id=1, title="Plain", short_title=""),
    ])
    assert [(c.id, c.label) for c in grouped[1]] == [(2, "First"), (3, "Plain")]


def test_menu_from_database(content_session):
    """Test the seeded menu: drafts are skipped and short titles used."""
    tree = expand_menu(content_session, [MenuNode(id=20, label="Chi siamo")])

    assert tree == [
        MenuNode(id=20, label="Chi siamo", pages=[
            MenuNode(id=21, label="Org", pages=[
                MenuNode(id=22, label="Sede", pages=[]),
            ]),
        ]),
    ]
