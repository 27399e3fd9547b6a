"""CLI behavior tests."""

import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from wpdocs.cli import build_parser, main
from wpdocs.database.schema import Base

from content_fixtures import seed_content


@pytest.fixture
def config_path(tmp_path):
    """Config pointing at a seeded SQLite file."""
    db_path = tmp_path / "docs.sqlite"
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        seed_content(session)
    engine.dispose()

    path = tmp_path / "wpdocs.config.yaml"
    path.write_text(f"database:\n  url: sqlite:///{db_path}\nlogging:\n  level: WARNING\n", encoding="utf-8")
    return path


def run(capsys, *argv):
    code = main(list(argv))
    out = capsys.readouterr().out
    return code, (json.loads(out) if out.strip() else None)


def test_list_parser_collects_repeated_facets():
    args = build_parser().parse_args(["list", "it", "--types", "3", "--types", "4", "--tags", "prezzi"])
    assert args.types == [3, 4]
    assert args.tags == ["prezzi"]
    assert args.themes is None
    assert args.limit == 10


def test_langs(config_path, capsys):
    code, data = run(capsys, "--config", str(config_path), "langs")
    assert code == 0
    assert data == ["en", "it"]


def test_list_prints_filtered_page(config_path, capsys):
    code, data = run(capsys, "--config", str(config_path), "list", "it", "--themes", "5", "--limit", "1")
    assert code == 0
    assert data["it"]["count"] == 2
    [doc] = data["it"]["list"]
    assert doc["id"] == 10
    assert doc["shortTitle"] == "Inflazione"
    assert "body" not in doc


def test_post_prints_null_for_unknown_id(config_path, capsys):
    code, data = run(capsys, "--config", str(config_path), "post", "999")
    assert code == 0
    assert data is None


def test_tags(config_path, capsys):
    code, data = run(capsys, "--config", str(config_path), "tags", "it", "--limit", "1")
    assert code == 0
    assert data == {"it": [{"name": "prezzi", "count": 2}]}


def test_missing_config_exits_with_2(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "missing.yaml"), "langs"])
    assert code == 2
    assert "Config file not found" in capsys.readouterr().err


def test_store_failure_exits_with_1(tmp_path, capsys):
    """Test that a backing store error is reported, not raised."""
    path = tmp_path / "wpdocs.config.yaml"
    path.write_text(f"database:\n  url: sqlite:///{tmp_path / 'empty.sqlite'}\n", encoding="utf-8")

    code = main(["--config", str(path), "langs"])

    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_unknown_log_level_exits_with_2(config_path, capsys):
    code = main(["--config", str(config_path), "--log-level", "LOUD", "langs"])
    assert code == 2
    assert "Unknown log level: LOUD" in capsys.readouterr().err
