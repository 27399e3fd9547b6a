"""Tests for API layer guardrails and contracts."""

import ast
from pathlib import Path

API_DIR = Path(__file__).resolve().parent.parent / "src" / "wpdocs" / "api"


def test_api_layer_has_no_sqlalchemy_imports():
    """Test that API layer files don't build queries themselves.

    Session from sqlalchemy.orm is allowed: it is the request handle the
    facade receives and passes down to the repositories.
    """
    violations = []
    for api_file in sorted(API_DIR.glob("*.py")):
        tree = ast.parse(api_file.read_text(encoding="utf-8"), filename=str(api_file))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name.startswith("sqlalchemy"):
                        violations.append(f"{api_file.name}: import '{alias.name}'")
            elif isinstance(node, ast.ImportFrom):
                module = node.module or ""
                if module.startswith("sqlalchemy"):
                    if module == "sqlalchemy.orm" and all(alias.name == "Session" for alias in node.names):
                        continue
                    violations.append(f"{api_file.name}: import from '{module}'")
                if module.endswith("database.schema"):
                    violations.append(f"{api_file.name}: import from '{module}'")

    assert not violations, "API layer imports SQLAlchemy internals:\n" + "\n".join(violations)


def test_content_service_exposes_read_operations():
    from wpdocs.api.content_api import ContentService

    for name in ("languages", "pages", "categories", "tags", "document", "list", "list_documents"):
        assert callable(getattr(ContentService, name)), name
    assert ContentService.list is ContentService.list_documents
