"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local relgen package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of relgen modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("relgen"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo logging configuration done by a test (CLI commands configure it)."""
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Write manifest YAML text to a file and return its path."""

    def _write(text: str, name: str = "models.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


BLOG_MANIFEST = {
    "root": "ActiveRecord::Base",
    "entities": [
        {"name": "ApplicationRecord", "abstract": True, "scopes": ["recent"]},
        {"name": "Post", "superclass": "ApplicationRecord", "scopes": ["published", "drafts"]},
        {"name": "CustomPost", "superclass": "Post", "scopes": ["featured"]},
        {"name": "SuperCustomPost", "superclass": "CustomPost", "scopes": ["pinned", "published"]},
        {"name": "Comment", "superclass": "ApplicationRecord"},
    ],
}


@pytest.fixture
def blog_graph():
    """Entity graph with a three-level post hierarchy under an abstract base."""
    from relgen.entities import EntityGraph, parse_manifest

    return EntityGraph.from_manifest(parse_manifest(BLOG_MANIFEST))
