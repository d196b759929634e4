"""
Shared test fixtures and configuration.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path → content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory: build a project directory from a {path: content} mapping.

    Directories are created for keys ending in ``/``.
    """

    def _make(files: dict[str, str] | None = None, name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            if rel.endswith("/"):
                (root / rel).mkdir(parents=True, exist_ok=True)
            else:
                _write_tree(root, {rel: content})
        return root

    return _make


@pytest.fixture
def go_project(make_project) -> Path:
    """Minimal Go service with a root main.go and a .env port."""
    return make_project(
        {
            "go.mod": "module example.com/svc\n\ngo 1.21.5\n",
            "main.go": "package main\n\nfunc main() {}\n",
            ".env": "PORT=8080\n",
        },
        name="my_service",
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Drop handlers installed by setup_logging() during a test."""
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in before and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
