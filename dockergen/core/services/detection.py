"""
Detection service — classify a project directory.

This is the core intelligence layer that looks at a project's filesystem
and decides what kind of project lives there. Each kind is described by
a ``KindRule`` (signals + entrypoint resolver + version resolver) and the
rules are evaluated in priority order; the first match wins.

Pure logic — no side effects, no persistence.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

from dockergen.core.models.project import (
    DEFAULT_PORT,
    ProjectClassification,
    ProjectKind,
)
from dockergen.core.services.signals import (
    dir_exists,
    file_exists,
    glob_matches,
    read_text,
    tree_contains,
)

logger = logging.getLogger(__name__)

DEFAULT_GO_VERSION = "1.22"

# Environment files scanned for PORT=..., in priority order
ENV_FILES = (".env", ".env.development", ".env.local")

_PORT_RE = re.compile(
    r"""^\s*(?:export\s+)?PORT\s*=\s*["']?(\d+)""",
    re.MULTILINE,
)
_GO_DIRECTIVE_RE = re.compile(r"^go\s+(\d+)\.(\d+)(?:\.\d+)?", re.MULTILINE)
_PACKAGE_MAIN_RE = re.compile(r'"main"\s*:\s*"([^"]+)"')

# Never descended into when searching for a main marker
_SEARCH_EXCLUDES = (
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "venv",
    ".venv",
    "__pycache__",
)


# ── Errors ──────────────────────────────────────────────────────


class DetectionError(Exception):
    """Raised when a directory cannot be classified."""


class AccessError(DetectionError):
    """The target path does not exist or is not a directory."""


class NotDetectedError(DetectionError):
    """No kind's signals matched."""


# ── Kind rules ──────────────────────────────────────────────────


class SignalRule(BaseModel):
    """Filesystem evidence for a project kind. Any single hit is a match."""

    files_any_of: list[str] = Field(default_factory=list)
    dirs_any_of: list[str] = Field(default_factory=list)
    globs_any_of: list[str] = Field(default_factory=list)

    def matches(self, directory: Path) -> bool:
        return (
            any(file_exists(directory, f) for f in self.files_any_of)
            or any(glob_matches(directory, g) for g in self.globs_any_of)
            or any(dir_exists(directory, d) for d in self.dirs_any_of)
        )


@dataclass(frozen=True)
class KindRule:
    """How to recognise one project kind and fill in its details."""

    kind: ProjectKind
    signals: SignalRule
    find_entrypoint: Callable[[Path], str]
    detect_version: Callable[[Path], str]


def _first_existing(directory: Path, candidates: list[str]) -> str:
    for candidate in candidates:
        if file_exists(directory, candidate):
            return candidate
    return ""


def find_go_entrypoint(directory: Path) -> str:
    """Locate the Go file holding ``func main()``."""
    found = _first_existing(
        directory,
        ["main.go", "cmd/main.go", f"cmd/{directory.name}/main.go"],
    )
    if found:
        return found

    match = tree_contains(
        directory,
        lambda content: "func main()" in content,
        (".go",),
        exclude_dirs=_SEARCH_EXCLUDES,
    )
    return match or ""


def find_nodejs_entrypoint(directory: Path) -> str:
    """Locate the Node.js entry file, preferring package.json's ``main``."""
    if file_exists(directory, "package.json"):
        content = read_text(directory / "package.json")
        if content is not None:
            match = _PACKAGE_MAIN_RE.search(content)
            if match:
                return match.group(1)

    return _first_existing(
        directory,
        ["index.js", "server.js", "app.js", "main.js", "src/index.js"],
    )


def find_python_entrypoint(directory: Path) -> str:
    """Locate the Python entry script."""
    found = _first_existing(
        directory,
        ["app.py", "main.py", "run.py", f"{directory.name}.py"],
    )
    if found:
        return found

    match = tree_contains(
        directory,
        lambda content: (
            'if __name__ == "__main__"' in content
            or "if __name__ == '__main__'" in content
        ),
        (".py",),
        exclude_dirs=_SEARCH_EXCLUDES,
    )
    return match or ""


def detect_go_version(directory: Path) -> str:
    """Read the ``go X.Y[.Z]`` directive from go.mod, keeping X.Y."""
    content = read_text(directory / "go.mod") if file_exists(directory, "go.mod") else None
    if content is None:
        return DEFAULT_GO_VERSION

    match = _GO_DIRECTIVE_RE.search(content)
    if match:
        return f"{match.group(1)}.{match.group(2)}"
    return DEFAULT_GO_VERSION


def _no_version(directory: Path) -> str:
    # Node.js and Python runtime versions are not detected.
    return ""


KIND_RULES: tuple[KindRule, ...] = (
    KindRule(
        kind=ProjectKind.GO,
        signals=SignalRule(
            files_any_of=["go.mod", "go.sum"],
            globs_any_of=["*.go"],
        ),
        find_entrypoint=find_go_entrypoint,
        detect_version=detect_go_version,
    ),
    KindRule(
        kind=ProjectKind.NODEJS,
        signals=SignalRule(
            files_any_of=["package.json"],
            dirs_any_of=["node_modules"],
            globs_any_of=["*.js"],
        ),
        find_entrypoint=find_nodejs_entrypoint,
        detect_version=_no_version,
    ),
    KindRule(
        kind=ProjectKind.PYTHON,
        signals=SignalRule(
            files_any_of=["requirements.txt", "setup.py", "Pipfile"],
            globs_any_of=["*.py"],
            dirs_any_of=["venv", ".venv"],
        ),
        find_entrypoint=find_python_entrypoint,
        detect_version=_no_version,
    ),
)


def match_kind(
    directory: Path,
    rules: tuple[KindRule, ...] = KIND_RULES,
) -> KindRule | None:
    """Return the first rule whose signals match *directory*, or None."""
    for rule in rules:
        if rule.signals.matches(directory):
            return rule
    return None


def detect_port(directory: Path) -> int:
    """Find the service port declared in the project's env files.

    The first env file containing a valid ``PORT=<n>`` wins. Values
    outside 1..65535 are ignored. Falls back to 3000.
    """
    for name in ENV_FILES:
        if not file_exists(directory, name):
            continue
        content = read_text(directory / name)
        if content is None:
            continue
        for match in _PORT_RE.finditer(content):
            try:
                port = int(match.group(1))
            except ValueError:
                continue
            if 0 < port <= 65535:
                logger.debug("Port %d found in %s", port, name)
                return port
    return DEFAULT_PORT


def classify(
    root_dir: Path,
    rules: tuple[KindRule, ...] = KIND_RULES,
) -> ProjectClassification:
    """Classify the project rooted at *root_dir*.

    Args:
        root_dir: Directory to scan.
        rules: Kind rules in priority order.

    Returns:
        ProjectClassification for the first matching kind.

    Raises:
        AccessError: If the path is missing or not a directory.
        NotDetectedError: If no kind's signals match.
    """
    root = Path(root_dir)
    try:
        root.stat()
    except OSError as e:
        raise AccessError(f"failed to access directory {root}: {e}") from e
    if not root.is_dir():
        raise AccessError(f"{root} is not a directory")
    root = root.resolve()

    rule = match_kind(root, rules)
    if rule is None:
        raise NotDetectedError(f"unable to determine project type in {root}")

    classification = ProjectClassification(
        kind=rule.kind,
        entrypoint=rule.find_entrypoint(root),
        port=detect_port(root),
        root_dir=root,
        runtime_version=rule.detect_version(root),
    )
    logger.info(
        "Detected %s project in %s: entrypoint=%s, port=%d, version=%s",
        classification.kind.value,
        root,
        classification.entrypoint or "(none)",
        classification.port,
        classification.runtime_version or "(none)",
    )
    return classification
