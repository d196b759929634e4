"""Docker config generation — Dockerfile and compose, as result dicts."""

from __future__ import annotations

import logging
from pathlib import Path

from dockergen.core.models.artifact import GeneratedFile
from dockergen.core.models.project import ProjectClassification
from dockergen.core.services.generators import GenerationError

logger = logging.getLogger(__name__)


def generate_dockerfile(
    classification: ProjectClassification,
    multi_stage: bool = True,
) -> dict:
    """Generate a Dockerfile for a classified project.

    Returns:
        {"ok": True, "file": {...}} or {"error": "...", "supported": [...]}
    """
    from dockergen.core.services.generators.dockerfile import (
        UnsupportedKindError,
        supported_kinds,
    )
    from dockergen.core.services.generators.dockerfile import generate_dockerfile as _gen

    try:
        result = _gen(classification, multi_stage)
    except UnsupportedKindError as e:
        return {"error": str(e), "supported": supported_kinds()}
    except GenerationError as e:
        return {"error": str(e)}

    return {"ok": True, "file": result.model_dump()}


def generate_compose(classification: ProjectClassification) -> dict:
    """Generate a docker-compose.yml for a classified project.

    The compose project is named after the scanned directory and
    publishes the classification's port.

    Returns:
        {"ok": True, "file": {...}} or {"error": "..."}
    """
    from dockergen.core.services.generators.compose import generate_compose as _gen

    try:
        result = _gen(classification.project_name, str(classification.port))
    except GenerationError as e:
        return {"error": str(e)}

    return {"ok": True, "file": result.model_dump()}


def write_generated_file(project_root: Path, file: GeneratedFile) -> dict:
    """Write *file* under *project_root*, honouring its overwrite flag.

    Returns:
        {"ok": True, "path": ..., "overwritten": bool} or {"error": ..., "path": ...}
    """
    if not file.path or not file.content:
        return {"error": "nothing to write: empty path or content", "path": file.path}

    replaced = file.exists_under(project_root)
    if replaced and not file.overwrite:
        return {
            "error": f"{file.path} already exists. Use --force to overwrite",
            "path": file.path,
        }

    target = file.target(project_root)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file.content, encoding="utf-8")
    except OSError as e:
        return {"error": f"failed to write {file.path}: {e}", "path": file.path}

    logger.info("%s %s", "Overwrote" if replaced else "Wrote", target)
    return {"ok": True, "path": file.path, "overwritten": replaced}


def blocked_files(project_root: Path, files: list[GeneratedFile]) -> list[str]:
    """Paths of *files* that exist on disk and may not be overwritten."""
    return [f.path for f in files if not f.overwrite and f.exists_under(project_root)]
