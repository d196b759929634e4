"""
Init use case — detect the project and write its container files.

Ties together config loading, classification, generation, and writing.
Everything is rendered before anything is written, so a failure never
leaves a half-generated set of files behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from dockergen.core.config.loader import ConfigError, load_config
from dockergen.core.models.artifact import GeneratedFile
from dockergen.core.models.project import ProjectClassification
from dockergen.core.services.detection import DetectionError, classify
from dockergen.core.services.docker_generate import (
    blocked_files,
    generate_compose,
    generate_dockerfile,
    write_generated_file,
)

logger = logging.getLogger(__name__)


@dataclass
class InitResult:
    """Result of the init use case."""

    classification: ProjectClassification | None = None
    multi_stage: bool = True
    compose: bool = False
    written: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
        if self.classification:
            result["project"] = self.classification.to_dict()
        result["multi_stage"] = self.multi_stage
        result["compose"] = self.compose
        result["written"] = self.written
        return result


def _pick(flag, configured, default):
    """CLI flag wins over config, config wins over the built-in default."""
    if flag is not None:
        return flag
    if configured is not None:
        return configured
    return default


def run_init(
    project_dir: Path,
    *,
    multi_stage: bool | None = None,
    compose: bool | None = None,
    port: int | None = None,
    force: bool = False,
) -> InitResult:
    """Generate a Dockerfile (and optionally docker-compose.yml).

    Args:
        project_dir: Directory to scan and write into.
        multi_stage: Use a multi-stage Dockerfile (None = config/default).
        compose: Also generate docker-compose.yml (None = config/default).
        port: Port override (None = config, then detected).
        force: Overwrite existing files.

    Returns:
        InitResult describing what was detected and written.
    """
    result = InitResult()

    try:
        config = load_config(project_dir)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.multi_stage = _pick(multi_stage, config.multi_stage, True)
    result.compose = _pick(compose, config.compose, False)

    try:
        classification = classify(project_dir)
    except DetectionError as e:
        result.error = f"failed to detect project: {e}"
        return result

    override = _pick(port, config.port, None)
    if override is not None:
        logger.info("Port overridden: %d -> %d", classification.port, override)
        classification = classification.with_port(override)
    result.classification = classification

    # ── Render ──────────────────────────────────────────────────
    files: list[GeneratedFile] = []

    dockerfile = generate_dockerfile(classification, result.multi_stage)
    if "error" in dockerfile:
        result.error = f"failed to generate Dockerfile: {dockerfile['error']}"
        return result
    files.append(GeneratedFile.model_validate(dockerfile["file"]).forced(force))

    if result.compose:
        compose_file = generate_compose(classification)
        if "error" in compose_file:
            result.error = f"failed to generate docker-compose.yml: {compose_file['error']}"
            return result
        files.append(GeneratedFile.model_validate(compose_file["file"]).forced(force))

    # ── Write ───────────────────────────────────────────────────
    root = classification.root_dir
    blocked = blocked_files(root, files)
    if blocked:
        result.error = f"{blocked[0]} already exists. Use --force to overwrite"
        return result

    for file in files:
        written = write_generated_file(root, file)
        if "error" in written:
            result.error = written["error"]
            return result
        result.written.append(written["path"])

    return result
