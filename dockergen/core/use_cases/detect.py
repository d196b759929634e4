"""
Detection use case — classify a directory and report the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dockergen.core.models.project import ProjectClassification
from dockergen.core.services.detection import DetectionError, classify


@dataclass
class DetectResult:
    """Result of the detect use case."""

    classification: ProjectClassification | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.classification is not None
        return {
            **self.classification.to_dict(),
            "project_name": self.classification.project_name,
        }


def run_detect(project_dir: Path) -> DetectResult:
    """Classify *project_dir* without generating anything."""
    try:
        return DetectResult(classification=classify(project_dir))
    except DetectionError as e:
        return DetectResult(error=f"failed to detect project: {e}")
