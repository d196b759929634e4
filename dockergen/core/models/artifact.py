"""
Generated artifacts — rendered container files not yet on disk.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class GeneratedFile(BaseModel):
    """One rendered file (``Dockerfile`` or ``docker-compose.yml``).

    ``path`` is relative to the project root. ``overwrite`` allows an
    existing file at that path to be replaced; otherwise writing fails.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""

    def target(self, project_root: Path) -> Path:
        return project_root / self.path

    def exists_under(self, project_root: Path) -> bool:
        return self.target(project_root).exists()

    def forced(self, overwrite: bool = True) -> GeneratedFile:
        """Copy of this file with the overwrite flag set."""
        return self.model_copy(update={"overwrite": overwrite})
