"""
Project model — what the classifier found in a directory.

Built once per invocation by the detection service. The only change
allowed afterwards is an explicit port override, which yields a copy.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ProjectKind(str, Enum):
    """Closed set of project kinds the classifier can assign."""

    GO = "go"
    NODEJS = "nodejs"
    PYTHON = "python"


# Fallback port when no environment file declares one
DEFAULT_PORT = 3000


class ProjectClassification(BaseModel):
    """Structured description of a scanned project.

    Attributes:
        kind:            Detected project kind.
        entrypoint:      Relative POSIX path to the main source file, or "".
        port:            Service port (default 3000).
        root_dir:        Absolute path of the scanned directory.
        runtime_version: Runtime version string ("" when not detected).
    """

    model_config = ConfigDict(frozen=True)

    kind: ProjectKind
    entrypoint: str = ""
    port: int = DEFAULT_PORT
    root_dir: Path
    runtime_version: str = ""

    def with_port(self, port: int) -> ProjectClassification:
        """Return a copy with the port replaced by a caller-supplied value."""
        return self.model_copy(update={"port": port})

    @property
    def project_name(self) -> str:
        """Compose-friendly name derived from the directory basename."""
        name = self.root_dir.name.lower()
        return name.replace(" ", "-").replace("_", "-")

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "entrypoint": self.entrypoint,
            "port": self.port,
            "root_dir": str(self.root_dir),
            "runtime_version": self.runtime_version,
        }
