"""
Recipe parameters — the values a Dockerfile template is expanded with.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RecipeParameters(BaseModel):
    """Derived view of a classification plus renderer options.

    Attributes:
        binary_name:   Name of the compiled binary.
        build_command: Shell command that builds the binary.
        run_command:   Command the single-stage image runs.
        entrypoint:    Path of the binary inside the image.
        port:          Port to EXPOSE (0 = none).
        multi_stage:   Whether to emit the builder + runtime layout.
        version:       Base image runtime version tag.
    """

    model_config = ConfigDict(frozen=True)

    binary_name: str
    build_command: str
    run_command: str
    entrypoint: str
    port: int = 0
    multi_stage: bool = True
    version: str
