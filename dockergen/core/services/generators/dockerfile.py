"""
Dockerfile generator — produce a Dockerfile from a project classification.

Each supported kind has a renderer that assembles its Dockerfile from
fixed text blocks. Optional parts (like ``EXPOSE``) are separate blocks
that are only included when their value is set; placeholders inside a
block are filled with ``string.Template``.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable
from string import Template

from dockergen.core.models.artifact import GeneratedFile
from dockergen.core.models.project import ProjectClassification, ProjectKind
from dockergen.core.models.recipe import RecipeParameters
from dockergen.core.services.detection import DEFAULT_GO_VERSION
from dockergen.core.services.generators import GenerationError

logger = logging.getLogger(__name__)

DEFAULT_BINARY_NAME = "app"


class UnsupportedKindError(GenerationError):
    """No Dockerfile template exists for the project kind."""


class TemplateError(GenerationError):
    """A template block is malformed or could not be expanded."""


# ── Go templates ────────────────────────────────────────────────


_GO_MULTI_STAGE = """\
# syntax=docker/dockerfile:1

# === Multi-stage build ===

# Build stage
FROM golang:${version}-alpine AS build
WORKDIR /app

# Copy go.mod and go.sum files first and download dependencies
COPY go.mod go.sum* ./
RUN go mod download

# Copy source code
COPY . .

# Build a static binary with debug symbols stripped
RUN ${build_command}

# Runtime stage with a minimal Alpine image
FROM alpine:latest

# Install necessary runtime dependencies
RUN apk --no-cache add \\
    ca-certificates \\
    tzdata

# Create a non-root user to run the application
RUN addgroup -S appgroup && adduser -S appuser -G appgroup

# Create app directory and set permissions
RUN mkdir -p /app && chown -R appuser:appgroup /app

WORKDIR /app

# Copy the binary from the build stage
COPY --from=build ${entrypoint} /app/

# Switch to non-root user
USER appuser

${expose}# Run the application
ENTRYPOINT ["${entrypoint}"]
"""

_GO_MULTI_STAGE_EXPOSE = """\
# Expose the application port
EXPOSE ${port}

"""

_GO_SINGLE_STAGE = """\
# syntax=docker/dockerfile:1

# === Single-stage build ===

FROM golang:${version}-alpine
WORKDIR /app

COPY go.mod go.sum* ./
RUN go mod download

COPY . .

RUN ${build_command}

${expose}ENTRYPOINT ["${run_command}"]
"""

_GO_SINGLE_STAGE_EXPOSE = """\
EXPOSE ${port}

"""


def _expand(template: str, values: dict[str, object]) -> str:
    """Fill a template block, turning any expansion failure into TemplateError."""
    try:
        return Template(template).substitute(values)
    except (KeyError, ValueError) as e:
        raise TemplateError(f"failed to execute dockerfile template: {e}") from e


def _render_go(params: RecipeParameters) -> str:
    if params.multi_stage:
        body, expose_block = _GO_MULTI_STAGE, _GO_MULTI_STAGE_EXPOSE
    else:
        body, expose_block = _GO_SINGLE_STAGE, _GO_SINGLE_STAGE_EXPOSE

    expose = _expand(expose_block, {"port": params.port}) if params.port else ""

    return _expand(
        body,
        {
            "version": params.version,
            "build_command": params.build_command,
            "run_command": params.run_command,
            "entrypoint": params.entrypoint,
            "expose": expose,
        },
    )


# Kinds with a Dockerfile renderer
_RENDERERS: dict[ProjectKind, Callable[[RecipeParameters], str]] = {
    ProjectKind.GO: _render_go,
}


# ── Public API ──────────────────────────────────────────────────


def binary_name_for(entrypoint: str) -> str:
    """Binary name from the entrypoint's file name, minus its extension."""
    stem, _ = posixpath.splitext(posixpath.basename(entrypoint))
    return stem or DEFAULT_BINARY_NAME


def build_recipe_parameters(
    classification: ProjectClassification,
    multi_stage: bool,
) -> RecipeParameters:
    """Derive Dockerfile template values from a classification."""
    binary = binary_name_for(classification.entrypoint)
    binary_path = f"/app/{binary}"

    package_dir = posixpath.dirname(classification.entrypoint)
    package = f"./{package_dir}" if package_dir else "."

    return RecipeParameters(
        binary_name=binary,
        build_command=(
            f'CGO_ENABLED=0 go build -ldflags="-s -w" -o {binary_path} {package}'
        ),
        run_command=binary_path,
        entrypoint=binary_path,
        port=classification.port,
        multi_stage=multi_stage,
        version=classification.runtime_version or DEFAULT_GO_VERSION,
    )


def render_dockerfile(kind: ProjectKind, params: RecipeParameters) -> str:
    """Render Dockerfile text for *kind*.

    Raises:
        UnsupportedKindError: If *kind* has no template.
        TemplateError: If the template cannot be expanded.
    """
    renderer = _RENDERERS.get(kind)
    if renderer is None:
        raise UnsupportedKindError(f"unsupported project type: {kind.value}")
    return renderer(params)


def generate_dockerfile(
    classification: ProjectClassification,
    multi_stage: bool = True,
    *,
    output_path: str = "Dockerfile",
) -> GeneratedFile:
    """Generate a Dockerfile for a classified project.

    Args:
        classification: Result of ``classify()``.
        multi_stage: Emit a builder + minimal runtime image.
        output_path: Relative path for the Dockerfile.

    Raises:
        UnsupportedKindError, TemplateError
    """
    if classification.kind not in _RENDERERS:
        raise UnsupportedKindError(
            f"unsupported project type: {classification.kind.value}"
        )

    params = build_recipe_parameters(classification, multi_stage)
    content = render_dockerfile(classification.kind, params)
    logger.debug(
        "Rendered %s Dockerfile (multi_stage=%s, binary=%s)",
        classification.kind.value,
        multi_stage,
        params.binary_name,
    )
    return GeneratedFile(
        path=output_path,
        content=content,
        overwrite=False,
        reason=f"Generated Dockerfile for {classification.kind.value} project",
    )


def supported_kinds() -> list[str]:
    """Return project kinds with Dockerfile templates available."""
    return sorted(k.value for k in _RENDERERS)
