"""
Compose generator — serialize a ComposeDocument to docker-compose.yml.

The output is a small, predictable YAML subset:

- two-space indentation per level
- a blank line after each top-level scalar and after each entry of
  ``services``, ``networks``, ``volumes``, ``configs`` and ``secrets``
- scalars are single-quoted (embedded ``'`` doubled) when they contain a
  space, tab, colon or quote character, and double-quoted with escapes
  when they contain a line break or other control character
- an empty string inside a sequence or mapping is written as ``''``
- empty strings, zero numbers, false flags and empty collections are
  omitted entirely; no key is ever written with a null value

Key order inside each block is fixed and follows the model's field order.
"""

from __future__ import annotations

import json
import logging

from dockergen.core.models.artifact import GeneratedFile
from dockergen.core.models.compose import (
    Build,
    ComposeDocument,
    Config,
    Deploy,
    HealthCheck,
    Network,
    Resources,
    ResourceSpec,
    Secret,
    Service,
    UpdateConfig,
    Volume,
)
from dockergen.core.services.generators import GenerationError

logger = logging.getLogger(__name__)

_INDENT = "  "

# Only these trigger single quotes. Values like ``true``, ``8080`` or ``#x``
# are written bare, so YAML reads them back as bool, int or a comment.
_QUOTE_CHARS = frozenset(" \t:'\"")

# Non-printable or line breaks to YAML, but left raw by json.dumps.
_EXTRA_ESCAPES = {"\x7f": "\\x7f", "\x85": "\\x85", "\u2028": "\\u2028", "\u2029": "\\u2029"}


class InvalidParametersError(GenerationError):
    """Compose generation was requested without a name or port."""


# ── Scalars ─────────────────────────────────────────────────────


def quote(value: str) -> str:
    """Quote *value* as a YAML scalar if it needs it."""
    if not value:
        return "''"
    if any(_is_control(c) for c in value):
        # Line breaks fold to spaces inside single quotes.
        return _double_quoted(value)
    if any(c in _QUOTE_CHARS for c in value):
        return _single_quoted(value)
    return value


def _is_control(c: str) -> bool:
    return c != "\t" and (c < " " or c in "\x7f\x85\u2028\u2029")


def _single_quoted(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _double_quoted(value: str) -> str:
    text = json.dumps(value, ensure_ascii=False)
    for raw, escaped in _EXTRA_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text


# ── Line builders ───────────────────────────────────────────────
#
# Each helper returns the lines for one key at the given depth, or an
# empty list when there is nothing to write.


def _pad(depth: int) -> str:
    return _INDENT * depth


def _scalar(depth: int, key: str, value: str) -> list[str]:
    if not value:
        return []
    return [f"{_pad(depth)}{key}: {quote(value)}"]


def _number(depth: int, key: str, value: int) -> list[str]:
    if not value:
        return []
    return [f"{_pad(depth)}{key}: {value}"]


def _flag(depth: int, key: str, value: bool) -> list[str]:
    if not value:
        return []
    return [f"{_pad(depth)}{key}: true"]


def _sequence(depth: int, key: str, items: list[str]) -> list[str]:
    if not items:
        return []
    lines = [f"{_pad(depth)}{key}:"]
    lines.extend(f"{_pad(depth + 1)}- {quote(item)}" for item in items)
    return lines


def _mapping(depth: int, key: str, items: dict[str, str]) -> list[str]:
    if not items:
        return []
    lines = [f"{_pad(depth)}{key}:"]
    lines.extend(
        f"{_pad(depth + 1)}{quote(k)}: {quote(v)}" for k, v in items.items()
    )
    return lines


def _block(depth: int, key: str, body: list[str]) -> list[str]:
    """Nest *body* under *key*, or drop the key when the body is empty."""
    if not body:
        return []
    return [f"{_pad(depth)}{key}:", *body]


# ── Node renderers ──────────────────────────────────────────────


def _render_build(build: Build | None, depth: int) -> list[str]:
    if build is None:
        return []
    body = [
        *_scalar(depth + 1, "context", build.context),
        *_scalar(depth + 1, "dockerfile", build.dockerfile),
        *_mapping(depth + 1, "args", build.args),
        *_scalar(depth + 1, "target", build.target),
        *_sequence(depth + 1, "cache_from", build.cache_from),
    ]
    return _block(depth, "build", body)


def _render_healthcheck(check: HealthCheck | None, depth: int) -> list[str]:
    if check is None or not check.test:
        return []
    body = [
        *_sequence(depth + 1, "test", check.test),
        *_scalar(depth + 1, "interval", check.interval),
        *_scalar(depth + 1, "timeout", check.timeout),
        *_number(depth + 1, "retries", check.retries),
        *_scalar(depth + 1, "start_period", check.start_period),
    ]
    return _block(depth, "healthcheck", body)


def _render_resource_spec(key: str, spec: ResourceSpec | None, depth: int) -> list[str]:
    if spec is None or spec.is_empty:
        return []
    body = [
        *_scalar(depth + 1, "cpus", spec.cpus),
        *_scalar(depth + 1, "memory", spec.memory),
    ]
    return _block(depth, key, body)


def _render_resources(resources: Resources | None, depth: int) -> list[str]:
    if resources is None:
        return []
    body = [
        *_render_resource_spec("limits", resources.limits, depth + 1),
        *_render_resource_spec("reservations", resources.reservations, depth + 1),
    ]
    return _block(depth, "resources", body)


def _render_update_config(update: UpdateConfig | None, depth: int) -> list[str]:
    if update is None:
        return []
    body = [
        *_number(depth + 1, "parallelism", update.parallelism),
        *_scalar(depth + 1, "delay", update.delay),
        *_scalar(depth + 1, "failure_action", update.failure_action),
        *_scalar(depth + 1, "order", update.order),
    ]
    return _block(depth, "update_config", body)


def _render_deploy(deploy: Deploy | None, depth: int) -> list[str]:
    if deploy is None:
        return []
    placement: list[str] = []
    if deploy.placement is not None:
        placement = _block(
            depth + 1,
            "placement",
            _sequence(depth + 2, "constraints", deploy.placement.constraints),
        )
    body = [
        *_scalar(depth + 1, "mode", deploy.mode),
        *_number(depth + 1, "replicas", deploy.replicas),
        *_render_resources(deploy.resources, depth + 1),
        *_render_update_config(deploy.update_config, depth + 1),
        *placement,
    ]
    return _block(depth, "deploy", body)


def _render_service(service: Service, depth: int) -> list[str]:
    d = depth + 1
    return [
        f"{_pad(depth)}{quote(service.name)}:",
        *_scalar(d, "container_name", service.container_name),
        *_scalar(d, "image", service.image),
        *_render_build(service.build, d),
        *_scalar(d, "restart", service.restart),
        *_sequence(d, "ports", service.ports),
        *_mapping(d, "environment", service.environment),
        *_sequence(d, "env_file", service.env_file),
        *_sequence(d, "volumes", service.volumes),
        *_sequence(d, "networks", service.networks),
        *_sequence(d, "depends_on", service.depends_on),
        *_render_healthcheck(service.healthcheck, d),
        *_render_deploy(service.deploy, d),
        *_mapping(d, "labels", service.labels),
        *_scalar(d, "command", service.command),
        *_scalar(d, "entrypoint", service.entrypoint),
        *_scalar(d, "user", service.user),
        *_scalar(d, "working_dir", service.working_dir),
        *_flag(d, "read_only", service.read_only),
    ]


def _render_network(network: Network, depth: int) -> list[str]:
    d = depth + 1
    return [
        f"{_pad(depth)}{quote(network.name)}:",
        *_scalar(d, "driver", network.driver),
        *_flag(d, "external", network.external),
        *_flag(d, "attachable", network.attachable),
        *_mapping(d, "labels", network.labels),
    ]


def _render_volume(volume: Volume, depth: int) -> list[str]:
    d = depth + 1
    return [
        f"{_pad(depth)}{quote(volume.name)}:",
        *_scalar(d, "driver", volume.driver),
        *_flag(d, "external", volume.external),
        *_mapping(d, "labels", volume.labels),
        *_mapping(d, "driver_opts", volume.driver_opts),
    ]


def _render_file_ref(item: Config | Secret, depth: int) -> list[str]:
    # External references carry no file.
    d = depth + 1
    lines = [f"{_pad(depth)}{quote(item.name)}:"]
    if item.external:
        lines.extend(_flag(d, "external", True))
    else:
        lines.extend(_scalar(d, "file", item.file))
    return lines


def _section(key: str, entries: list[list[str]]) -> list[str]:
    """A top-level section with a blank line after every entry."""
    if not entries:
        return []
    lines = [f"{key}:"]
    for entry in entries:
        lines.extend(entry)
        lines.append("")
    return lines


# ── Public API ──────────────────────────────────────────────────


def render_compose(document: ComposeDocument) -> str:
    """Serialize a ComposeDocument to docker-compose.yml text."""
    lines = [
        f"version: {_single_quoted(document.version)}",
        "",
        f"name: {_single_quoted(document.name)}",
        "",
        *_section("services", [_render_service(s, 1) for s in document.services]),
        *_section("networks", [_render_network(n, 1) for n in document.networks]),
        *_section("volumes", [_render_volume(v, 1) for v in document.volumes]),
        *_section("configs", [_render_file_ref(c, 1) for c in document.configs]),
        *_section("secrets", [_render_file_ref(s, 1) for s in document.secrets]),
    ]
    return "\n".join(lines) + "\n"


def build_default_compose(project_name: str, port: str) -> ComposeDocument:
    """Build the single-service compose document for a project.

    Args:
        project_name: Compose project name (e.g. ``my-api``).
        port: Published container port, as a string.

    Raises:
        InvalidParametersError: If either argument is empty.
    """
    if not project_name or not port:
        raise InvalidParametersError("project name and port are required")

    return ComposeDocument(
        name=project_name,
        services=[
            Service(
                name="app",
                container_name=f"{project_name}-app",
                build=Build(context=".", dockerfile="Dockerfile"),
                restart="unless-stopped",
                ports=[f"{port}:{port}"],
                environment={"ENV": "development"},
            ),
        ],
    )


def generate_compose(
    project_name: str,
    port: str,
    *,
    output_path: str = "docker-compose.yml",
) -> GeneratedFile:
    """Generate docker-compose.yml for a project.

    Raises:
        InvalidParametersError: If the name or port is empty.
    """
    document = build_default_compose(project_name, port)
    content = render_compose(document)
    logger.debug("Rendered compose file for %s (%d service(s))", project_name, len(document.services))
    return GeneratedFile(
        path=output_path,
        content=content,
        overwrite=False,
        reason=f"Generated docker-compose.yml for {project_name}",
    )
