"""
dockergen — CLI entrypoint.

Usage:
    dockergen --help
    dockergen detect
    dockergen init --compose
    python -m dockergen.main init --single-stage --port 8080
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from dockergen import __version__
from dockergen.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="dockergen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write logs to FILE.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    log_file: str | None,
) -> None:
    """dockergen — auto-generate Dockerfiles and Compose files from project analysis.

    No container management, just scaffolding.
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=log_file or os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


_dir_option = click.option(
    "--dir",
    "project_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)


@cli.command()
@_dir_option
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(project_dir: Path | None, as_json: bool) -> None:
    """Detect the project type, entrypoint, port and runtime version."""
    from dockergen.core.use_cases.detect import run_detect

    result = run_detect((project_dir or Path.cwd()).resolve())

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    project = result.classification
    assert project is not None
    click.secho(f"🔍 {project.kind.value} project", fg="cyan", bold=True)
    click.echo(f"   Directory:  {project.root_dir}")
    click.echo(f"   Entrypoint: {project.entrypoint or '(not found)'}")
    click.echo(f"   Port:       {project.port}")
    if project.runtime_version:
        click.echo(f"   Version:    {project.runtime_version}")


@cli.command("init")
@_dir_option
@click.option("--compose/--no-compose", "-c", default=None, help="Generate docker-compose.yml.")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing files.")
@click.option("--port", "-p", type=click.IntRange(1, 65535), default=None,
              help="Specify app port (default: auto-detect).")
@click.option("--multi-stage/--single-stage", "-m", "multi_stage", default=None,
              help="Use a multi-stage build (default: multi-stage).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def init_cmd(
    ctx: click.Context,
    project_dir: Path | None,
    compose: bool | None,
    force: bool,
    port: int | None,
    multi_stage: bool | None,
    as_json: bool,
) -> None:
    """Initialize a Dockerfile for your project."""
    from dockergen.core.use_cases.init import run_init

    result = run_init(
        (project_dir or Path.cwd()).resolve(),
        multi_stage=multi_stage,
        compose=compose,
        port=port,
        force=force,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.classification is not None
    kind = result.classification.kind.value
    for path in result.written:
        click.secho(f"✅ Generated {path} for {kind} project", fg="green")

    if not ctx.obj.get("quiet"):
        click.echo("🚀 Dockerization complete!")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
