"""
Tests for the Dockerfile generator — recipe parameters and rendering.

Pure unit tests: classification in → Dockerfile text out.
No Docker daemon required.
"""

from pathlib import Path

import pytest

from dockergen.core.models.project import ProjectClassification, ProjectKind
from dockergen.core.models.recipe import RecipeParameters
from dockergen.core.services.generators import GenerationError
from dockergen.core.services.generators import dockerfile as dockerfile_mod
from dockergen.core.services.generators.dockerfile import (
    TemplateError,
    UnsupportedKindError,
    binary_name_for,
    build_recipe_parameters,
    generate_dockerfile,
    render_dockerfile,
    supported_kinds,
)


def _go(entrypoint: str = "main.go", port: int = 8080, version: str = "1.21") -> ProjectClassification:
    return ProjectClassification(
        kind=ProjectKind.GO,
        entrypoint=entrypoint,
        port=port,
        root_dir=Path("/srv/app"),
        runtime_version=version,
    )


# ═══════════════════════════════════════════════════════════════════
#  Recipe parameters
# ═══════════════════════════════════════════════════════════════════


class TestBinaryName:
    def test_root_entrypoint(self):
        """main.go → main."""
        assert binary_name_for("main.go") == "main"

    def test_nested_entrypoint(self):
        """Only the file name counts, not its directory."""
        assert binary_name_for("tools/gen/run.go") == "run"

    def test_unknown_entrypoint(self):
        """No entrypoint → "app"."""
        assert binary_name_for("") == "app"


class TestBuildRecipeParameters:
    def test_root_entrypoint(self):
        """Root main.go builds the current package into /app/main."""
        params = build_recipe_parameters(_go(), multi_stage=True)
        assert params.binary_name == "main"
        assert params.entrypoint == "/app/main"
        assert params.run_command == "/app/main"
        assert params.build_command == (
            'CGO_ENABLED=0 go build -ldflags="-s -w" -o /app/main .'
        )
        assert params.port == 8080
        assert params.version == "1.21"
        assert params.multi_stage is True

    def test_nested_entrypoint_builds_package_dir(self):
        """cmd/api/main.go → go build ./cmd/api."""
        params = build_recipe_parameters(_go("cmd/api/main.go"), multi_stage=False)
        assert params.build_command.endswith("-o /app/main ./cmd/api")
        assert params.multi_stage is False

    def test_missing_entrypoint(self):
        """Unknown entrypoint falls back to /app/app built from "."."""
        params = build_recipe_parameters(_go(""), multi_stage=True)
        assert params.binary_name == "app"
        assert params.build_command.endswith("-o /app/app .")

    def test_missing_version_uses_default(self):
        """Empty runtime version → default Go version."""
        params = build_recipe_parameters(_go(version=""), multi_stage=True)
        assert params.version == "1.22"

    def test_parameters_are_frozen(self):
        params = build_recipe_parameters(_go(), multi_stage=True)
        with pytest.raises(Exception):
            params.port = 1  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════


class TestMultiStage:
    def test_full_layout(self):
        """Build stage, alpine runtime stage, non-root user, EXPOSE, ENTRYPOINT."""
        content = render_dockerfile(ProjectKind.GO, build_recipe_parameters(_go(), True))
        lines = content.splitlines()

        from_lines = [l for l in lines if l.startswith("FROM ")]
        assert from_lines == ["FROM golang:1.21-alpine AS build", "FROM alpine:latest"]

        # Dependencies downloaded before the source copy
        download_idx = lines.index("RUN go mod download")
        copy_all_idx = lines.index("COPY . .")
        assert download_idx < copy_all_idx

        assert 'RUN CGO_ENABLED=0 go build -ldflags="-s -w" -o /app/main .' in lines
        assert "    ca-certificates \\" in lines
        assert "    tzdata" in lines
        assert "RUN addgroup -S appgroup && adduser -S appuser -G appgroup" in lines
        assert "COPY --from=build /app/main /app/" in lines
        assert "USER appuser" in lines
        assert "EXPOSE 8080" in lines
        assert lines[-1] == 'ENTRYPOINT ["/app/main"]'

    def test_user_switch_before_entrypoint(self):
        """USER appuser precedes ENTRYPOINT."""
        content = render_dockerfile(ProjectKind.GO, build_recipe_parameters(_go(), True))
        assert content.index("USER appuser") < content.index("ENTRYPOINT")

    def test_port_zero_omits_expose(self):
        """Port 0 → no EXPOSE block at all."""
        content = render_dockerfile(ProjectKind.GO, build_recipe_parameters(_go(port=0), True))
        assert "EXPOSE" not in content
        assert "Expose the application port" not in content


class TestSingleStage:
    def test_full_layout(self):
        """One golang stage, no runtime stage, no user switch."""
        content = render_dockerfile(ProjectKind.GO, build_recipe_parameters(_go(), False))
        lines = content.splitlines()

        from_lines = [l for l in lines if l.startswith("FROM ")]
        assert from_lines == ["FROM golang:1.21-alpine"]
        assert "COPY --from=build" not in content
        assert "USER" not in content
        assert "RUN go mod download" in lines
        assert "EXPOSE 8080" in lines
        assert lines[-1] == 'ENTRYPOINT ["/app/main"]'

    def test_port_zero_omits_expose(self):
        content = render_dockerfile(ProjectKind.GO, build_recipe_parameters(_go(port=0), False))
        assert "EXPOSE" not in content


class TestRenderDockerfile:
    def test_idempotent(self):
        """Same parameters → identical output."""
        params = build_recipe_parameters(_go("cmd/api/main.go"), True)
        assert render_dockerfile(ProjectKind.GO, params) == render_dockerfile(ProjectKind.GO, params)

    @pytest.mark.parametrize("kind", [ProjectKind.NODEJS, ProjectKind.PYTHON])
    def test_unsupported_kind(self, kind):
        """Kinds without a template are rejected by name."""
        params = build_recipe_parameters(_go(), True)
        with pytest.raises(UnsupportedKindError, match=f"unsupported project type: {kind.value}"):
            render_dockerfile(kind, params)

    def test_malformed_template(self, monkeypatch):
        """A broken placeholder raises TemplateError."""
        monkeypatch.setattr(dockerfile_mod, "_GO_SINGLE_STAGE", "FROM golang:${version\n")
        params = build_recipe_parameters(_go(), False)
        with pytest.raises(TemplateError):
            render_dockerfile(ProjectKind.GO, params)

    def test_unknown_placeholder(self, monkeypatch):
        """Missing placeholder value → TemplateError wrapping KeyError."""
        monkeypatch.setattr(dockerfile_mod, "_GO_SINGLE_STAGE", "FROM ${base_image}\n")
        params = build_recipe_parameters(_go(), False)
        with pytest.raises(TemplateError) as exc:
            render_dockerfile(ProjectKind.GO, params)
        assert isinstance(exc.value.__cause__, KeyError)

    def test_values_are_not_reexpanded(self):
        """A "$" inside a value is written literally."""
        params = RecipeParameters(
            binary_name="svc",
            build_command="go build -o /app/$HOME ./...",
            run_command="/app/svc",
            entrypoint="/app/svc",
            port=0,
            multi_stage=False,
            version="1.22",
        )
        content = render_dockerfile(ProjectKind.GO, params)
        assert "RUN go build -o /app/$HOME ./..." in content


class TestGenerateDockerfile:
    def test_generated_file_metadata(self):
        """Returns a GeneratedFile for ./Dockerfile."""
        result = generate_dockerfile(_go())
        assert result.path == "Dockerfile"
        assert result.overwrite is False
        assert "go" in result.reason
        assert "AS build" in result.content

    def test_single_stage_flag(self):
        result = generate_dockerfile(_go(), multi_stage=False)
        assert "AS build" not in result.content

    def test_unsupported_kind(self):
        """Python projects have no Dockerfile template."""
        project = ProjectClassification(kind=ProjectKind.PYTHON, root_dir=Path("/srv/py"))
        with pytest.raises(UnsupportedKindError):
            generate_dockerfile(project)

    def test_errors_are_generation_errors(self):
        assert issubclass(UnsupportedKindError, GenerationError)
        assert issubclass(TemplateError, GenerationError)

    def test_supported_kinds(self):
        """supported_kinds() lists go only."""
        assert supported_kinds() == ["go"]
