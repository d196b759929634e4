"""
Domain models — Pydantic types for dockergen.

All models are re-exported here for convenient access:

    from dockergen.core.models import ProjectClassification, ComposeDocument
"""

from dockergen.core.models.artifact import GeneratedFile
from dockergen.core.models.compose import (
    Build,
    ComposeDocument,
    Config,
    Deploy,
    HealthCheck,
    Network,
    Placement,
    Resources,
    ResourceSpec,
    Secret,
    Service,
    UpdateConfig,
    Volume,
)
from dockergen.core.models.project import (
    DEFAULT_PORT,
    ProjectClassification,
    ProjectKind,
)
from dockergen.core.models.recipe import RecipeParameters

__all__ = [
    # artifact.py
    "GeneratedFile",
    # compose.py
    "Build",
    "ComposeDocument",
    "Config",
    "Deploy",
    "HealthCheck",
    "Network",
    "Placement",
    "ResourceSpec",
    "Resources",
    "Secret",
    "Service",
    "UpdateConfig",
    "Volume",
    # project.py
    "DEFAULT_PORT",
    "ProjectClassification",
    "ProjectKind",
    # recipe.py
    "RecipeParameters",
]
