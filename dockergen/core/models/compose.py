"""
Compose document model — the orchestration descriptor as a tree.

Every optional sub-structure is ``X | None`` so that an absent block and
a present-but-empty one stay distinguishable when rendering. Collections
default to empty and are omitted from output when empty.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Build(BaseModel):
    """Service build block."""

    context: str = "."
    dockerfile: str = ""
    args: dict[str, str] = Field(default_factory=dict)
    target: str = ""
    cache_from: list[str] = Field(default_factory=list)


class HealthCheck(BaseModel):
    """Container health probe."""

    test: list[str] = Field(default_factory=list)
    interval: str = ""
    timeout: str = ""
    retries: int = 0
    start_period: str = ""


class ResourceSpec(BaseModel):
    cpus: str = ""
    memory: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.cpus or self.memory)


class Resources(BaseModel):
    limits: ResourceSpec | None = None
    reservations: ResourceSpec | None = None


class UpdateConfig(BaseModel):
    """Rolling update policy."""

    parallelism: int = 0
    delay: str = ""
    failure_action: str = ""
    order: str = ""


class Placement(BaseModel):
    constraints: list[str] = Field(default_factory=list)


class Deploy(BaseModel):
    """Swarm-style deploy policy."""

    mode: str = ""
    replicas: int = 0
    resources: Resources | None = None
    update_config: UpdateConfig | None = None
    placement: Placement | None = None


class Service(BaseModel):
    """A single compose service.

    Field order matches the order keys are written out.
    """

    name: str
    container_name: str = ""
    image: str = ""
    build: Build | None = None
    restart: str = ""
    ports: list[str] = Field(default_factory=list)
    environment: dict[str, str] = Field(default_factory=dict)
    env_file: list[str] = Field(default_factory=list)
    volumes: list[str] = Field(default_factory=list)
    networks: list[str] = Field(default_factory=list)
    depends_on: list[str] = Field(default_factory=list)
    healthcheck: HealthCheck | None = None
    deploy: Deploy | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    command: str = ""
    entrypoint: str = ""
    user: str = ""
    working_dir: str = ""
    read_only: bool = False


class Network(BaseModel):
    name: str
    driver: str = ""
    external: bool = False
    attachable: bool = False
    labels: dict[str, str] = Field(default_factory=dict)


class Volume(BaseModel):
    name: str
    driver: str = ""
    external: bool = False
    labels: dict[str, str] = Field(default_factory=dict)
    driver_opts: dict[str, str] = Field(default_factory=dict)


class Config(BaseModel):
    """A top-level config; either external or backed by a file."""

    name: str
    file: str = ""
    external: bool = False


class Secret(BaseModel):
    """A top-level secret; either external or backed by a file."""

    name: str
    file: str = ""
    external: bool = False


class ComposeDocument(BaseModel):
    """Root of a docker-compose.yml."""

    version: str = "3.8"
    name: str
    services: list[Service] = Field(default_factory=list)
    networks: list[Network] = Field(default_factory=list)
    volumes: list[Volume] = Field(default_factory=list)
    configs: list[Config] = Field(default_factory=list)
    secrets: list[Secret] = Field(default_factory=list)
