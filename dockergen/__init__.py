"""
dockergen — zero-configuration container scaffolding.

Detects a project's stack and generates a Dockerfile and an optional
docker-compose.yml for it.
"""

__version__ = "0.1.0"
