"""
Generators — produce config files from a detected project.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile`` and raises a ``GenerationError`` subclass on failure.
"""


class GenerationError(Exception):
    """Raised when an artifact cannot be rendered."""
