"""Error types raised by the generator pipeline.

Library code raises these; only the CLI turns them into exit codes.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for every error the generator raises on purpose."""


class SpecResolutionError(GeneratorError):
    """The OpenAPI document could not be loaded, parsed or validated."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or [message]


class ConfigurationError(GeneratorError):
    """Caller-supplied generation settings are missing or malformed."""


class OutputConflictError(GeneratorError):
    """The output directory is already populated and overwrite was not allowed."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Output directory already exists: {path}")
        self.path = path
