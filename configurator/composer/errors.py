"""Exceptions raised by the configuration composer.

Every error the composer can surface derives from ``ConfiguratorError`` so
callers (the CLI, a web service) can present failures with one ``except``.
Nothing here is retried or recovered internally.
"""

from __future__ import annotations


class ConfiguratorError(Exception):
    """Base class for all composer failures."""


class UnknownFeatureError(ConfiguratorError, KeyError):
    """Raised when a selection references a feature id absent from the catalog."""

    def __init__(self, feature_id: str) -> None:
        self.feature_id = feature_id
        super().__init__(f"Unknown feature: {feature_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.args[0]


class UnknownDialectError(ConfiguratorError, KeyError):
    """Raised when a dialect has no base template or no registered transform."""

    def __init__(self, dialect: str, feature_id: str | None = None) -> None:
        self.dialect = dialect
        self.feature_id = feature_id
        if feature_id is None:
            message = f"Unknown dialect: {dialect!r}"
        else:
            message = f"Feature {feature_id!r} has no transform for dialect {dialect!r}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class VersionLookupError(ConfiguratorError):
    """Raised when the version lookup fails for any package."""

    def __init__(self, package: str, reason: str = "") -> None:
        self.package = package
        self.reason = reason
        message = f"Could not resolve a version for {package!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SerializationError(ConfiguratorError, TypeError):
    """Raised when a config value cannot be written in the requested style."""
