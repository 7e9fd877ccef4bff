"""
Configuration Exceptions

Exceptions raised while loading or changing configuration.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ConfigException(Exception):
    """
    Base exception for configuration errors.

    Attributes:
        message: Human-readable error description
        key: Configuration key involved (if applicable)
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.key = key
        self.context = context or {}
        if key:
            self.context["key"] = key

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigLoadError(ConfigException):
    """The configuration file is missing, unreadable or not valid JSON."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx)
        self.path = path


class ConfigValidationError(ConfigException):
    """A configuration value is unknown or out of range."""
    pass
