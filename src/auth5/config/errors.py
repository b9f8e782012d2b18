from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Sequence, Tuple

if TYPE_CHECKING:
    from .validator import Violation


class ConfigError(Exception):
    """Base class for configuration errors."""


class ConfigFileError(ConfigError):
    """The settings file is missing, unreadable or not valid YAML."""

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error loading config file {self.path}: {reason}")


class ConfigUnmarshalError(ConfigError):
    """The merged tree does not fit the typed configuration model."""

    def __init__(self, errors: Sequence[Tuple[str, str]]):
        self.errors: List[Tuple[str, str]] = list(errors)
        details = "; ".join(f"{path}: {message}" for path, message in self.errors)
        super().__init__(f"Error unmarshalling config: {details}")


class ConfigValidationError(ConfigError):
    """One or more validation rules failed."""

    def __init__(self, violations: Sequence[Violation]):
        self.violations = list(violations)
        first = self.violations[0] if self.violations else None
        summary = f"{first.path}: {first.message}" if first else "unknown violation"
        extra = len(self.violations) - 1
        if extra > 0:
            summary += f" (and {extra} more)"
        super().__init__(f"Configuration validation failed: {summary}")


class MailProfileNotFoundError(LookupError):
    """No mail profile carries the requested nickname."""

    def __init__(self, nickname: str):
        self.nickname = nickname
        super().__init__(f"SMTP configuration not found for nickname: {nickname}")


class ConfigNotLoadedError(ConfigError):
    """Configuration accessed before ``init_config`` completed."""


class ConfigAlreadyLoadedError(ConfigError):
    """``init_config`` called while a configuration is already published."""
