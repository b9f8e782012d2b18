"""
Accessors - typed, read-only views over a loaded configuration.

``ConfigAccessor`` is meant to be constructed once from ``load_config`` and
passed to the components that need it. The module-level functions expose the
same getters over a process-wide instance published by ``init_config``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import ConfigAlreadyLoadedError, ConfigNotLoadedError, MailProfileNotFoundError
from .loader import load_config
from .schema import (
    CORSConfig,
    DatabaseConfig,
    MaxMindConfig,
    OAuthProviders,
    RootConfig,
    SentryConfig,
    ServerConfig,
    SiteConfig,
    SMTPConfig,
    StripeConfig,
    SwaggerConfig,
)
from .utils import get_path, split_path


class ConfigAccessor:
    """Narrow getters over a validated ``RootConfig``."""

    def __init__(self, root: RootConfig, path: Optional[Path] = None, overridden_keys: Sequence[str] = ()):
        self._root = root
        self.path = path
        self.overridden_keys = tuple(overridden_keys)

    @property
    def root(self) -> RootConfig:
        return self._root

    def get_site_config(self) -> SiteConfig:
        return self._root.site

    def get_server_config(self) -> ServerConfig:
        return self._root.server

    def get_swagger_config(self) -> SwaggerConfig:
        return self._root.swagger

    def get_stripe_config(self) -> StripeConfig:
        return self._root.stripe

    def get_maxmind_config(self) -> MaxMindConfig:
        return self._root.maxmind

    def get_sentry_config(self) -> SentryConfig:
        return self._root.sentry

    def get_cors_config(self) -> CORSConfig:
        return self._root.cors

    def get_database_config(self) -> DatabaseConfig:
        return self._root.database

    def get_oauth_config(self) -> OAuthProviders:
        return self._root.oauth

    def get_smtp_config(self, nickname: str) -> SMTPConfig:
        """
        Return the SMTP settings of the first profile named ``nickname``.

        Args:
            nickname: Profile nickname, compared case-sensitively

        Raises:
            MailProfileNotFoundError: No profile carries that nickname
        """
        for profile in self._root.emails:
            if profile.nickname == nickname:
                return profile.smtp
        raise MailProfileNotFoundError(nickname)

    def mail_profile_nicknames(self) -> List[str]:
        return [profile.nickname for profile in self._root.emails]

    def as_dict(self) -> Dict[str, Any]:
        """Plain copy of the configuration keyed by file keys, lists for tuples."""
        return self._root.model_dump(mode="json", by_alias=True)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``server.port`` or ``emails.0.nickname``."""
        value = get_path(self.as_dict(), split_path(key))
        return default if value is None else value


_accessor: Optional[ConfigAccessor] = None


def init_config(
    path: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigAccessor:
    """Load the configuration and publish it for the rest of the process."""
    global _accessor
    if _accessor is not None:
        raise ConfigAlreadyLoadedError("configuration is already loaded")
    result = load_config(path, environ)
    _accessor = ConfigAccessor(result.config, result.path, result.overridden_keys)
    return _accessor


def get_config() -> ConfigAccessor:
    if _accessor is None:
        raise ConfigNotLoadedError("configuration accessed before init_config()")
    return _accessor


def reset_config() -> None:
    """Drop the published configuration. Intended for tests."""
    global _accessor
    _accessor = None


def get_site_config() -> SiteConfig:
    return get_config().get_site_config()


def get_server_config() -> ServerConfig:
    return get_config().get_server_config()


def get_swagger_config() -> SwaggerConfig:
    return get_config().get_swagger_config()


def get_stripe_config() -> StripeConfig:
    return get_config().get_stripe_config()


def get_maxmind_config() -> MaxMindConfig:
    return get_config().get_maxmind_config()


def get_sentry_config() -> SentryConfig:
    return get_config().get_sentry_config()


def get_smtp_config(nickname: str) -> SMTPConfig:
    return get_config().get_smtp_config(nickname)


def get_cors_config() -> CORSConfig:
    return get_config().get_cors_config()


def get_database_config() -> DatabaseConfig:
    return get_config().get_database_config()


def get_oauth_config() -> OAuthProviders:
    return get_config().get_oauth_config()
