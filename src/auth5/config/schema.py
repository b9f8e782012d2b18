from __future__ import annotations

from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

CONFIG_ENV_VAR = "AUTH5_CONFIG"
DEFAULT_CONFIG_FILE = "auth5.yml"
ENV_PREFIX = "AUTH5_"
ENV_DELIMITER = "."


class Section(BaseModel):
    """Frozen base for every configuration section.

    Fields default to their zero value so that a missing key surfaces as a
    validation violation rather than an unmarshalling error.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # ``key:`` with no value in YAML means the key is absent.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class SiteConfig(Section):
    name: str = ""
    url: str = ""
    api_url: str = ""


class ServerConfig(Section):
    host: str = ""
    port: int = 0


class SwaggerConfig(Section):
    web: bool = False
    path: str = ""


class WebhookConfig(Section):
    secret: str = ""


class StripeConfig(Section):
    secret_key: str = ""
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)


class GeoLite2Config(Section):
    country: str = ""


class MaxMindConfig(Section):
    geolite2: GeoLite2Config = Field(default_factory=GeoLite2Config)


class SentryConfig(Section):
    dsn: str = ""


class SMTPConfig(Section):
    name: str = ""
    from_: str = Field(default="", alias="from")
    username: str = ""
    password: str = ""
    host: str = ""
    port: int = 0
    tls: bool = False


class EmailConfig(Section):
    """One outbound-mail profile, selected by nickname."""

    nickname: str = ""
    smtp: SMTPConfig = Field(default_factory=SMTPConfig)


class CORSConfig(Section):
    origins: Tuple[str, ...] = ()


class MongoDBConfig(Section):
    uri: str = ""
    db_name: str = ""


class BadgerConfig(Section):
    dir: str = ""


class DatabaseConfig(Section):
    mongodb: MongoDBConfig = Field(default_factory=MongoDBConfig)
    badger: BadgerConfig = Field(default_factory=BadgerConfig)


class OAuthConfig(Section):
    client_id: str = ""
    client_secret: str = ""
    redirect_url: str = ""


class OAuthProviders(Section):
    google: OAuthConfig = Field(default_factory=OAuthConfig)
    github: OAuthConfig = Field(default_factory=OAuthConfig)


class RootConfig(Section):
    """Typed, immutable representation of the whole settings tree."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    swagger: SwaggerConfig = Field(default_factory=SwaggerConfig)
    stripe: StripeConfig = Field(default_factory=StripeConfig)
    maxmind: MaxMindConfig = Field(default_factory=MaxMindConfig)
    sentry: SentryConfig = Field(default_factory=SentryConfig)
    emails: Tuple[EmailConfig, ...] = ()
    cors: CORSConfig = Field(default_factory=CORSConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    oauth: OAuthProviders = Field(default_factory=OAuthProviders)
