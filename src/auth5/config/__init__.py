"""Layered configuration: YAML settings file plus AUTH5_* environment overrides."""

from .schema import RootConfig, EmailConfig, SMTPConfig  # noqa: F401
from .loader import LoadResult, load_config, resolve_config_path  # noqa: F401
from .validator import Violation, validate_config  # noqa: F401
from .errors import (  # noqa: F401
    ConfigAlreadyLoadedError,
    ConfigError,
    ConfigFileError,
    ConfigNotLoadedError,
    ConfigUnmarshalError,
    ConfigValidationError,
    MailProfileNotFoundError,
)
from .accessors import (  # noqa: F401
    ConfigAccessor,
    get_config,
    get_cors_config,
    get_database_config,
    get_maxmind_config,
    get_oauth_config,
    get_sentry_config,
    get_server_config,
    get_site_config,
    get_smtp_config,
    get_stripe_config,
    get_swagger_config,
    init_config,
    reset_config,
)
