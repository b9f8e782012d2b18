import argparse
import sys
from typing import List, Optional

from loguru import logger

from auth5.config import (
    ConfigError,
    ConfigFileError,
    ConfigUnmarshalError,
    ConfigValidationError,
    init_config,
)
from auth5.config.printer import format_diagnostics, format_summary, format_violations
from auth5.logging_utils import setup_logging


def _report_fatal(error: ConfigError) -> None:
    if isinstance(error, ConfigValidationError):
        first = error.violations[0]
        logger.critical(f"Configuration validation failed: field={first.path} error={first.message}")
        for violation in error.violations[1:]:
            logger.error(f"Configuration validation failed: field={violation.path} error={violation.message}")
    elif isinstance(error, ConfigUnmarshalError):
        for path, message in error.errors:
            logger.critical(f"Error unmarshalling config: field={path} error={message}")
    elif isinstance(error, ConfigFileError):
        logger.critical(f"Error loading config file: path={error.path} error={error.reason}")
    else:
        logger.critical(str(error))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="auth5 configuration loader")
    parser.add_argument("--config", help="Settings file (default: $AUTH5_CONFIG or auth5.yml)")
    parser.add_argument("--check", action="store_true", help="Validate the configuration and print diagnostics")
    parser.add_argument("--show", action="store_true", help="Print the effective configuration with secrets masked")
    parser.add_argument("--log-level", default="INFO", help="Log level (default: INFO)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    try:
        accessor = init_config(args.config)
    except ConfigError as e:
        _report_fatal(e)
        if args.check and isinstance(e, ConfigValidationError):
            print(format_violations(e.violations))
        return 1

    if args.check:
        print(format_diagnostics(str(accessor.path), accessor.overridden_keys))
        print(f"OK: {len(accessor.mail_profile_nicknames())} mail profile(s): "
              f"{', '.join(accessor.mail_profile_nicknames())}")
    if args.show:
        print(format_summary(accessor.as_dict()))

    logger.info("Configuration loaded")
    return 0


if __name__ == "__main__":
    sys.exit(main())
