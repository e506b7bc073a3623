"""Process-wide engine configuration.

The engine's build options are fixed once per process, when this module is
first imported:

- error mode (``GNAW_ERROR_MODE``: ``simple`` or ``verbose``)
- regex bridge availability (``GNAW_REGEX``)
- owned-collection support (``GNAW_COLLECT``); when off, collecting
  repetition combinators refuse construction and only folds are available

Parsers never read the configuration while parsing. The error strategy is
bound from ``CONFIG`` at import time by gnaw.diagnostics.strategy.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from gnaw.constants import ENV_COLLECT, ENV_ERROR_MODE, ENV_REGEX, FALSE_VALUES
from gnaw.diagnostics.errors import ConfigurationError
from gnaw.enums import ErrorMode

__all__ = ["CONFIG", "EngineConfig", "load_config", "require_collections", "require_regex"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine build options.

    Constructing ``EngineConfig()`` with no arguments yields the defaults:
    simple errors, regex bridge enabled, owned collections enabled.

    Attributes:
        error_mode: Shape of Error payloads (simple discriminant or chain)
        regex: Whether the regular-expression bridge may be constructed
        collections: Whether combinators that build owned lists may be
            constructed (False models a reduced runtime environment)

    Example:
        >>> EngineConfig(error_mode=ErrorMode.VERBOSE).error_mode
        <ErrorMode.VERBOSE: 'verbose'>
    """

    error_mode: ErrorMode = ErrorMode.SIMPLE
    regex: bool = True
    collections: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ConfigurationError: If error_mode is not an ErrorMode member
        """
        if not isinstance(self.error_mode, ErrorMode):
            msg = f"error_mode must be an ErrorMode, got {self.error_mode!r}"
            raise ConfigurationError(msg)


def _flag(environ: Mapping[str, str], name: str) -> bool:
    value = environ.get(name)
    if value is None:
        return True
    return value.strip().lower() not in FALSE_VALUES


def load_config(environ: Mapping[str, str] | None = None) -> EngineConfig:
    """Build an EngineConfig from environment variables.

    Unrecognised error modes fall back to ``simple`` with a warning rather
    than failing the import of the library.

    Args:
        environ: Mapping to read (default: ``os.environ``)

    Returns:
        Validated configuration
    """
    env = os.environ if environ is None else environ

    raw_mode = env.get(ENV_ERROR_MODE, ErrorMode.SIMPLE.value).strip().lower()
    try:
        error_mode = ErrorMode(raw_mode)
    except ValueError:
        logger.warning(
            "Unknown %s value '%s'. Falling back to '%s'",
            ENV_ERROR_MODE,
            raw_mode,
            ErrorMode.SIMPLE.value,
        )
        error_mode = ErrorMode.SIMPLE

    config = EngineConfig(
        error_mode=error_mode,
        regex=_flag(env, ENV_REGEX),
        collections=_flag(env, ENV_COLLECT),
    )
    logger.debug("Engine configuration: %s", config)
    return config


CONFIG: EngineConfig = load_config()


def require_collections(feature: str) -> None:
    """Fail fast when owned collections are disabled.

    Args:
        feature: Name of the combinator being constructed

    Raises:
        ConfigurationError: If the configuration disables owned collections
    """
    if not CONFIG.collections:
        msg = (
            f"{feature} collects outputs into a list, which is disabled "
            f"({ENV_COLLECT}=0). Use a fold_* combinator instead."
        )
        raise ConfigurationError(msg)


def require_regex(feature: str) -> None:
    """Fail fast when the regex bridge is disabled.

    Raises:
        ConfigurationError: If the configuration disables the regex bridge
    """
    if not CONFIG.regex:
        msg = f"{feature} requires the regex bridge, which is disabled ({ENV_REGEX}=0)"
        raise ConfigurationError(msg)
