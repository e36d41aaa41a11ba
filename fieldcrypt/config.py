"""
Configuration management for fieldcrypt.

A provider is configured with the option mapping the surrounding framework
passes through (`key` and `salt`, both required). The KDF work factor can be
tuned per deployment through the environment.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from .crypto.kdf import DEFAULT_ITERATIONS
from .errors import ConfigError


logger = logging.getLogger(__name__)

ENV_PREFIX = "FIELDCRYPT_"
ITERATIONS_ENV_VAR = f"{ENV_PREFIX}KDF_ITERATIONS"

RECOGNIZED_OPTIONS = ("key", "salt", "iterations")


def _parse_iterations(raw: Any, source: str) -> int:
    """Accept an int (not bool) or a string of digits, as read from the environment."""
    if isinstance(raw, str) and raw.strip().isdigit():
        iterations = int(raw.strip())
    elif isinstance(raw, int) and not isinstance(raw, bool):
        iterations = raw
    else:
        raise ConfigError(f"{source} must be an integer, got {raw!r}")
    if iterations < 1:
        raise ConfigError(f"{source} must be positive, got {iterations}")
    return iterations


def default_iterations() -> int:
    """
    Return the PBKDF2 work factor for new providers.

    Reads FIELDCRYPT_KDF_ITERATIONS, falling back to DEFAULT_ITERATIONS.

    Raises:
        ConfigError: If the environment value is not a positive integer
    """
    raw = os.environ.get(ITERATIONS_ENV_VAR)
    if raw is None or raw.strip() == "":
        return DEFAULT_ITERATIONS
    return _parse_iterations(raw.strip(), ITERATIONS_ENV_VAR)


@dataclass(frozen=True)
class FieldCipherConfig:
    """
    Options for constructing a field cipher provider.

    `key` is the passphrase, not the derived key. It is excluded from repr so
    configs can be logged safely.
    """

    key: Union[str, bytes] = field(repr=False)
    salt: Union[str, bytes] = field(repr=False)
    iterations: int = DEFAULT_ITERATIONS

    def __post_init__(self):
        for name in ("key", "salt"):
            value = getattr(self, name)
            if value is None:
                raise ConfigError(f"Missing required option: {name}")
            if not isinstance(value, (str, bytes)):
                raise ConfigError(f"Option {name} must be str or bytes, got {type(value).__name__}")
            if len(value) == 0:
                raise ConfigError(f"Option {name} must not be empty")
        object.__setattr__(self, "iterations", _parse_iterations(self.iterations, "iterations"))

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "FieldCipherConfig":
        """
        Build a config from a provider option mapping.

        Args:
            options: Mapping with `key` and `salt`, optionally `iterations`.
                Unrecognized options are ignored.

        Raises:
            ConfigError: If a required option is missing or invalid
        """
        options = dict(options or {})

        ignored = sorted(str(name) for name in options if name not in RECOGNIZED_OPTIONS)
        if ignored:
            logger.debug(f"Ignoring unrecognized provider options: {', '.join(ignored)}")

        iterations = options.get("iterations")
        if iterations is None:
            iterations = default_iterations()

        return cls(key=options.get("key"), salt=options.get("salt"), iterations=iterations)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "FieldCipherConfig":
        """
        Build a config from <prefix>KEY, <prefix>SALT and <prefix>KDF_ITERATIONS.

        Raises:
            ConfigError: If the key or salt variable is unset or empty
        """
        options = {
            "key": os.environ.get(f"{prefix}KEY"),
            "salt": os.environ.get(f"{prefix}SALT"),
        }
        raw_iterations = os.environ.get(f"{prefix}KDF_ITERATIONS")
        if raw_iterations:
            options["iterations"] = _parse_iterations(raw_iterations, f"{prefix}KDF_ITERATIONS")
        return cls.from_options(options)
