# conjax/config.py
"""
Runtime configuration.

Config values are read from the environment by load_config:
    CONJAX_ENABLE_X64: "1"/"0", run JAX with 64-bit floats (default on)
    CONJAX_LOG_LEVEL:  level name for the ``conjax`` logger (default WARNING)

Importing ``conjax`` changes nothing. An entry point applies the values once:

    conjax.apply_config(conjax.load_config())
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import jax

logger = logging.getLogger(__name__)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Config:
    """
    Attributes:
        enable_x64: enable double precision in JAX. The closed-form normalizers
            lose most of their digits in float32.
        log_level: level of the package logger
    """
    enable_x64: bool = True
    log_level: str = "WARNING"


def _parse_bool(name: str, value: str) -> bool:
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be one of {_TRUE + _FALSE}, got {value!r}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    env = os.environ if environ is None else environ
    defaults = Config()

    enable_x64 = defaults.enable_x64
    if "CONJAX_ENABLE_X64" in env:
        enable_x64 = _parse_bool("CONJAX_ENABLE_X64", env["CONJAX_ENABLE_X64"])

    log_level = env.get("CONJAX_LOG_LEVEL", defaults.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level: {log_level}")

    return Config(enable_x64=enable_x64, log_level=log_level)


def apply_config(config: Config) -> None:
    jax.config.update("jax_enable_x64", config.enable_x64)
    logging.getLogger("conjax").setLevel(config.log_level)
    logger.debug("applied %s", config)
