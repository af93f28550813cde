"""Configuration file loading.

The configuration lives in ``scripts/scripts.toml`` under the user's
configuration directory::

    [smtp]
    host = "smtp.example.com"
    user = "me@example.com"
    port = 465
    pass_command = "pass smtp.example.com"

    [mail]
    from = "Jane Doe <me@example.com>"
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import click
from pydantic import BaseModel, ConfigDict, Field, NameEmail, StrictInt, StrictStr, ValidationError

from .exceptions import ConfigError
from .utils import PathLike, ensure_path

_LOGGER = logging.getLogger("deskscripts.config")

APP_NAME = "scripts"
CONFIG_FILENAME = "scripts.toml"


class SmtpConfig(BaseModel):
    """SMTP account used to send mail."""

    host: StrictStr
    user: StrictStr
    port: StrictInt = Field(..., ge=1, le=65535)
    pass_command: StrictStr = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")


class MailConfig(BaseModel):
    """Message defaults."""

    from_: NameEmail = Field(..., alias="from")

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class Config(BaseModel):
    smtp: SmtpConfig
    mail: MailConfig

    model_config = ConfigDict(frozen=True, extra="forbid")


def default_config_path() -> Path:
    """Return the platform-specific location of ``scripts.toml``."""

    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME


def load_config(path: PathLike) -> Config:
    """Read and validate the configuration at *path*.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid TOML, or
            does not match the schema.
    """

    config_path = ensure_path(path)
    _LOGGER.debug("Loading configuration from %s", config_path)
    try:
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {config_path}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file {config_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    try:
        config = Config.model_validate(data)
    except ValidationError as exc:
        _LOGGER.error("Configuration %s does not match the schema: %s", config_path, exc)
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc

    _LOGGER.info("Loaded configuration from %s", config_path)
    return config


__all__ = ["Config", "MailConfig", "SmtpConfig", "default_config_path", "load_config"]
