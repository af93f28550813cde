"""Invoice sender setup."""

from __future__ import annotations

from .config import Config, load_config
from .mail import SmtpTransport, new_transport
from .process import Runner
from .utils import PathLike


def prepare_transport(config_path: PathLike, *, runner: Runner | None = None) -> tuple[Config, SmtpTransport]:
    """Load the configuration at *config_path* and build its SMTP transport."""

    config = load_config(config_path)
    return config, new_transport(config.smtp, runner=runner)


__all__ = ["prepare_transport"]
