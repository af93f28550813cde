"""Utility helpers for :mod:`deskscripts`."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

PathLike = Union[str, os.PathLike[str]]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure package-wide logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def ensure_path(path: PathLike) -> Path:
    """Return an absolute :class:`~pathlib.Path` for *path*."""

    return Path(path).expanduser().resolve(strict=False)


def ensure_parent_dir(path: Path) -> None:
    """Create parent directory for *path* if it does not exist."""

    path.parent.mkdir(parents=True, exist_ok=True)


__all__ = ["LOG_FORMAT", "PathLike", "configure_logging", "ensure_path", "ensure_parent_dir"]
