"""Shared helpers for Volley Pairing."""

# Volley Pairing
# Copyright (C) 2025  Volley Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import uuid

from volleypairing.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

ROOT_LOGGER_NAME = "volleypairing"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        level = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
        root.setLevel(getattr(logging, level, logging.WARNING))
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a logger living under the package namespace.

    The package root logger gets a single stream handler the first time
    any module asks for a logger. Its level comes from the
    ``VOLLEYPAIRING_LOG_LEVEL`` environment variable (default WARNING).

    Args:
        name: Usually the calling module's ``__name__``

    Returns:
        Configured logger
    """
    _configure_root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def generate_id(prefix: str = "") -> str:
    """Generate a unique identifier, optionally prefixed (e.g. ``Team-...``)."""
    token = uuid.uuid4().hex
    return f"{prefix}-{token}" if prefix else token


__all__ = ["setup_logger", "generate_id"]
