"""Shared helpers for BeachRank: logging setup and id generation."""

# BeachRank
# Copyright (C) 2025  BeachRank developers
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
import sys
import uuid

from beachrank.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from_env() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    # getLevelName returns a string for unknown names
    if not isinstance(level, int):
        return logging.WARNING
    return level


def setup_logger(name: str) -> logging.Logger:
    """Setup a logger with consistent formatting.

    The level is read from the ``BEACHRANK_LOG_LEVEL`` environment variable.
    Calling this twice for the same name does not add a second handler.

    Args:
        name: Logger name, normally ``__name__``

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = _level_from_env()
    logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)

    return logger


def generate_id(prefix: str) -> str:
    """Generate a unique identifier such as ``player_3f2a...``.

    Args:
        prefix: Usually the class name of the object being identified

    Returns:
        A unique string id
    """
    return f"{prefix.lower()}_{uuid.uuid4().hex}"
