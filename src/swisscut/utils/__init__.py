"""Shared helpers for Swiss Cut: logger setup and id generation."""

# Swiss Cut
# Copyright (C) 2025  Swiss Cut developers
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
import uuid
from typing import Callable

ROOT_LOGGER_NAME = "swisscut"

# The library never configures handlers itself; applications do.
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

IdFactory = Callable[[], str]


def setup_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name``.

    Modules outside the ``swisscut`` namespace are nested under it so a
    single ``logging.getLogger("swisscut")`` call controls every engine.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Attach a console handler to the package logger (CLI use only)."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)
    has_console = any(
        isinstance(handler, logging.StreamHandler) for handler in root.handlers
    )
    if not has_console:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
        root.addHandler(handler)


def generate_id(prefix: str) -> str:
    """Generate an opaque unique id such as ``phase-3f9c2a1b7d``."""
    return f"{prefix}-{uuid.uuid4().hex[:10]}"


class IdSequence:
    """Deterministic id factory: ``phase-1``, ``phase-2``, ...

    Pass an instance wherever an ``IdFactory`` is accepted so generated ids
    are reproducible.
    """

    def __init__(self, prefix: str, start: int = 1) -> None:
        self.prefix = prefix
        self._next = start

    def __call__(self) -> str:
        value = f"{self.prefix}-{self._next}"
        self._next += 1
        return value


__all__ = [
    "IdFactory",
    "IdSequence",
    "configure_logging",
    "generate_id",
    "setup_logger",
]
