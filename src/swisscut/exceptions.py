"""Exceptions for use in Swiss Cut.

Expected domain failures (an impossible pairing, an illegal match result, a
drop that is not allowed) are reported through result objects. The
exceptions below are reserved for calls that cannot be answered at all.
"""

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


# ========== Base Application Exception ==========


class SwissCutException(Exception):
    """Base exception for all Swiss Cut errors.

    All custom exceptions in the package inherit from this class so callers
    can catch every engine error with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(SwissCutException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


# ========== Bracket Exceptions ==========


class BracketException(SwissCutException):
    """Base exception for top cut bracket errors."""

    pass


class InvalidBracketException(BracketException):
    """Raised when a bracket size or its seeded player list is invalid."""

    pass


# ========== Player Exceptions ==========


class PlayerException(SwissCutException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissCutException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
