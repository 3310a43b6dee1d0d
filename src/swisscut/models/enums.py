"""Closed sets of tournament states and formats."""

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

from enum import Enum


class TournamentPhase(str, Enum):
    """Phase owned by the flow state machine. ``COMPLETED`` is terminal."""

    SWISS = "swiss"
    TOP_CUT = "top_cut"
    COMPLETED = "completed"


class TournamentFormat(str, Enum):
    """Overall event format chosen by the organizer."""

    SWISS_ONLY = "swiss_only"
    SWISS_WITH_CUT = "swiss_with_cut"
    SINGLE_ELIMINATION = "single_elimination"


class BracketFormat(str, Enum):
    """Elimination bracket flavour."""

    SINGLE_ELIMINATION = "single_elimination"
    DOUBLE_ELIMINATION = "double_elimination"


class PhaseType(str, Enum):
    """Kind of a configured tournament phase."""

    SWISS = "swiss"
    SINGLE_ELIMINATION = "single_elimination"
    DOUBLE_ELIMINATION = "double_elimination"


class PhaseStatus(str, Enum):
    """Lifecycle of a configured tournament phase."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class RoundStatus(str, Enum):
    """Lifecycle of a single round as stored by the caller."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class CutRule(str, Enum):
    """How players qualify for an elimination phase."""

    X_MINUS_1 = "x-1"
    X_MINUS_2 = "x-2"
    X_MINUS_3 = "x-3"
    TOP_4 = "top-4"
    TOP_8 = "top-8"
    TOP_16 = "top-16"
    TOP_32 = "top-32"


class DropTiming(str, Enum):
    """Point in the round cycle at which a drop is requested."""

    PAIRING = "pairing"
    BETWEEN_ROUNDS = "between_rounds"
    DURING_MATCH = "during_match"
    DURING_ROUND = "during_round"
