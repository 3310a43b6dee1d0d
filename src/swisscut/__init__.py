"""Swiss Cut: Swiss rounds with a single elimination top cut.

Pairing, standings, drop handling and phase management for best-of-N
events scored with match points (no ties), such as Pokemon VGC.
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

# Import order matters: tournament.flow depends on every other package.
from swisscut.models import (
    MatchResultData,
    PlayerRecord,
    TournamentFormat,
    TournamentMatch,
    TournamentPhase,
    TournamentPlayer,
    TournamentSettings,
    TournamentState,
)
from swisscut.tournament import calculate_standings
from swisscut.pairing import generate_swiss_pairings, generate_top_cut_bracket
from swisscut.validation import validate_match_result
from swisscut.tournament.flow import TournamentFlow

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "TournamentFlow",
    "TournamentSettings",
    "TournamentState",
    "TournamentPlayer",
    "TournamentMatch",
    "TournamentFormat",
    "TournamentPhase",
    "PlayerRecord",
    "MatchResultData",
    "calculate_standings",
    "generate_swiss_pairings",
    "generate_top_cut_bracket",
    "validate_match_result",
]
