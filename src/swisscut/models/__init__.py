"""Data models for Swiss Cut."""

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

from swisscut.models.bracket import (
    BracketMatch,
    BracketPlayer,
    BracketSettings,
    BracketStructure,
)
from swisscut.models.drop import (
    ByeRecord,
    ByeResult,
    DropHandlingResult,
    DropRequest,
    DropResult,
    DropTimingCheck,
    ProcessDropsResult,
)
from swisscut.models.enums import (
    BracketFormat,
    CutRule,
    DropTiming,
    PhaseStatus,
    PhaseType,
    RoundStatus,
    TournamentFormat,
    TournamentPhase,
)
from swisscut.models.match import (
    MatchResultData,
    TournamentMatch,
    is_top_cut_match_id,
    make_match_id,
    parse_match_id,
)
from swisscut.models.pairing import Pairing, SwissPairingResult
from swisscut.models.phase import DBPhaseUpdate, PhaseConfig
from swisscut.models.player import PlayerRecord, PlayerStatus, TournamentPlayer
from swisscut.models.schedule import (
    PhaseSchedule,
    RoundSchedule,
    RoundTiming,
    ScheduledPhase,
    ScheduledRound,
    TournamentSchedule,
    TournamentScheduleData,
)
from swisscut.models.tournament import (
    RoundResult,
    StateTransitionResult,
    TournamentDrop,
    TournamentSettings,
    TournamentState,
)
from swisscut.models.validation import (
    OptimalTournamentSettings,
    RoundStartData,
    TournamentStartCheck,
    TournamentTimingData,
    TournamentValidationSettings,
    ValidationResult,
)

__all__ = [
    # Enums
    "BracketFormat",
    "CutRule",
    "DropTiming",
    "PhaseStatus",
    "PhaseType",
    "RoundStatus",
    "TournamentFormat",
    "TournamentPhase",
    # Players and matches
    "TournamentPlayer",
    "PlayerRecord",
    "PlayerStatus",
    "TournamentMatch",
    "MatchResultData",
    "make_match_id",
    "parse_match_id",
    "is_top_cut_match_id",
    # Pairing and bracket
    "Pairing",
    "SwissPairingResult",
    "BracketPlayer",
    "BracketSettings",
    "BracketMatch",
    "BracketStructure",
    # Drops
    "DropRequest",
    "ByeRecord",
    "DropResult",
    "ByeResult",
    "DropHandlingResult",
    "ProcessDropsResult",
    "DropTimingCheck",
    # Tournament state
    "TournamentSettings",
    "TournamentDrop",
    "TournamentState",
    "RoundResult",
    "StateTransitionResult",
    # Validation
    "ValidationResult",
    "TournamentValidationSettings",
    "TournamentTimingData",
    "RoundStartData",
    "TournamentStartCheck",
    "OptimalTournamentSettings",
    # Phases and schedule
    "PhaseConfig",
    "DBPhaseUpdate",
    "RoundTiming",
    "ScheduledRound",
    "ScheduledPhase",
    "TournamentScheduleData",
    "RoundSchedule",
    "PhaseSchedule",
    "TournamentSchedule",
]
