"""Schedule projection data classes."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from swisscut.models.enums import PhaseType, RoundStatus, TournamentPhase

# Timestamps may arrive as datetimes or ISO-8601 strings from storage
Timestamp = Union[datetime, str, None]


@dataclass
class RoundTiming:
    """Actual timing of a round, by absolute round number."""

    round_number: int
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None


@dataclass
class ScheduledRound:
    round_number: int
    status: RoundStatus = RoundStatus.PENDING
    start_time: Timestamp = None
    end_time: Timestamp = None


@dataclass
class ScheduledPhase:
    id: int
    name: str
    phase_type: PhaseType
    status: str = "pending"
    current_round: int = 0
    planned_rounds: Optional[int] = None
    rounds: List[ScheduledRound] = field(default_factory=list)


@dataclass
class TournamentScheduleData:
    """Everything the estimator needs about an event."""

    start_date: Timestamp
    round_time_minutes: int
    tournament_format: str
    swiss_rounds: Optional[int]
    top_cut_size: Optional[int]
    registration_count: int
    current_round: int
    phases: List[ScheduledPhase] = field(default_factory=list)


@dataclass
class RoundSchedule:
    round_number: int
    name: str
    estimated_start_time: Optional[datetime]
    actual_start_time: Optional[datetime]
    is_completed: bool
    is_active: bool


@dataclass
class PhaseSchedule:
    phase_name: str
    phase_type: TournamentPhase
    rounds: List[RoundSchedule] = field(default_factory=list)


@dataclass
class TournamentSchedule:
    tournament_start_time: Optional[datetime]
    phases: List[PhaseSchedule] = field(default_factory=list)

    @property
    def rounds(self) -> List[RoundSchedule]:
        return [r for phase in self.phases for r in phase.rounds]
