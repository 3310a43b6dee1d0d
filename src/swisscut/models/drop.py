"""Drop and bye data classes."""

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
from typing import List, Optional

from swisscut.constants import BYE_MATCH_POINTS
from swisscut.models.player import PlayerStatus


@dataclass(frozen=True)
class DropRequest:
    """A player's intent to withdraw. Immutable once accepted."""

    player_id: str
    tournament_id: str
    round_number: int
    dropped_at: datetime
    reason: Optional[str] = None


@dataclass(frozen=True)
class ByeRecord:
    """A bye awarded for a round: always one match point, never game wins."""

    player_id: str
    round_number: int
    match_points: int = BYE_MATCH_POINTS


@dataclass
class DropResult:
    success: bool
    updated_players: List[PlayerStatus]
    drop_record: Optional[DropRequest] = None
    error: Optional[str] = None


@dataclass
class ByeResult:
    success: bool
    updated_players: List[PlayerStatus]
    bye_record: Optional[ByeRecord] = None
    error: Optional[str] = None


@dataclass
class DropHandlingResult:
    """Outcome of a single drop, including any bye it forced."""

    success: bool
    updated_players: List[PlayerStatus]
    drop_record: Optional[DropRequest] = None
    bye_assignment: Optional[ByeRecord] = None
    opponent_auto_win: bool = False
    error: Optional[str] = None


@dataclass
class ProcessDropsResult:
    """Outcome of an all-or-nothing batch of drops."""

    success: bool
    updated_players: List[PlayerStatus]
    processed_drops: List[DropRequest] = field(default_factory=list)
    bye_assignment: Optional[ByeRecord] = None
    errors: List[str] = field(default_factory=list)


@dataclass
class DropTimingCheck:
    can_drop: bool
    reason: Optional[str] = None
