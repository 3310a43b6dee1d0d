"""Phase configuration data classes."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from swisscut.constants import (
    DEFAULT_BEST_OF,
    DEFAULT_CHECK_IN_TIME_MINUTES,
    DEFAULT_ROUND_TIME_MINUTES,
)
from swisscut.models.enums import CutRule, PhaseStatus, PhaseType


@dataclass
class PhaseConfig:
    """Organizer settings for one phase of an event.

    Attributes:
        id: ``db-<n>`` for stored phases, a generated id for new ones
        name: Display name
        phase_type: Swiss or elimination
        best_of: Games per match (1, 3 or 5)
        round_time_minutes: Length of a round
        check_in_time_minutes: Check-in window before each round
        planned_rounds: Rounds to play, None to derive from the field
        cut_rule: How players qualify for an elimination phase
        status: Lifecycle status, None for phases not yet stored
    """

    id: str
    name: str
    phase_type: PhaseType
    best_of: int = DEFAULT_BEST_OF
    round_time_minutes: int = DEFAULT_ROUND_TIME_MINUTES
    check_in_time_minutes: int = DEFAULT_CHECK_IN_TIME_MINUTES
    planned_rounds: Optional[int] = None
    cut_rule: Optional[CutRule] = None
    status: Optional[PhaseStatus] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize phase config to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "phase_type": self.phase_type.value,
            "best_of": self.best_of,
            "round_time_minutes": self.round_time_minutes,
            "check_in_time_minutes": self.check_in_time_minutes,
            "planned_rounds": self.planned_rounds,
            "cut_rule": self.cut_rule.value if self.cut_rule else None,
            "status": self.status.value if self.status else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhaseConfig":
        """Deserialize phase config from dictionary."""
        cut_rule = data.get("cut_rule")
        status = data.get("status")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            phase_type=PhaseType(data["phase_type"]),
            best_of=data.get("best_of", DEFAULT_BEST_OF),
            round_time_minutes=data.get(
                "round_time_minutes", DEFAULT_ROUND_TIME_MINUTES
            ),
            check_in_time_minutes=data.get(
                "check_in_time_minutes", DEFAULT_CHECK_IN_TIME_MINUTES
            ),
            planned_rounds=data.get("planned_rounds"),
            cut_rule=CutRule(cut_rule) if cut_rule else None,
            status=PhaseStatus(status) if status else None,
        )


@dataclass
class DBPhaseUpdate:
    """A phase row ready to be written back to storage.

    ``id`` is None for phases that have never been stored.
    """

    name: str
    phase_order: int
    phase_type: str
    best_of: int
    round_time_minutes: int
    check_in_time_minutes: int
    id: Optional[int] = None
    planned_rounds: Optional[int] = None
    cut_rule: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phase_order": self.phase_order,
            "phase_type": self.phase_type,
            "best_of": self.best_of,
            "round_time_minutes": self.round_time_minutes,
            "check_in_time_minutes": self.check_in_time_minutes,
            "planned_rounds": self.planned_rounds,
            "cut_rule": self.cut_rule,
        }
