"""Inputs and reports for the validation rules."""

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

from swisscut.models.enums import TournamentFormat


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        errors: Human-readable reasons the action is blocked
        warnings: Advice that does not block the action
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_messages(
        cls, errors: List[str], warnings: Optional[List[str]] = None
    ) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors, warnings=warnings or [])

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, warnings={self.warnings!r})"
        return f"ValidationResult(INVALID, {self.errors!r})"


@dataclass
class TournamentValidationSettings:
    name: str
    max_participants: int
    min_participants: int
    top_cut_size: int
    swiss_rounds: int
    format: TournamentFormat
    round_time_minutes: int
    start_date: datetime
    end_date: datetime
    allow_late_registration: bool = False
    requires_approval: bool = False


@dataclass
class TournamentTimingData:
    """Snapshot used to check whether an event or round may start now."""

    tournament_id: str
    status: str
    current_round: int
    total_rounds: int
    start_date: datetime
    current_time: datetime
    round_start_time: Optional[datetime]
    round_time_minutes: int
    current_participants: Optional[int] = None
    min_participants: Optional[int] = None


@dataclass
class RoundStartData:
    """Preconditions for starting the round after ``current_round``."""

    current_round: int
    total_rounds: int
    previous_round_complete: bool
    participant_count: int
    min_participants: int
    round_time_minutes: int


@dataclass
class TournamentStartCheck:
    can_start: bool
    reason: Optional[str] = None


@dataclass
class OptimalTournamentSettings:
    swiss_rounds: int
    recommended_top_cut: int
    estimated_duration: int
    recommended_round_time: int
