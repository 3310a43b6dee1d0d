"""Validation rules for settings, timing, rounds and results."""

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

from swisscut.validation.rules import (
    calculate_optimal_tournament_settings,
    calculate_swiss_rounds,
    can_advance_round,
    can_start_tournament,
    estimate_tournament_duration,
    validate_match_result,
    validate_round_start,
    validate_tournament_integrity,
    validate_tournament_settings,
    validate_tournament_timing,
)

__all__ = [
    "calculate_swiss_rounds",
    "validate_tournament_settings",
    "validate_tournament_timing",
    "validate_round_start",
    "validate_match_result",
    "can_start_tournament",
    "estimate_tournament_duration",
    "can_advance_round",
    "calculate_optimal_tournament_settings",
    "validate_tournament_integrity",
]
