"""Tournament management for Swiss Cut.

Standings and tiebreakers, drops and byes, round counts and schedule
projection. The flow state machine lives in ``swisscut.tournament.flow``
and is imported from there.
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

from swisscut.tournament.standings import (
    StandingsCalculator,
    calculate_game_win_percentage,
    calculate_match_win_percentage,
    calculate_resistance,
    calculate_standings,
    has_x_minus_2_record,
    sort_standings,
    standings_sort_key,
)
from swisscut.tournament.drops import (
    DropByeManager,
    calculate_total_match_points,
    get_active_player_count,
    get_players_with_byes,
    get_players_without_byes,
    has_minimum_players,
    validate_drop_timing,
)
from swisscut.tournament.rounds import (
    calculate_required_rounds,
    calculate_top_cut_rounds,
)
from swisscut.tournament.schedule import (
    calculate_round_eta,
    format_round_time,
    format_start_datetime,
    get_tournament_schedule,
)

__all__ = [
    "StandingsCalculator",
    "calculate_standings",
    "calculate_match_win_percentage",
    "calculate_game_win_percentage",
    "calculate_resistance",
    "has_x_minus_2_record",
    "sort_standings",
    "standings_sort_key",
    "DropByeManager",
    "validate_drop_timing",
    "get_active_player_count",
    "has_minimum_players",
    "get_players_with_byes",
    "get_players_without_byes",
    "calculate_total_match_points",
    "calculate_required_rounds",
    "calculate_top_cut_rounds",
    "calculate_round_eta",
    "get_tournament_schedule",
    "format_round_time",
    "format_start_datetime",
]
