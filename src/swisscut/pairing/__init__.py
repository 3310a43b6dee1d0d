"""Swiss and top cut pairing engines."""

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

from swisscut.pairing.swiss import (
    SwissPairingEngine,
    find_bye_player,
    generate_swiss_pairings,
    group_players_by_points,
    shuffle_players,
)
from swisscut.pairing.bracket import (
    advance_bracket,
    calculate_bracket_rounds,
    generate_top_cut_bracket,
    get_bracket_matchups,
    get_bracket_winner,
    get_eliminated_players,
    get_ready_matches,
    get_remaining_players,
    get_round_name,
    is_bracket_complete,
    is_valid_bracket_size,
    record_bracket_result,
    seed_top_cut,
)

__all__ = [
    "SwissPairingEngine",
    "generate_swiss_pairings",
    "shuffle_players",
    "find_bye_player",
    "group_players_by_points",
    "is_valid_bracket_size",
    "calculate_bracket_rounds",
    "get_round_name",
    "get_bracket_matchups",
    "seed_top_cut",
    "generate_top_cut_bracket",
    "advance_bracket",
    "record_bracket_result",
    "get_eliminated_players",
    "get_remaining_players",
    "get_ready_matches",
    "is_bracket_complete",
    "get_bracket_winner",
]
