"""Round count formulas shared by the flow, validation and schedule code."""

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

import math

from swisscut.constants import MIN_SWISS_ROUNDS, SMALL_FIELD_SIZE


def calculate_required_rounds(player_count: int) -> int:
    """Swiss rounds for a field: 3 up to 8 players, else ceil(log2(n)).

    >>> calculate_required_rounds(8)
    3
    >>> calculate_required_rounds(100)
    7
    """
    if player_count <= SMALL_FIELD_SIZE:
        return MIN_SWISS_ROUNDS
    return math.ceil(math.log2(player_count))


def calculate_top_cut_rounds(top_cut_size: int) -> int:
    """Elimination rounds for a cut; 0 when there is no cut."""
    if top_cut_size <= 1:
        return 0
    return math.ceil(math.log2(top_cut_size))
