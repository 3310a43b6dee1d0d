"""Swiss pairing result data classes."""

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
from typing import List, Optional


@dataclass(frozen=True)
class Pairing:
    """One table of a round. ``player2_id`` is None for a bye."""

    player1_id: str
    player2_id: Optional[str]
    is_bye: bool = False

    @property
    def player_ids(self) -> List[str]:
        if self.player2_id is None:
            return [self.player1_id]
        return [self.player1_id, self.player2_id]


@dataclass
class SwissPairingResult:
    """Result of a pairing computation for a single round.

    ``used_fallback`` is set when the best-effort pass had to pair across
    point groups with rematches; each forced rematch is listed in
    ``warnings``.
    """

    pairings: List[Pairing] = field(default_factory=list)
    success: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def bye(self) -> Optional[Pairing]:
        return next((p for p in self.pairings if p.is_bye), None)

    @property
    def player_ids(self) -> List[str]:
        return [pid for pairing in self.pairings for pid in pairing.player_ids]


#  LocalWords:  SwissPairingResult
