"""Player data classes."""

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
from typing import Any, Dict, FrozenSet

from swisscut.constants import TIEBREAKER_FLOOR


@dataclass
class TournamentPlayer:
    """An entrant as known to the flow state machine."""

    id: str
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentPlayer":
        return cls(id=str(data["id"]), name=data.get("name", ""))


@dataclass
class PlayerRecord:
    """A player's standing snapshot used for pairing and seeding.

    Attributes
    ----------
    id : str
        Player identifier.
    display_name : str
        Name shown in standings.
    match_points : int
        One point per win or bye, zero per loss.
    game_wins, game_losses : int
        Games won and lost in played (non-bye) matches.
    game_win_percentage : float
        Floored game win ratio.
    opponent_match_win_percentage : float
        Mean of opponents' floored match win ratios (resistance).
    opponent_game_win_percentage : float
        Mean of opponents' floored game win ratios.
    has_received_bye : bool
        Whether the player has been given at least one bye.
    bye_count : int
        Number of byes received; at least 1 whenever ``has_received_bye``.
    is_dropped : bool
        One-way flag, never reverts once set.
    previous_opponents : frozenset of str
        Ids of every opponent faced in a played match.
    rounds_played : int
        Completed rounds including byes.
    rank : int
        1-based position after sorting, 0 when not ranked.
    """

    id: str
    display_name: str = ""
    match_points: int = 0
    game_wins: int = 0
    game_losses: int = 0
    game_win_percentage: float = TIEBREAKER_FLOOR
    opponent_match_win_percentage: float = TIEBREAKER_FLOOR
    opponent_game_win_percentage: float = TIEBREAKER_FLOOR
    has_received_bye: bool = False
    bye_count: int = 0
    is_dropped: bool = False
    previous_opponents: FrozenSet[str] = field(default_factory=frozenset)
    rounds_played: int = 0
    rank: int = 0

    def __post_init__(self) -> None:
        self.previous_opponents = frozenset(self.previous_opponents)
        if self.has_received_bye and self.bye_count == 0:
            self.bye_count = 1
        if self.bye_count > 0:
            self.has_received_bye = True

    @property
    def match_win_percentage(self) -> float:
        """Floored match win ratio for this player."""
        if self.rounds_played == 0:
            return TIEBREAKER_FLOOR
        return max(self.match_points / self.rounds_played, TIEBREAKER_FLOOR)

    def has_played(self, other_id: str) -> bool:
        """Check if this player has already faced ``other_id``."""
        return other_id in self.previous_opponents

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the record to a dictionary."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "match_points": self.match_points,
            "game_wins": self.game_wins,
            "game_losses": self.game_losses,
            "game_win_percentage": self.game_win_percentage,
            "opponent_match_win_percentage": self.opponent_match_win_percentage,
            "opponent_game_win_percentage": self.opponent_game_win_percentage,
            "has_received_bye": self.has_received_bye,
            "bye_count": self.bye_count,
            "is_dropped": self.is_dropped,
            "previous_opponents": sorted(self.previous_opponents),
            "rounds_played": self.rounds_played,
            "rank": self.rank,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerRecord":
        """Deserialize a record from a dictionary."""
        return cls(
            id=str(data["id"]),
            display_name=data.get("display_name", ""),
            match_points=data.get("match_points", 0),
            game_wins=data.get("game_wins", 0),
            game_losses=data.get("game_losses", 0),
            game_win_percentage=data.get("game_win_percentage", TIEBREAKER_FLOOR),
            opponent_match_win_percentage=data.get(
                "opponent_match_win_percentage", TIEBREAKER_FLOOR
            ),
            opponent_game_win_percentage=data.get(
                "opponent_game_win_percentage", TIEBREAKER_FLOOR
            ),
            has_received_bye=data.get("has_received_bye", False),
            bye_count=data.get("bye_count", 0),
            is_dropped=data.get("is_dropped", False),
            previous_opponents=frozenset(
                str(opp) for opp in data.get("previous_opponents", [])
            ),
            rounds_played=data.get("rounds_played", 0),
            rank=data.get("rank", 0),
        )


@dataclass
class PlayerStatus:
    """The slice of a player the drop and bye manager works on."""

    id: str
    name: str = ""
    is_dropped: bool = False
    bye_count: int = 0
    match_points: int = 0
    rounds_played: int = 0
