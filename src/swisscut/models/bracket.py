"""Top cut bracket data classes."""

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
from typing import Any, Dict, List, Optional

from swisscut.constants import DEFAULT_BEST_OF
from swisscut.models.enums import BracketFormat
from swisscut.type_hints import MatchId


@dataclass(frozen=True)
class BracketPlayer:
    """A seeded top cut entrant. Seed 1 is the best Swiss finisher."""

    id: str
    seed: int
    name: str = ""


@dataclass
class BracketSettings:
    bracket_size: int
    format: BracketFormat = BracketFormat.SINGLE_ELIMINATION
    best_of: int = DEFAULT_BEST_OF


@dataclass
class BracketMatch:
    """One slot of the bracket.

    Matches after the first round start empty and name the two earlier
    matches whose winners fill them.
    """

    id: str
    round: int
    match_number: int
    player1_id: Optional[str] = None
    player2_id: Optional[str] = None
    player1_seed: Optional[int] = None
    player2_seed: Optional[int] = None
    player1_match_points: int = 0
    player2_match_points: int = 0
    player1_game_wins: int = 0
    player2_game_wins: int = 0
    winner_id: Optional[str] = None
    is_complete: bool = False
    best_of: int = DEFAULT_BEST_OF
    prerequisite_match1_id: Optional[str] = None
    prerequisite_match2_id: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        """Both players are known and the match has not been played."""
        return bool(self.player1_id and self.player2_id) and not self.is_complete

    @property
    def loser_id(self) -> Optional[str]:
        if not self.is_complete or self.winner_id is None:
            return None
        if self.winner_id == self.player1_id:
            return self.player2_id
        return self.player1_id

    def seed_of(self, player_id: Optional[str]) -> Optional[int]:
        if player_id is None:
            return None
        if player_id == self.player1_id:
            return self.player1_seed
        if player_id == self.player2_id:
            return self.player2_seed
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "round": self.round,
            "match_number": self.match_number,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "player1_seed": self.player1_seed,
            "player2_seed": self.player2_seed,
            "player1_match_points": self.player1_match_points,
            "player2_match_points": self.player2_match_points,
            "player1_game_wins": self.player1_game_wins,
            "player2_game_wins": self.player2_game_wins,
            "winner_id": self.winner_id,
            "is_complete": self.is_complete,
            "best_of": self.best_of,
            "prerequisite_match1_id": self.prerequisite_match1_id,
            "prerequisite_match2_id": self.prerequisite_match2_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketMatch":
        return cls(
            id=data["id"],
            round=data["round"],
            match_number=data["match_number"],
            player1_id=data.get("player1_id"),
            player2_id=data.get("player2_id"),
            player1_seed=data.get("player1_seed"),
            player2_seed=data.get("player2_seed"),
            player1_match_points=data.get("player1_match_points", 0),
            player2_match_points=data.get("player2_match_points", 0),
            player1_game_wins=data.get("player1_game_wins", 0),
            player2_game_wins=data.get("player2_game_wins", 0),
            winner_id=data.get("winner_id"),
            is_complete=data.get("is_complete", False),
            best_of=data.get("best_of", DEFAULT_BEST_OF),
            prerequisite_match1_id=data.get("prerequisite_match1_id"),
            prerequisite_match2_id=data.get("prerequisite_match2_id"),
        )


@dataclass
class BracketStructure:
    """A whole single elimination bracket.

    ``total_rounds`` is log2(``bracket_size``); ``matches`` is ordered by
    round, then match number.
    """

    bracket_size: int
    total_rounds: int
    format: BracketFormat = BracketFormat.SINGLE_ELIMINATION
    matches: List[BracketMatch] = field(default_factory=list)
    seeds: List[BracketPlayer] = field(default_factory=list)

    def round_matches(self, round_number: int) -> List[BracketMatch]:
        return [m for m in self.matches if m.round == round_number]

    def get_match(self, match_id: MatchId) -> Optional[BracketMatch]:
        return next((m for m in self.matches if m.id == match_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bracket_size": self.bracket_size,
            "total_rounds": self.total_rounds,
            "format": self.format.value,
            "matches": [m.to_dict() for m in self.matches],
            "seeds": [
                {"id": p.id, "seed": p.seed, "name": p.name} for p in self.seeds
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketStructure":
        return cls(
            bracket_size=data["bracket_size"],
            total_rounds=data["total_rounds"],
            format=BracketFormat(
                data.get("format", BracketFormat.SINGLE_ELIMINATION.value)
            ),
            matches=[BracketMatch.from_dict(m) for m in data.get("matches", [])],
            seeds=[
                BracketPlayer(id=p["id"], seed=p["seed"], name=p.get("name", ""))
                for p in data.get("seeds", [])
            ],
        )
