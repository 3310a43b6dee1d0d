"""Match data classes and the match id scheme."""

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

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from swisscut.constants import (
    DEFAULT_BEST_OF,
    SWISS_MATCH_PREFIX,
    TOP_CUT_MATCH_PREFIX,
)
from swisscut.models.enums import TournamentPhase
from swisscut.type_hints import MatchId, MaybePlayerId, PlayerId

_MATCH_ID_PATTERN = re.compile(
    r"^(?P<prefix>[a-z]+)-r(?P<round>\d+)-m(?P<number>\d+)$"
)

_PREFIX_BY_PHASE = {
    TournamentPhase.SWISS: SWISS_MATCH_PREFIX,
    TournamentPhase.TOP_CUT: TOP_CUT_MATCH_PREFIX,
}


def make_match_id(
    phase: TournamentPhase, round_number: int, match_number: int
) -> str:
    """Build a match id that encodes phase and phase-local round.

    >>> make_match_id(TournamentPhase.TOP_CUT, 1, 4)
    'topcut-r1-m4'
    """
    if phase not in _PREFIX_BY_PHASE:
        raise ValueError(f"Matches cannot belong to phase '{phase.value}'")
    return f"{_PREFIX_BY_PHASE[phase]}-r{round_number}-m{match_number}"


def parse_match_id(match_id: MatchId) -> Optional[Tuple[TournamentPhase, int, int]]:
    """Split a generated match id into (phase, round, match number).

    Returns None for ids that do not follow the generated scheme, e.g.
    storage row ids.
    """
    found = _MATCH_ID_PATTERN.match(match_id)
    if not found:
        return None
    prefix = found.group("prefix")
    for phase, phase_prefix in _PREFIX_BY_PHASE.items():
        if prefix == phase_prefix:
            return phase, int(found.group("round")), int(found.group("number"))
    return None


def is_top_cut_match_id(match_id: MatchId) -> bool:
    """Top cut matches are recognised by their id prefix."""
    return match_id.startswith(TOP_CUT_MATCH_PREFIX + "-")


@dataclass
class TournamentMatch:
    """A match as stored in the tournament state.

    Attributes
    ----------
    id : str
        Match id; generated ids encode phase and round.
    round_number : int
        Phase-local round number.
    player1_id : str
        First player, the sole player for a bye.
    player2_id : str or None
        Second player, None for a bye.
    player1_match_points, player2_match_points : int
        0 or 1 each once the match is complete.
    player1_game_wins, player2_game_wins : int
        Games won by each side.
    is_bye : bool
        Whether this is an unopposed bye.
    is_complete : bool
        Once True the match is never modified again.
    """

    id: str
    round_number: int
    player1_id: str
    player2_id: Optional[str] = None
    player1_match_points: int = 0
    player2_match_points: int = 0
    player1_game_wins: int = 0
    player2_game_wins: int = 0
    is_bye: bool = False
    is_complete: bool = False

    @property
    def is_top_cut(self) -> bool:
        return is_top_cut_match_id(self.id)

    @property
    def winner_id(self) -> MaybePlayerId:
        """Id of the player with strictly more match points, if any."""
        if self.player1_match_points > self.player2_match_points:
            return self.player1_id
        if self.player2_match_points > self.player1_match_points:
            return self.player2_id
        return None

    @property
    def loser_id(self) -> MaybePlayerId:
        winner = self.winner_id
        if winner is None or self.is_bye:
            return None
        return self.player2_id if winner == self.player1_id else self.player1_id

    def involves(self, player_id: PlayerId) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "player1_match_points": self.player1_match_points,
            "player2_match_points": self.player2_match_points,
            "player1_game_wins": self.player1_game_wins,
            "player2_game_wins": self.player2_game_wins,
            "is_bye": self.is_bye,
            "is_complete": self.is_complete,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentMatch":
        """Deserialize match from dictionary."""
        return cls(
            id=str(data["id"]),
            round_number=data["round_number"],
            player1_id=str(data["player1_id"]),
            player2_id=data.get("player2_id"),
            player1_match_points=data.get("player1_match_points", 0),
            player2_match_points=data.get("player2_match_points", 0),
            player1_game_wins=data.get("player1_game_wins", 0),
            player2_game_wins=data.get("player2_game_wins", 0),
            is_bye=data.get("is_bye", False),
            is_complete=data.get("is_complete", False),
        )


@dataclass
class MatchResultData:
    """A reported match result awaiting validation."""

    match_id: MatchId
    player1_id: PlayerId
    player2_id: MaybePlayerId
    match_points1: int
    match_points2: int
    game_wins1: int
    game_wins2: int
    best_of: int = DEFAULT_BEST_OF
    is_bye: bool = False
    winner_id: MaybePlayerId = None
