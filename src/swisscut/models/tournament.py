"""Tournament-level data classes owned by the flow state machine."""

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
from typing import Any, Dict, List, Optional, Set

from swisscut.constants import DEFAULT_BEST_OF, DEFAULT_ROUND_TIME_MINUTES
from swisscut.exceptions import PlayerNotFoundException
from swisscut.models.bracket import BracketStructure
from swisscut.models.drop import ByeRecord
from swisscut.models.enums import TournamentFormat, TournamentPhase
from swisscut.models.match import TournamentMatch
from swisscut.models.player import TournamentPlayer
from swisscut.type_hints import MatchId, PlayerId


@dataclass
class TournamentSettings:
    """Organizer settings the flow state machine consults.

    Attributes:
        id: Tournament identifier
        max_participants: Registration cap
        top_cut_size: Bracket size for the elimination stage
        swiss_rounds: Number of Swiss rounds to play
        format: Event format
        round_time_minutes: Length of a round
        best_of: Games per match
    """

    id: str
    swiss_rounds: int
    format: TournamentFormat = TournamentFormat.SWISS_WITH_CUT
    top_cut_size: int = 8
    max_participants: int = 0
    round_time_minutes: int = DEFAULT_ROUND_TIME_MINUTES
    best_of: int = DEFAULT_BEST_OF

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        return {
            "id": self.id,
            "swiss_rounds": self.swiss_rounds,
            "format": self.format.value,
            "top_cut_size": self.top_cut_size,
            "max_participants": self.max_participants,
            "round_time_minutes": self.round_time_minutes,
            "best_of": self.best_of,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSettings":
        """Deserialize settings from dictionary."""
        return cls(
            id=str(data["id"]),
            swiss_rounds=data["swiss_rounds"],
            format=TournamentFormat(
                data.get("format", TournamentFormat.SWISS_WITH_CUT.value)
            ),
            top_cut_size=data.get("top_cut_size", 8),
            max_participants=data.get("max_participants", 0),
            round_time_minutes=data.get(
                "round_time_minutes", DEFAULT_ROUND_TIME_MINUTES
            ),
            best_of=data.get("best_of", DEFAULT_BEST_OF),
        )


@dataclass(frozen=True)
class TournamentDrop:
    tournament_id: str
    player_id: str
    round_number: int


@dataclass
class TournamentState:
    """Single source of truth for a running event.

    The caller owns and persists it; the engine reads a snapshot and
    returns a new one. Completed matches are never rewritten.
    """

    current_round: int = 0
    phase: TournamentPhase = TournamentPhase.SWISS
    players: List[TournamentPlayer] = field(default_factory=list)
    matches: List[TournamentMatch] = field(default_factory=list)
    drops: List[TournamentDrop] = field(default_factory=list)
    bracket: Optional[BracketStructure] = None

    @property
    def dropped_player_ids(self) -> Set[str]:
        return {drop.player_id for drop in self.drops}

    @property
    def active_players(self) -> List[TournamentPlayer]:
        dropped = self.dropped_player_ids
        return [p for p in self.players if p.id not in dropped]

    def get_match(self, match_id: MatchId) -> Optional[TournamentMatch]:
        return next((m for m in self.matches if m.id == match_id), None)

    def get_player(self, player_id: PlayerId) -> TournamentPlayer:
        """Look up an entrant, dropped or not.

        Raises:
            PlayerNotFoundException: If no entrant has ``player_id``
        """
        for player in self.players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundException(f"Player not found: {player_id}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to dictionary."""
        return {
            "current_round": self.current_round,
            "phase": self.phase.value,
            "players": [p.to_dict() for p in self.players],
            "matches": [m.to_dict() for m in self.matches],
            "drops": [
                {
                    "tournament_id": d.tournament_id,
                    "player_id": d.player_id,
                    "round_number": d.round_number,
                }
                for d in self.drops
            ],
            "bracket": self.bracket.to_dict() if self.bracket else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Deserialize state from dictionary."""
        bracket_data = data.get("bracket")
        bracket = BracketStructure.from_dict(bracket_data) if bracket_data else None
        return cls(
            current_round=data.get("current_round", 0),
            phase=TournamentPhase(data.get("phase", TournamentPhase.SWISS.value)),
            players=[TournamentPlayer.from_dict(p) for p in data.get("players", [])],
            matches=[TournamentMatch.from_dict(m) for m in data.get("matches", [])],
            drops=[
                TournamentDrop(
                    tournament_id=str(d["tournament_id"]),
                    player_id=str(d["player_id"]),
                    round_number=d["round_number"],
                )
                for d in data.get("drops", [])
            ],
            bracket=bracket,
        )


@dataclass
class RoundResult:
    """Matches generated for the next round, or why none could be."""

    round_number: int
    phase: TournamentPhase
    matches: List[TournamentMatch] = field(default_factory=list)
    success: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class StateTransitionResult:
    """A proposed next state. On failure ``state`` is the unchanged input."""

    success: bool
    state: TournamentState
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    bye_assignment: Optional[ByeRecord] = None
