"""Standings calculation for Swiss tournaments.

This module derives each player's match points, win percentages and
opponent-strength tiebreakers (resistance) from the raw match history.
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

from typing import Dict, Iterable, List, Optional, Set, Tuple

from swisscut.constants import TIEBREAKER_FLOOR
from swisscut.models.match import TournamentMatch
from swisscut.models.player import PlayerRecord, TournamentPlayer
from swisscut.type_hints import PercentageTable
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


def calculate_match_win_percentage(match_points: int, rounds_played: int) -> float:
    """Match win ratio floored at 0.33.

    A player with no completed rounds also gets the floor.
    """
    if rounds_played <= 0:
        return TIEBREAKER_FLOOR
    return max(match_points / rounds_played, TIEBREAKER_FLOOR)


def calculate_game_win_percentage(game_wins: int, total_games: int) -> float:
    """Game win ratio floored at 0.33."""
    if total_games <= 0:
        return TIEBREAKER_FLOOR
    return max(game_wins / total_games, TIEBREAKER_FLOOR)


def calculate_resistance(
    opponent_ids: Iterable[str], percentages: PercentageTable
) -> float:
    """Mean of the opponents' (already floored) percentages.

    Opponents missing from ``percentages`` count at the floor. With no
    opponents the result is the floor as well.
    """
    values = [percentages.get(opp, TIEBREAKER_FLOOR) for opp in opponent_ids]
    if not values:
        return TIEBREAKER_FLOOR
    return sum(values) / len(values)


def has_x_minus_2_record(match_points: int, rounds_played: int) -> bool:
    """True when the player has lost at most two rounds."""
    return rounds_played - match_points <= 2


def standings_sort_key(record: PlayerRecord) -> Tuple[int, float, float, float]:
    """Sort key for the canonical standings order.

    Descending by match points, then opponent match win %, then game
    win %, then opponent game win %.
    """
    return (
        -record.match_points,
        -record.opponent_match_win_percentage,
        -record.game_win_percentage,
        -record.opponent_game_win_percentage,
    )


def sort_standings(records: Iterable[PlayerRecord]) -> List[PlayerRecord]:
    """Return ``records`` in standings order with ranks assigned 1..n."""
    ordered = sorted(records, key=standings_sort_key)
    for index, record in enumerate(ordered, start=1):
        record.rank = index
    return ordered


class _Tally:
    __slots__ = (
        "match_points",
        "rounds_played",
        "game_wins",
        "game_losses",
        "bye_count",
        "opponents",
    )

    def __init__(self) -> None:
        self.match_points = 0
        self.rounds_played = 0
        self.game_wins = 0
        self.game_losses = 0
        self.bye_count = 0
        self.opponents: List[str] = []


class StandingsCalculator:
    """Builds ``PlayerRecord`` standings from completed matches.

    Only matches flagged ``is_complete`` count. A bye awards its match
    point and a played round but no games and no opponent. Top cut matches
    are ignored unless ``include_top_cut`` is set, so Swiss standings stay
    fixed once the bracket starts.
    """

    def __init__(self, include_top_cut: bool = False) -> None:
        self.include_top_cut = include_top_cut

    def _counted(self, matches: Iterable[TournamentMatch]) -> List[TournamentMatch]:
        return [
            m
            for m in matches
            if m.is_complete and (self.include_top_cut or not m.is_top_cut)
        ]

    def _tally(
        self, player_ids: List[str], matches: List[TournamentMatch]
    ) -> Dict[str, _Tally]:
        tallies: Dict[str, _Tally] = {pid: _Tally() for pid in player_ids}

        def tally_for(player_id: Optional[str]) -> Optional[_Tally]:
            if player_id is None:
                return None
            if player_id not in tallies:
                # Opponents outside the requested list still feed resistance
                tallies[player_id] = _Tally()
            return tallies[player_id]

        for match in matches:
            first = tally_for(match.player1_id)
            if match.is_bye or match.player2_id is None:
                if first is not None:
                    first.match_points += match.player1_match_points
                    first.rounds_played += 1
                    first.bye_count += 1
                continue

            second = tally_for(match.player2_id)
            first.match_points += match.player1_match_points
            second.match_points += match.player2_match_points
            first.rounds_played += 1
            second.rounds_played += 1
            first.game_wins += match.player1_game_wins
            first.game_losses += match.player2_game_wins
            second.game_wins += match.player2_game_wins
            second.game_losses += match.player1_game_wins
            first.opponents.append(match.player2_id)
            second.opponents.append(match.player1_id)

        return tallies

    def calculate(
        self,
        players: List[TournamentPlayer],
        matches: Iterable[TournamentMatch],
        dropped_ids: Optional[Set[str]] = None,
    ) -> List[PlayerRecord]:
        """Calculate sorted, ranked standings for ``players``.

        Args:
            players: Every entrant, dropped or not
            matches: Full match history
            dropped_ids: Players to flag as dropped

        Returns:
            One ``PlayerRecord`` per player in standings order
        """
        dropped_ids = dropped_ids or set()
        counted = self._counted(matches)
        tallies = self._tally([p.id for p in players], counted)

        mwp: PercentageTable = {}
        gwp: PercentageTable = {}
        for player_id, tally in tallies.items():
            mwp[player_id] = calculate_match_win_percentage(
                tally.match_points, tally.rounds_played
            )
            gwp[player_id] = calculate_game_win_percentage(
                tally.game_wins, tally.game_wins + tally.game_losses
            )

        records = []
        for player in players:
            tally = tallies[player.id]
            records.append(
                PlayerRecord(
                    id=player.id,
                    display_name=player.name,
                    match_points=tally.match_points,
                    game_wins=tally.game_wins,
                    game_losses=tally.game_losses,
                    game_win_percentage=gwp[player.id],
                    opponent_match_win_percentage=calculate_resistance(
                        tally.opponents, mwp
                    ),
                    opponent_game_win_percentage=calculate_resistance(
                        tally.opponents, gwp
                    ),
                    has_received_bye=tally.bye_count > 0,
                    bye_count=tally.bye_count,
                    is_dropped=player.id in dropped_ids,
                    previous_opponents=frozenset(tally.opponents),
                    rounds_played=tally.rounds_played,
                )
            )

        logger.debug(
            "Calculated standings for %d players from %d matches",
            len(records),
            len(counted),
        )
        return sort_standings(records)

    def recalculate_tiebreakers(
        self, records: List[PlayerRecord]
    ) -> List[PlayerRecord]:
        """Refresh resistance on existing records from the current snapshot.

        Useful when records were loaded from storage and opponents' results
        have since changed. Game win % is kept as stored.
        """
        mwp = {r.id: r.match_win_percentage for r in records}
        gwp = {r.id: r.game_win_percentage for r in records}
        for record in records:
            record.opponent_match_win_percentage = calculate_resistance(
                record.previous_opponents, mwp
            )
            record.opponent_game_win_percentage = calculate_resistance(
                record.previous_opponents, gwp
            )
        return sort_standings(records)


def calculate_standings(
    players: List[TournamentPlayer],
    matches: Iterable[TournamentMatch],
    dropped_ids: Optional[Set[str]] = None,
) -> List[PlayerRecord]:
    """Swiss standings with tiebreakers; see ``StandingsCalculator``."""
    return StandingsCalculator().calculate(players, matches, dropped_ids)
