"""Swiss pairing for match-point tournaments.

Round 1 is a seeded random permutation. Later rounds pair inside match
point groups from the top down, floating unpaired players into the next
group, and only accept rematches in a last best-effort pass.
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

import random
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from swisscut.constants import MIN_ACTIVE_PLAYERS_FOR_PAIRING
from swisscut.models.pairing import Pairing, SwissPairingResult
from swisscut.models.player import PlayerRecord
from swisscut.tournament.standings import standings_sort_key
from swisscut.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")

# Leftover pools up to this size get an exhaustive rematch-free search
_EXHAUSTIVE_SEARCH_LIMIT = 12


def shuffle_players(players: Sequence[T], rng: random.Random) -> List[T]:
    """Fisher-Yates shuffle into a new list using ``rng``."""
    result = list(players)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def find_bye_player(sorted_players: List[PlayerRecord]) -> Optional[PlayerRecord]:
    """Pick the bye for a round.

    Only players with the fewest byes so far are eligible; among them the
    lowest in the standings is chosen. ``sorted_players`` must already be
    in standings order.
    """
    if not sorted_players:
        return None
    fewest = min(p.bye_count for p in sorted_players)
    for player in reversed(sorted_players):
        if player.bye_count == fewest:
            return player
    return None


def group_players_by_points(
    players: List[PlayerRecord],
) -> Dict[int, List[PlayerRecord]]:
    """Group players by match points, highest group first.

    Players keep their relative order inside each group.
    """
    groups: Dict[int, List[PlayerRecord]] = {}
    for player in players:
        groups.setdefault(player.match_points, []).append(player)
    return {points: groups[points] for points in sorted(groups, reverse=True)}


def _make_pairing(first: PlayerRecord, second: PlayerRecord) -> Pairing:
    return Pairing(player1_id=first.id, player2_id=second.id, is_bye=False)


def _greedy_pair_bracket(
    bracket: List[PlayerRecord],
) -> Tuple[List[Pairing], List[PlayerRecord]]:
    """Pair a point group top-down without rematches.

    Each player takes the highest available opponent it has not met.
    Players with no legal opponent are returned as floaters.
    """
    pairings = []
    floaters = []
    remaining = list(bracket)

    while len(remaining) >= 2:
        player1 = remaining.pop(0)
        opponent_index = next(
            (
                i
                for i, candidate in enumerate(remaining)
                if not player1.has_played(candidate.id)
            ),
            None,
        )
        if opponent_index is None:
            floaters.append(player1)
            continue
        player2 = remaining.pop(opponent_index)
        pairings.append(_make_pairing(player1, player2))

    floaters.extend(remaining)
    return pairings, floaters


def _search_rematch_free(
    pool: List[PlayerRecord],
) -> Optional[List[Tuple[PlayerRecord, PlayerRecord]]]:
    """Depth-first search for a perfect rematch-free matching of ``pool``."""
    if not pool:
        return []
    first, rest = pool[0], pool[1:]
    for i, candidate in enumerate(rest):
        if first.has_played(candidate.id):
            continue
        tail = _search_rematch_free(rest[:i] + rest[i + 1 :])
        if tail is not None:
            return [(first, candidate)] + tail
    return None


def _pair_remaining_players(
    players: List[PlayerRecord],
) -> Tuple[List[Pairing], List[str]]:
    """Best-effort pass over the players the point groups could not pair.

    Tries a rematch-free matching of the whole pool first; failing that,
    pairs greedily and accepts rematches. Every forced rematch produces a
    warning.
    """
    warnings: List[str] = []

    if len(players) <= _EXHAUSTIVE_SEARCH_LIMIT:
        found = _search_rematch_free(players)
        if found is not None:
            return [_make_pairing(a, b) for a, b in found], warnings

    pairings = []
    remaining = list(players)
    while len(remaining) >= 2:
        player1 = remaining.pop(0)
        opponent_index = next(
            (
                i
                for i, candidate in enumerate(remaining)
                if not player1.has_played(candidate.id)
            ),
            0,
        )
        player2 = remaining.pop(opponent_index)
        if player1.has_played(player2.id):
            warnings.append(
                f"Rematch between {player1.id} and {player2.id} could not be avoided"
            )
        pairings.append(_make_pairing(player1, player2))
    return pairings, warnings


class SwissPairingEngine:
    """Produces one round of Swiss pairings.

    The engine keeps only its seed. Every round 1 call shuffles with a fresh
    generator built from that seed, so repeating a call with the same
    players gives the same pairings.

    Parameters
    ----------
    seed : int, optional
        Seed for round 1 shuffles. One is drawn at construction when not
        given.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed if seed is not None else random.randrange(2**32)

    def generate(
        self,
        players: List[PlayerRecord],
        round_number: int,
        rng: Optional[random.Random] = None,
    ) -> SwissPairingResult:
        """Pair every active player exactly once for ``round_number``.

        ``rng`` overrides the engine seed for this call only.
        """
        active = [p for p in players if not p.is_dropped]
        if len(active) < MIN_ACTIVE_PLAYERS_FOR_PAIRING:
            logger.warning(
                "Cannot pair round %d: only %d active players",
                round_number,
                len(active),
            )
            return SwissPairingResult(
                pairings=[],
                success=False,
                errors=["Not enough active players to generate pairings"],
            )

        sorted_players = sorted(active, key=standings_sort_key)
        if round_number <= 1:
            if rng is None:
                rng = random.Random(self.seed)
            result = self._pair_first_round(sorted_players, rng)
        else:
            result = self._pair_later_round(sorted_players)

        self._check_coverage(result, active)
        if result.success:
            logger.info(
                "Paired round %d: %d tables%s",
                round_number,
                len(result.pairings),
                " (fallback used)" if result.used_fallback else "",
            )
        return result

    def _pair_first_round(
        self, players: List[PlayerRecord], rng: random.Random
    ) -> SwissPairingResult:
        shuffled = shuffle_players(players, rng)
        pairings = []
        for i in range(0, len(shuffled) - 1, 2):
            pairings.append(_make_pairing(shuffled[i], shuffled[i + 1]))
        if len(shuffled) % 2 == 1:
            bye_player = shuffled[-1]
            logger.debug("Round 1 bye goes to %s", bye_player.id)
            pairings.append(Pairing(bye_player.id, None, is_bye=True))
        return SwissPairingResult(pairings=pairings)

    def _pair_later_round(self, players: List[PlayerRecord]) -> SwissPairingResult:
        pairings: List[Pairing] = []
        unpaired = list(players)

        if len(unpaired) % 2 == 1:
            bye_player = find_bye_player(unpaired)
            logger.debug(
                "Bye goes to %s (bye count %d)", bye_player.id, bye_player.bye_count
            )
            pairings.append(Pairing(bye_player.id, None, is_bye=True))
            unpaired.remove(bye_player)

        floaters: List[PlayerRecord] = []
        for points, group in group_players_by_points(unpaired).items():
            bracket = floaters + group
            group_pairings, floaters = _greedy_pair_bracket(bracket)
            pairings.extend(group_pairings)
            if floaters:
                logger.debug(
                    "%d player(s) float down from the %d point group",
                    len(floaters),
                    points,
                )

        warnings: List[str] = []
        used_fallback = False
        if floaters:
            used_fallback = True
            fallback_pairings, warnings = _pair_remaining_players(floaters)
            pairings.extend(fallback_pairings)
            for warning in warnings:
                logger.warning(warning)

        return SwissPairingResult(
            pairings=pairings, warnings=warnings, used_fallback=used_fallback
        )

    @staticmethod
    def _check_coverage(
        result: SwissPairingResult, active: List[PlayerRecord]
    ) -> None:
        paired = result.player_ids
        missing = {p.id for p in active} - set(paired)
        duplicated = len(paired) != len(set(paired))
        byes = sum(1 for p in result.pairings if p.is_bye)
        if missing:
            result.errors.append(
                f"Pairing left {len(missing)} player(s) unpaired: "
                + ", ".join(sorted(missing))
            )
        if duplicated:
            result.errors.append("A player was paired more than once")
        if byes > 1:
            result.errors.append("More than one bye was assigned")
        if result.errors:
            result.success = False
            logger.warning("Pairing failed: %s", "; ".join(result.errors))


def generate_swiss_pairings(
    players: List[PlayerRecord],
    round_number: int,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> SwissPairingResult:
    """Generate Swiss pairings for a round; see ``SwissPairingEngine``."""
    return SwissPairingEngine(seed=seed).generate(players, round_number, rng=rng)
