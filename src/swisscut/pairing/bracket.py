"""Single elimination top cut bracket.

Seeds the best Swiss finishers into a power-of-two bracket and advances
winners round by round until one player remains.
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

import math
from dataclasses import replace
from typing import List, Optional

from swisscut.constants import (
    TOP_CUT_ROUND_NAMES,
    VALID_BRACKET_SIZES,
    WIN_MATCH_POINTS,
)
from swisscut.exceptions import BracketException, InvalidBracketException
from swisscut.models.bracket import (
    BracketMatch,
    BracketPlayer,
    BracketSettings,
    BracketStructure,
)
from swisscut.models.enums import BracketFormat, TournamentPhase
from swisscut.models.match import make_match_id
from swisscut.models.player import PlayerRecord
from swisscut.tournament.standings import standings_sort_key
from swisscut.type_hints import MatchId, PlayerId, SeedMatchups
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


def is_valid_bracket_size(size: int) -> bool:
    """Power of two between 4 and 256."""
    return size in VALID_BRACKET_SIZES


def _require_valid_size(size: int) -> None:
    if not is_valid_bracket_size(size):
        raise InvalidBracketException(f"Invalid bracket size: {size}")


def calculate_bracket_rounds(bracket_size: int) -> int:
    """Number of rounds needed to reduce ``bracket_size`` players to one."""
    _require_valid_size(bracket_size)
    return int(math.log2(bracket_size))


def get_round_name(round_number: int, total_rounds: int) -> str:
    """Name a bracket round by how many rounds remain, the final counting as 1.

    >>> get_round_name(1, 3)
    'Quarterfinals'
    >>> get_round_name(1, 5)
    'Top 32'
    """
    remaining = total_rounds - round_number + 1
    if remaining in TOP_CUT_ROUND_NAMES:
        return TOP_CUT_ROUND_NAMES[remaining]
    return f"Top {2 ** remaining}"


def get_bracket_matchups(bracket_size: int) -> SeedMatchups:
    """First round seed pairs in bracket order.

    Seed 1 meets the last seed, and the bracket is folded so that the top
    two seeds can only meet in the final, the top four only in the
    semifinals, and so on. For 8 players this gives
    ``[(1, 8), (4, 5), (2, 7), (3, 6)]``.
    """
    _require_valid_size(bracket_size)
    order = [1, 2]
    while len(order) < bracket_size:
        field_size = len(order) * 2
        order = [seed for s in order for seed in (s, field_size + 1 - s)]
    return [(order[i], order[i + 1]) for i in range(0, bracket_size, 2)]


def seed_top_cut(
    standings: List[PlayerRecord], bracket_size: int
) -> List[BracketPlayer]:
    """Take the top ``bracket_size`` active players as seeds 1..N.

    Dropped players are skipped even if their record would qualify.

    Raises
    ------
    InvalidBracketException
        If the size is invalid or too few active players remain.
    """
    _require_valid_size(bracket_size)
    active = sorted(
        (p for p in standings if not p.is_dropped), key=standings_sort_key
    )
    if len(active) < bracket_size:
        raise InvalidBracketException(
            f"Not enough active players ({len(active)}) for a top {bracket_size}"
        )
    return [
        BracketPlayer(id=player.id, seed=seed, name=player.display_name)
        for seed, player in enumerate(active[:bracket_size], start=1)
    ]


def _match_id(round_number: int, match_number: int) -> str:
    return make_match_id(TournamentPhase.TOP_CUT, round_number, match_number)


def generate_top_cut_bracket(
    players: List[BracketPlayer], settings: BracketSettings
) -> BracketStructure:
    """Build the full bracket: seeded first round, empty later rounds.

    Every later match names the two earlier matches whose winners fill it.
    """
    _require_valid_size(settings.bracket_size)
    if settings.format is not BracketFormat.SINGLE_ELIMINATION:
        raise InvalidBracketException(
            f"Unsupported bracket format: {settings.format.value}"
        )
    if len(players) != settings.bracket_size:
        raise InvalidBracketException(
            f"Player count ({len(players)}) does not match bracket size "
            f"({settings.bracket_size})"
        )

    by_seed = {player.seed: player for player in players}
    total_rounds = calculate_bracket_rounds(settings.bracket_size)
    matches: List[BracketMatch] = []

    for number, (seed1, seed2) in enumerate(
        get_bracket_matchups(settings.bracket_size), start=1
    ):
        if seed1 not in by_seed or seed2 not in by_seed:
            raise InvalidBracketException(
                f"Could not find players for seeds {seed1} and {seed2}"
            )
        matches.append(
            BracketMatch(
                id=_match_id(1, number),
                round=1,
                match_number=number,
                player1_id=by_seed[seed1].id,
                player2_id=by_seed[seed2].id,
                player1_seed=seed1,
                player2_seed=seed2,
                best_of=settings.best_of,
            )
        )

    for round_number in range(2, total_rounds + 1):
        previous = [m for m in matches if m.round == round_number - 1]
        for number in range(1, len(previous) // 2 + 1):
            matches.append(
                BracketMatch(
                    id=_match_id(round_number, number),
                    round=round_number,
                    match_number=number,
                    best_of=settings.best_of,
                    prerequisite_match1_id=previous[2 * number - 2].id,
                    prerequisite_match2_id=previous[2 * number - 1].id,
                )
            )

    logger.info(
        "Generated top %d bracket with %d rounds", settings.bracket_size, total_rounds
    )
    return BracketStructure(
        bracket_size=settings.bracket_size,
        total_rounds=total_rounds,
        format=settings.format,
        matches=matches,
        seeds=sorted(players, key=lambda p: p.seed),
    )


def advance_bracket(bracket: BracketStructure) -> BracketStructure:
    """Fill empty slots whose prerequisite matches both have a winner.

    Returns a new structure; ``bracket`` is not modified.
    """
    by_id = {m.id: m for m in bracket.matches}
    updated = []
    for match in bracket.matches:
        prereq1 = by_id.get(match.prerequisite_match1_id or "")
        prereq2 = by_id.get(match.prerequisite_match2_id or "")
        if (
            match.player1_id is None
            and prereq1 is not None
            and prereq2 is not None
            and prereq1.is_complete
            and prereq2.is_complete
            and prereq1.winner_id
            and prereq2.winner_id
        ):
            match = replace(
                match,
                player1_id=prereq1.winner_id,
                player2_id=prereq2.winner_id,
                player1_seed=prereq1.seed_of(prereq1.winner_id),
                player2_seed=prereq2.seed_of(prereq2.winner_id),
            )
            by_id[match.id] = match
            logger.debug("Advanced winners into %s", match.id)
        updated.append(match)
    return replace(bracket, matches=updated)


def record_bracket_result(
    bracket: BracketStructure,
    match_id: MatchId,
    winner_id: PlayerId,
    player1_game_wins: int = 0,
    player2_game_wins: int = 0,
) -> BracketStructure:
    """Record the winner of a ready match and advance the bracket.

    Raises
    ------
    BracketException
        If the match is unknown, not ready, or ``winner_id`` is not in it.
    """
    match = bracket.get_match(match_id)
    if match is None:
        raise BracketException(f"Unknown bracket match: {match_id}")
    if match.is_complete:
        raise BracketException(f"Bracket match {match_id} is already complete")
    if not match.is_ready:
        raise BracketException(f"Bracket match {match_id} is waiting for players")
    if winner_id not in (match.player1_id, match.player2_id):
        raise BracketException(
            f"Winner {winner_id} is not a player in bracket match {match_id}"
        )

    first_won = winner_id == match.player1_id
    finished = replace(
        match,
        winner_id=winner_id,
        is_complete=True,
        player1_match_points=WIN_MATCH_POINTS if first_won else 0,
        player2_match_points=0 if first_won else WIN_MATCH_POINTS,
        player1_game_wins=player1_game_wins,
        player2_game_wins=player2_game_wins,
    )
    matches = [finished if m.id == match_id else m for m in bracket.matches]
    return advance_bracket(replace(bracket, matches=matches))


def get_eliminated_players(bracket: BracketStructure) -> List[str]:
    return [m.loser_id for m in bracket.matches if m.loser_id is not None]


def get_remaining_players(bracket: BracketStructure) -> List[str]:
    """Seeded players not yet eliminated, in seed order."""
    eliminated = set(get_eliminated_players(bracket))
    return [p.id for p in bracket.seeds if p.id not in eliminated]


def get_ready_matches(
    bracket: BracketStructure, round_number: Optional[int] = None
) -> List[BracketMatch]:
    """Matches with both players known that have not been played yet."""
    return [
        m
        for m in bracket.matches
        if m.is_ready and (round_number is None or m.round == round_number)
    ]


def is_bracket_complete(bracket: BracketStructure) -> bool:
    final = next(
        (m for m in bracket.matches if m.round == bracket.total_rounds), None
    )
    return final is not None and final.is_complete and final.winner_id is not None


def get_bracket_winner(bracket: BracketStructure) -> Optional[str]:
    if not is_bracket_complete(bracket):
        return None
    final = bracket.round_matches(bracket.total_rounds)[0]
    return final.winner_id
