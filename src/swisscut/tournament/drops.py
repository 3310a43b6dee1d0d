"""Player drops and the byes they force.

A drop removes a player from pairing for the rest of the event. When that
leaves an odd active field, one player is given a bye straight away.
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

from dataclasses import replace
from typing import List, Optional

from swisscut.constants import BYE_MATCH_POINTS, MIN_PARTICIPANTS
from swisscut.models.drop import (
    ByeRecord,
    ByeResult,
    DropHandlingResult,
    DropRequest,
    DropResult,
    DropTimingCheck,
    ProcessDropsResult,
)
from swisscut.models.enums import DropTiming
from swisscut.models.player import PlayerStatus
from swisscut.type_hints import PlayerId
from swisscut.utils import setup_logger

logger = setup_logger(__name__)

PLAYER_NOT_AVAILABLE = "Player not found or already dropped"
DROP_DURING_ROUND = (
    "Players cannot drop during active rounds. Please wait until round completion."
)
DROP_DURING_MATCH = (
    "Dropping during an active match results in an automatic win for the opponent."
)


def get_active_player_count(players: List[PlayerStatus]) -> int:
    return sum(1 for p in players if not p.is_dropped)


def has_minimum_players(
    players: List[PlayerStatus], minimum: int = MIN_PARTICIPANTS
) -> bool:
    return get_active_player_count(players) >= minimum


def get_players_with_byes(players: List[PlayerStatus]) -> List[PlayerStatus]:
    return [p for p in players if not p.is_dropped and p.bye_count > 0]


def get_players_without_byes(players: List[PlayerStatus]) -> List[PlayerStatus]:
    return [p for p in players if not p.is_dropped and p.bye_count == 0]


def calculate_total_match_points(player: PlayerStatus) -> int:
    """Match points from played rounds plus one per bye."""
    return player.match_points + player.bye_count * BYE_MATCH_POINTS


def validate_drop_timing(
    timing: DropTiming, round_started: bool = True
) -> DropTimingCheck:
    """Check whether a drop may be taken at ``timing``.

    Drops while a round is live as a block are refused. A drop during a
    single live match is allowed and the returned reason notes the
    opponent's automatic win.
    """
    if timing is DropTiming.DURING_ROUND and round_started:
        return DropTimingCheck(can_drop=False, reason=DROP_DURING_ROUND)
    if timing is DropTiming.DURING_MATCH:
        return DropTimingCheck(can_drop=True, reason=DROP_DURING_MATCH)
    return DropTimingCheck(can_drop=True)


class DropByeManager:
    """Applies drops to a list of ``PlayerStatus`` and re-balances byes.

    Every method returns new lists; the players passed in are never
    modified.
    """

    def __init__(self, round_started: bool = True) -> None:
        self.round_started = round_started

    @staticmethod
    def _find(
        players: List[PlayerStatus], player_id: PlayerId
    ) -> Optional[PlayerStatus]:
        return next((p for p in players if p.id == player_id), None)

    def can_player_drop(
        self, player_id: PlayerId, timing: DropTiming, players: List[PlayerStatus]
    ) -> bool:
        player = self._find(players, player_id)
        if player is None or player.is_dropped:
            return False
        return validate_drop_timing(timing, self.round_started).can_drop

    def drop_player(
        self, request: DropRequest, players: List[PlayerStatus]
    ) -> DropResult:
        """Mark the requested player as dropped."""
        player = self._find(players, request.player_id)
        if player is None or player.is_dropped:
            return DropResult(
                success=False, updated_players=players, error=PLAYER_NOT_AVAILABLE
            )
        updated = [
            replace(p, is_dropped=True) if p.id == request.player_id else p
            for p in players
        ]
        logger.info(
            "Player %s dropped in round %d", request.player_id, request.round_number
        )
        return DropResult(success=True, updated_players=updated, drop_record=request)

    def find_bye_candidate(self, players: List[PlayerStatus]) -> Optional[PlayerStatus]:
        """The active player who should take a bye, if the field is odd.

        Fewest byes first, then fewest match points. Remaining ties go to
        the player listed last, matching the lowest standing when the list
        is in standings order.
        """
        active = [(i, p) for i, p in enumerate(players) if not p.is_dropped]
        if len(active) % 2 == 0:
            return None
        _, candidate = min(
            active, key=lambda item: (item[1].bye_count, item[1].match_points, -item[0])
        )
        return candidate

    def assign_bye(
        self, player_id: PlayerId, round_number: int, players: List[PlayerStatus]
    ) -> ByeResult:
        player = self._find(players, player_id)
        if player is None or player.is_dropped:
            return ByeResult(
                success=False, updated_players=players, error=PLAYER_NOT_AVAILABLE
            )
        updated = [
            replace(p, bye_count=p.bye_count + 1) if p.id == player_id else p
            for p in players
        ]
        logger.debug("Bye for round %d assigned to %s", round_number, player_id)
        return ByeResult(
            success=True,
            updated_players=updated,
            bye_record=ByeRecord(player_id=player_id, round_number=round_number),
        )

    def _rebalance_bye(
        self, players: List[PlayerStatus], round_number: int
    ) -> ByeResult:
        candidate = self.find_bye_candidate(players)
        if candidate is None:
            return ByeResult(success=True, updated_players=players)
        return self.assign_bye(candidate.id, round_number, players)

    def handle_drop(
        self,
        request: DropRequest,
        players: List[PlayerStatus],
        timing: DropTiming,
    ) -> DropHandlingResult:
        """Drop one player and resolve the resulting table imbalance.

        During a live match the opponent simply wins and no bye is sought.
        Otherwise an odd active field triggers an immediate bye.
        """
        timing_check = validate_drop_timing(timing, self.round_started)
        if not timing_check.can_drop:
            logger.warning(
                "Rejected drop of %s: %s", request.player_id, timing_check.reason
            )
            return DropHandlingResult(
                success=False, updated_players=players, error=timing_check.reason
            )

        dropped = self.drop_player(request, players)
        if not dropped.success:
            logger.warning("Rejected drop of %s: %s", request.player_id, dropped.error)
            return DropHandlingResult(
                success=False, updated_players=players, error=dropped.error
            )

        if timing is DropTiming.DURING_MATCH:
            return DropHandlingResult(
                success=True,
                updated_players=dropped.updated_players,
                drop_record=request,
                opponent_auto_win=True,
            )

        bye = self._rebalance_bye(dropped.updated_players, request.round_number)
        return DropHandlingResult(
            success=True,
            updated_players=bye.updated_players,
            drop_record=request,
            bye_assignment=bye.bye_record,
        )

    def process_drops_for_round(
        self,
        requests: List[DropRequest],
        players: List[PlayerStatus],
        round_number: int,
    ) -> ProcessDropsResult:
        """Apply several drops at once.

        If any drop is invalid nothing is applied. Otherwise a single bye
        check runs after every drop has been taken.
        """
        current = list(players)
        errors = []
        for request in requests:
            dropped = self.drop_player(request, current)
            if dropped.success:
                current = dropped.updated_players
            else:
                errors.append(
                    f"Failed to drop player {request.player_id}: {dropped.error}"
                )

        if errors:
            logger.warning("Batch drop rejected: %s", "; ".join(errors))
            return ProcessDropsResult(
                success=False, updated_players=players, errors=errors
            )

        bye = self._rebalance_bye(current, round_number)
        return ProcessDropsResult(
            success=True,
            updated_players=bye.updated_players,
            processed_drops=list(requests),
            bye_assignment=bye.bye_record,
        )
