"""Tournament flow state machine.

This module moves an event through its phases (Swiss, top cut, completed)
and delegates round generation to the Swiss pairing and bracket engines.
Every operation takes a ``TournamentState`` snapshot and returns a new one;
the snapshot passed in is left untouched.
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
from swisscut.exceptions import TournamentStateException
from swisscut.models.bracket import BracketSettings, BracketStructure
from swisscut.models.drop import DropRequest
from swisscut.models.enums import BracketFormat, TournamentFormat, TournamentPhase
from swisscut.models.match import MatchResultData, TournamentMatch, make_match_id
from swisscut.models.player import PlayerRecord, PlayerStatus
from swisscut.models.tournament import (
    RoundResult,
    StateTransitionResult,
    TournamentDrop,
    TournamentSettings,
    TournamentState,
)
from swisscut.pairing.bracket import (
    generate_top_cut_bracket,
    get_ready_matches,
    get_remaining_players,
    is_valid_bracket_size,
    record_bracket_result,
    seed_top_cut,
)
from swisscut.pairing.swiss import SwissPairingEngine
from swisscut.tournament.drops import DropByeManager
from swisscut.tournament.rounds import calculate_required_rounds
from swisscut.tournament.standings import StandingsCalculator
from swisscut.utils import setup_logger
from swisscut.validation.rules import validate_match_result

logger = setup_logger(__name__)


def _round_matches(state: TournamentState) -> List[TournamentMatch]:
    """Matches of the current round of the current phase."""
    top_cut = state.phase is TournamentPhase.TOP_CUT
    return [
        m
        for m in state.matches
        if m.round_number == state.current_round and m.is_top_cut == top_cut
    ]


def sync_bracket(state: TournamentState) -> Optional[BracketStructure]:
    """Bring ``state.bracket`` up to date with completed top cut matches.

    Results are applied in round order so each winner is in place before
    the next round's result is read.
    """
    bracket = state.bracket
    if bracket is None:
        return None
    completed = sorted(
        (m for m in state.matches if m.is_top_cut and m.is_complete),
        key=lambda m: (m.round_number, m.id),
    )
    for match in completed:
        slot = bracket.get_match(match.id)
        if slot is None or slot.is_complete or not slot.is_ready:
            continue
        winner = match.winner_id
        if winner is None:
            continue
        bracket = record_bracket_result(
            bracket,
            match.id,
            winner,
            match.player1_game_wins,
            match.player2_game_wins,
        )
    return bracket


class TournamentFlow:
    """Orchestrates rounds and phase changes for one event.

    Parameters
    ----------
    settings : TournamentSettings
        Organizer settings for the event.
    seed : int, optional
        Seed for round 1 pairings. Generating the same round twice from
        the same state gives the same matches.
    """

    def __init__(
        self, settings: TournamentSettings, seed: Optional[int] = None
    ) -> None:
        self.settings = settings
        self.pairing_engine = SwissPairingEngine(seed=seed)
        self.standings = StandingsCalculator()

    # Queries

    def get_active_players_count(self, state: TournamentState) -> int:
        return len(state.active_players)

    def has_sufficient_participants(
        self, state: TournamentState, minimum: int = MIN_PARTICIPANTS
    ) -> bool:
        return self.get_active_players_count(state) >= minimum

    def build_player_records(self, state: TournamentState) -> List[PlayerRecord]:
        """Swiss standings for every entrant, drops flagged."""
        return self.standings.calculate(
            state.players, state.matches, state.dropped_player_ids
        )

    def build_player_statuses(self, state: TournamentState) -> List[PlayerStatus]:
        dropped = state.dropped_player_ids
        statuses = []
        for record in self.build_player_records(state):
            statuses.append(
                PlayerStatus(
                    id=record.id,
                    name=record.display_name,
                    is_dropped=record.id in dropped,
                    bye_count=record.bye_count,
                    match_points=record.match_points
                    - record.bye_count * BYE_MATCH_POINTS,
                    rounds_played=record.rounds_played,
                )
            )
        return statuses

    def recommended_swiss_rounds(self, state: TournamentState) -> int:
        """Swiss rounds suited to the current active field."""
        return calculate_required_rounds(self.get_active_players_count(state))

    def can_start_next_round(self, state: TournamentState) -> bool:
        """True when every match of the current round is complete."""
        if state.phase is TournamentPhase.COMPLETED:
            return False
        if state.current_round == 0:
            return True
        return all(m.is_complete for m in _round_matches(state))

    def can_advance_to_top_cut(self, state: TournamentState) -> bool:
        return (
            state.phase is TournamentPhase.SWISS
            and self.settings.format is TournamentFormat.SWISS_WITH_CUT
            and state.current_round >= self.settings.swiss_rounds
        )

    def get_next_round_number(self, state: TournamentState) -> int:
        """Next phase-local round number.

        Raises
        ------
        TournamentStateException
            If the tournament is already completed.
        """
        if state.phase is TournamentPhase.COMPLETED:
            raise TournamentStateException(
                "Cannot determine next round number for completed tournament"
            )
        return state.current_round + 1

    def is_tournament_complete(self, state: TournamentState) -> bool:
        if state.phase is TournamentPhase.COMPLETED:
            return True
        if self.settings.format is TournamentFormat.SWISS_ONLY:
            return state.current_round >= self.settings.swiss_rounds
        if self.settings.format is TournamentFormat.SWISS_WITH_CUT:
            if state.phase is not TournamentPhase.TOP_CUT:
                return False
            bracket = sync_bracket(state)
            return bracket is not None and len(get_remaining_players(bracket)) == 1
        # Completion of a pure elimination event is not tracked here
        logger.debug("Completion check not supported for %s", self.settings.format)
        return False

    # Round generation

    def generate_next_round(self, state: TournamentState) -> RoundResult:
        """Build (but do not install) the matches of the next round."""
        if state.phase is TournamentPhase.COMPLETED:
            return RoundResult(
                round_number=state.current_round,
                phase=state.phase,
                success=False,
                errors=["Cannot generate round for completed tournament"],
            )
        next_round = self.get_next_round_number(state)
        if not self.can_start_next_round(state):
            return RoundResult(
                round_number=next_round,
                phase=state.phase,
                success=False,
                errors=["Cannot start next round: previous round is not complete"],
            )
        if state.phase is TournamentPhase.SWISS:
            if next_round > self.settings.swiss_rounds:
                return RoundResult(
                    round_number=next_round,
                    phase=state.phase,
                    success=False,
                    errors=["Cannot start round beyond total scheduled rounds"],
                )
            return self.generate_swiss_round(state, next_round)
        return self.generate_top_cut_round(state, next_round)

    def generate_swiss_round(
        self, state: TournamentState, round_number: int
    ) -> RoundResult:
        records = self.build_player_records(state)
        pairing = self.pairing_engine.generate(records, round_number)
        if not pairing.success:
            return RoundResult(
                round_number=round_number,
                phase=TournamentPhase.SWISS,
                success=False,
                errors=list(pairing.errors),
                warnings=list(pairing.warnings),
            )

        matches = []
        for number, table in enumerate(pairing.pairings, start=1):
            match_id = make_match_id(TournamentPhase.SWISS, round_number, number)
            if table.is_bye:
                matches.append(
                    TournamentMatch(
                        id=match_id,
                        round_number=round_number,
                        player1_id=table.player1_id,
                        player1_match_points=BYE_MATCH_POINTS,
                        is_bye=True,
                        is_complete=True,
                    )
                )
            else:
                matches.append(
                    TournamentMatch(
                        id=match_id,
                        round_number=round_number,
                        player1_id=table.player1_id,
                        player2_id=table.player2_id,
                    )
                )
        return RoundResult(
            round_number=round_number,
            phase=TournamentPhase.SWISS,
            matches=matches,
            warnings=list(pairing.warnings),
        )

    def generate_top_cut_round(
        self, state: TournamentState, round_number: int
    ) -> RoundResult:
        bracket = sync_bracket(state)
        if bracket is None:
            return RoundResult(
                round_number=round_number,
                phase=TournamentPhase.TOP_CUT,
                success=False,
                errors=["Tournament state does not have bracket information"],
            )
        ready = get_ready_matches(bracket, round_number)
        if not ready:
            return RoundResult(
                round_number=round_number,
                phase=TournamentPhase.TOP_CUT,
                success=False,
                errors=[f"No matches available for top cut round {round_number}"],
            )
        matches = [
            TournamentMatch(
                id=slot.id,
                round_number=round_number,
                player1_id=slot.player1_id,
                player2_id=slot.player2_id,
            )
            for slot in ready
        ]
        return RoundResult(
            round_number=round_number, phase=TournamentPhase.TOP_CUT, matches=matches
        )

    def start_next_round(self, state: TournamentState) -> StateTransitionResult:
        """Generate the next round and install it in a new state."""
        result = self.generate_next_round(state)
        if not result.success:
            logger.warning(
                "Round %d not started: %s", result.round_number, result.errors
            )
            return StateTransitionResult(
                success=False,
                state=state,
                errors=result.errors,
                warnings=result.warnings,
            )
        logger.info(
            "Started %s round %d with %d matches",
            result.phase.value,
            result.round_number,
            len(result.matches),
        )
        new_state = replace(
            state,
            current_round=result.round_number,
            matches=state.matches + result.matches,
            bracket=sync_bracket(state),
        )
        return StateTransitionResult(
            success=True, state=new_state, warnings=result.warnings
        )

    # Transitions

    def record_match_result(
        self, state: TournamentState, result: MatchResultData
    ) -> StateTransitionResult:
        """Validate and store the result of an open match.

        The result is checked against the event's ``best_of``; whatever
        format the report carries is ignored.
        """
        match = state.get_match(result.match_id)
        if match is None:
            return StateTransitionResult(
                success=False, state=state, errors=[f"Unknown match {result.match_id}"]
            )
        if match.is_complete:
            return StateTransitionResult(
                success=False,
                state=state,
                errors=[f"Match {result.match_id} is already complete"],
            )
        if (result.player1_id, result.player2_id) != (
            match.player1_id,
            match.player2_id,
        ):
            return StateTransitionResult(
                success=False,
                state=state,
                errors=["Reported players do not match the pairing"],
            )

        validation = validate_match_result(
            replace(result, best_of=self.settings.best_of)
        )
        if not validation.is_valid:
            logger.warning(
                "Rejected result for %s: %s", result.match_id, validation.errors
            )
            return StateTransitionResult(
                success=False,
                state=state,
                errors=validation.errors,
                warnings=validation.warnings,
            )

        finished = replace(
            match,
            player1_match_points=result.match_points1,
            player2_match_points=result.match_points2,
            player1_game_wins=result.game_wins1,
            player2_game_wins=result.game_wins2,
            is_complete=True,
        )
        matches = [finished if m.id == match.id else m for m in state.matches]
        new_state = replace(state, matches=matches)
        if finished.is_top_cut:
            new_state = replace(new_state, bracket=sync_bracket(new_state))
        logger.debug("Recorded result for %s", result.match_id)
        return StateTransitionResult(
            success=True, state=new_state, warnings=validation.warnings
        )

    def process_player_drops(
        self, state: TournamentState, requests: List[DropRequest]
    ) -> StateTransitionResult:
        """Apply drops in one batch; nothing changes if any is invalid."""
        if not requests:
            return StateTransitionResult(success=True, state=state)
        manager = DropByeManager(round_started=False)
        outcome = manager.process_drops_for_round(
            requests, self.build_player_statuses(state), state.current_round + 1
        )
        if not outcome.success:
            return StateTransitionResult(
                success=False, state=state, errors=outcome.errors
            )
        drops = state.drops + [
            TournamentDrop(
                tournament_id=request.tournament_id,
                player_id=request.player_id,
                round_number=request.round_number,
            )
            for request in outcome.processed_drops
        ]
        return StateTransitionResult(
            success=True,
            state=replace(state, drops=drops),
            bye_assignment=outcome.bye_assignment,
        )

    def advance_to_top_cut(self, state: TournamentState) -> StateTransitionResult:
        """Seed the bracket from final Swiss standings and enter top cut."""
        if not self.can_advance_to_top_cut(state):
            if self.settings.format is not TournamentFormat.SWISS_WITH_CUT:
                reason = "Tournament format does not include top cut"
            elif state.phase is not TournamentPhase.SWISS:
                reason = "Tournament is not in the Swiss phase"
            else:
                reason = "Swiss rounds not complete"
            return StateTransitionResult(
                success=False,
                state=state,
                errors=[f"Cannot advance to top cut: {reason}"],
            )
        if not self.can_start_next_round(state):
            return StateTransitionResult(
                success=False,
                state=state,
                errors=["Cannot advance to top cut: current round is not complete"],
            )

        size = self.settings.top_cut_size
        if not is_valid_bracket_size(size):
            return StateTransitionResult(
                success=False,
                state=state,
                errors=[
                    "Top cut size must be a power of 2 (4, 8, 16, 32, 64, 128, 256)"
                ],
            )
        if self.get_active_players_count(state) < size:
            return StateTransitionResult(
                success=False,
                state=state,
                errors=[f"Not enough active players for a top {size} cut"],
            )

        seeds = seed_top_cut(self.build_player_records(state), size)
        bracket = generate_top_cut_bracket(
            seeds,
            BracketSettings(
                bracket_size=size,
                format=BracketFormat.SINGLE_ELIMINATION,
                best_of=self.settings.best_of,
            ),
        )
        logger.info(
            "Advancing to top %d after %d Swiss rounds", size, state.current_round
        )
        return StateTransitionResult(
            success=True,
            state=replace(
                state, phase=TournamentPhase.TOP_CUT, current_round=0, bracket=bracket
            ),
        )

    def complete_tournament(self, state: TournamentState) -> StateTransitionResult:
        if state.phase is TournamentPhase.COMPLETED:
            return StateTransitionResult(success=True, state=state)
        if not self.is_tournament_complete(state) or not self.can_start_next_round(
            state
        ):
            return StateTransitionResult(
                success=False,
                state=state,
                errors=["Tournament cannot be completed yet"],
            )
        logger.info("Tournament %s completed", self.settings.id)
        return StateTransitionResult(
            success=True,
            state=replace(
                state, phase=TournamentPhase.COMPLETED, bracket=sync_bracket(state)
            ),
        )


__all__ = ["TournamentFlow", "calculate_required_rounds", "sync_bracket"]
