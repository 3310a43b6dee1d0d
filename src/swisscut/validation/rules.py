"""Validation rules for tournament settings, rounds and match results.

Every function here is a pure check that returns a report; none of them
modify their input.
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
from datetime import datetime

from swisscut.constants import (
    BYE_MATCH_POINTS,
    DEFAULT_ROUND_TIME_MINUTES,
    LONG_EVENT_MINUTES,
    MAX_RECOMMENDED_SWISS_ROUNDS,
    MAX_ROUND_TIME_MINUTES,
    MAX_TOURNAMENT_NAME_LENGTH,
    MIN_PARTICIPANTS,
    MIN_ROUND_TIME_MINUTES,
    ROUND_BUFFER_MINUTES,
    TOP_CUT_MAX_FIELD_RATIO,
    VALID_BEST_OF,
    VALID_BRACKET_SIZES,
    VALID_MATCH_POINTS,
)
from swisscut.models.enums import TournamentFormat
from swisscut.models.match import MatchResultData
from swisscut.models.validation import (
    OptimalTournamentSettings,
    RoundStartData,
    TournamentStartCheck,
    TournamentTimingData,
    TournamentValidationSettings,
    ValidationResult,
)
from swisscut.tournament.rounds import (
    calculate_required_rounds,
    calculate_top_cut_rounds,
)
from swisscut.utils import setup_logger

logger = setup_logger(__name__)

WINNER_MISMATCH = "Winner must be the player with higher match points"


def calculate_swiss_rounds(participant_count: int) -> int:
    """Recommended Swiss rounds for ``participant_count`` players."""
    return calculate_required_rounds(participant_count)


def validate_tournament_settings(
    settings: TournamentValidationSettings,
) -> ValidationResult:
    """Sanity check organizer settings before an event is created."""
    errors = []
    warnings = []

    if not settings.name or not settings.name.strip():
        errors.append("Tournament name is required")
    elif len(settings.name) > MAX_TOURNAMENT_NAME_LENGTH:
        errors.append(
            f"Tournament name must be {MAX_TOURNAMENT_NAME_LENGTH} characters or less"
        )

    if settings.min_participants < MIN_PARTICIPANTS:
        errors.append(
            f"Minimum participants must be at least {MIN_PARTICIPANTS} "
            "for Pokemon VGC tournaments"
        )
    if settings.max_participants < settings.min_participants:
        errors.append(
            "Maximum participants must be greater than minimum participants"
        )

    if settings.format is TournamentFormat.SWISS_WITH_CUT:
        if settings.top_cut_size not in VALID_BRACKET_SIZES:
            errors.append(
                "Top cut size must be a power of 2 (4, 8, 16, 32, 64, 128, 256)"
            )
        if settings.top_cut_size > settings.max_participants:
            warnings.append(
                "Top cut size exceeds maximum participants - "
                "ensure sufficient registration"
            )

    if settings.swiss_rounds < 1:
        errors.append("Swiss rounds must be at least 1")
    if settings.swiss_rounds > MAX_RECOMMENDED_SWISS_ROUNDS:
        warnings.append(
            "Very high number of Swiss rounds - tournaments may take a very long time"
        )

    if not (
        MIN_ROUND_TIME_MINUTES <= settings.round_time_minutes <= MAX_ROUND_TIME_MINUTES
    ):
        errors.append(
            f"Round time must be between {MIN_ROUND_TIME_MINUTES} and "
            f"{MAX_ROUND_TIME_MINUTES} minutes"
        )

    if settings.end_date <= settings.start_date:
        errors.append("End date must be after start date")

    if settings.max_participants > 0 and settings.swiss_rounds >= 1:
        calculated = calculate_swiss_rounds(settings.max_participants)
        if settings.swiss_rounds < calculated - 1:
            warnings.append(
                "Low Swiss rounds may not properly eliminate players. "
                f"Calculated: {calculated}, you have: {settings.swiss_rounds}"
            )
        elif settings.swiss_rounds > calculated + 2:
            warnings.append(
                "High Swiss rounds may make tournament very long. "
                f"Calculated: {calculated}, you have: {settings.swiss_rounds}"
            )

    if errors:
        logger.warning("Tournament settings rejected: %s", errors)
    return ValidationResult.from_messages(errors, warnings)


def validate_tournament_timing(data: TournamentTimingData) -> ValidationResult:
    """Check whether the event or its next round may start at ``current_time``."""
    errors = []
    warnings = []

    if data.current_time < data.start_date:
        warnings.append("Starting tournament before scheduled start date")

    if data.current_participants is not None and data.min_participants is not None:
        if data.current_participants < data.min_participants:
            errors.append("Insufficient participants to start tournament")

    if data.round_start_time is not None and data.current_time < data.round_start_time:
        errors.append("Cannot start round before scheduled time")

    if data.current_round > data.total_rounds:
        errors.append("Current round exceeds total planned rounds")

    return ValidationResult.from_messages(errors, warnings)


def validate_round_start(data: RoundStartData) -> ValidationResult:
    """Preconditions for starting the round after ``data.current_round``."""
    errors = []

    if data.current_round > 0 and not data.previous_round_complete:
        errors.append("Previous round must be completed before starting next round")
    if data.current_round >= data.total_rounds:
        errors.append("Cannot start round beyond total scheduled rounds")
    if data.participant_count < data.min_participants:
        errors.append("Insufficient participants to continue tournament")
    if data.round_time_minutes < MIN_ROUND_TIME_MINUTES:
        errors.append(
            f"Round time too short - minimum {MIN_ROUND_TIME_MINUTES} minutes required"
        )

    return ValidationResult.from_messages(errors)


def _validate_bye_result(data: MatchResultData) -> list:
    errors = []
    if data.player2_id is not None:
        errors.append("Bye matches should not have a second player")
    if data.match_points1 != BYE_MATCH_POINTS or data.match_points2 != 0:
        errors.append("Bye matches must award 1 match point to the active player")
    if data.game_wins1 != 0 or data.game_wins2 != 0:
        errors.append("Bye matches should not record game wins")
    return errors


def _validate_game_counts(data: MatchResultData) -> list:
    errors = []
    if data.best_of not in VALID_BEST_OF:
        return [f"Best of {data.best_of} is not a supported match format"]

    games_to_win = math.ceil(data.best_of / 2)
    total_games = data.game_wins1 + data.game_wins2
    if total_games < games_to_win or total_games > data.best_of:
        errors.append(
            f"Best of {data.best_of} matches must have {games_to_win} "
            f"to {data.best_of} games"
        )

    first_won = data.match_points1 > data.match_points2
    winner_games = data.game_wins1 if first_won else data.game_wins2
    loser_games = data.game_wins2 if first_won else data.game_wins1
    if winner_games < games_to_win:
        errors.append(
            f"Best of {data.best_of} winner must win at least {games_to_win} games"
        )
    if loser_games >= winner_games:
        errors.append("Match winner must have won more games than opponent")
    return errors


def validate_match_result(data: MatchResultData) -> ValidationResult:
    """Check a reported result against VGC scoring rules.

    No ties, match points of 0 or 1, a declared winner holding the higher
    match points, and a game score legal for the best-of format. Byes must
    be an unopposed 1-0 with no games.
    """
    errors = []

    if data.match_points1 == data.match_points2 and not data.is_bye:
        errors.append("Ties are not allowed in Pokemon VGC tournaments")

    if (
        data.match_points1 not in VALID_MATCH_POINTS
        or data.match_points2 not in VALID_MATCH_POINTS
    ):
        errors.append("Match points must be 0 or 1")

    if data.is_bye:
        errors.extend(_validate_bye_result(data))
    else:
        if data.winner_id is not None:
            if data.match_points1 > data.match_points2:
                expected = data.player1_id
            elif data.match_points2 > data.match_points1:
                expected = data.player2_id
            else:
                expected = None
            if expected is not None and data.winner_id != expected:
                errors.append(WINNER_MISMATCH)
        errors.extend(_validate_game_counts(data))

    return ValidationResult.from_messages(errors)


def can_start_tournament(
    current_participants: int,
    min_participants: int,
    start_date: datetime,
    current_time: datetime,
) -> TournamentStartCheck:
    if current_participants < min_participants:
        return TournamentStartCheck(
            can_start=False,
            reason=(
                f"Insufficient participants: {current_participants}/"
                f"{min_participants} minimum required"
            ),
        )
    if current_time < start_date:
        return TournamentStartCheck(
            can_start=False,
            reason="Cannot start tournament before scheduled start date",
        )
    return TournamentStartCheck(can_start=True)


def estimate_tournament_duration(
    swiss_rounds: int,
    top_cut_size: int,
    round_time_minutes: int,
    format: TournamentFormat,
) -> int:
    """Total minutes: every round plus a 15-minute buffer after each."""
    total_rounds = swiss_rounds
    if format is TournamentFormat.SWISS_WITH_CUT and top_cut_size > 0:
        total_rounds += calculate_top_cut_rounds(top_cut_size)
    return total_rounds * (round_time_minutes + ROUND_BUFFER_MINUTES)


def can_advance_round(
    current_round: int,
    total_rounds: int,
    all_matches_complete: bool,
    active_participants: int,
    min_participants: int,
) -> ValidationResult:
    errors = []
    if not all_matches_complete:
        errors.append("All matches in current round must be completed")
    if active_participants < min_participants:
        errors.append("Insufficient active participants to continue tournament")
    if current_round >= total_rounds:
        errors.append("Tournament has reached maximum rounds")
    return ValidationResult.from_messages(errors)


def recommended_top_cut(expected_participants: int) -> int:
    if expected_participants >= 256:
        return 32
    if expected_participants >= 128:
        return 16
    if expected_participants >= 32:
        return 8
    return 4


def calculate_optimal_tournament_settings(
    expected_participants: int,
) -> OptimalTournamentSettings:
    """Suggested Swiss rounds, cut size and duration for a field size."""
    swiss_rounds = calculate_swiss_rounds(expected_participants)
    top_cut = recommended_top_cut(expected_participants)
    return OptimalTournamentSettings(
        swiss_rounds=swiss_rounds,
        recommended_top_cut=top_cut,
        estimated_duration=estimate_tournament_duration(
            swiss_rounds,
            top_cut,
            DEFAULT_ROUND_TIME_MINUTES,
            TournamentFormat.SWISS_WITH_CUT,
        ),
        recommended_round_time=DEFAULT_ROUND_TIME_MINUTES,
    )


def validate_tournament_integrity(
    settings: TournamentValidationSettings,
) -> ValidationResult:
    """Warn about settings that are legal but make a poor event."""
    warnings = []

    if settings.format is TournamentFormat.SWISS_WITH_CUT:
        calculated = calculate_swiss_rounds(settings.max_participants)
        if settings.swiss_rounds < calculated - 1:
            warnings.append(
                "Few Swiss rounds may result in tied players advancing to top cut"
            )
        if (
            settings.max_participants > 0
            and settings.top_cut_size / settings.max_participants
            > TOP_CUT_MAX_FIELD_RATIO
        ):
            warnings.append(
                "Top cut includes more than 50% of participants - "
                "consider reducing size"
            )

    if settings.format is not TournamentFormat.SINGLE_ELIMINATION:
        duration = estimate_tournament_duration(
            settings.swiss_rounds,
            settings.top_cut_size,
            settings.round_time_minutes,
            settings.format,
        )
        if duration > LONG_EVENT_MINUTES:
            warnings.append(
                f"Tournament estimated to take {round(duration / 60)} hours"
                " - very long event"
            )

    return ValidationResult.from_messages([], warnings)
