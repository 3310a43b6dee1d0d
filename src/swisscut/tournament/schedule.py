"""Tournament schedule projection.

Estimates the start time of every Swiss and top cut round from the event
start, the nominal round length and whatever actual round times have been
recorded so far.
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

from datetime import datetime
from typing import Dict, List, Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from swisscut.models.enums import TournamentFormat, TournamentPhase
from swisscut.models.schedule import (
    PhaseSchedule,
    RoundSchedule,
    RoundTiming,
    Timestamp,
    TournamentSchedule,
    TournamentScheduleData,
)
from swisscut.pairing.bracket import get_round_name
from swisscut.tournament.rounds import (
    calculate_required_rounds,
    calculate_top_cut_rounds,
)
from swisscut.utils import setup_logger

logger = setup_logger(__name__)

_SWISS_FORMATS = (
    TournamentFormat.SWISS_ONLY.value,
    TournamentFormat.SWISS_WITH_CUT.value,
)


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """Accept a datetime, an ISO-8601 string or None."""
    if value is None or isinstance(value, datetime):
        return value
    return isoparse(value)


def calculate_required_swiss_rounds(player_count: int) -> int:
    return calculate_required_rounds(player_count)


def get_top_cut_round_name(round_number: int, total_rounds: int) -> str:
    return get_round_name(round_number, total_rounds)


def calculate_round_eta(
    tournament_start: datetime,
    round_number: int,
    round_duration_minutes: int,
    timings: List[RoundTiming],
) -> datetime:
    """Estimated start of ``round_number`` (absolute numbering from 1).

    Walks the earlier rounds in order. A recorded end time becomes the next
    start; a round that started but has not ended is assumed to run its
    full length from the recorded start; otherwise the nominal length is
    added.
    """
    by_round: Dict[int, RoundTiming] = {t.round_number: t for t in timings}
    duration = relativedelta(minutes=round_duration_minutes)
    current = tournament_start
    for number in range(1, round_number):
        timing = by_round.get(number)
        if timing is not None and timing.actual_end_time is not None:
            current = timing.actual_end_time
        elif timing is not None and timing.actual_start_time is not None:
            current = timing.actual_start_time + duration
        else:
            current = current + duration
    return current


def _collect_timings(data: TournamentScheduleData) -> List[RoundTiming]:
    timings = []
    for phase in data.phases:
        for scheduled in phase.rounds:
            timings.append(
                RoundTiming(
                    round_number=scheduled.round_number,
                    actual_start_time=parse_timestamp(scheduled.start_time),
                    actual_end_time=parse_timestamp(scheduled.end_time),
                )
            )
    return timings


def _round_schedule(
    absolute_round: int,
    name: str,
    start: datetime,
    data: TournamentScheduleData,
    timings: List[RoundTiming],
) -> RoundSchedule:
    timing = next((t for t in timings if t.round_number == absolute_round), None)
    actual_start = timing.actual_start_time if timing else None
    return RoundSchedule(
        round_number=absolute_round,
        name=name,
        estimated_start_time=calculate_round_eta(
            start, absolute_round, data.round_time_minutes, timings
        ),
        actual_start_time=actual_start,
        is_completed=timing is not None and timing.actual_end_time is not None,
        is_active=data.current_round == absolute_round and actual_start is not None,
    )


def get_tournament_schedule(data: TournamentScheduleData) -> TournamentSchedule:
    """Project every round of the event.

    Swiss rounds are numbered from 1; top cut rounds continue the absolute
    numbering after the last Swiss round. Without a start date there is
    nothing to project.
    """
    start = parse_timestamp(data.start_date)
    if start is None:
        return TournamentSchedule(tournament_start_time=None)

    swiss_count = data.swiss_rounds or 0
    if not swiss_count and data.registration_count > 0:
        swiss_count = calculate_required_swiss_rounds(data.registration_count)

    timings = _collect_timings(data)
    schedule = TournamentSchedule(tournament_start_time=start)

    if swiss_count > 0 and data.tournament_format in _SWISS_FORMATS:
        rounds = [
            _round_schedule(number, f"Round {number}", start, data, timings)
            for number in range(1, swiss_count + 1)
        ]
        schedule.phases.append(
            PhaseSchedule(
                phase_name=f"Swiss Rounds ({swiss_count})",
                phase_type=TournamentPhase.SWISS,
                rounds=rounds,
            )
        )

    if (
        data.tournament_format == TournamentFormat.SWISS_WITH_CUT.value
        and data.top_cut_size
        and data.top_cut_size > 1
    ):
        cut_rounds = calculate_top_cut_rounds(data.top_cut_size)
        rounds = [
            _round_schedule(
                swiss_count + number,
                get_top_cut_round_name(number, cut_rounds),
                start,
                data,
                timings,
            )
            for number in range(1, cut_rounds + 1)
        ]
        schedule.phases.append(
            PhaseSchedule(
                phase_name=f"Top Cut (Top {data.top_cut_size})",
                phase_type=TournamentPhase.TOP_CUT,
                rounds=rounds,
            )
        )

    logger.debug(
        "Projected %d rounds from %s", len(schedule.rounds), start.isoformat()
    )
    return schedule


def format_round_time(moment: datetime) -> str:
    """12-hour clock time such as ``6:06 PM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def format_start_datetime(moment: datetime) -> str:
    """Short date and time such as ``Mon, Feb 2 at 6:06 PM``."""
    return f"{moment.strftime('%a, %b')} {moment.day} at {format_round_time(moment)}"
