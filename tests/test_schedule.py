from datetime import datetime

from swisscut.models.enums import PhaseType, RoundStatus, TournamentPhase
from swisscut.models.schedule import (
    RoundTiming,
    ScheduledPhase,
    ScheduledRound,
    TournamentScheduleData,
)
from swisscut.tournament.schedule import (
    calculate_round_eta,
    format_round_time,
    format_start_datetime,
    get_tournament_schedule,
    parse_timestamp,
)

START = datetime(2025, 6, 1, 9, 0)


def _data(**overrides):
    values = dict(
        start_date="2025-06-01T09:00:00",
        round_time_minutes=50,
        tournament_format="swiss_with_cut",
        swiss_rounds=3,
        top_cut_size=8,
        registration_count=20,
        current_round=0,
    )
    values.update(overrides)
    return TournamentScheduleData(**values)


def test_parse_timestamp():
    assert parse_timestamp(None) is None
    assert parse_timestamp(START) is START
    assert parse_timestamp("2025-06-01T09:00:00") == START


def test_eta_uses_nominal_round_length():
    assert calculate_round_eta(START, 1, 50, []) == START
    assert calculate_round_eta(START, 3, 50, []) == datetime(2025, 6, 1, 10, 40)


def test_eta_uses_recorded_times():
    ended_early = [RoundTiming(1, START, datetime(2025, 6, 1, 9, 40))]
    assert calculate_round_eta(START, 3, 50, ended_early) == datetime(
        2025, 6, 1, 10, 30
    )

    started_late = [RoundTiming(1, datetime(2025, 6, 1, 9, 10), None)]
    assert calculate_round_eta(START, 2, 50, started_late) == datetime(
        2025, 6, 1, 10, 0
    )


def test_schedule_numbers_top_cut_after_swiss():
    schedule = get_tournament_schedule(_data())

    assert schedule.tournament_start_time == START
    assert [p.phase_name for p in schedule.phases] == [
        "Swiss Rounds (3)",
        "Top Cut (Top 8)",
    ]
    assert schedule.phases[1].phase_type is TournamentPhase.TOP_CUT
    assert [r.round_number for r in schedule.rounds] == [1, 2, 3, 4, 5, 6]
    assert [r.name for r in schedule.rounds] == [
        "Round 1",
        "Round 2",
        "Round 3",
        "Quarterfinals",
        "Semifinals",
        "Finals",
    ]
    assert schedule.rounds[3].estimated_start_time == datetime(2025, 6, 1, 11, 30)
    assert not any(r.is_active or r.is_completed for r in schedule.rounds)


def test_schedule_reflects_progress():
    phase = ScheduledPhase(
        id=1,
        name="Swiss",
        phase_type=PhaseType.SWISS,
        status="active",
        current_round=2,
        rounds=[
            ScheduledRound(
                1,
                RoundStatus.COMPLETED,
                "2025-06-01T09:00:00",
                "2025-06-01T09:40:00",
            ),
            ScheduledRound(2, RoundStatus.ACTIVE, "2025-06-01T09:45:00"),
        ],
    )
    schedule = get_tournament_schedule(_data(current_round=2, phases=[phase]))
    first, second, third = schedule.rounds[:3]

    assert first.is_completed
    assert not first.is_active
    assert second.is_active
    assert second.actual_start_time == datetime(2025, 6, 1, 9, 45)
    assert second.estimated_start_time == datetime(2025, 6, 1, 9, 40)
    assert third.estimated_start_time == datetime(2025, 6, 1, 10, 35)


def test_schedule_derives_swiss_rounds_from_registrations():
    schedule = get_tournament_schedule(
        _data(swiss_rounds=None, tournament_format="swiss_only", top_cut_size=None)
    )
    assert len(schedule.phases) == 1
    assert len(schedule.rounds) == 5


def test_schedule_without_start_date_is_empty():
    schedule = get_tournament_schedule(_data(start_date=None))
    assert schedule.tournament_start_time is None
    assert schedule.rounds == []


def test_time_formatting():
    assert format_round_time(datetime(2026, 2, 2, 18, 6)) == "6:06 PM"
    assert format_round_time(datetime(2026, 2, 2, 0, 5)) == "12:05 AM"
    assert format_round_time(datetime(2026, 2, 2, 12, 0)) == "12:00 PM"
    assert (
        format_start_datetime(datetime(2026, 2, 2, 18, 6)) == "Mon, Feb 2 at 6:06 PM"
    )
