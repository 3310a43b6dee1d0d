from datetime import datetime

import pytest

from swisscut.exceptions import TournamentStateException
from swisscut.models.drop import DropRequest
from swisscut.models.enums import BracketFormat, TournamentFormat, TournamentPhase
from swisscut.models.match import MatchResultData
from swisscut.models.player import TournamentPlayer
from swisscut.models.tournament import TournamentSettings, TournamentState
from swisscut.pairing.bracket import get_bracket_winner
from swisscut.tournament.flow import TournamentFlow
from swisscut.validation.rules import WINNER_MISMATCH


def _state(count):
    return TournamentState(
        players=[
            TournamentPlayer(id=f"p{i:02d}", name=f"Player {i}")
            for i in range(1, count + 1)
        ]
    )


def _flow(
    swiss_rounds=3, format=TournamentFormat.SWISS_ONLY, top_cut_size=8, best_of=3
):
    settings = TournamentSettings(
        id="t1",
        swiss_rounds=swiss_rounds,
        format=format,
        top_cut_size=top_cut_size,
        best_of=best_of,
    )
    return TournamentFlow(settings, seed=7)


def _win(match, winner_first=True):
    return MatchResultData(
        match_id=match.id,
        player1_id=match.player1_id,
        player2_id=match.player2_id,
        match_points1=1 if winner_first else 0,
        match_points2=0 if winner_first else 1,
        game_wins1=2 if winner_first else 1,
        game_wins2=1 if winner_first else 2,
        winner_id=match.player1_id if winner_first else match.player2_id,
    )


def _finish_round(flow, state, first_match):
    for match in state.matches[first_match:]:
        if match.is_complete:
            continue
        recorded = flow.record_match_result(state, _win(match))
        assert recorded.success, recorded.errors
        state = recorded.state
    return state


def _play_round(flow, state):
    before = len(state.matches)
    started = flow.start_next_round(state)
    assert started.success, started.errors
    return _finish_round(flow, started.state, before)


def _drop(player_id, round_number):
    return DropRequest(
        player_id=player_id,
        tournament_id="t1",
        round_number=round_number,
        dropped_at=datetime(2025, 6, 1, 12, 0),
    )


def test_round_one_for_eight_players():
    flow = _flow()
    state = _state(8)
    started = flow.start_next_round(state)

    assert started.success
    new_state = started.state
    assert new_state.current_round == 1
    assert [m.id for m in new_state.matches] == [
        "swiss-r1-m1",
        "swiss-r1-m2",
        "swiss-r1-m3",
        "swiss-r1-m4",
    ]
    assert not any(m.is_bye or m.is_complete for m in new_state.matches)
    # the input snapshot is unchanged
    assert state.current_round == 0
    assert state.matches == []


def test_bye_match_is_created_complete():
    started = _flow().start_next_round(_state(7))
    byes = [m for m in started.state.matches if m.is_bye]
    assert len(started.state.matches) == 4
    assert len(byes) == 1
    assert byes[0].player2_id is None
    assert byes[0].is_complete
    assert byes[0].player1_match_points == 1


def test_round_one_is_reproducible():
    first = _flow().start_next_round(_state(10)).state
    second = _flow().start_next_round(_state(10)).state
    assert first.matches == second.matches


def test_retrying_round_one_on_one_flow_gives_same_matches():
    flow = _flow()
    state = _state(10)
    first = flow.start_next_round(state)
    retry = flow.start_next_round(state)
    assert first.success and retry.success
    assert first.state.matches == retry.state.matches
    assert flow.generate_next_round(state).matches == first.state.matches


def test_results_are_checked_against_event_best_of():
    flow = _flow(best_of=1)
    state = flow.start_next_round(_state(4)).state
    match = state.matches[0]

    two_one = _win(match)
    assert two_one.best_of == 3
    rejected = flow.record_match_result(state, two_one)
    assert not rejected.success
    assert rejected.state is state
    assert "Best of 1 matches must have 1 to 1 games" in rejected.errors

    one_nil = MatchResultData(
        match.id, match.player1_id, match.player2_id, 1, 0, 1, 0, best_of=3
    )
    recorded = flow.record_match_result(state, one_nil)
    assert recorded.success, recorded.errors
    assert recorded.state.get_match(match.id).is_complete


def test_next_round_waits_for_open_matches():
    flow = _flow()
    state = flow.start_next_round(_state(4)).state
    assert not flow.can_start_next_round(state)

    blocked = flow.start_next_round(state)
    assert not blocked.success
    assert blocked.state is state
    assert blocked.errors == [
        "Cannot start next round: previous round is not complete"
    ]


def test_record_match_result_rejections():
    flow = _flow()
    state = flow.start_next_round(_state(4)).state
    match = state.matches[0]

    unknown = flow.record_match_result(
        state, MatchResultData("nope", "a", "b", 1, 0, 2, 0)
    )
    assert not unknown.success
    assert unknown.errors == ["Unknown match nope"]

    swapped = MatchResultData(
        match.id, match.player2_id, match.player1_id, 1, 0, 2, 0
    )
    mismatch = flow.record_match_result(state, swapped)
    assert mismatch.errors == ["Reported players do not match the pairing"]

    wrong_winner = _win(match)
    wrong_winner.winner_id = match.player2_id
    invalid = flow.record_match_result(state, wrong_winner)
    assert not invalid.success
    assert invalid.state is state
    assert WINNER_MISMATCH in invalid.errors

    recorded = flow.record_match_result(state, _win(match))
    assert recorded.success
    stored = recorded.state.get_match(match.id)
    assert stored.is_complete
    assert (stored.player1_game_wins, stored.player2_game_wins) == (2, 1)
    assert not state.get_match(match.id).is_complete

    again = flow.record_match_result(recorded.state, _win(match))
    assert again.errors == [f"Match {match.id} is already complete"]


def test_swiss_only_event_runs_to_completion():
    flow = _flow(swiss_rounds=3)
    state = _state(8)
    for _ in range(3):
        assert not flow.is_tournament_complete(state)
        state = _play_round(flow, state)

    assert flow.is_tournament_complete(state)
    beyond = flow.generate_next_round(state)
    assert not beyond.success
    assert beyond.errors == ["Cannot start round beyond total scheduled rounds"]

    completed = flow.complete_tournament(state)
    assert completed.success
    state = completed.state
    assert state.phase is TournamentPhase.COMPLETED
    assert flow.is_tournament_complete(state)
    assert not flow.can_start_next_round(state)
    assert not flow.generate_next_round(state).success
    with pytest.raises(TournamentStateException):
        flow.get_next_round_number(state)


def test_complete_tournament_refuses_unfinished_event():
    flow = _flow(swiss_rounds=3)
    state = _play_round(flow, _state(8))
    result = flow.complete_tournament(state)
    assert not result.success
    assert result.errors == ["Tournament cannot be completed yet"]


def test_sixteen_players_advance_to_top_eight():
    flow = _flow(swiss_rounds=5, format=TournamentFormat.SWISS_WITH_CUT)
    state = _state(16)
    for _ in range(5):
        assert not flow.can_advance_to_top_cut(state)
        state = _play_round(flow, state)

    swiss_standings = flow.build_player_records(state)
    assert flow.can_advance_to_top_cut(state)
    advanced = flow.advance_to_top_cut(state)
    assert advanced.success

    state = advanced.state
    bracket = state.bracket
    assert state.phase is TournamentPhase.TOP_CUT
    assert state.current_round == 0
    assert bracket.bracket_size == 8
    assert len(bracket.seeds) == 8
    assert bracket.total_rounds == 3
    assert bracket.format is BracketFormat.SINGLE_ELIMINATION
    assert [p.id for p in bracket.seeds] == [r.id for r in swiss_standings[:8]]

    state = _play_round(flow, state)
    assert [m.id for m in state.matches[-4:]] == [
        "topcut-r1-m1",
        "topcut-r1-m2",
        "topcut-r1-m3",
        "topcut-r1-m4",
    ]
    assert state.bracket.get_match("topcut-r2-m1").player1_id is not None

    while not flow.is_tournament_complete(state):
        state = _play_round(flow, state)
    assert state.current_round == 3

    # top cut results leave Swiss standings alone
    after = {r.id: r.match_points for r in flow.build_player_records(state)}
    assert after == {r.id: r.match_points for r in swiss_standings}

    completed = flow.complete_tournament(state)
    assert completed.success
    assert completed.state.phase is TournamentPhase.COMPLETED
    assert get_bracket_winner(completed.state.bracket) == bracket.seeds[0].id


def test_advance_to_top_cut_failures():
    swiss_only = _flow(swiss_rounds=1)
    state = _play_round(swiss_only, _state(8))
    result = swiss_only.advance_to_top_cut(state)
    assert result.errors == [
        "Cannot advance to top cut: Tournament format does not include top cut"
    ]

    flow = _flow(swiss_rounds=2, format=TournamentFormat.SWISS_WITH_CUT)
    state = _play_round(flow, _state(8))
    assert flow.advance_to_top_cut(state).errors == [
        "Cannot advance to top cut: Swiss rounds not complete"
    ]

    dropped = flow.process_player_drops(state, [_drop("p01", 1)])
    assert dropped.success
    state = _play_round(flow, dropped.state)
    short = flow.advance_to_top_cut(state)
    assert not short.success
    assert short.state is state
    assert short.errors == ["Not enough active players for a top 8 cut"]

    odd_size = _flow(
        swiss_rounds=1, format=TournamentFormat.SWISS_WITH_CUT, top_cut_size=6
    )
    state = _play_round(odd_size, _state(8))
    assert odd_size.advance_to_top_cut(state).errors == [
        "Top cut size must be a power of 2 (4, 8, 16, 32, 64, 128, 256)"
    ]


def test_drops_between_rounds():
    flow = _flow(swiss_rounds=3)
    state = _play_round(flow, _state(4))

    dropped = flow.process_player_drops(state, [_drop("p02", 1)])
    assert dropped.success
    assert state.drops == []
    assert [d.player_id for d in dropped.state.drops] == ["p02"]
    assert dropped.bye_assignment is not None
    assert dropped.bye_assignment.round_number == 2
    assert flow.get_active_players_count(dropped.state) == 3
    assert not flow.has_sufficient_participants(dropped.state)

    before = len(dropped.state.matches)
    next_round = flow.start_next_round(dropped.state).state
    new_matches = next_round.matches[before:]
    assert len(new_matches) == 2
    assert sum(1 for m in new_matches if m.is_bye) == 1
    assert not any(m.involves("p02") for m in new_matches)

    records = {r.id: r for r in flow.build_player_records(next_round)}
    assert records["p02"].is_dropped

    again = flow.process_player_drops(next_round, [_drop("p02", 2)])
    assert not again.success
    assert again.state is next_round


def test_failed_batch_drop_changes_nothing():
    flow = _flow()
    state = _play_round(flow, _state(6))
    result = flow.process_player_drops(state, [_drop("p01", 1), _drop("ghost", 1)])
    assert not result.success
    assert result.state is state
    assert len(result.errors) == 1


def test_completion_queries_by_format():
    elimination = _flow(format=TournamentFormat.SINGLE_ELIMINATION)
    assert not elimination.is_tournament_complete(_state(8))

    done = TournamentState(phase=TournamentPhase.COMPLETED)
    assert elimination.is_tournament_complete(done)


def test_recommended_swiss_rounds_follow_active_field():
    flow = _flow()
    assert flow.recommended_swiss_rounds(_state(16)) == 4
    assert flow.recommended_swiss_rounds(_state(6)) == 3
    assert flow.has_sufficient_participants(_state(4))


def test_pairings_avoid_rematches_unless_warned():
    flow = _flow(swiss_rounds=5)
    state = _state(16)
    for _ in range(5):
        history = {r.id: r.previous_opponents for r in flow.build_player_records(state)}
        before = len(state.matches)
        started = flow.start_next_round(state)
        assert started.success
        if started.state.current_round > 1 and not started.warnings:
            for match in started.state.matches[before:]:
                if not match.is_bye:
                    assert match.player2_id not in history[match.player1_id]
        state = _finish_round(flow, started.state, before)
