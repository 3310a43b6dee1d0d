from datetime import datetime

from swisscut.models.drop import DropRequest
from swisscut.models.enums import DropTiming
from swisscut.models.player import PlayerStatus
from swisscut.tournament.drops import (
    DROP_DURING_MATCH,
    DROP_DURING_ROUND,
    PLAYER_NOT_AVAILABLE,
    DropByeManager,
    calculate_total_match_points,
    get_active_player_count,
    get_players_with_byes,
    get_players_without_byes,
    has_minimum_players,
    validate_drop_timing,
)

DROPPED_AT = datetime(2025, 3, 1, 12, 0)


def _request(player_id, round_number=1):
    return DropRequest(
        player_id=player_id,
        tournament_id="t1",
        round_number=round_number,
        dropped_at=DROPPED_AT,
    )


def _players(count):
    return [PlayerStatus(id=f"p{i}", match_points=count - i) for i in range(count)]


def test_drop_timing_policy():
    assert validate_drop_timing(DropTiming.PAIRING).can_drop
    assert validate_drop_timing(DropTiming.BETWEEN_ROUNDS).can_drop

    during_match = validate_drop_timing(DropTiming.DURING_MATCH)
    assert during_match.can_drop
    assert during_match.reason == DROP_DURING_MATCH

    during_round = validate_drop_timing(DropTiming.DURING_ROUND)
    assert not during_round.can_drop
    assert during_round.reason == DROP_DURING_ROUND

    # a round that has not gone live yet can still be left
    assert validate_drop_timing(DropTiming.DURING_ROUND, round_started=False).can_drop


def test_player_helpers():
    players = [
        PlayerStatus(id="a", bye_count=1, match_points=2),
        PlayerStatus(id="b"),
        PlayerStatus(id="c", is_dropped=True, bye_count=1),
    ]
    assert get_active_player_count(players) == 2
    assert not has_minimum_players(players)
    assert has_minimum_players(players, minimum=2)
    assert [p.id for p in get_players_with_byes(players)] == ["a"]
    assert [p.id for p in get_players_without_byes(players)] == ["b"]
    assert calculate_total_match_points(players[0]) == 3


def test_drop_between_rounds_to_odd_field_assigns_one_bye():
    manager = DropByeManager()
    players = _players(4)
    result = manager.handle_drop(_request("p0"), players, DropTiming.BETWEEN_ROUNDS)

    assert result.success
    assert get_active_player_count(result.updated_players) == 3
    assert result.bye_assignment is not None
    assert result.bye_assignment.match_points == 1
    assert result.bye_assignment.round_number == 1
    with_bye = get_players_with_byes(result.updated_players)
    assert [p.id for p in with_bye] == [result.bye_assignment.player_id]
    # inputs are left alone
    assert not players[0].is_dropped


def test_drop_to_even_field_needs_no_bye():
    result = DropByeManager().handle_drop(
        _request("p0"), _players(5), DropTiming.PAIRING
    )
    assert result.success
    assert result.bye_assignment is None
    assert get_players_with_byes(result.updated_players) == []


def test_drop_during_match_gives_opponent_the_win():
    result = DropByeManager().handle_drop(
        _request("p1"), _players(4), DropTiming.DURING_MATCH
    )
    assert result.success
    assert result.opponent_auto_win
    assert result.bye_assignment is None


def test_drop_during_live_round_is_rejected():
    players = _players(4)
    result = DropByeManager().handle_drop(
        _request("p1"), players, DropTiming.DURING_ROUND
    )
    assert not result.success
    assert result.error == DROP_DURING_ROUND
    assert result.updated_players is players


def test_unknown_or_dropped_player_cannot_drop():
    manager = DropByeManager()
    players = _players(3) + [PlayerStatus(id="gone", is_dropped=True)]
    assert not manager.can_player_drop("gone", DropTiming.PAIRING, players)
    assert not manager.can_player_drop("nobody", DropTiming.PAIRING, players)
    assert manager.can_player_drop("p0", DropTiming.PAIRING, players)

    result = manager.drop_player(_request("gone"), players)
    assert not result.success
    assert result.error == PLAYER_NOT_AVAILABLE


def test_bye_candidate_prefers_fewest_byes_then_fewest_points():
    manager = DropByeManager()
    players = [
        PlayerStatus(id="a", match_points=0, bye_count=1),
        PlayerStatus(id="b", match_points=2),
        PlayerStatus(id="c", match_points=1),
    ]
    assert manager.find_bye_candidate(players).id == "c"
    assert manager.find_bye_candidate(players[:2]) is None

    tied = [PlayerStatus(id="x"), PlayerStatus(id="y"), PlayerStatus(id="z")]
    assert manager.find_bye_candidate(tied).id == "z"


def test_assign_bye_increments_count():
    manager = DropByeManager()
    result = manager.assign_bye("p1", 3, _players(3))
    assert result.success
    assert result.bye_record.round_number == 3
    assert [p.bye_count for p in result.updated_players] == [0, 1, 0]

    missing = manager.assign_bye("nobody", 3, _players(3))
    assert not missing.success


def test_batch_drops_are_all_or_nothing():
    manager = DropByeManager()
    players = _players(6)
    result = manager.process_drops_for_round(
        [_request("p0"), _request("nobody")], players, 2
    )
    assert not result.success
    assert result.updated_players is players
    assert result.processed_drops == []
    assert result.errors == [
        f"Failed to drop player nobody: {PLAYER_NOT_AVAILABLE}"
    ]


def test_batch_drops_check_byes_once():
    manager = DropByeManager()
    result = manager.process_drops_for_round(
        [_request("p0"), _request("p1"), _request("p2")], _players(6), 2
    )
    assert result.success
    assert len(result.processed_drops) == 3
    assert get_active_player_count(result.updated_players) == 3
    assert result.bye_assignment is not None
    assert result.bye_assignment.round_number == 2
    assert len(get_players_with_byes(result.updated_players)) == 1
