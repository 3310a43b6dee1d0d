import random

import pytest

from swisscut.models.player import PlayerRecord
from swisscut.pairing.swiss import (
    SwissPairingEngine,
    find_bye_player,
    generate_swiss_pairings,
    group_players_by_points,
    shuffle_players,
)


def _field(count, **kwargs):
    return [PlayerRecord(id=f"p{i}", **kwargs) for i in range(1, count + 1)]


def _assert_covers(result, players):
    active = sorted(p.id for p in players if not p.is_dropped)
    assert sorted(result.player_ids) == active
    byes = [p for p in result.pairings if p.is_bye]
    assert len(byes) == len(active) % 2
    for pairing in result.pairings:
        assert pairing.player1_id != pairing.player2_id


def test_round_one_even_field_has_no_bye():
    result = generate_swiss_pairings(_field(8), 1, seed=1)
    assert result.success
    assert len(result.pairings) == 4
    assert result.bye is None


def test_round_one_odd_field_has_one_bye():
    result = generate_swiss_pairings(_field(7), 1, seed=1)
    assert result.success
    assert len([p for p in result.pairings if not p.is_bye]) == 3
    assert result.bye is not None
    assert result.bye.player2_id is None


def test_round_one_is_reproducible_for_a_seed():
    players = _field(12)
    first = generate_swiss_pairings(players, 1, seed=42)
    second = generate_swiss_pairings(players, 1, rng=random.Random(42))
    assert first.pairings == second.pairings


def test_repeated_round_one_calls_on_one_engine_agree():
    players = _field(10)
    engine = SwissPairingEngine(seed=1)
    first = engine.generate(players, 1)
    assert engine.generate(players, 1).pairings == first.pairings

    unseeded = SwissPairingEngine()
    assert (
        unseeded.generate(players, 1).pairings
        == unseeded.generate(players, 1).pairings
    )


def test_shuffle_keeps_every_element():
    items = list(range(20))
    shuffled = shuffle_players(items, random.Random(5))
    assert sorted(shuffled) == items
    assert items == list(range(20))


@pytest.mark.parametrize("count", range(2, 16))
@pytest.mark.parametrize("round_number", [1, 2, 5])
def test_every_active_player_is_paired_exactly_once(count, round_number):
    rng = random.Random(count * 100 + round_number)
    players = [
        PlayerRecord(
            id=f"p{i}",
            match_points=rng.randint(0, round_number - 1),
            bye_count=rng.randint(0, 1),
        )
        for i in range(count)
    ]
    result = generate_swiss_pairings(players, round_number, rng=rng)
    assert result.success
    _assert_covers(result, players)


def test_dropped_players_are_not_paired():
    players = _field(6)
    players[0].is_dropped = True
    result = generate_swiss_pairings(players, 2, seed=3)
    _assert_covers(result, players)
    assert "p1" not in result.player_ids


def test_not_enough_players():
    players = _field(2)
    players[1].is_dropped = True
    result = generate_swiss_pairings(players, 1, seed=0)
    assert not result.success
    assert result.pairings == []
    assert result.errors == ["Not enough active players to generate pairings"]


def test_find_bye_player_prefers_fewest_byes_then_lowest_standing():
    players = [
        PlayerRecord(id="a", match_points=3),
        PlayerRecord(id="b", match_points=2),
        PlayerRecord(id="c", match_points=1),
        PlayerRecord(id="d", match_points=0, bye_count=1),
    ]
    assert find_bye_player(players).id == "c"
    assert find_bye_player([]) is None


def test_later_round_bye_skips_players_who_already_had_one():
    players = [
        PlayerRecord(id="a", match_points=2),
        PlayerRecord(id="b", match_points=2),
        PlayerRecord(id="c", match_points=1),
        PlayerRecord(id="d", match_points=1),
        PlayerRecord(id="e", match_points=1, bye_count=1),
    ]
    result = generate_swiss_pairings(players, 3, seed=0)
    assert result.bye.player1_id == "d"


def test_group_players_by_points_highest_first():
    players = [
        PlayerRecord(id="a", match_points=1),
        PlayerRecord(id="b", match_points=2),
        PlayerRecord(id="c", match_points=1),
    ]
    groups = group_players_by_points(players)
    assert list(groups) == [2, 1]
    assert [p.id for p in groups[1]] == ["a", "c"]


def test_players_pair_within_their_point_group():
    players = [
        PlayerRecord(id="a", match_points=2, opponent_match_win_percentage=0.9),
        PlayerRecord(id="b", match_points=2, opponent_match_win_percentage=0.8),
        PlayerRecord(id="c", match_points=0, opponent_match_win_percentage=0.7),
        PlayerRecord(id="d", match_points=0, opponent_match_win_percentage=0.6),
    ]
    result = generate_swiss_pairings(players, 3, seed=0)
    pairs = {frozenset(p.player_ids) for p in result.pairings}
    assert pairs == {frozenset({"a", "b"}), frozenset({"c", "d"})}
    assert not result.used_fallback


def test_rematch_floats_players_into_next_group():
    players = [
        PlayerRecord(
            id="a",
            match_points=2,
            opponent_match_win_percentage=0.9,
            previous_opponents={"b"},
        ),
        PlayerRecord(
            id="b",
            match_points=2,
            opponent_match_win_percentage=0.8,
            previous_opponents={"a"},
        ),
        PlayerRecord(id="c", match_points=1, opponent_match_win_percentage=0.7),
        PlayerRecord(id="d", match_points=1, opponent_match_win_percentage=0.6),
    ]
    result = generate_swiss_pairings(players, 3, seed=0)
    pairs = {frozenset(p.player_ids) for p in result.pairings}
    assert pairs == {frozenset({"a", "c"}), frozenset({"b", "d"})}
    assert not result.used_fallback
    assert result.warnings == []


def test_unavoidable_rematches_use_fallback_and_warn():
    ids = ["a", "b", "c", "d"]
    players = [
        PlayerRecord(
            id=pid,
            match_points=1,
            previous_opponents={other for other in ids if other != pid},
        )
        for pid in ids
    ]
    result = SwissPairingEngine(seed=0).generate(players, 4)
    assert result.success
    assert result.used_fallback
    assert len(result.warnings) == 2
    assert all("Rematch" in warning for warning in result.warnings)
    _assert_covers(result, players)
