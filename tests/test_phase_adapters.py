import pytest

from swisscut.exceptions import InvalidConfigurationException
from swisscut.models.enums import CutRule, PhaseStatus, PhaseType
from swisscut.models.phase import PhaseConfig
from swisscut.utils import IdSequence, generate_id
from swisscut.utils.phase_adapters import (
    create_default_elimination_phase,
    create_default_swiss_phase,
    db_phases_to_phase_configs,
    get_default_phase_name,
    get_default_round_time,
    parse_phase_db_id,
    phase_configs_to_db_updates,
)

ROWS = [
    {
        "id": 7,
        "name": "Top Cut",
        "phase_order": 2,
        "phase_type": "single_elimination",
        "best_of": 3,
        "round_time_minutes": 50,
        "check_in_time_minutes": 10,
        "cut_rule": "x-2",
        "status": "pending",
    },
    {
        "id": 5,
        "name": "Day 1",
        "phase_order": 1,
        "phase_type": "mystery",
        "best_of": 4,
        "round_time_minutes": None,
        "planned_rounds": 6,
    },
]


def test_rows_become_ordered_configs():
    swiss, cut = db_phases_to_phase_configs(ROWS)

    assert swiss.id == "db-5"
    assert swiss.phase_type is PhaseType.SWISS
    assert swiss.best_of == 3
    assert swiss.round_time_minutes == 50
    assert swiss.check_in_time_minutes == 5
    assert swiss.planned_rounds == 6
    assert swiss.cut_rule is None
    assert swiss.status is None

    assert cut.id == "db-7"
    assert cut.phase_type is PhaseType.SINGLE_ELIMINATION
    assert cut.check_in_time_minutes == 10
    assert cut.cut_rule is CutRule.X_MINUS_2
    assert cut.status is PhaseStatus.PENDING


def test_parse_phase_db_id():
    assert parse_phase_db_id("db-42") == 42
    assert parse_phase_db_id("phase-1") is None
    with pytest.raises(InvalidConfigurationException):
        parse_phase_db_id("db-abc")


def test_configs_become_db_updates():
    stored = db_phases_to_phase_configs(ROWS)
    ids = IdSequence("phase")
    phases = stored + [create_default_elimination_phase(True, id_factory=ids)]

    updates = phase_configs_to_db_updates(phases)
    assert [u.id for u in updates] == [5, 7, None]
    assert [u.phase_order for u in updates] == [1, 2, 3]
    assert updates[1].phase_type == "single_elimination"
    assert updates[1].cut_rule == "x-2"
    assert updates[2].to_dict()["name"] == "Top Cut"


def test_default_phases_use_injected_ids():
    ids = IdSequence("phase")
    swiss = create_default_swiss_phase(id_factory=ids)
    cut = create_default_elimination_phase(True, id_factory=ids)
    standalone = create_default_elimination_phase(False, id_factory=ids)

    assert [swiss.id, cut.id, standalone.id] == ["phase-1", "phase-2", "phase-3"]
    assert swiss.name == "Swiss Rounds"
    assert swiss.round_time_minutes == 50
    assert swiss.best_of == 3
    assert cut.cut_rule is CutRule.X_MINUS_2
    assert standalone.cut_rule is None


def test_default_ids_are_unique():
    assert create_default_swiss_phase().id != create_default_swiss_phase().id
    assert generate_id("phase").startswith("phase-")


def test_default_names_and_round_times():
    assert get_default_phase_name(PhaseType.SINGLE_ELIMINATION) == "Top Cut"
    assert get_default_phase_name(PhaseType.DOUBLE_ELIMINATION) == "Double Elimination"
    assert get_default_round_time(1) == 25
    assert get_default_round_time(3) == 50
    assert get_default_round_time(5) == 75
    with pytest.raises(InvalidConfigurationException):
        get_default_round_time(2)


def test_phase_config_dict_round_trip():
    config = create_default_elimination_phase(True, id_factory=IdSequence("new"))
    assert PhaseConfig.from_dict(config.to_dict()) == config
