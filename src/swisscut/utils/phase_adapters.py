"""Adapters between stored phase rows and ``PhaseConfig`` objects.

Stored rows arrive as plain dictionaries with snake_case keys and possibly
missing or out-of-range values. Stored phases are identified by
``db-<row id>``; phases created in memory get an id from an injected
factory until they are saved.
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

from functools import partial
from typing import Any, Dict, List, Optional

from swisscut.constants import (
    DB_PHASE_ID_PREFIX,
    DEFAULT_BEST_OF,
    DEFAULT_CHECK_IN_TIME_MINUTES,
    DEFAULT_DOUBLE_ELIMINATION_PHASE_NAME,
    DEFAULT_ELIMINATION_PHASE_NAME,
    DEFAULT_ROUND_TIME_MINUTES,
    DEFAULT_SWISS_PHASE_NAME,
    NEW_PHASE_ID_PREFIX,
    ROUND_TIME_BY_BEST_OF,
    VALID_BEST_OF,
)
from swisscut.exceptions import InvalidConfigurationException
from swisscut.models.enums import CutRule, PhaseStatus, PhaseType
from swisscut.models.phase import DBPhaseUpdate, PhaseConfig
from swisscut.type_hints import BestOf
from swisscut.utils import IdFactory, generate_id, setup_logger

logger = setup_logger(__name__)

_default_id_factory: IdFactory = partial(generate_id, NEW_PHASE_ID_PREFIX)

_DEFAULT_PHASE_NAMES = {
    PhaseType.SWISS: DEFAULT_SWISS_PHASE_NAME,
    PhaseType.SINGLE_ELIMINATION: DEFAULT_ELIMINATION_PHASE_NAME,
    PhaseType.DOUBLE_ELIMINATION: DEFAULT_DOUBLE_ELIMINATION_PHASE_NAME,
}


def _parse_phase_type(value: Any) -> PhaseType:
    try:
        return PhaseType(value)
    except ValueError:
        logger.warning("Unknown phase type %r, treating as swiss", value)
        return PhaseType.SWISS


def _parse_cut_rule(value: Any) -> Optional[CutRule]:
    if value is None:
        return None
    try:
        return CutRule(value)
    except ValueError:
        logger.debug("Ignoring unknown cut rule %r", value)
        return None


def _parse_status(value: Any) -> Optional[PhaseStatus]:
    if value is None:
        return None
    try:
        return PhaseStatus(value)
    except ValueError:
        logger.debug("Ignoring unknown phase status %r", value)
        return None


def _value_or(row: Dict[str, Any], key: str, default: Any) -> Any:
    value = row.get(key)
    return default if value is None else value


def db_phases_to_phase_configs(rows: List[Dict[str, Any]]) -> List[PhaseConfig]:
    """Convert stored phase rows to configs ordered by ``phase_order``.

    Args:
        rows: Phase rows as loaded from storage

    Returns:
        One ``PhaseConfig`` per row. Unknown phase types become Swiss, an
        unsupported best-of becomes 3, and unknown cut rules are dropped.
    """
    configs = []
    for row in sorted(rows, key=lambda r: r["phase_order"]):
        best_of = row.get("best_of")
        configs.append(
            PhaseConfig(
                id=f"{DB_PHASE_ID_PREFIX}{row['id']}",
                name=row["name"],
                phase_type=_parse_phase_type(row.get("phase_type")),
                best_of=best_of if best_of in VALID_BEST_OF else DEFAULT_BEST_OF,
                round_time_minutes=_value_or(
                    row, "round_time_minutes", DEFAULT_ROUND_TIME_MINUTES
                ),
                check_in_time_minutes=_value_or(
                    row, "check_in_time_minutes", DEFAULT_CHECK_IN_TIME_MINUTES
                ),
                planned_rounds=row.get("planned_rounds"),
                cut_rule=_parse_cut_rule(row.get("cut_rule")),
                status=_parse_status(row.get("status")),
            )
        )
    return configs


def parse_phase_db_id(phase_id: str) -> Optional[int]:
    """Storage row id for a ``db-<n>`` phase id, None for new phases.

    Raises:
        InvalidConfigurationException: If the id has the stored prefix but
            no integer after it
    """
    if not phase_id.startswith(DB_PHASE_ID_PREFIX):
        return None
    raw = phase_id[len(DB_PHASE_ID_PREFIX) :]
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidConfigurationException(
            f"Invalid stored phase id: {phase_id}"
        ) from e


def phase_config_to_db_update(phase: PhaseConfig, order: int) -> DBPhaseUpdate:
    return DBPhaseUpdate(
        id=parse_phase_db_id(phase.id),
        name=phase.name,
        phase_order=order,
        phase_type=phase.phase_type.value,
        best_of=phase.best_of,
        round_time_minutes=phase.round_time_minutes,
        check_in_time_minutes=phase.check_in_time_minutes,
        planned_rounds=phase.planned_rounds,
        cut_rule=phase.cut_rule.value if phase.cut_rule else None,
    )


def phase_configs_to_db_updates(phases: List[PhaseConfig]) -> List[DBPhaseUpdate]:
    """Updates for every phase, ordered from 1 in list order."""
    return [
        phase_config_to_db_update(phase, order)
        for order, phase in enumerate(phases, start=1)
    ]


def get_default_phase_name(phase_type: PhaseType) -> str:
    return _DEFAULT_PHASE_NAMES[phase_type]


def get_default_round_time(best_of: BestOf) -> int:
    """Round length for a best-of format: 25, 50 or 75 minutes."""
    if best_of not in ROUND_TIME_BY_BEST_OF:
        raise InvalidConfigurationException(f"Unsupported best of: {best_of}")
    return ROUND_TIME_BY_BEST_OF[best_of]


def create_default_swiss_phase(
    id_factory: IdFactory = _default_id_factory,
) -> PhaseConfig:
    return PhaseConfig(
        id=id_factory(),
        name=get_default_phase_name(PhaseType.SWISS),
        phase_type=PhaseType.SWISS,
        best_of=DEFAULT_BEST_OF,
        round_time_minutes=get_default_round_time(DEFAULT_BEST_OF),
        check_in_time_minutes=DEFAULT_CHECK_IN_TIME_MINUTES,
    )


def create_default_elimination_phase(
    has_swiss_before: bool, id_factory: IdFactory = _default_id_factory
) -> PhaseConfig:
    """Top cut phase; qualifies X-2 records when it follows Swiss rounds."""
    return PhaseConfig(
        id=id_factory(),
        name=get_default_phase_name(PhaseType.SINGLE_ELIMINATION),
        phase_type=PhaseType.SINGLE_ELIMINATION,
        best_of=DEFAULT_BEST_OF,
        round_time_minutes=get_default_round_time(DEFAULT_BEST_OF),
        check_in_time_minutes=DEFAULT_CHECK_IN_TIME_MINUTES,
        cut_rule=CutRule.X_MINUS_2 if has_swiss_before else None,
    )
