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

# --- Constants ---

# Match outcome points (VGC scoring: no ties)
WIN_MATCH_POINTS = 1
LOSS_MATCH_POINTS = 0
BYE_MATCH_POINTS = 1  # A bye is always one match point and never game wins
VALID_MATCH_POINTS = (LOSS_MATCH_POINTS, WIN_MATCH_POINTS)

# Tiebreaker floor applied to MWP, GWP and each opponent's percentages
TIEBREAKER_FLOOR = 0.33

# Best-of formats
VALID_BEST_OF = (1, 3, 5)
DEFAULT_BEST_OF = 3

# Participants
MIN_PARTICIPANTS = 4
MIN_ACTIVE_PLAYERS_FOR_PAIRING = 2

# Swiss rounds
MIN_SWISS_ROUNDS = 3  # Used for fields of 8 or fewer
SMALL_FIELD_SIZE = 8
MAX_RECOMMENDED_SWISS_ROUNDS = 20

# Round timing (minutes)
MIN_ROUND_TIME_MINUTES = 15
MAX_ROUND_TIME_MINUTES = 120
DEFAULT_ROUND_TIME_MINUTES = 50
DEFAULT_CHECK_IN_TIME_MINUTES = 5
ROUND_BUFFER_MINUTES = 15
LONG_EVENT_MINUTES = 12 * 60

# Default round time per best-of (~20 min per game plus buffer)
ROUND_TIME_BY_BEST_OF = {1: 25, 3: 50, 5: 75}

# Tournament name
MAX_TOURNAMENT_NAME_LENGTH = 100

# Top cut bracket sizes (powers of two)
VALID_BRACKET_SIZES = (4, 8, 16, 32, 64, 128, 256)
TOP_CUT_MAX_FIELD_RATIO = 0.5

# Match id scheme
SWISS_MATCH_PREFIX = "swiss"
TOP_CUT_MATCH_PREFIX = "topcut"

# Persisted phase id prefix ("db-<numericId>")
DB_PHASE_ID_PREFIX = "db-"
NEW_PHASE_ID_PREFIX = "phase"

# Top cut round names, keyed by rounds remaining
TOP_CUT_ROUND_NAMES = {
    1: "Finals",
    2: "Semifinals",
    3: "Quarterfinals",
    4: "Round of 16",
}

# Default phase names
DEFAULT_SWISS_PHASE_NAME = "Swiss Rounds"
DEFAULT_ELIMINATION_PHASE_NAME = "Top Cut"
DEFAULT_DOUBLE_ELIMINATION_PHASE_NAME = "Double Elimination"
