# Volley Pairing
# Copyright (C) 2025  Volley Pairing developers
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
# Skill dimensions, in display order
SKILL_SERVICE = "skill_service"
SKILL_PASS = "skill_pass"
SKILL_ATTACK = "skill_attack"
SKILL_DEFENSE = "skill_defense"
SKILL_KEYS = (SKILL_SERVICE, SKILL_PASS, SKILL_ATTACK, SKILL_DEFENSE)

MIN_SKILL_RATING = 1
MAX_SKILL_RATING = 10

# Gender codes
GENDER_FEMALE = "F"
GENDER_MALE = "M"
VALID_GENDERS = (GENDER_FEMALE, GENDER_MALE)

# Gender skill multipliers
GENDER_MULTIPLIERS = {GENDER_MALE: 1.0, GENDER_FEMALE: 0.85}
DEFAULT_GENDER_MULTIPLIER = 1.0

# Guest levels: every skill is set to the level value
GUEST_BEGINNER = "beginner"
GUEST_INTERMEDIATE = "intermediate"
GUEST_ADVANCED = "advanced"
GUEST_LEVELS = {
    GUEST_BEGINNER: 3,
    GUEST_INTERMEDIATE: 5,
    GUEST_ADVANCED: 7,
}

# Team balancing
MIN_TEAM_SIZE = 3
MAX_TEAM_SIZE = 6
SHORT_TEAM_DIVISOR = 4  # A team of MIN_TEAM_SIZE is normalized as if it had 4
FAMILIARITY_WEIGHT = 0.3
CONVERGENCE_THRESHOLD = 0.005
MAX_SWAP_ITERATIONS = 200
TEAM_NAMES = ("Team A", "Team B")

# Number of past sessions counted in the pairing history
RECENT_SESSIONS_WINDOW = 8

# Tournament modes
MODE_CLASSIC = "CLASSIC"
MODE_KOTH = "KOTH"

# Scoring
WIN_POINTS = 3
MIN_PLAYERS_KOTH = 4
MIN_TEAMS = 2
BRACKET_COURTS = 4  # Bracket matches cycle over this many courts

# Round labels
POOL_PREFIX = "POOL_"
KOTH_ROUND_PREFIX = "ROUND_"
ROUND_FINAL = "final"
ROUND_SEMI_FINAL = "semi-final"
ROUND_QUARTER_FINAL = "quarter-final"
ROUND_OF_16 = "round of 16"

ROUND_NAMES = {
    2: ROUND_FINAL,
    4: ROUND_SEMI_FINAL,
    8: ROUND_QUARTER_FINAL,
    16: ROUND_OF_16,
}

# Default match configurations
DEFAULT_SETS = 1
DEFAULT_POINTS = 25
DEFAULT_TIE_BREAK_POINTS = 15
DEFAULT_NUM_POOLS = 2
DEFAULT_QUALIFIERS_PER_POOL = 2

# Logging
LOG_LEVEL_ENV_VAR = "VOLLEYPAIRING_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
