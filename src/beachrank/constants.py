# BeachRank
# Copyright (C) 2025  BeachRank developers
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

# Match shape
TEAM_SIZE = 2
PAIRS_PER_MATCH = 2
PLAYERS_PER_MATCH = TEAM_SIZE * PAIRS_PER_MATCH

# Courts
MIN_COURTS = 1
DEFAULT_COURTS = 2

# Scoring
POINTS_PER_WIN = 3
POINTS_PER_LOSS = 0

# Team sides
SIDE_A = "A"
SIDE_B = "B"
SIDES = (SIDE_A, SIDE_B)

# Skill levels (higher = stronger)
MIN_LEVEL = 1
LEVELS = {
    1: "C",
    2: "B",
    3: "BB",
    4: "A",
    5: "AA",
}


def get_level_label(level: int) -> str:
    """Return the display label for a level, ``N<level>`` when unknown."""
    return LEVELS.get(level, f"N{level}")


# Player sort modes
SORT_ACTIVE = "active"
SORT_NAME = "name"
SORT_LEVEL = "level"
PLAYER_SORT_MODES = (SORT_ACTIVE, SORT_NAME, SORT_LEVEL)

# Leaderboard row keys
ROW_POINTS = "P"
ROW_SET_BALANCE = "SV"
ROW_GAME_BALANCE = "SG"
ROW_WINS = "W"
ROW_LOSSES = "L"

# Mini-league annotation keys (only present for members of a tied run)
ROW_MINI_SET_BALANCE = "miniSV"
ROW_MINI_GAME_BALANCE = "miniSG"
ROW_MINI_GAMES_FOR = "GPmini"
ROW_MINI_GAMES_AGAINST = "GCmini"
ROW_MINI_WINS = "miniW"
ROW_MINI_LOSSES = "miniL"
ROW_MINI_OPPONENTS = "oppMini"

# Logging
LOG_LEVEL_ENV_VAR = "BEACHRANK_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
