"""Type hints used in BeachRank."""

from typing import Dict, List, Literal, Optional, Tuple

# Team side type alias, "A" or "B"
TeamSide = Literal["A", "B"]
MaybeSide = Optional[TeamSide]

# List of players
Players = List["Player"]
# Two teammates
Team = List["Player"]
# Two same-court teammates before they are assigned a side
Pair = Tuple["Player", "Player"]
# Sorted levels of a team, e.g. (2, 3)
LevelComposition = Tuple[int, ...]
# player id -> number of matches played
PlayedMap = Dict[str, int]
# (player id, player id) -> count
PairCounter = Dict[Tuple[str, str], int]

PlayerSortMode = Literal["active", "name", "level"]

#  LocalWords:  PlayedMap PairCounter
