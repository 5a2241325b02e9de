"""Standings for a play session."""

from beachrank.tournament.leaderboard import LeaderboardCalculator, rank
from beachrank.tournament.mini_league import MiniLeague
from beachrank.tournament.models import (
    LeaderboardRow,
    MatchHistory,
    PairwiseRecord,
    PlayerStat,
)

__all__ = [
    "LeaderboardCalculator",
    "LeaderboardRow",
    "MatchHistory",
    "MiniLeague",
    "PairwiseRecord",
    "PlayerStat",
    "rank",
]
