"""Data records for a play session: matches, rounds and configuration."""

from beachrank.models.tournament.match import Match
from beachrank.models.tournament.round_data import RoundData
from beachrank.models.tournament.session_config import SessionConfig

__all__ = [
    "Match",
    "RoundData",
    "SessionConfig",
]
