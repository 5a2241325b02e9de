"""Controllers for players, rounds and scores."""

from beachrank.controllers.player import PlayerPool
from beachrank.controllers.tournament import ResultRecorder, RoundManager

__all__ = ["PlayerPool", "ResultRecorder", "RoundManager"]
