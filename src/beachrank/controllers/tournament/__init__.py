"""Controllers that drive a session's rounds and scores."""

from beachrank.controllers.tournament.result_recorder import ResultRecorder
from beachrank.controllers.tournament.round_manager import RoundManager

__all__ = ["ResultRecorder", "RoundManager"]
