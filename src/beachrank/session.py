"""Play session orchestration.

A :class:`Session` ties the player pool, the round history, score entry and
the leaderboard together behind one API.
"""

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

import random
from typing import Any, Dict, List, Optional, Tuple

from beachrank.controllers import PlayerPool, ResultRecorder, RoundManager
from beachrank.exceptions import MatchNotFoundException
from beachrank.models.tournament import Match, RoundData, SessionConfig
from beachrank.player import Player
from beachrank.tournament import LeaderboardCalculator, LeaderboardRow
from beachrank.utils import setup_logger

logger = setup_logger(__name__)


class Session:
    """Main session management class.

    This class coordinates all session operations through specialized managers:
    - PlayerPool: registered players and their availability
    - RoundManager: round generation and history
    - ResultRecorder: score entry and validation
    - LeaderboardCalculator: standings with tie-breaks

    When the config carries a seed, one random generator is created from it
    and shared by every round, so a whole session replays identically.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        players: Optional[List[Player]] = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.pool = PlayerPool(players)
        self.round_manager = RoundManager()
        self.result_recorder = ResultRecorder()
        self.leaderboard_calculator = LeaderboardCalculator()
        self._rng: Optional[random.Random] = (
            random.Random(self.config.seed) if self.config.seed is not None else None
        )

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def courts(self) -> int:
        return self.config.courts

    @property
    def players(self) -> List[Player]:
        return self.pool.players

    @property
    def rounds(self) -> List[RoundData]:
        return self.round_manager.rounds

    @property
    def current_round_number(self) -> int:
        return self.round_manager.current_round_number

    # ========== Players ==========

    def add_player(self, name: str, level: int) -> Player:
        return self.pool.add(name, level)

    def remove_player(self, player_id: str) -> Player:
        """Remove a player from the pool; their past matches stay recorded."""
        return self.pool.remove(player_id)

    def toggle_active(self, player_id: str) -> Player:
        return self.pool.toggle_active(player_id)

    # ========== Rounds ==========

    def _round_args(
        self, courts: Optional[int], seed: Optional[int], rng: Optional[random.Random]
    ) -> Tuple[int, Optional[int], Optional[random.Random]]:
        courts = self.config.courts if courts is None else courts
        if seed is None and rng is None:
            rng = self._rng
        return courts, seed, rng

    def generate_round(
        self,
        courts: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> RoundData:
        """Generate and store the next round.

        Args:
            courts: Overrides the configured number of courts for this round
            seed: Overrides the session's random generator for this round
            rng: Overrides the session's random generator for this round

        Raises:
            InsufficientPlayersException: If the active players cannot fill the courts
        """
        courts, seed, rng = self._round_args(courts, seed, rng)
        return self.round_manager.create_next_round(
            self.pool.players, courts, seed=seed, rng=rng
        )

    def regenerate_last_round(
        self,
        courts: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[RoundData]:
        """Discard the last unscored round and generate a new one.

        Returns:
            The new round, or None if the last round could not be undone
        """
        courts, seed, rng = self._round_args(courts, seed, rng)
        return self.round_manager.regenerate_last_round(
            self.pool.players, courts, seed=seed, rng=rng
        )

    def undo_last_round(self) -> bool:
        return self.round_manager.undo_last_round()

    # ========== Scores ==========

    def _locate(self, match_id: str) -> RoundData:
        found = self.round_manager.find_match(match_id)
        if found is None:
            raise MatchNotFoundException(f"Match {match_id} not found in any round")
        return found[0]

    def set_games(self, match_id: str, side: str, games: Any) -> Match:
        """Record one side's game count of a match in any round."""
        return self.result_recorder.set_games(
            self._locate(match_id), match_id, side, games
        )

    def record_score(self, match_id: str, games_a: Any, games_b: Any) -> Match:
        """Record both game counts of a match in any round."""
        return self.result_recorder.record_score(
            self._locate(match_id), match_id, games_a, games_b
        )

    # ========== Standings ==========

    def leaderboard(self) -> List[LeaderboardRow]:
        """Current standings of every player in the pool."""
        return self.leaderboard_calculator.rank(self.pool.players, self.rounds)

    # ========== Reset ==========

    def clear_rounds(self) -> None:
        """Drop every round and zero the players' match statistics."""
        self.round_manager.clear()
        self.pool.reset_statistics()

    def clear_all(self) -> None:
        """Drop every round and every player."""
        self.round_manager.clear()
        self.pool.clear()
        logger.info(f"Session {self.name!r} cleared")

    # ========== Serialization ==========

    def _former_players(self) -> List[Player]:
        """Players referenced by rounds who are no longer in the pool."""
        former: Dict[str, Player] = {}
        for round_data in self.rounds:
            for match in round_data.matches:
                for player in match.players:
                    if player.id not in self.pool and player.id not in former:
                        former[player.id] = player
        return list(former.values())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize session to dictionary.

        Returns:
            Dictionary containing all session data
        """
        return {
            "config": self.config.to_dict(),
            "players": [p.to_dict() for p in self.pool.players],
            "former_players": [p.to_dict() for p in self._former_players()],
            "rounds": self.round_manager.to_dict()["rounds"],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Deserialize session from dictionary.

        Raises:
            PlayerNotFoundException: If a match references a player that is
                neither in the pool nor among the former players
        """
        config = SessionConfig.from_dict(data.get("config", {}))
        session = cls(config=config)
        session.pool = PlayerPool.from_dict({"players": data.get("players", [])})

        lookup = {
            entry.id: entry
            for entry in (
                Player.from_dict(p) for p in data.get("former_players", [])
            )
        }
        lookup.update(session.pool.by_id)
        session.round_manager = RoundManager.from_dict(
            {"rounds": data.get("rounds", [])}, lookup
        )

        logger.info(
            f"Loaded session {config.name!r}: {len(session.pool)} player(s), "
            f"{session.current_round_number} round(s)"
        )
        return session
