"""Level-balanced doubles round generation.

A round fills every court with one match of two teams of two. Players who
have played the fewest matches are seated first, teammates come from the same
level whenever the pool allows it, and teams with the same level composition
face each other.
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
from collections import defaultdict
from itertools import permutations
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from beachrank.constants import PLAYERS_PER_MATCH
from beachrank.exceptions import InsufficientPlayersException, InvalidPairingException
from beachrank.models.tournament import Match, RoundData
from beachrank.player import Player
from beachrank.type_hints import LevelComposition, Pair
from beachrank.utils import setup_logger
from beachrank.utils.validation import validate_courts_strict

logger = setup_logger(__name__)

FairnessKey = Callable[[Player], Tuple[int, int]]


def level_composition(team: Iterable[Player]) -> LevelComposition:
    """Sorted levels of a team, strongest first, e.g. ``(3, 2)``."""
    return tuple(sorted((p.level for p in team), reverse=True))


def _unique_active(players: Iterable[Player]) -> List[Player]:
    seen: Dict[str, Player] = {}
    for player in players:
        if not player.is_active:
            continue
        if player.id in seen:
            logger.warning(f"Ignoring duplicate entry for player {player.name}")
            continue
        seen[player.id] = player
    return list(seen.values())


def _fairness_key(
    players: Sequence[Player], seed: Optional[int], rng: Optional[random.Random]
) -> FairnessKey:
    """Build the sort key: fewest matches first, then a stable tiebreak position.

    Without ``seed`` or ``rng`` the tiebreak is the order of ``players``.
    """
    ordered = list(players)
    if rng is None and seed is not None:
        rng = random.Random(seed)
    if rng is not None:
        rng.shuffle(ordered)
    position = {p.id: index for index, p in enumerate(ordered)}
    return lambda p: (p.match_count, position[p.id])


def _select_participants(
    active: List[Player], seats: int, key: FairnessKey
) -> Dict[int, List[Player]]:
    """Choose who plays this round, grouped by level in fairness order.

    Everyone strictly below the cut-off match count plays. The remaining seats
    go to players at the cut-off: first to give odd level buckets a same-level
    partner, then two at a time from the level with the most players waiting.
    """
    ordered = sorted(active, key=key)
    cutoff = ordered[seats - 1].match_count

    selected: Dict[int, List[Player]] = defaultdict(list)
    waiting: Dict[int, List[Player]] = defaultdict(list)
    for player in ordered:
        if player.match_count < cutoff:
            selected[player.level].append(player)
        elif player.match_count == cutoff:
            waiting[player.level].append(player)

    seats_left = seats - sum(len(bucket) for bucket in selected.values())

    odd_levels = [
        level
        for level, bucket in selected.items()
        if len(bucket) % 2 == 1 and waiting[level]
    ]
    for level in sorted(odd_levels, key=lambda lvl: (-len(waiting[lvl]), -lvl)):
        if seats_left == 0:
            break
        selected[level].append(waiting[level].pop(0))
        seats_left -= 1

    while seats_left > 0:
        candidates = [level for level, queue in waiting.items() if queue]
        if seats_left >= 2:
            roomy = [level for level in candidates if len(waiting[level]) >= 2]
            candidates = roomy or candidates
        level = max(candidates, key=lambda lvl: (len(waiting[lvl]), lvl))
        take = min(2, seats_left, len(waiting[level]))
        for _ in range(take):
            selected[level].append(waiting[level].pop(0))
        seats_left -= take
        logger.debug(f"Borrowed {take} player(s) from level {level}")

    return selected


def _form_pairs(selected: Dict[int, List[Player]], key: FairnessKey) -> List[Pair]:
    """Walk each level bucket two at a time; pair leftovers by nearest level."""
    pairs: List[Pair] = []
    singles: List[Player] = []

    for level in sorted(selected, reverse=True):
        queue = list(selected[level])
        while len(queue) >= 2:
            pairs.append((queue.pop(0), queue.pop(0)))
        if queue:
            singles.append(queue[0])

    # Adjacent leftovers in level order have the smallest level gap
    singles.sort(key=lambda p: (-p.level, key(p)))
    for i in range(0, len(singles) - 1, 2):
        logger.debug(
            f"Mixed-level pair: {singles[i].name} (L{singles[i].level}) with "
            f"{singles[i + 1].name} (L{singles[i + 1].level})"
        )
        pairs.append((singles[i], singles[i + 1]))

    return pairs


def _form_matches(pairs: List[Pair]) -> List[Match]:
    """Face pairs of identical level composition, then the closest in strength."""
    groups: Dict[LevelComposition, List[Pair]] = defaultdict(list)
    for pair in pairs:
        groups[level_composition(pair)].append(pair)

    matches: List[Match] = []
    leftovers: List[Pair] = []
    for composition in sorted(groups, reverse=True):
        queue = groups[composition]
        while len(queue) >= 2:
            team_a, team_b = queue.pop(0), queue.pop(0)
            matches.append(Match(team_a=list(team_a), team_b=list(team_b)))
        if queue:
            leftovers.append(queue[0])

    leftovers.sort(
        key=lambda pair: (-sum(level_composition(pair)), level_composition(pair))
    )
    for i in range(0, len(leftovers) - 1, 2):
        matches.append(
            Match(team_a=list(leftovers[i]), team_b=list(leftovers[i + 1]))
        )

    return matches


def apply_round_statistics(round_data: RoundData) -> None:
    """Count the round towards every participant's history.

    Each participant's match count goes up by one and each pair of
    teammates records the partnership in both directions.
    """
    for match in round_data.matches:
        for team in (match.team_a, match.team_b):
            for player in team:
                player.match_count += 1
            for player, partner in permutations(team, 2):
                player.add_partner(partner.id)


def revert_round_statistics(round_data: RoundData) -> None:
    """Exact inverse of :func:`apply_round_statistics`."""
    for match in round_data.matches:
        for team in (match.team_a, match.team_b):
            for player in team:
                player.match_count = max(0, player.match_count - 1)
            for player, partner in permutations(team, 2):
                player.remove_partner(partner.id)


def generate_round(
    players: Iterable[Player],
    courts: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> RoundData:
    """Generate one round of doubles matches, one per court.

    Inactive players are ignored. On success every participant's match count
    and partner history are updated; on failure nothing is touched.

    Args:
        players: The player pool (inactive players are skipped)
        courts: Number of courts, i.e. matches to generate
        seed: Optional seed to shuffle ties in match count reproducibly
        rng: Optional random generator, takes precedence over ``seed``

    Returns:
        A new RoundData with exactly ``courts`` unscored matches

    Raises:
        InvalidCourtCountException: If courts is not a positive integer
        InsufficientPlayersException: If fewer than ``courts * 4`` players are active
    """
    courts = validate_courts_strict(courts)
    active = _unique_active(players)
    seats = courts * PLAYERS_PER_MATCH

    if len(active) < seats:
        logger.warning(
            f"Cannot fill {courts} court(s): {len(active)} active players, "
            f"{seats} needed"
        )
        raise InsufficientPlayersException(required=seats, available=len(active))

    key = _fairness_key(active, seed, rng)
    selected = _select_participants(active, seats, key)
    pairs = _form_pairs(selected, key)
    matches = _form_matches(pairs)

    if len(matches) != courts:
        # Unreachable while seats is a multiple of PLAYERS_PER_MATCH
        raise InvalidPairingException(
            f"Generated {len(matches)} matches for {courts} court(s)"
        )

    round_data = RoundData(matches=matches)
    apply_round_statistics(round_data)

    logger.info(
        f"Generated round with {len(matches)} match(es) "
        f"from {len(active)} active players"
    )
    return round_data
