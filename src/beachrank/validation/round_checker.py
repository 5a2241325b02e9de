"""Round checker - internal validation of generated doubles rounds.

Structural checks must hold for every round the generator produces. Quality
checks only flag rounds that are legal but could be fairer.
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

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from beachrank.constants import TEAM_SIZE
from beachrank.models.tournament import RoundData
from beachrank.pairing import level_composition
from beachrank.utils import setup_logger

logger = setup_logger(__name__)


class CheckStatus(Enum):
    """Outcome of a single round check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    STRUCTURAL = "STRUCTURAL"  # the round is unusable
    QUALITY = "QUALITY"  # legal, but could be fairer


@dataclass
class CheckResult:
    """Result of a single round check."""

    check: str
    status: CheckStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def is_violation(self) -> bool:
        return self.status == CheckStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete check report for one round."""

    round_number: Optional[int]
    results: List[CheckResult]
    violations: List[CheckResult]
    quality_warnings: List[CheckResult]
    overall_status: CheckStatus
    summary: str

    @property
    def is_valid(self) -> bool:
        return self.overall_status == CheckStatus.COMPLIANT

    @property
    def compliance_percentage(self) -> float:
        applicable = [r for r in self.results if r.status != CheckStatus.NOT_APPLICABLE]
        if not applicable:
            return 100.0
        compliant = sum(1 for r in applicable if r.status == CheckStatus.COMPLIANT)
        return (compliant / len(applicable)) * 100.0


class RoundChecker:
    """Checks a generated round for structural problems and fairness."""

    def check_team_sizes(self, round_data: RoundData) -> CheckResult:
        """Every team has exactly two players."""
        for match in round_data.matches:
            for side, team in (("A", match.team_a), ("B", match.team_b)):
                if len(team) != TEAM_SIZE:
                    return CheckResult(
                        check="team_sizes",
                        status=CheckStatus.VIOLATION,
                        violation_type=ViolationType.STRUCTURAL,
                        description=(
                            f"Match {match.id} team {side} has {len(team)} player(s)"
                        ),
                        details={"match_id": match.id, "side": side},
                    )
        return CheckResult(
            check="team_sizes",
            status=CheckStatus.COMPLIANT,
            description="All teams have two players",
        )

    def check_no_duplicates(self, round_data: RoundData) -> CheckResult:
        """No player appears twice in the round."""
        counts = Counter(round_data.player_ids)
        duplicates = sorted(pid for pid, count in counts.items() if count > 1)
        if duplicates:
            return CheckResult(
                check="no_duplicates",
                status=CheckStatus.VIOLATION,
                violation_type=ViolationType.STRUCTURAL,
                description=f"{len(duplicates)} player(s) placed more than once",
                details={"players": duplicates},
            )
        return CheckResult(
            check="no_duplicates",
            status=CheckStatus.COMPLIANT,
            description="Every player appears at most once",
        )

    def check_court_count(
        self, round_data: RoundData, courts: Optional[int]
    ) -> CheckResult:
        """The round fills exactly the available courts."""
        if courts is None:
            return CheckResult(
                check="court_count",
                status=CheckStatus.NOT_APPLICABLE,
                description="Court count not given",
            )
        if len(round_data.matches) != courts:
            return CheckResult(
                check="court_count",
                status=CheckStatus.VIOLATION,
                violation_type=ViolationType.STRUCTURAL,
                description=(
                    f"{len(round_data.matches)} match(es) for {courts} court(s)"
                ),
                details={"matches": len(round_data.matches), "courts": courts},
            )
        return CheckResult(
            check="court_count",
            status=CheckStatus.COMPLIANT,
            description=f"One match on each of {courts} court(s)",
        )

    def check_balanced_composition(self, round_data: RoundData) -> CheckResult:
        """Both teams of each match share the same level composition."""
        unbalanced = [
            match.id
            for match in round_data.matches
            if level_composition(match.team_a) != level_composition(match.team_b)
        ]
        if unbalanced:
            return CheckResult(
                check="balanced_composition",
                status=CheckStatus.VIOLATION,
                violation_type=ViolationType.QUALITY,
                description=f"{len(unbalanced)} match(es) between unequal teams",
                details={"matches": unbalanced},
            )
        return CheckResult(
            check="balanced_composition",
            status=CheckStatus.COMPLIANT,
            description="Every match is between teams of equal levels",
        )

    def check_repeat_partners(self, round_data: RoundData) -> CheckResult:
        """Flags teammates who have already been teamed before this round.

        Must run after the round's statistics were applied, which is the
        state the generator returns.
        """
        repeats = []
        for match in round_data.matches:
            for team in (match.team_a, match.team_b):
                if len(team) == TEAM_SIZE and team[0].partner_count(team[1].id) > 1:
                    repeats.append([team[0].id, team[1].id])
        if repeats:
            return CheckResult(
                check="repeat_partners",
                status=CheckStatus.VIOLATION,
                violation_type=ViolationType.QUALITY,
                description=f"{len(repeats)} team(s) played together before",
                details={"teams": repeats},
            )
        return CheckResult(
            check="repeat_partners",
            status=CheckStatus.COMPLIANT,
            description="No repeated partnerships",
        )

    def check_round(
        self, round_data: RoundData, courts: Optional[int] = None
    ) -> ValidationReport:
        """Run every check against a round."""
        logger.info(f"Checking round {round_data.round_number}")

        results = [
            self.check_team_sizes(round_data),
            self.check_no_duplicates(round_data),
            self.check_court_count(round_data, courts),
            self.check_balanced_composition(round_data),
            self.check_repeat_partners(round_data),
        ]

        violations = [
            r
            for r in results
            if r.is_violation and r.violation_type == ViolationType.STRUCTURAL
        ]
        quality_warnings = [
            r
            for r in results
            if r.is_violation and r.violation_type == ViolationType.QUALITY
        ]
        overall_status = (
            CheckStatus.VIOLATION if violations else CheckStatus.COMPLIANT
        )

        if overall_status == CheckStatus.COMPLIANT:
            summary = (
                f"Structural checks passed; {len(quality_warnings)} "
                "quality check(s) flagged"
            )
        else:
            summary = (
                f"Structural violations detected - {len(violations)} "
                f"check(s) failed; {len(quality_warnings)} quality warning(s)"
            )

        logger.info(f"Round check complete: {summary}")
        return ValidationReport(
            round_number=round_data.round_number,
            results=results,
            violations=violations,
            quality_warnings=quality_warnings,
            overall_status=overall_status,
            summary=summary,
        )
