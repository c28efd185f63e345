"""
ProofStack - Rule Scorecard

Working state for a single rule scorer: running point total on a
0-100 scale plus the findings and recommendations collected so far.
The engine turns a finished Scorecard into an immutable ComplianceResult.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from proofstack.models import Finding, FindingImpact, FindingType


@dataclass
class Scorecard:
    """Mutable accumulator used while a rule is being scored."""
    rule_reference: str
    points: int = 0
    findings: List[Finding] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def add(self, points: int) -> None:
        self.points += points

    def reset(self, points: int) -> None:
        """Replace the running total (used by overriding conditions)."""
        self.points = points

    def record(
        self,
        finding_type: FindingType,
        description: str,
        impact: FindingImpact = FindingImpact.MEDIUM,
        recommendation: Optional[str] = None,
        rule_reference: Optional[str] = None,
    ) -> None:
        self.findings.append(
            Finding(
                type=finding_type,
                description=description,
                impact=impact,
                rule_reference=rule_reference or self.rule_reference,
            )
        )
        if recommendation:
            self.recommend(recommendation)

    def strength(self, description: str, impact: FindingImpact = FindingImpact.MEDIUM,
                 rule_reference: Optional[str] = None) -> None:
        self.record(FindingType.STRENGTH, description, impact, rule_reference=rule_reference)

    def weakness(self, description: str, impact: FindingImpact = FindingImpact.MEDIUM,
                 recommendation: Optional[str] = None,
                 rule_reference: Optional[str] = None) -> None:
        self.record(FindingType.WEAKNESS, description, impact, recommendation, rule_reference)

    def missing(self, description: str, impact: FindingImpact = FindingImpact.HIGH,
                recommendation: Optional[str] = None,
                rule_reference: Optional[str] = None) -> None:
        self.record(FindingType.MISSING, description, impact, recommendation, rule_reference)

    def concern(self, description: str, impact: FindingImpact = FindingImpact.MEDIUM,
                recommendation: Optional[str] = None,
                rule_reference: Optional[str] = None) -> None:
        self.record(FindingType.CONCERN, description, impact, recommendation, rule_reference)

    def recommend(self, recommendation: str) -> None:
        if recommendation not in self.recommendations:
            self.recommendations.append(recommendation)
