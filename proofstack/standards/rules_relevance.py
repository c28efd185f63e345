"""
ProofStack - Relevance Scorers (FRE 401, FRE 403)

FRE 401 scales with the caller-assessed relevance score (0-100). FRE 403
starts from "admissible unless prejudicial" and is reduced by the assessed
prejudicial risk.
"""

from proofstack.models import EvidenceItem, FindingImpact, LegalRule, PrejudicialRisk
from proofstack.standards.profiles import ScoringProfile
from proofstack.standards.scorecard import Scorecard

HIGHLY_RELEVANT = 80
MODERATELY_RELEVANT = 60


class RelevanceRulesMixin:
    """Mixin providing the FRE 401 and FRE 403 scorers."""

    _profile: ScoringProfile

    def _score_relevance(
        self, rule: LegalRule, evidence: EvidenceItem
    ) -> Scorecard:
        profile = self._profile
        metadata = evidence.metadata
        card = Scorecard(rule.rule_number, points=profile.relevance_base)

        relevance = metadata.relevance_score
        if relevance is None:
            card.missing(
                "Relevance not assessed for this evidence",
                FindingImpact.MEDIUM,
            )
            relevance = 0.0

        card.add(round(relevance * profile.relevance_multiplier))

        if relevance >= HIGHLY_RELEVANT:
            card.strength("Evidence highly relevant to case", FindingImpact.HIGH)
        elif relevance >= MODERATELY_RELEVANT:
            card.strength("Evidence moderately relevant", FindingImpact.MEDIUM)
        else:
            card.weakness(
                "Evidence relevance questionable",
                FindingImpact.HIGH,
                recommendation="Strengthen connection between evidence and case issues",
            )

        if metadata.probative_value:
            card.strength(
                f"Probative value assessed as {metadata.probative_value}",
                FindingImpact.LOW,
            )
        return card

    def _score_prejudice_balance(
        self, rule: LegalRule, evidence: EvidenceItem
    ) -> Scorecard:
        profile = self._profile
        risk = evidence.metadata.prejudicial_risk
        card = Scorecard(rule.rule_number, points=profile.prejudice_base)

        if risk == PrejudicialRisk.HIGH:
            card.add(-profile.prejudice_high_penalty)
            card.weakness(
                "High prejudicial risk - danger of unfair prejudice may "
                "substantially outweigh probative value",
                FindingImpact.HIGH,
                recommendation="Consider limiting instruction or alternative evidence",
            )
        elif risk == PrejudicialRisk.MEDIUM:
            card.add(-profile.prejudice_medium_penalty)
            card.concern(
                "Moderate prejudicial risk",
                FindingImpact.MEDIUM,
                recommendation="Prepare a limiting instruction addressing the prejudicial aspects",
            )
        elif risk == PrejudicialRisk.LOW:
            card.add(profile.prejudice_low_bonus)
            card.strength("Low prejudicial risk", FindingImpact.MEDIUM)
        else:
            card.concern(
                "Prejudicial risk not assessed - presumed admissible",
                FindingImpact.LOW,
                recommendation="Assess probative value against prejudicial effect under FRE 403",
            )
        return card
