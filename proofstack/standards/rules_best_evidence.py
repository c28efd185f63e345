"""
ProofStack - Best Evidence Scorer (FRE 1001-1008)

To prove the content of a writing or recording the original is required,
unless a duplicate is acceptable or the original's absence is explained.
Ordering: original > copy with stated justification > unjustified copy.
"""

from proofstack.models import EvidenceItem, FindingImpact, LegalRule
from proofstack.standards.profiles import ScoringProfile
from proofstack.standards.scorecard import Scorecard


class BestEvidenceRulesMixin:
    """Mixin providing the FRE 1001/1002 scorer."""

    _profile: ScoringProfile

    def _score_best_evidence(
        self, rule: LegalRule, evidence: EvidenceItem
    ) -> Scorecard:
        profile = self._profile
        metadata = evidence.metadata
        card = Scorecard("FRE 1002", points=profile.best_evidence_base)

        if metadata.is_original:
            card.add(profile.best_evidence_original_bonus)
            card.strength("Original document provided", FindingImpact.HIGH)
            return card

        if metadata.copy_justification:
            card.add(profile.best_evidence_justified_copy_bonus)
            card.strength(
                f"Copy provided with proper justification: {metadata.copy_justification}",
                FindingImpact.MEDIUM,
            )
            card.concern(
                "Duplicate admissible only absent a genuine question about the "
                "original's authenticity",
                FindingImpact.LOW,
                rule_reference="FRE 1003",
            )
            return card

        if metadata.is_original is None:
            card.missing(
                "Originality not documented - treated as a copy without "
                "justification for absence of the original",
                FindingImpact.HIGH,
                recommendation="Provide justification for using copy instead of original",
            )
        else:
            card.weakness(
                "Copy provided without justification for absence of the original",
                FindingImpact.HIGH,
                recommendation="Provide justification for using copy instead of original",
            )
        return card
