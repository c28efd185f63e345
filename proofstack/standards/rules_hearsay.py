"""
ProofStack - Hearsay Scorer (FRE 803, business records under 803(6))

Hearsay flagged without any exception overrides every other path: the
score is reset to a fixed low value even when business record elements
are present, because no exception has actually been asserted.
"""

from proofstack.models import EvidenceItem, FindingImpact, LegalRule
from proofstack.standards.profiles import ScoringProfile
from proofstack.standards.scorecard import Scorecard

BUSINESS_RECORD = "business_record"


class HearsayRulesMixin:
    """Mixin providing the FRE 803 scorer."""

    _profile: ScoringProfile

    def _score_hearsay_exception(
        self, rule: LegalRule, evidence: EvidenceItem
    ) -> Scorecard:
        profile = self._profile
        metadata = evidence.metadata
        card = Scorecard(rule.rule_number, points=profile.hearsay_base)
        has_foundation = bool(metadata.regular_course and metadata.record_keeper)

        if metadata.is_hearsay and not metadata.hearsay_exception:
            card.reset(profile.hearsay_reset_score)
            card.weakness(
                "Hearsay evidence without applicable exception",
                FindingImpact.HIGH,
                recommendation="Establish hearsay exception or find non-hearsay alternative",
            )
            if has_foundation:
                card.recommend(
                    "Assert the business records exception (FRE 803(6)) through "
                    f"the record keeper ({metadata.record_keeper})"
                )
            return card

        if has_foundation:
            card.add(profile.hearsay_business_record_bonus)
            card.strength(
                "Qualifies as business record exception to hearsay",
                FindingImpact.HIGH,
                rule_reference="FRE 803(6)",
            )
            card.strength(
                f"Record keeper identified: {metadata.record_keeper}",
                FindingImpact.LOW,
                rule_reference="FRE 803(6)",
            )
            return card

        if metadata.hearsay_exception:
            card.add(profile.hearsay_exception_bonus)
            card.strength(
                f"Hearsay exception asserted: {metadata.hearsay_exception}",
                FindingImpact.MEDIUM,
            )
            return card

        if metadata.document_type == BUSINESS_RECORD:
            card.add(profile.hearsay_record_tag_bonus)

        if metadata.document_type == BUSINESS_RECORD or metadata.regular_course or metadata.record_keeper:
            if not metadata.regular_course:
                card.missing(
                    "Business record foundation incomplete - regular course of "
                    "business not established",
                    FindingImpact.MEDIUM,
                    recommendation="Establish that the record was kept in the regular course of business",
                    rule_reference="FRE 803(6)",
                )
            if not metadata.record_keeper:
                card.missing(
                    "Business record foundation incomplete - record keeper not identified",
                    FindingImpact.MEDIUM,
                    recommendation="Identify the custodian or other qualified witness for the record",
                    rule_reference="FRE 803(6)",
                )
        else:
            card.concern(
                "No hearsay exception or business record foundation documented",
                FindingImpact.LOW,
                recommendation=(
                    "Identify any out-of-court statements offered for the truth "
                    "of the matter asserted"
                ),
            )
        return card
