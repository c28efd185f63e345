"""
ProofStack - Authentication Scorers (FRE/IRE 901, FRE 902)

FRE 901 asks whether the proponent can show the item is what it is
claimed to be; for digital evidence that rests mostly on a digital
signature and a documented chain of custody. FRE 902 covers records that
authenticate themselves, chiefly certified public records.
"""

from proofstack.models import EvidenceItem, FindingImpact, LegalRule
from proofstack.standards.profiles import ScoringProfile
from proofstack.standards.scorecard import Scorecard

PUBLIC_RECORD = "public_record"


class AuthenticationRulesMixin:
    """Mixin providing the FRE 901 / IRE 901 and FRE 902 scorers."""

    _profile: ScoringProfile

    def _score_authentication(
        self, rule: LegalRule, evidence: EvidenceItem
    ) -> Scorecard:
        """FRE 901 / IRE 901: signature and chain of custody.

        Used for both jurisdictions; the Indiana rule mirrors the federal
        one, only the rule reference on each finding differs.
        """
        profile = self._profile
        metadata = evidence.metadata
        card = Scorecard(rule.rule_number, points=profile.auth_base)

        if metadata.digital_signature:
            card.add(profile.auth_signature_bonus)
            card.strength(
                "Digital signature present for authentication",
                FindingImpact.HIGH,
            )
        else:
            card.missing(
                "Missing digital authentication - no digital signature recorded",
                FindingImpact.HIGH,
                recommendation="Obtain digital signature or other authentication method",
            )

        entries = metadata.custody_entries
        if entries:
            card.add(profile.auth_custody_bonus)
            card.strength(
                f"Chain of custody documented ({len(entries)} "
                f"entr{'y' if len(entries) == 1 else 'ies'})",
                FindingImpact.HIGH,
            )
            unnamed = sum(1 for e in entries if not e.handler)
            if unnamed:
                card.concern(
                    f"{unnamed} chain of custody entr{'y' if unnamed == 1 else 'ies'} "
                    "without an identified handler",
                    FindingImpact.MEDIUM,
                    recommendation="Identify every handler in the chain of custody",
                )
        else:
            card.missing(
                "Chain of custody missing or incomplete",
                FindingImpact.HIGH,
                recommendation="Document complete chain of custody",
            )

        if metadata.hash_sha256 or metadata.hash_md5:
            card.strength(
                "Cryptographic hash recorded for integrity verification",
                FindingImpact.LOW,
            )

        return card

    def _score_self_authentication(
        self, rule: LegalRule, evidence: EvidenceItem
    ) -> Scorecard:
        """FRE 902: public records are self-authenticating."""
        profile = self._profile
        metadata = evidence.metadata
        card = Scorecard(rule.rule_number, points=profile.self_auth_base)

        if metadata.document_type == PUBLIC_RECORD:
            card.add(profile.self_auth_public_record_bonus)
            card.strength(
                "Document qualifies as self-authenticating public record",
                FindingImpact.HIGH,
            )
        else:
            card.weakness(
                "Document requires additional authentication - not a "
                "self-authenticating record",
                FindingImpact.MEDIUM,
                recommendation="Provide authentication witness or certification",
            )

        if metadata.issuing_authority:
            card.add(profile.self_auth_authority_bonus)
            card.strength(
                f"Issuing authority identified: {metadata.issuing_authority}",
                FindingImpact.LOW,
            )
        elif metadata.document_type == PUBLIC_RECORD:
            card.missing(
                "Issuing authority for the public record not identified",
                FindingImpact.LOW,
                recommendation="Identify the public office that issued or certified the record",
            )

        return card
