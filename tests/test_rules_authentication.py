"""
Tests for the authentication scorers (FRE 901, IRE 901, FRE 902).

Test Coverage:
1. FRE 901 rewards a digital signature and a documented chain of custody
2. Missing signature or custody yields missing findings with recommendations
3. IRE 901 is scored like FRE 901 with Indiana rule references
4. FRE 902 public records are self-authenticating
5. Relative ordering holds under every built-in profile
"""

import pytest

from proofstack.models import FindingImpact, FindingType
from proofstack.standards.engine import ComplianceEvaluator
from proofstack.standards.profiles import CONSERVATIVE, DEFAULT

CUSTODY = [{"handler": "Officer Smith", "timestamp": "2023-03-01T10:00:00", "action": "collected"}]


class TestFRE901:
    """Tests for FRE 901 authentication."""

    def test_missing_metadata_scores_below_fifty(self, evaluator):
        result = evaluator.evaluate_rule("fre-901", {"metadata": {}})
        assert result.score < 50
        assert result.compliant is False

        missing = result.findings_of_type(FindingType.MISSING)
        assert len(missing) == 2
        assert all(f.impact == FindingImpact.HIGH for f in missing)
        assert "Obtain digital signature or other authentication method" in result.recommendations
        assert "Document complete chain of custody" in result.recommendations

    def test_signature_and_custody_full_score(self, evaluator):
        result = evaluator.evaluate_rule(
            "fre-901", {"metadata": {"digitalSignature": "sig", "chainOfCustody": CUSTODY}}
        )
        assert result.score == result.max_score
        assert result.recommendations == ()
        assert result.findings_of_type(FindingType.MISSING) == []

    def test_custody_count_in_finding(self, evaluator):
        result = evaluator.evaluate_rule("fre-901", {"metadata": {"chainOfCustody": CUSTODY * 2}})
        descriptions = [f.description for f in result.findings]
        assert "Chain of custody documented (2 entries)" in descriptions

    def test_entry_without_handler(self, evaluator):
        result = evaluator.evaluate_rule(
            "fre-901", {"metadata": {"chainOfCustody": [{"action": "collected"}]}}
        )
        concerns = result.findings_of_type(FindingType.CONCERN)
        assert len(concerns) == 1
        assert "without an identified handler" in concerns[0].description
        assert "Identify every handler in the chain of custody" in result.recommendations

    def test_hash_is_noted_without_points(self, evaluator):
        plain = evaluator.evaluate_rule("fre-901", {"metadata": {}})
        hashed = evaluator.evaluate_rule("fre-901", {"metadata": {"hashSHA256": "a" * 64}})
        assert hashed.score == plain.score
        assert any("hash" in f.description for f in hashed.findings_of_type(FindingType.STRENGTH))

    def test_findings_reference_rule(self, evaluator):
        result = evaluator.evaluate_rule("fre-901", {"metadata": {}})
        assert {f.rule_reference for f in result.findings} == {"FRE 901"}


class TestIRE901:
    """Tests for the Indiana authentication rule."""

    def test_mirrors_federal_scores(self, evaluator, strong_evidence, bare_evidence):
        for evidence in (strong_evidence, bare_evidence):
            federal = evaluator.evaluate_rule("fre-901", evidence)
            indiana = evaluator.evaluate_rule("ire-901", evidence)
            assert indiana.score == federal.score
            assert indiana.compliant == federal.compliant

    def test_indiana_references(self, evaluator):
        result = evaluator.evaluate_rule("IRE_901", {"metadata": {}})
        assert {f.rule_reference for f in result.findings} == {"IRE 901"}


class TestFRE902:
    """Tests for FRE 902 self-authentication."""

    def test_public_record(self, evaluator):
        result = evaluator.evaluate_rule("fre-902", {"metadata": {"documentType": "public_record"}})
        assert result.score > 80
        assert result.compliant is True
        assert any(
            "self-authenticating" in f.description
            for f in result.findings_of_type(FindingType.STRENGTH)
        )

    def test_public_record_without_authority_is_noted(self, evaluator):
        result = evaluator.evaluate_rule("fre-902", {"metadata": {"documentType": "public_record"}})
        missing = result.findings_of_type(FindingType.MISSING)
        assert len(missing) == 1
        assert missing[0].impact == FindingImpact.LOW

    def test_private_correspondence(self, evaluator):
        result = evaluator.evaluate_rule(
            "fre-902", {"metadata": {"documentType": "private_correspondence"}}
        )
        assert result.score < 60
        assert result.compliant is False
        assert "Provide authentication witness or certification" in result.recommendations

    def test_issuing_authority_bonus(self, evaluator):
        without = evaluator.evaluate_rule("fre-902", {"metadata": {"documentType": "public_record"}})
        with_authority = evaluator.evaluate_rule(
            "fre-902",
            {"metadata": {"documentType": "public_record", "issuingAuthority": "County Recorder"}},
        )
        assert with_authority.score > without.score
        assert with_authority.score == with_authority.max_score


@pytest.mark.parametrize("profile", [DEFAULT, CONSERVATIVE], ids=lambda p: p.name)
def test_authentication_ordering_per_profile(profile):
    """More authentication evidence never scores lower, whatever the profile."""
    evaluator = ComplianceEvaluator(profile=profile)
    none = evaluator.evaluate_rule("fre-901", {"metadata": {}}).score
    signed = evaluator.evaluate_rule("fre-901", {"metadata": {"digitalSignature": "s"}}).score
    both = evaluator.evaluate_rule(
        "fre-901", {"metadata": {"digitalSignature": "s", "chainOfCustody": CUSTODY}}
    ).score
    assert none < signed < both
