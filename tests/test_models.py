"""Tests for Pydantic data models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from proofstack.models import (
    COMPLIANCE_THRESHOLD,
    AdmissibilityLikelihood,
    AnalysisCriteria,
    AnalysisResult,
    ComplianceResult,
    CustodyAction,
    EvidenceItem,
    EvidenceMetadata,
    Finding,
    FindingImpact,
    FindingType,
    Jurisdiction,
    LegalRule,
    PrejudicialRisk,
    ScoringFactor,
    is_compliant,
)


class TestComplianceThreshold:
    """Tests for the shared compliance threshold."""

    def test_threshold_value(self):
        assert COMPLIANCE_THRESHOLD == 70

    @pytest.mark.parametrize(
        "score,max_score,expected",
        [
            (70, 100, True),
            (69, 100, False),
            (42, 60, True),
            (41, 60, False),
            (0, 100, False),
            (0, 0, False),
        ],
    )
    def test_is_compliant(self, score, max_score, expected):
        assert is_compliant(score, max_score) is expected


class TestLegalRule:
    """Tests for LegalRule model."""

    def test_aliases_and_id_normalization(self):
        """Test camelCase aliases and id normalization."""
        rule = LegalRule.model_validate({
            "id": "FRE_999",
            "title": "Custom rule",
            "jurisdiction": "Federal",
            "ruleNumber": "FRE 999",
            "category": "Authentication",
            "relatedRules": ["fre-901"],
            "citation": "Fed. R. Evid. 999",
        })
        assert rule.rule_id == "fre-999"
        assert rule.rule_number == "FRE 999"
        assert rule.related_rules == ("fre-901",)

    def test_rule_is_frozen(self, catalog):
        rule = catalog.get_rule_by_id("fre-901")
        with pytest.raises(ValidationError):
            rule.title = "Changed"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            LegalRule(
                rule_id="  ",
                title="x",
                jurisdiction=Jurisdiction.FEDERAL,
                rule_number="x",
                category="Relevance",
                citation="x",
            )


class TestAnalysisCriteria:
    """Tests for AnalysisCriteria model."""

    def test_max_score_is_factor_sum(self):
        criteria = AnalysisCriteria(
            rule_id="fre-999",
            weight=5,
            scoring_factors=(
                ScoringFactor(factor="A", max_points=40),
                ScoringFactor(factor="B", max_points=20),
            ),
        )
        assert criteria.max_score == 60

    def test_requires_a_factor(self):
        with pytest.raises(ValidationError):
            AnalysisCriteria(rule_id="fre-999", weight=5, scoring_factors=())

    def test_weight_bounds(self):
        with pytest.raises(ValidationError):
            AnalysisCriteria(
                rule_id="fre-999",
                weight=11,
                scoring_factors=(ScoringFactor(factor="A", max_points=10),),
            )

    def test_factor_points_positive(self):
        with pytest.raises(ValidationError):
            ScoringFactor(factor="A", max_points=0)


class TestEvidenceMetadata:
    """Tests for EvidenceMetadata model."""

    def test_all_fields_optional(self):
        metadata = EvidenceMetadata()
        assert metadata.digital_signature is None
        assert metadata.custody_entries == []

    def test_camel_case_aliases(self):
        metadata = EvidenceMetadata.model_validate({
            "digitalSignature": "sig",
            "isOriginal": False,
            "copyJustification": "Original destroyed in fire",
            "hashSHA256": "a" * 64,
            "chainOfCustody": [{"handler": "Officer Smith", "action": "collected"}],
        })
        assert metadata.digital_signature == "sig"
        assert metadata.is_original is False
        assert metadata.copy_justification == "Original destroyed in fire"
        assert metadata.custody_entries[0].action == CustodyAction.COLLECTED

    def test_snake_case_names_accepted(self):
        metadata = EvidenceMetadata(record_keeper="Jane", regular_course=True)
        assert metadata.record_keeper == "Jane"

    def test_unknown_keys_ignored(self):
        metadata = EvidenceMetadata.model_validate({"customField": 1, "fileName": "a.txt"})
        assert metadata.file_name == "a.txt"

    def test_prejudicial_risk_normalized(self):
        metadata = EvidenceMetadata.model_validate({"prejudicialRisk": " High "})
        assert metadata.prejudicial_risk == PrejudicialRisk.HIGH

    def test_document_type_normalized(self):
        metadata = EvidenceMetadata.model_validate({"documentType": "Public Record"})
        assert metadata.document_type == "public_record"

    def test_relevance_score_bounds(self):
        with pytest.raises(ValidationError):
            EvidenceMetadata(relevance_score=101)


class TestEvidenceItem:
    """Tests for EvidenceItem model."""

    def test_defaults(self):
        item = EvidenceItem()
        assert item.jurisdiction == Jurisdiction.FEDERAL
        assert isinstance(item.metadata, EvidenceMetadata)

    def test_none_metadata_becomes_empty(self):
        item = EvidenceItem.model_validate({"id": "EV-1", "metadata": None})
        assert item.metadata == EvidenceMetadata()

    def test_full_mapping(self, strong_evidence):
        assert strong_evidence.id == "EV-001"
        assert strong_evidence.date_collected == datetime(2023, 3, 1, 10, 0)
        assert len(strong_evidence.metadata.custody_entries) == 2


class TestComplianceResult:
    """Tests for ComplianceResult model."""

    def test_valid_result(self):
        result = ComplianceResult(rule_id="fre-901", compliant=True, score=80, max_score=100)
        assert result.percentage == 80.0

    def test_score_above_max_rejected(self):
        with pytest.raises(ValidationError):
            ComplianceResult(rule_id="fre-901", compliant=True, score=101, max_score=100)

    def test_negative_score_rejected(self):
        with pytest.raises(ValidationError):
            ComplianceResult(rule_id="fre-901", compliant=False, score=-1, max_score=100)

    def test_compliant_must_match_threshold(self):
        with pytest.raises(ValidationError):
            ComplianceResult(rule_id="fre-901", compliant=True, score=69, max_score=100)
        with pytest.raises(ValidationError):
            ComplianceResult(rule_id="fre-901", compliant=False, score=70, max_score=100)

    def test_findings_of_type(self):
        findings = (
            Finding(type=FindingType.STRENGTH, description="a", impact=FindingImpact.HIGH,
                    rule_reference="FRE 901"),
            Finding(type=FindingType.MISSING, description="b", impact=FindingImpact.HIGH,
                    rule_reference="FRE 901"),
        )
        result = ComplianceResult(
            rule_id="fre-901", compliant=False, score=40, max_score=100, findings=findings
        )
        assert [f.description for f in result.findings_of_type(FindingType.MISSING)] == ["b"]


class TestAnalysisResult:
    """Tests for AnalysisResult model."""

    def test_compliant_rules(self):
        result = AnalysisResult(
            evidence_id="EV-1",
            overall_score=55,
            max_score=200,
            admissibility_likelihood=AdmissibilityLikelihood.LOW,
            rule_compliance=[
                ComplianceResult(rule_id="fre-901", compliant=True, score=70, max_score=100),
                ComplianceResult(rule_id="fre-902", compliant=False, score=40, max_score=100),
            ],
        )
        assert result.compliant_rules == ["fre-901"]
        assert isinstance(result.generated_at, datetime)

    def test_overall_score_bounds(self):
        with pytest.raises(ValidationError):
            AnalysisResult(
                evidence_id="EV-1",
                overall_score=101,
                max_score=100,
                admissibility_likelihood=AdmissibilityLikelihood.HIGH,
            )
