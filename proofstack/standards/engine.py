"""
ProofStack - Compliance Evaluator

Scores one piece of evidence against the rules of evidence and aggregates
the results into an overall compliance percentage and an admissibility
likelihood.

Scorers are organized by category as mixins:
- AuthenticationRulesMixin: FRE 901, IRE 901, FRE 902
- BestEvidenceRulesMixin: FRE 1001-1008
- HearsayRulesMixin: FRE 803 (business records, 803(6))
- RelevanceRulesMixin: FRE 401, FRE 403

Every scorer works on a 0-100 point scale; the engine clamps the points
and scales them to the maximum score of the rule's analysis criteria.
Evaluation is pure: the catalog is read-only and each call builds new
result objects.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from proofstack.models import (
    COMPLIANCE_THRESHOLD,
    AdmissibilityLikelihood,
    AnalysisResult,
    ComplianceResult,
    EvidenceItem,
    EvidenceMetadata,
    Finding,
    FindingImpact,
    FindingType,
    LegalRule,
    is_compliant,
)
from proofstack.standards.catalog import RuleCatalog
from proofstack.standards.profiles import DEFAULT, ScoringProfile
from proofstack.standards.rules_authentication import AuthenticationRulesMixin
from proofstack.standards.rules_best_evidence import BestEvidenceRulesMixin
from proofstack.standards.rules_hearsay import HearsayRulesMixin
from proofstack.standards.rules_relevance import RelevanceRulesMixin
from proofstack.standards.scorecard import Scorecard
from proofstack.utils.exceptions import CatalogError, EvidenceInputError, UnknownRuleError

logger = logging.getLogger(__name__)

# Rules evaluated for every piece of evidence, in report order.
APPLICABLE_RULES = (
    "fre-901",  # authentication
    "fre-902",  # self-authentication
    "fre-1001",  # best evidence
    "fre-803",  # hearsay exception
    "fre-401",  # relevance
    "fre-403",  # prejudice balancing
)

HIGH_LIKELIHOOD_SCORE = 85

EvidenceInput = Union[EvidenceItem, EvidenceMetadata, Mapping[str, Any]]
Scorer = Callable[[LegalRule, EvidenceItem], Scorecard]


def coerce_evidence(evidence: EvidenceInput) -> EvidenceItem:
    """
    Accept an EvidenceItem, a bare metadata record, or a plain mapping.

    Mappings are validated as EvidenceItem (camelCase keys allowed).

    Raises:
        EvidenceInputError: If a mapping cannot be validated
    """
    if isinstance(evidence, EvidenceItem):
        return evidence
    if isinstance(evidence, EvidenceMetadata):
        return EvidenceItem(metadata=evidence)
    if isinstance(evidence, Mapping):
        try:
            return EvidenceItem.model_validate(dict(evidence))
        except ValidationError as e:
            raise EvidenceInputError(
                f"{e.error_count()} invalid field(s): {e.errors()[0]['msg']}",
                cause=e,
            ) from e
    raise EvidenceInputError(f"Unsupported evidence type: {type(evidence).__name__}")


def classify_admissibility(
    overall_score: float, findings: Iterable[Finding]
) -> AdmissibilityLikelihood:
    """
    Classify admissibility from an overall score and the findings behind it.

    High: score >= 85 and no high-impact findings
    Medium: score >= 70 and at most one high-impact finding
    Low: otherwise

    Only findings that count against admissibility (anything but a
    strength) are considered.
    """
    high_impact = sum(
        1 for f in findings
        if f.impact == FindingImpact.HIGH and f.type != FindingType.STRENGTH
    )
    if overall_score >= HIGH_LIKELIHOOD_SCORE and high_impact == 0:
        return AdmissibilityLikelihood.HIGH
    if overall_score >= COMPLIANCE_THRESHOLD and high_impact <= 1:
        return AdmissibilityLikelihood.MEDIUM
    return AdmissibilityLikelihood.LOW


class ComplianceEvaluator(
    AuthenticationRulesMixin,
    BestEvidenceRulesMixin,
    HearsayRulesMixin,
    RelevanceRulesMixin,
):
    """
    Rule-based evidence compliance evaluator.

    Scores evidence against the six applicable rules (or any single
    scorable rule) using an injected RuleCatalog and ScoringProfile.
    """

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        profile: Optional[ScoringProfile] = None,
    ):
        """
        Initialize with a catalog and scoring profile.

        Args:
            catalog: Rule catalog; defaults to RuleCatalog.default()
            profile: Scoring constants; defaults to the DEFAULT profile

        Raises:
            CatalogError: If an applicable rule is not scorable with the catalog
        """
        self.catalog = catalog or RuleCatalog.default()
        self._profile = profile or DEFAULT
        self._scorers: Dict[str, Scorer] = {
            "fre-901": self._score_authentication,
            "ire-901": self._score_authentication,
            "fre-902": self._score_self_authentication,
            "fre-1001": self._score_best_evidence,
            "fre-803": self._score_hearsay_exception,
            "fre-401": self._score_relevance,
            "fre-403": self._score_prejudice_balance,
        }

        for rule_id in APPLICABLE_RULES:
            if not self.is_scorable(rule_id):
                raise CatalogError(f"Applicable rule {rule_id} has no rule or criteria")

    @property
    def profile(self) -> ScoringProfile:
        return self._profile

    def is_scorable(self, rule_id: str) -> bool:
        """True when the rule, its criteria and a scorer all exist."""
        canonical = self.catalog.resolve(rule_id)
        return (
            canonical in self._scorers
            and self.catalog.get_rule_by_id(canonical) is not None
            and self.catalog.get_criteria_for_rule(canonical) is not None
        )

    def scorable_rules(self) -> List[str]:
        return [rule_id for rule_id in self.catalog.rule_ids if self.is_scorable(rule_id)]

    def evaluate_rule(self, rule_id: str, evidence: EvidenceInput) -> ComplianceResult:
        """
        Evaluate evidence against a single rule.

        Args:
            rule_id: Catalog id (fre-901) or legacy id (FRE_901, FRE_1002, FRE_803_6)
            evidence: EvidenceItem, EvidenceMetadata or mapping

        Returns:
            ComplianceResult carrying rule_id exactly as supplied

        Raises:
            UnknownRuleError: If the id does not resolve to a scorable rule
        """
        canonical = self.catalog.resolve(rule_id)
        rule = self.catalog.get_rule_by_id(canonical)
        criteria = self.catalog.get_criteria_for_rule(canonical)
        scorer = self._scorers.get(canonical)

        if rule is None or criteria is None or scorer is None:
            raise UnknownRuleError(rule_id, canonical)

        item = coerce_evidence(evidence)
        card = scorer(rule, item)

        max_score = criteria.max_score
        points = max(0, min(card.points, 100))
        score = round(points * max_score / 100)

        logger.debug(
            f"{canonical}: {card.points} raw points -> {score}/{max_score} "
            f"({len(card.findings)} findings)"
        )

        return ComplianceResult(
            rule_id=rule_id,
            compliant=is_compliant(score, max_score),
            score=score,
            max_score=max_score,
            findings=card.findings,
            recommendations=card.recommendations,
        )

    def analyze_evidence(self, evidence: EvidenceInput) -> List[ComplianceResult]:
        """Evaluate evidence against every applicable rule, in fixed order."""
        item = coerce_evidence(evidence)
        return [self.evaluate_rule(rule_id, item) for rule_id in APPLICABLE_RULES]

    def calculate_overall_compliance(self, evidence: EvidenceInput) -> int:
        """Overall compliance percentage across the applicable rules (0-100)."""
        return overall_compliance(self.analyze_evidence(evidence))

    def summarize(self, evidence: EvidenceInput) -> AnalysisResult:
        """
        Aggregate the applicable-rule results into an AnalysisResult.

        Args:
            evidence: EvidenceItem, EvidenceMetadata or mapping

        Returns:
            AnalysisResult with overall score, likelihood, critical issues,
            de-duplicated recommendations and citations
        """
        item = coerce_evidence(evidence)
        results = self.analyze_evidence(item)
        return build_analysis_result(item.id, results, self.catalog)


def overall_compliance(results: Iterable[ComplianceResult]) -> int:
    """round(sum of scores / sum of max scores * 100), or 0 when empty."""
    results = list(results)
    total = sum(r.score for r in results)
    maximum = sum(r.max_score for r in results)
    if maximum <= 0:
        return 0
    return round(total / maximum * 100)


def build_analysis_result(
    evidence_id: str,
    results: List[ComplianceResult],
    catalog: RuleCatalog,
) -> AnalysisResult:
    """Combine per-rule results into an AnalysisResult."""
    critical_issues = [
        f for r in results for f in r.findings
        if f.impact == FindingImpact.HIGH and f.type != FindingType.STRENGTH
    ]

    recommendations: List[str] = []
    for result in results:
        for recommendation in result.recommendations:
            if recommendation not in recommendations:
                recommendations.append(recommendation)

    overall = overall_compliance(results)
    likelihood = classify_admissibility(overall, critical_issues)

    citations: List[str] = []
    for citation in catalog.generate_citations(r.rule_id for r in results):
        if citation not in citations:
            citations.append(citation)

    return AnalysisResult(
        evidence_id=evidence_id,
        overall_score=overall,
        max_score=sum(r.max_score for r in results),
        admissibility_likelihood=likelihood,
        rule_compliance=results,
        critical_issues=critical_issues,
        recommendations=recommendations,
        citations=citations,
    )
