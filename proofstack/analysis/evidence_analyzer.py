"""
ProofStack - Evidence Analyzer

Jurisdiction-aware admissibility analysis for a single evidence item.

Authentication (FRE 901 or IRE 901) is broken into four sub-analyses worth
25 points each:
- Chain of custody: completeness, collection entry, signatures, witnesses
- Technical authentication: hash values, digital signature, timestamps
- Metadata preservation: file name, size, creation and modification dates
- Collection process: collection documentation, device and software

The remaining rules (best evidence, hearsay, relevance) are scored by the
ComplianceEvaluator so both paths share one catalog and one threshold.
"""

import logging
from dataclasses import dataclass, field
from datetime import timezone
from typing import Iterable, List, Optional

from proofstack.analysis.privilege import screen_evidence
from proofstack.analysis.prompts import PROMPTS, RULE_CONTEXT_ENTRY
from proofstack.models import (
    AnalysisResult,
    AuthenticityVerdict,
    ComplianceResult,
    CustodyAction,
    CustodyEntry,
    EvidenceItem,
    FindingImpact,
    FindingType,
    Jurisdiction,
    LegalRule,
    PrivilegeAnalysis,
    RuleCategory,
    is_compliant,
)
from proofstack.standards.catalog import RuleCatalog
from proofstack.standards.engine import (
    ComplianceEvaluator,
    EvidenceInput,
    build_analysis_result,
    coerce_evidence,
)
from proofstack.standards.scorecard import Scorecard
from proofstack.utils.exceptions import UnknownRuleError

logger = logging.getLogger(__name__)

# Rules scored by the evaluator after authentication, in report order.
EVALUATOR_RULES = ("fre-1001", "fre-803", "fre-401")

# Evidence types that bring in the best evidence rules (compared lowercase).
DOCUMENTARY_TYPES = frozenset({
    "computer",
    "hard drive",
    "usb drive",
    "email",
    "social media",
    "digital",
    "document",
})

SUB_ANALYSIS_POINTS = 25

# Chain of custody points
CUSTODY_COMPLETE_POINTS = 15
CUSTODY_COLLECTION_POINTS = 3
CUSTODY_SIGNATURE_POINTS = 4
CUSTODY_WITNESS_POINTS = 3

# Technical authentication points
HASH_POINTS = 10
SIGNATURE_POINTS = 8
TIMESTAMP_POINTS = 7

# Collection process points
COLLECTION_BASE_POINTS = 15
DEVICE_POINTS = 5
SOFTWARE_POINTS = 5

PRESERVED_FIELDS = ("file_name", "file_size", "created_date", "modified_date")
PRESERVED_STRENGTH_POINTS = 20

# Authenticity verdict thresholds, percent of the authentication maximum
AUTHENTICATED_PERCENT = 80
QUESTIONABLE_PERCENT = 60


@dataclass
class CustodyAnalysis:
    """Result of reviewing a chain of custody."""
    entries: int = 0
    is_complete: bool = False
    has_collection: bool = False
    all_signed: bool = False
    has_witness: bool = False
    gaps: List[str] = field(default_factory=list)
    score: int = 0


def analyze_chain_of_custody(entries: Iterable[CustodyEntry]) -> CustodyAnalysis:
    """
    Review chain of custody entries.

    A chain is complete when it has at least one entry and no gaps. Gaps are
    entries without a handler or timestamp, and timestamps that go backwards.

    Args:
        entries: Custody entries in recorded order

    Returns:
        CustodyAnalysis with a 0-25 point score
    """
    entries = list(entries)
    analysis = CustodyAnalysis(entries=len(entries))

    if not entries:
        analysis.gaps.append("No custody entries recorded")
        return analysis

    previous = None
    for index, entry in enumerate(entries, start=1):
        if not entry.handler:
            analysis.gaps.append(f"Entry {index}: no handler recorded")
        if entry.timestamp is None:
            analysis.gaps.append(f"Entry {index}: no timestamp recorded")
            continue
        if previous is not None and _comparable(previous) > _comparable(entry.timestamp):
            analysis.gaps.append(f"Entry {index}: timestamp precedes entry {index - 1}")
        previous = entry.timestamp

    analysis.is_complete = not analysis.gaps
    analysis.has_collection = any(e.action == CustodyAction.COLLECTED for e in entries)
    analysis.all_signed = all(e.signature for e in entries)
    analysis.has_witness = any(e.witness_signature for e in entries)

    score = 0
    if analysis.is_complete:
        score += CUSTODY_COMPLETE_POINTS
    if analysis.has_collection:
        score += CUSTODY_COLLECTION_POINTS
    if analysis.all_signed:
        score += CUSTODY_SIGNATURE_POINTS
    if analysis.has_witness:
        score += CUSTODY_WITNESS_POINTS
    analysis.score = score
    return analysis


def _comparable(timestamp):
    # Aware values are compared in UTC; naive values are taken as recorded
    if timestamp.tzinfo is not None and timestamp.utcoffset() is not None:
        return timestamp.astimezone(timezone.utc).replace(tzinfo=None)
    return timestamp


def determine_authenticity(result: ComplianceResult) -> AuthenticityVerdict:
    """
    Verdict for an authentication result.

    Any high-impact weakness, missing element or concern leaves the evidence
    unauthenticated regardless of score.
    """
    critical = [
        f for f in result.findings
        if f.impact == FindingImpact.HIGH and f.type != FindingType.STRENGTH
    ]
    if critical:
        return AuthenticityVerdict.UNAUTHENTICATED
    if result.percentage >= AUTHENTICATED_PERCENT:
        return AuthenticityVerdict.AUTHENTICATED
    if result.percentage >= QUESTIONABLE_PERCENT:
        return AuthenticityVerdict.QUESTIONABLE
    return AuthenticityVerdict.UNAUTHENTICATED


class EvidenceAnalyzer:
    """
    Full admissibility analysis for one evidence item.

    Shares its catalog with the ComplianceEvaluator it delegates the
    non-authentication rules to.
    """

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        evaluator: Optional[ComplianceEvaluator] = None,
    ):
        if evaluator is None:
            evaluator = ComplianceEvaluator(catalog)
        self.evaluator = evaluator
        self.catalog = evaluator.catalog

    def analyze(self, evidence: EvidenceInput) -> AnalysisResult:
        """
        Analyze evidence for admissibility.

        Args:
            evidence: EvidenceItem, EvidenceMetadata or mapping

        Returns:
            AnalysisResult with the authentication result first, followed by
            best evidence, hearsay and relevance results, plus the
            authenticity verdict and privilege screen
        """
        item = coerce_evidence(evidence)
        authentication = self.analyze_authentication(item)
        results = [authentication]
        results.extend(self.evaluator.evaluate_rule(rule_id, item) for rule_id in EVALUATOR_RULES)

        analysis = build_analysis_result(item.id, results, self.catalog)
        analysis.authenticity = determine_authenticity(authentication)
        analysis.privilege = self.screen_privilege(item)
        for recommendation in analysis.privilege.recommendations:
            if recommendation not in analysis.recommendations:
                analysis.recommendations.append(recommendation)

        logger.debug(
            f"Evidence {item.id or '<unnamed>'}: overall {analysis.overall_score}%, "
            f"likelihood {analysis.admissibility_likelihood.value}, "
            f"authenticity {analysis.authenticity.value}"
        )
        return analysis

    def screen_privilege(self, evidence: EvidenceInput) -> PrivilegeAnalysis:
        """Screen the evidence name and description for privileged content."""
        return screen_evidence(coerce_evidence(evidence))

    def authentication_rule_id(self, evidence: EvidenceItem) -> str:
        if evidence.jurisdiction == Jurisdiction.INDIANA:
            return "ire-901"
        return "fre-901"

    def analyze_authentication(self, evidence: EvidenceInput) -> ComplianceResult:
        """
        Score authentication as four 25 point sub-analyses.

        Raises:
            UnknownRuleError: If the catalog lacks the authentication rule
        """
        item = coerce_evidence(evidence)
        rule_id = self.authentication_rule_id(item)
        rule = self.catalog.get_rule_by_id(rule_id)
        criteria = self.catalog.get_criteria_for_rule(rule_id)
        if rule is None or criteria is None:
            raise UnknownRuleError(rule_id)

        prefix = rule.rule_number.split()[0]
        card = Scorecard(rule.rule_number)
        self._score_custody(item, card, prefix)
        self._score_technical(item, card, prefix)
        self._score_metadata(item, card, prefix)
        self._score_collection(item, card, prefix)

        max_score = criteria.max_score
        points = max(0, min(card.points, SUB_ANALYSIS_POINTS * 4))
        score = round(points * max_score / (SUB_ANALYSIS_POINTS * 4))

        return ComplianceResult(
            rule_id=rule_id,
            compliant=is_compliant(score, max_score),
            score=score,
            max_score=max_score,
            findings=card.findings,
            recommendations=card.recommendations,
        )

    def analyze_chain_of_custody(self, entries: Iterable[CustodyEntry]) -> CustodyAnalysis:
        return analyze_chain_of_custody(entries)

    def _score_custody(self, evidence: EvidenceItem, card: Scorecard, prefix: str) -> None:
        reference = f"{prefix} 901(b)(1)"
        custody = analyze_chain_of_custody(evidence.metadata.custody_entries)
        card.add(custody.score)

        if custody.is_complete:
            card.strength(
                "Complete chain of custody documented",
                FindingImpact.MEDIUM,
                rule_reference=reference,
            )
        else:
            card.weakness(
                f"Chain of custody gaps identified: {', '.join(custody.gaps)}",
                FindingImpact.HIGH,
                recommendation="Document all gaps in chain of custody and provide explanations",
                rule_reference=reference,
            )

        if not custody.has_collection:
            card.recommend("Document initial collection of evidence")
        if not custody.all_signed:
            card.recommend("Ensure all custody transfers are signed")

    def _score_technical(self, evidence: EvidenceItem, card: Scorecard, prefix: str) -> None:
        metadata = evidence.metadata

        if metadata.hash_sha256 or metadata.hash_md5:
            card.add(HASH_POINTS)
            card.strength(
                "Cryptographic hash values present for integrity verification",
                FindingImpact.MEDIUM,
                rule_reference=f"{prefix} 901(b)(9)",
            )
        else:
            card.missing(
                "No cryptographic hash values for integrity verification",
                FindingImpact.HIGH,
                recommendation="Generate and document SHA-256 hash values for all digital evidence",
                rule_reference=f"{prefix} 901(b)(9)",
            )

        if metadata.digital_signature:
            card.add(SIGNATURE_POINTS)
            card.strength(
                "Digital signature present",
                FindingImpact.MEDIUM,
                rule_reference=f"{prefix} 902(14)",
            )
        else:
            card.recommend("Consider implementing digital signatures for evidence authentication")

        if metadata.created_date and metadata.modified_date:
            card.add(TIMESTAMP_POINTS)
            card.strength(
                "Creation and modification timestamps preserved",
                FindingImpact.LOW,
                rule_reference=f"{prefix} 901(b)(4)",
            )
        else:
            card.recommend("Preserve all available timestamp information")

    def _score_metadata(self, evidence: EvidenceItem, card: Scorecard, prefix: str) -> None:
        metadata = evidence.metadata
        present = [name for name in PRESERVED_FIELDS if getattr(metadata, name) is not None]
        points = round(len(present) / len(PRESERVED_FIELDS) * SUB_ANALYSIS_POINTS)
        card.add(points)

        if points >= PRESERVED_STRENGTH_POINTS:
            card.strength(
                "Essential metadata fields preserved",
                FindingImpact.MEDIUM,
                rule_reference=f"{prefix} 901(b)(4)",
            )
        else:
            card.weakness(
                "Missing essential metadata fields",
                FindingImpact.MEDIUM,
                recommendation="Preserve all available metadata during evidence collection",
                rule_reference=f"{prefix} 901(b)(4)",
            )

    def _score_collection(self, evidence: EvidenceItem, card: Scorecard, prefix: str) -> None:
        metadata = evidence.metadata
        reference = f"{prefix} 901(b)(9)"
        card.add(COLLECTION_BASE_POINTS)

        if metadata.device_info:
            card.add(DEVICE_POINTS)
            card.strength("Device information documented", FindingImpact.LOW, rule_reference=reference)
        else:
            card.recommend("Document the device the evidence was collected from")

        if metadata.software_version:
            card.add(SOFTWARE_POINTS)
            card.strength(
                "Collection software version documented",
                FindingImpact.LOW,
                rule_reference=reference,
            )
        else:
            card.recommend("Record the collection tool and its software version")

    def get_relevant_rules(self, evidence: EvidenceInput) -> List[LegalRule]:
        """
        Rules relevant to the evidence, filtered by its jurisdiction.

        Authentication and relevance rules always apply; best evidence rules
        apply to documentary and digital evidence types.
        """
        item = coerce_evidence(evidence)
        rules = list(self.catalog.get_rules_by_category(RuleCategory.AUTHENTICATION))
        if item.type.strip().lower() in DOCUMENTARY_TYPES:
            rules.extend(self.catalog.get_rules_by_category(RuleCategory.BEST_EVIDENCE))
        rules.extend(self.catalog.get_rules_by_category(RuleCategory.RELEVANCE))

        if item.jurisdiction != Jurisdiction.BOTH:
            rules = [
                r for r in rules
                if r.jurisdiction in (Jurisdiction.BOTH, item.jurisdiction)
            ]
        return rules

    def build_prompt(self, evidence: EvidenceInput, kind: str = "critique") -> str:
        """
        Build a legally grounded prompt for an external narrative service.

        Args:
            evidence: EvidenceItem, EvidenceMetadata or mapping
            kind: "critique" or "suggestions"

        Raises:
            ValueError: If kind is not a known prompt kind
        """
        template = PROMPTS.get(kind)
        if template is None:
            raise ValueError(f"Invalid prompt kind: {kind}. Valid kinds: {', '.join(PROMPTS)}")

        item = coerce_evidence(evidence)
        rule_context = "\n\n".join(
            RULE_CONTEXT_ENTRY.format(
                rule_number=rule.rule_number,
                title=rule.title,
                description=rule.description,
                requirements="; ".join(rule.requirements) or "None listed",
            )
            for rule in self.get_relevant_rules(item)
        )
        analysis = self.analyze(item)

        if kind == "critique":
            metadata = item.metadata
            custody = analyze_chain_of_custody(metadata.custody_entries)
            present = sorted(
                name for name, value in metadata.model_dump(exclude_none=True).items()
                if name != "chain_of_custody"
            )
            return template.format(
                rule_context=rule_context,
                evidence_type=item.type or "Unspecified",
                description=item.description or "None provided",
                jurisdiction=item.jurisdiction.value,
                is_original=_yes_no_unknown(metadata.is_original),
                custody_complete="Yes" if custody.is_complete else "No",
                custody_entries=custody.entries,
                custody_gaps=f"Gaps: {', '.join(custody.gaps)}\n" if custody.gaps else "",
                metadata_fields=", ".join(present) or "None",
                compliance_summary="\n".join(
                    f"- {r.rule_id}: {r.score}/{r.max_score} "
                    f"({'compliant' if r.compliant else 'non-compliant'})"
                    for r in analysis.rule_compliance
                ),
            )

        issues = [f"- {f.description} ({f.rule_reference})" for f in analysis.critical_issues]
        issues.extend(f"- {r}" for r in analysis.recommendations)
        return template.format(
            rule_context=rule_context,
            evidence_type=item.type or "Unspecified",
            jurisdiction=item.jurisdiction.value,
            open_issues="\n".join(issues) or "- None",
        )


def _yes_no_unknown(value: Optional[bool]) -> str:
    if value is None:
        return "Unknown"
    return "Yes" if value else "No"
