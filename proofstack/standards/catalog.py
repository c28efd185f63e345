"""
ProofStack - Rule Catalog

Authoritative table of Federal and Indiana Rules of Evidence and the
analysis criteria used to score evidence against them.

The catalog is an explicit object constructed once and passed to the
evaluator. It is read-only after construction: rules and criteria are
frozen models held in mapping proxies. Lookups accept catalog ids
(fre-901) as well as legacy questionnaire ids (FRE_901, FRE_1002,
FRE_803_6), resolved through RULE_ALIASES.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from proofstack.models import (
    AnalysisCriteria,
    Jurisdiction,
    LegalRule,
    RuleCategory,
    ScoringFactor,
)
from proofstack.utils.exceptions import CatalogError

logger = logging.getLogger(__name__)

CATALOG_VERSION = "2024.1"


# =============================================================================
# Federal Rules of Evidence
# =============================================================================

FEDERAL_RULES: Tuple[LegalRule, ...] = (
    LegalRule(
        rule_id="fre-901",
        title="Authenticating or Identifying Evidence",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 901",
        category=RuleCategory.AUTHENTICATION,
        description=(
            "To satisfy the requirement of authenticating or identifying an item "
            "of evidence, the proponent must produce evidence sufficient to support "
            "a finding that the item is what the proponent claims it is."
        ),
        requirements=(
            "Evidence sufficient to support a finding of authenticity",
            "Testimony of witness with knowledge",
            "Nonexpert opinion about handwriting",
            "Comparison with authenticated specimens",
            "Distinctive characteristics and the like",
            "Evidence about a process or system",
            "Evidence about public records",
            "Evidence about ancient documents or data compilations",
            "Evidence about a process or system used to produce a result",
            "Methods provided by a statute or rule",
        ),
        related_rules=("fre-902", "fre-1001"),
        citation="Fed. R. Evid. 901",
    ),
    LegalRule(
        rule_id="fre-902",
        title="Evidence That Is Self-Authenticating",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 902",
        category=RuleCategory.AUTHENTICATION,
        description=(
            "The following items of evidence are self-authenticating; they require "
            "no extrinsic evidence of authenticity in order to be admitted."
        ),
        requirements=(
            "Domestic public documents that are sealed and signed",
            "Domestic public documents that are not sealed but are signed and certified",
            "Foreign public documents",
            "Certified copies of public records",
            "Official publications",
            "Newspapers and periodicals",
            "Trade inscriptions and the like",
            "Acknowledged documents",
            "Commercial paper and related documents",
            "Presumptions under a federal statute",
            "Certified domestic records of a regularly conducted activity",
            "Certified foreign records of a regularly conducted activity",
            "Machine-generated digital evidence",
        ),
        related_rules=("fre-901",),
        citation="Fed. R. Evid. 902",
    ),
    LegalRule(
        rule_id="fre-1001",
        title="Definitions (Best Evidence Rule)",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 1001-1008",
        category=RuleCategory.BEST_EVIDENCE,
        description=(
            "An original of a writing or recording means the writing or recording "
            "itself or any counterpart intended to have the same effect by the "
            "person who executed or issued it."
        ),
        requirements=(
            "Original document required to prove content",
            "Duplicate admissible to same extent as original unless genuine question about authenticity",
            "Original not required if lost or destroyed in good faith",
            "Original not required if not obtainable by judicial process",
            "Original not required if in possession of opponent who fails to produce after notice",
        ),
        related_rules=("fre-901", "fre-902"),
        citation="Fed. R. Evid. 1001-1008",
    ),
    LegalRule(
        rule_id="fre-401",
        title="Test for Relevant Evidence",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 401",
        category=RuleCategory.RELEVANCE,
        description=(
            "Evidence is relevant if it has any tendency to make a fact more or less "
            "probable than it would be without the evidence, and the fact is of "
            "consequence in determining the action."
        ),
        requirements=(
            "Tendency to make fact more or less probable",
            "Fact must be of consequence in determining the action",
        ),
        related_rules=("fre-402", "fre-403"),
        citation="Fed. R. Evid. 401",
    ),
    LegalRule(
        rule_id="fre-402",
        title="General Admissibility of Relevant Evidence",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 402",
        category=RuleCategory.RELEVANCE,
        description=(
            "Relevant evidence is admissible unless the Constitution, a federal "
            "statute, these rules, or other rules prescribed by the Supreme Court "
            "provide otherwise. Irrelevant evidence is not admissible."
        ),
        requirements=(
            "Evidence must be relevant under FRE 401",
            "No constitutional, statutory or rule-based bar to admission",
        ),
        related_rules=("fre-401", "fre-403"),
        citation="Fed. R. Evid. 402",
    ),
    LegalRule(
        rule_id="fre-403",
        title="Excluding Relevant Evidence for Prejudice, Confusion, or Other Reasons",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 403",
        category=RuleCategory.RELEVANCE,
        description=(
            "The court may exclude relevant evidence if its probative value is "
            "substantially outweighed by a danger of unfair prejudice, confusing the "
            "issues, misleading the jury, undue delay, wasting time, or needlessly "
            "presenting cumulative evidence."
        ),
        requirements=(
            "Evidence must be relevant under FRE 401",
            "Probative value not substantially outweighed by prejudicial effect",
            "No undue confusion or misleading of jury",
            "No undue delay or waste of time",
        ),
        related_rules=("fre-401", "fre-402"),
        citation="Fed. R. Evid. 403",
    ),
    LegalRule(
        rule_id="fre-803",
        title="Exceptions to the Rule Against Hearsay",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 803",
        category=RuleCategory.HEARSAY,
        description=(
            "The following are not excluded by the rule against hearsay, regardless "
            "of whether the declarant is available as a witness."
        ),
        requirements=(
            "Statement falls within recognized exception",
            "Reliability indicators present",
            "Necessity for admission established",
        ),
        exceptions=(
            "Present sense impression",
            "Excited utterance",
            "Then-existing mental, emotional, or physical condition",
            "Statement made for medical diagnosis or treatment",
            "Recorded recollection",
            "Records of a regularly conducted activity",
            "Absence of a record of a regularly conducted activity",
            "Public records",
            "Public records of vital statistics",
            "Absence of a public record",
            "Records of religious organizations concerning personal or family history",
            "Certificates of marriage, baptism, and similar ceremonies",
            "Family records",
            "Records of documents that affect an interest in property",
            "Statements in documents that affect an interest in property",
            "Statements in ancient documents",
            "Market reports and similar commercial publications",
            "Learned treatises",
            "Reputation concerning personal or family history",
            "Reputation concerning boundaries or general history",
            "Reputation concerning character",
            "Judgment of a previous conviction",
            "Judgments involving personal, family, or general history",
        ),
        citation="Fed. R. Evid. 803",
    ),
    LegalRule(
        rule_id="fre-502",
        title="Attorney-Client Privilege and Work Product; Limitations on Waiver",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRE 502",
        category=RuleCategory.PRIVILEGE,
        description=(
            "Disclosure of a communication or information covered by the "
            "attorney-client privilege or work-product protection does not operate "
            "as a waiver if the disclosure is inadvertent and the holder took "
            "reasonable steps to prevent and rectify it."
        ),
        requirements=(
            "Communication covered by privilege or work-product protection",
            "Disclosure was inadvertent",
            "Holder took reasonable steps to prevent disclosure",
            "Holder promptly took reasonable steps to rectify the error",
        ),
        citation="Fed. R. Evid. 502",
    ),
    LegalRule(
        rule_id="frcp-26",
        title="Duty to Disclose; General Provisions Governing Discovery",
        jurisdiction=Jurisdiction.FEDERAL,
        rule_number="FRCP 26",
        category=RuleCategory.DISCOVERY,
        description=(
            "Parties may obtain discovery regarding any nonprivileged matter that is "
            "relevant to any party's claim or defense and proportional to the needs "
            "of the case."
        ),
        requirements=(
            "Initial disclosures served",
            "Discovery proportional to the needs of the case",
            "Privileged material withheld is described in a privilege log",
            "Disclosures supplemented when incomplete or incorrect",
        ),
        related_rules=("fre-502",),
        citation="Fed. R. Civ. P. 26",
    ),
)


# =============================================================================
# Indiana Rules of Evidence
# =============================================================================

INDIANA_RULES: Tuple[LegalRule, ...] = (
    LegalRule(
        rule_id="ire-901",
        title="Authentication and Identification",
        jurisdiction=Jurisdiction.INDIANA,
        rule_number="IRE 901",
        category=RuleCategory.AUTHENTICATION,
        description=(
            "The requirement of authentication or identification as a condition "
            "precedent to admissibility is satisfied by evidence sufficient to "
            "support a finding that the matter in question is what its proponent "
            "claims."
        ),
        requirements=(
            "Evidence sufficient to support finding of authenticity",
            "Testimony of witness with knowledge",
            "Nonexpert opinion on handwriting",
            "Comparison by trier or expert witness",
            "Distinctive characteristics and circumstances",
            "Voice identification",
            "Telephone conversations",
            "Public records or reports",
            "Ancient documents or data compilation",
            "Process or system",
            "Methods provided by statute or rule",
        ),
        citation="Ind. R. Evid. 901",
    ),
)


# =============================================================================
# Analysis criteria
# =============================================================================
# Factor max points for every scored rule sum to 100, so a rule's score
# reads directly as a percentage.

_AUTHENTICATION_FACTORS = (
    ScoringFactor(
        factor="Chain of Custody",
        description="Complete documentation of evidence handling from collection to presentation",
        max_points=40,
        evaluation_criteria=(
            "Unbroken chain documented",
            "All handlers identified",
            "Transfer procedures followed",
            "Storage conditions documented",
            "Access controls maintained",
        ),
    ),
    ScoringFactor(
        factor="Technical Authentication",
        description="Technical methods used to verify evidence integrity",
        max_points=35,
        evaluation_criteria=(
            "Hash values calculated and verified",
            "Digital signatures present",
            "Timestamps verified",
            "Metadata preserved",
            "Collection tools documented",
        ),
    ),
    ScoringFactor(
        factor="Witness Testimony",
        description="Competent witness testimony supporting authenticity",
        max_points=25,
        evaluation_criteria=(
            "Witness has personal knowledge",
            "Witness is competent",
            "Testimony is detailed and specific",
            "Witness available for cross-examination",
        ),
    ),
)

_AUTHENTICATION_ELEMENTS = (
    "Chain of custody documentation",
    "Witness testimony or affidavit",
    "Technical documentation of collection process",
    "Metadata preservation evidence",
)

ANALYSIS_CRITERIA: Tuple[AnalysisCriteria, ...] = (
    AnalysisCriteria(
        rule_id="fre-901",
        weight=9,
        required_elements=_AUTHENTICATION_ELEMENTS,
        scoring_factors=_AUTHENTICATION_FACTORS,
    ),
    AnalysisCriteria(
        rule_id="ire-901",
        weight=9,
        required_elements=_AUTHENTICATION_ELEMENTS,
        scoring_factors=_AUTHENTICATION_FACTORS,
    ),
    AnalysisCriteria(
        rule_id="fre-902",
        weight=8,
        required_elements=("Document type classification", "Authority verification"),
        scoring_factors=(
            ScoringFactor(
                factor="Self-Authentication",
                description="Evidence qualifies for self-authentication under FRE 902",
                max_points=70,
                evaluation_criteria=(
                    "Public record status verified",
                    "Official seal or certification present",
                    "Proper format and appearance",
                ),
            ),
            ScoringFactor(
                factor="Issuing Authority",
                description="The authority that issued or certified the record is identified",
                max_points=30,
                evaluation_criteria=("Issuing authority identified",),
            ),
        ),
    ),
    AnalysisCriteria(
        rule_id="fre-1001",
        weight=7,
        required_elements=("Original vs copy determination", "Justification for copies"),
        scoring_factors=(
            ScoringFactor(
                factor="Best Evidence",
                description="Original document or acceptable copy provided",
                max_points=70,
                evaluation_criteria=(
                    "Original document provided",
                    "Copy justified by circumstances",
                    "Original unavailability explained",
                ),
            ),
            ScoringFactor(
                factor="Copy Accuracy",
                description="Any duplicate accurately reproduces the original",
                max_points=30,
                evaluation_criteria=("Copy accuracy verified",),
            ),
        ),
    ),
    AnalysisCriteria(
        rule_id="fre-803",
        weight=8,
        required_elements=("Hearsay analysis", "Exception qualification"),
        scoring_factors=(
            ScoringFactor(
                factor="Hearsay Exception",
                description="Evidence qualifies for hearsay exception",
                max_points=70,
                evaluation_criteria=(
                    "Business record requirements met",
                    "Regular course of business established",
                    "Contemporaneous creation verified",
                ),
            ),
            ScoringFactor(
                factor="Foundation Witness",
                description="Custodian or qualified witness can lay the foundation",
                max_points=30,
                evaluation_criteria=("Record keeper identified",),
            ),
        ),
    ),
    AnalysisCriteria(
        rule_id="fre-401",
        weight=9,
        required_elements=("Relevance determination", "Probative value assessment"),
        scoring_factors=(
            ScoringFactor(
                factor="Relevance",
                description="Evidence is relevant to case issues",
                max_points=75,
                evaluation_criteria=(
                    "Logical connection to case facts",
                    "Tendency to prove material fact",
                    "Clear relevance articulated",
                ),
            ),
            ScoringFactor(
                factor="Probative Value",
                description="Strength of the evidence in proving the fact at issue",
                max_points=25,
                evaluation_criteria=("Probative value identified",),
            ),
        ),
    ),
    AnalysisCriteria(
        rule_id="fre-403",
        weight=8,
        required_elements=("Prejudice assessment", "Probative value balancing"),
        scoring_factors=(
            ScoringFactor(
                factor="Prejudice Balance",
                description="Probative value outweighs prejudicial effect",
                max_points=70,
                evaluation_criteria=(
                    "Prejudicial risk assessed",
                    "Probative value quantified",
                ),
            ),
            ScoringFactor(
                factor="Limiting Measures",
                description="Measures available to reduce any unfair prejudice",
                max_points=30,
                evaluation_criteria=(
                    "Alternative evidence considered",
                    "Limiting instructions available",
                ),
            ),
        ),
    ),
)


# Legacy questionnaire ids -> catalog ids. Keys are already case-folded and
# hyphenated; normalize_rule_id applies that step before the lookup.
RULE_ALIASES: Mapping[str, str] = MappingProxyType({
    **{f"fre-{n}": "fre-1001" for n in range(1002, 1009)},
    "fre-803-6": "fre-803",
    "fre-804": "fre-803",
    "ire-1001": "fre-1001",
})


def normalize_rule_id(rule_id: str, aliases: Mapping[str, str] = RULE_ALIASES) -> str:
    """
    Convert a rule id to its canonical catalog form.

    Case-folds, maps underscores and spaces to hyphens, then resolves
    legacy aliases (FRE_1002 -> fre-1001, FRE_803_6 -> fre-803).

    Args:
        rule_id: Rule id in catalog or legacy form
        aliases: Alias table to resolve against

    Returns:
        Canonical rule id (which may still be unknown to the catalog)
    """
    key = "-".join(rule_id.strip().lower().replace("_", " ").split())
    return aliases.get(key, key)


class RuleCatalog:
    """
    Read-only catalog of legal rules and their analysis criteria.

    Construct once (usually via RuleCatalog.default()) and share freely;
    nothing in the catalog changes after __init__ returns.
    """

    def __init__(
        self,
        rules: Iterable[LegalRule],
        criteria: Iterable[AnalysisCriteria] = (),
        aliases: Mapping[str, str] = RULE_ALIASES,
        version: str = CATALOG_VERSION,
    ):
        """
        Build a catalog, validating id uniqueness and rule/criteria pairing.

        Args:
            rules: Catalog rules in display order
            criteria: Analysis criteria, at most one per rule
            aliases: Legacy id -> catalog id mapping
            version: Catalog version label

        Raises:
            CatalogError: On duplicate ids or criteria for an unknown rule
        """
        rules_by_id: Dict[str, LegalRule] = {}
        for rule in rules:
            if rule.rule_id in rules_by_id:
                raise CatalogError(f"Duplicate rule id: {rule.rule_id}")
            rules_by_id[rule.rule_id] = rule

        criteria_by_id: Dict[str, AnalysisCriteria] = {}
        for item in criteria:
            if item.rule_id not in rules_by_id:
                raise CatalogError(f"Criteria reference unknown rule: {item.rule_id}")
            if item.rule_id in criteria_by_id:
                raise CatalogError(f"Duplicate criteria for rule: {item.rule_id}")
            criteria_by_id[item.rule_id] = item

        self._rules: Mapping[str, LegalRule] = MappingProxyType(rules_by_id)
        self._criteria: Mapping[str, AnalysisCriteria] = MappingProxyType(criteria_by_id)
        self._aliases: Mapping[str, str] = MappingProxyType(dict(aliases))
        self.version = version

    @classmethod
    def default(cls) -> "RuleCatalog":
        """Build the catalog from the embedded Federal and Indiana tables."""
        return cls(FEDERAL_RULES + INDIANA_RULES, ANALYSIS_CRITERIA)

    @classmethod
    def from_file(cls, rules_path: Union[str, Path]) -> "RuleCatalog":
        """
        Build the default catalog extended with rules from a YAML or JSON file.

        The file holds a mapping with a 'rules' list and an optional
        'criteria' list. Entries replace embedded entries with the same id.

        Args:
            rules_path: Path to the rules configuration file

        Returns:
            New RuleCatalog with the custom entries merged in

        Raises:
            CatalogError: If the file is missing, unreadable or malformed
        """
        rules_path = Path(rules_path)
        source = str(rules_path)

        if not rules_path.exists():
            raise CatalogError("Rules file not found", source=source)

        suffix = rules_path.suffix.lower()
        try:
            with open(rules_path, "r", encoding="utf-8") as f:
                if suffix in [".yaml", ".yml"]:
                    config = yaml.safe_load(f)
                elif suffix == ".json":
                    config = json.load(f)
                else:
                    raise CatalogError(f"Unsupported format: {suffix}", source=source)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogError(f"Could not parse file: {e}", source=source) from e

        if not isinstance(config, dict) or "rules" not in config:
            raise CatalogError("Rules file must contain 'rules' key", source=source)

        try:
            custom_rules = [LegalRule.model_validate(r) for r in config["rules"] or []]
            custom_criteria = [
                AnalysisCriteria.model_validate(c) for c in config.get("criteria") or []
            ]
        except (ValidationError, TypeError) as e:
            raise CatalogError(f"Invalid rule definition: {e}", source=source) from e

        rules = {r.rule_id: r for r in FEDERAL_RULES + INDIANA_RULES}
        rules.update({r.rule_id: r for r in custom_rules})
        criteria = {c.rule_id: c for c in ANALYSIS_CRITERIA}
        criteria.update({c.rule_id: c for c in custom_criteria})

        logger.info(
            f"Loaded {len(custom_rules)} rules and {len(custom_criteria)} criteria "
            f"from {source}"
        )
        return cls(rules.values(), criteria.values())

    def resolve(self, rule_id: str) -> str:
        """Return the canonical catalog id for a catalog or legacy rule id."""
        return normalize_rule_id(rule_id, self._aliases)

    def get_rule_by_id(self, rule_id: str) -> Optional[LegalRule]:
        """Look up a rule; None for unknown ids."""
        return self._rules.get(self.resolve(rule_id))

    def get_rules_by_category(self, category: Union[RuleCategory, str]) -> List[LegalRule]:
        """Rules in a category, in catalog order; empty for an unknown category."""
        try:
            category = RuleCategory(category)
        except ValueError:
            return []
        return [rule for rule in self._rules.values() if rule.category == category]

    def get_rules_by_jurisdiction(
        self, jurisdiction: Union[Jurisdiction, str]
    ) -> List[LegalRule]:
        """Rules that apply in a jurisdiction, including rules marked Both."""
        jurisdiction = Jurisdiction(jurisdiction)
        return [
            rule for rule in self._rules.values()
            if rule.jurisdiction in (jurisdiction, Jurisdiction.BOTH)
        ]

    def get_criteria_for_rule(self, rule_id: str) -> Optional[AnalysisCriteria]:
        """Look up a rule's analysis criteria; None when absent."""
        return self._criteria.get(self.resolve(rule_id))

    def generate_citations(self, rule_ids: Iterable[str]) -> List[str]:
        """Citation strings for the given ids; unknown ids are skipped."""
        citations = []
        for rule_id in rule_ids:
            rule = self.get_rule_by_id(rule_id)
            if rule is not None:
                citations.append(rule.citation)
        return citations

    @property
    def rule_ids(self) -> List[str]:
        return list(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return isinstance(rule_id, str) and self.resolve(rule_id) in self._rules

    def __iter__(self) -> Iterator[LegalRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)
