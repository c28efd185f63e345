"""
Pydantic data models for evidence admissibility scoring.

This module defines the rule catalog records (LegalRule, AnalysisCriteria),
the evidence under evaluation (EvidenceItem and its metadata record), and
the evaluation outputs (Finding, ComplianceResult, AnalysisResult).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Percentage of a rule's maximum score required for compliance. Shared by
# every rule scorer, the aggregator and the likelihood classification.
COMPLIANCE_THRESHOLD = 70


def is_compliant(score: int, max_score: int) -> bool:
    """Return True when score reaches COMPLIANCE_THRESHOLD percent of max_score."""
    if max_score <= 0:
        return False
    return score * 100 >= COMPLIANCE_THRESHOLD * max_score


class Jurisdiction(str, Enum):
    """Jurisdiction a legal rule belongs to."""
    FEDERAL = "Federal"
    INDIANA = "Indiana"
    BOTH = "Both"


class RuleCategory(str, Enum):
    """Evidence law categories used to group catalog rules."""
    AUTHENTICATION = "Authentication"
    BEST_EVIDENCE = "BestEvidence"
    HEARSAY = "Hearsay"
    RELEVANCE = "Relevance"
    PRIVILEGE = "Privilege"
    DISCOVERY = "Discovery"


class FindingType(str, Enum):
    """Kind of observation recorded by a rule scorer."""
    STRENGTH = "strength"
    WEAKNESS = "weakness"
    MISSING = "missing"
    CONCERN = "concern"


class FindingImpact(str, Enum):
    """How much a finding bears on admissibility."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AdmissibilityLikelihood(str, Enum):
    """Overall admissibility classification for a piece of evidence."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AuthenticityVerdict(str, Enum):
    """Overall verdict on whether evidence has been authenticated."""
    AUTHENTICATED = "authenticated"
    QUESTIONABLE = "questionable"
    UNAUTHENTICATED = "unauthenticated"


class PrivilegeType(str, Enum):
    """Privileges screened for before production (FRE 502)."""
    ATTORNEY_CLIENT = "attorney_client"
    WORK_PRODUCT = "work_product"


class CustodyAction(str, Enum):
    """Actions recorded in a chain of custody entry."""
    COLLECTED = "collected"
    TRANSFERRED = "transferred"
    ANALYZED = "analyzed"
    STORED = "stored"
    ACCESSED = "accessed"
    COPIED = "copied"
    MODIFIED = "modified"


class PrejudicialRisk(str, Enum):
    """Caller-assessed risk of unfair prejudice (FRE 403)."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# Rule catalog records
# =============================================================================


class LegalRule(BaseModel):
    """Immutable catalog entry for a rule of evidence."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rule_id: str = Field(..., alias="id", description="Catalog id (e.g., fre-901)")
    title: str = Field(..., description="Rule title")
    jurisdiction: Jurisdiction = Field(..., description="Federal, Indiana or Both")
    rule_number: str = Field(..., alias="ruleNumber", description="Display number (e.g., FRE 901)")
    category: RuleCategory = Field(..., description="Evidence law category")
    description: str = Field(default="", description="Text of the rule")
    requirements: Tuple[str, ...] = Field(default=(), description="Ordered requirements")
    exceptions: Tuple[str, ...] = Field(default=(), description="Recognized exceptions")
    related_rules: Tuple[str, ...] = Field(
        default=(), alias="relatedRules", description="Ids of related catalog rules"
    )
    citation: str = Field(..., description="Citation string (e.g., Fed. R. Evid. 901)")

    @field_validator("rule_id")
    @classmethod
    def validate_rule_id(cls, v: str) -> str:
        """Catalog ids are lowercase and hyphenated."""
        v = v.strip()
        if not v:
            raise ValueError("Rule id must not be empty")
        return v.lower().replace("_", "-")


class ScoringFactor(BaseModel):
    """One weighted factor contributing to a rule's maximum score."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    factor: str
    description: str = ""
    max_points: int = Field(..., alias="maxPoints", gt=0)
    evaluation_criteria: Tuple[str, ...] = Field(default=(), alias="evaluationCriteria")


class AnalysisCriteria(BaseModel):
    """Scoring configuration paired with a catalog rule."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rule_id: str = Field(..., alias="ruleId")
    weight: int = Field(..., ge=1, le=10, description="Importance in overall analysis")
    required_elements: Tuple[str, ...] = Field(default=(), alias="requiredElements")
    scoring_factors: Tuple[ScoringFactor, ...] = Field(..., alias="scoringFactors", min_length=1)

    @field_validator("rule_id")
    @classmethod
    def validate_rule_id(cls, v: str) -> str:
        return v.strip().lower().replace("_", "-")

    @property
    def max_score(self) -> int:
        """Maximum attainable score: the sum of all factor max points."""
        return sum(f.max_points for f in self.scoring_factors)


# =============================================================================
# Evidence under evaluation
# =============================================================================


class CustodyEntry(BaseModel):
    """One handler or transfer in an evidence chain of custody."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    handler: Optional[str] = None
    timestamp: Optional[datetime] = None
    action: Optional[CustodyAction] = None
    location: Optional[str] = None
    purpose: Optional[str] = None
    signature: Optional[str] = None
    witness_signature: Optional[str] = Field(None, alias="witnessSignature")


class EvidenceMetadata(BaseModel):
    """Structured evidence metadata.

    Every field is optional. An absent field is treated by the scorers as
    the negative branch of whatever condition checks it, never as an error.
    The camelCase keys used by the questionnaire front end are accepted as
    aliases and unknown keys are ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # File properties
    file_name: Optional[str] = Field(None, alias="fileName")
    file_size: Optional[int] = Field(None, alias="fileSize", ge=0)
    file_type: Optional[str] = Field(None, alias="fileType")
    created_date: Optional[datetime] = Field(None, alias="createdDate")
    modified_date: Optional[datetime] = Field(None, alias="modifiedDate")

    # Integrity and authentication
    hash_md5: Optional[str] = Field(None, alias="hashMD5")
    hash_sha256: Optional[str] = Field(None, alias="hashSHA256")
    digital_signature: Optional[str] = Field(None, alias="digitalSignature")
    chain_of_custody: Optional[List[CustodyEntry]] = Field(None, alias="chainOfCustody")

    # Best evidence
    is_original: Optional[bool] = Field(None, alias="isOriginal")
    copy_justification: Optional[str] = Field(None, alias="copyJustification")

    # Document classification
    document_type: Optional[str] = Field(None, alias="documentType")
    issuing_authority: Optional[str] = Field(None, alias="issuingAuthority")

    # Hearsay
    record_keeper: Optional[str] = Field(None, alias="recordKeeper")
    regular_course: Optional[bool] = Field(None, alias="regularCourse")
    is_hearsay: Optional[bool] = Field(None, alias="isHearsay")
    hearsay_exception: Optional[str] = Field(None, alias="hearsayException")

    # Relevance and prejudice
    relevance_score: Optional[float] = Field(None, alias="relevanceScore", ge=0.0, le=100.0)
    probative_value: Optional[str] = Field(None, alias="probativeValue")
    prejudicial_risk: Optional[PrejudicialRisk] = Field(None, alias="prejudicialRisk")

    # Collection process
    device_info: Optional[str] = Field(None, alias="deviceInfo")
    software_version: Optional[str] = Field(None, alias="softwareVersion")

    @field_validator("prejudicial_risk", mode="before")
    @classmethod
    def normalize_risk(cls, v):
        """Accept 'High', ' medium ' and the like."""
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("document_type", mode="before")
    @classmethod
    def normalize_document_type(cls, v):
        if isinstance(v, str):
            v = v.strip().lower().replace(" ", "_").replace("-", "_")
            return v or None
        return v

    @property
    def custody_entries(self) -> List[CustodyEntry]:
        """Chain of custody entries, empty when none were recorded."""
        return list(self.chain_of_custody or [])


class EvidenceItem(BaseModel):
    """A piece of evidence submitted for admissibility scoring."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="Caller-assigned evidence id")
    type: str = Field(default="", description="Free-text category (digital, document, ...)")
    name: Optional[str] = None
    description: str = ""
    source: str = ""
    date_collected: Optional[datetime] = Field(None, alias="dateCollected")
    jurisdiction: Jurisdiction = Jurisdiction.FEDERAL
    metadata: EvidenceMetadata = Field(default_factory=EvidenceMetadata)

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, v):
        return {} if v is None else v


# =============================================================================
# Evaluation outputs
# =============================================================================


class Finding(BaseModel):
    """A single observation made while scoring a rule."""
    model_config = ConfigDict(frozen=True)

    type: FindingType
    description: str
    impact: FindingImpact
    rule_reference: str


class ComplianceResult(BaseModel):
    """Outcome of evaluating one piece of evidence against one rule."""
    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(..., description="Rule id as supplied by the caller")
    compliant: bool
    score: int = Field(..., ge=0)
    max_score: int = Field(..., gt=0)
    findings: Tuple[Finding, ...] = ()
    recommendations: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_bounds(self) -> "ComplianceResult":
        if self.score > self.max_score:
            raise ValueError(
                f"score {self.score} exceeds max_score {self.max_score}"
            )
        if self.compliant != is_compliant(self.score, self.max_score):
            raise ValueError(
                f"compliant={self.compliant} disagrees with the "
                f"{COMPLIANCE_THRESHOLD}% threshold for {self.score}/{self.max_score}"
            )
        return self

    @property
    def percentage(self) -> float:
        """Score as a percentage of the maximum score."""
        return self.score / self.max_score * 100

    def findings_of_type(self, finding_type: FindingType) -> List[Finding]:
        return [f for f in self.findings if f.type == finding_type]


class PrivilegeClaim(BaseModel):
    """A passage that may be privileged."""
    model_config = ConfigDict(frozen=True)

    type: PrivilegeType
    description: str
    basis: str
    matched_text: str = Field(..., description="Text that triggered the claim")


class PrivilegeAnalysis(BaseModel):
    """Privilege screening result for one piece of evidence."""

    claims: List[PrivilegeClaim] = Field(default_factory=list)
    redaction_required: bool = False
    findings: List[Finding] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Aggregate admissibility analysis for one piece of evidence."""

    evidence_id: str
    overall_score: int = Field(..., ge=0, le=100)
    max_score: int = Field(..., ge=0)
    admissibility_likelihood: AdmissibilityLikelihood
    rule_compliance: List[ComplianceResult] = Field(default_factory=list)
    critical_issues: List[Finding] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    citations: List[str] = Field(default_factory=list)
    authenticity: Optional[AuthenticityVerdict] = Field(
        None, description="Set by the full analyzer from the authentication result"
    )
    privilege: Optional[PrivilegeAnalysis] = Field(
        None, description="Set by the full analyzer; never affects scores"
    )
    generated_at: datetime = Field(default_factory=datetime.now)

    @property
    def compliant_rules(self) -> List[str]:
        return [r.rule_id for r in self.rule_compliance if r.compliant]
