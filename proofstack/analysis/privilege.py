"""
ProofStack - Privilege Screening

Flags evidence text that may be protected by the attorney-client privilege
or the work product doctrine so it can be reviewed before production
(FRE 502). Screening is pattern based and never changes a rule score; a
match only means the passage needs a human privilege review.
"""

import logging
import re
from typing import List, Optional

from proofstack.models import (
    EvidenceItem,
    Finding,
    FindingImpact,
    FindingType,
    PrivilegeAnalysis,
    PrivilegeClaim,
    PrivilegeType,
)

logger = logging.getLogger(__name__)

PRIVILEGE_REFERENCE = "FRE 502"

# Attorney-client privilege markers
ATTORNEY_CLIENT_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"attorney.{0,20}client",
        r"legal advice",
        r"privileged.{0,10}confidential",
        r"counsel.{0,20}communication",
    )
)

# Work product markers
WORK_PRODUCT_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"prepared.{0,20}litigation",
        r"trial preparation",
        r"litigation strategy",
        r"attorney work product",
    )
)

SCREENS = (
    (
        PrivilegeType.ATTORNEY_CLIENT,
        ATTORNEY_CLIENT_PATTERNS,
        "Potential attorney-client privileged communication",
        "Communication appears to be between attorney and client for legal advice",
    ),
    (
        PrivilegeType.WORK_PRODUCT,
        WORK_PRODUCT_PATTERNS,
        "Potential attorney work product",
        "Document appears to be prepared in anticipation of litigation",
    ),
)

PRIVILEGE_RECOMMENDATIONS = (
    "Review privilege claims and consider redaction",
    "Prepare privilege log for withheld information",
)


def screen_privilege(text: Optional[str]) -> PrivilegeAnalysis:
    """
    Screen text for privileged content.

    Each pattern that matches yields one claim. Any claim requires redaction
    review.

    Args:
        text: Free text to screen (None is treated as empty)

    Returns:
        PrivilegeAnalysis with one FRE 502 concern finding per claim
    """
    text = text or ""
    claims: List[PrivilegeClaim] = []

    for privilege_type, patterns, description, basis in SCREENS:
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                claims.append(PrivilegeClaim(
                    type=privilege_type,
                    description=description,
                    basis=basis,
                    matched_text=match.group(0),
                ))

    findings = [
        Finding(
            type=FindingType.CONCERN,
            description=f'{claim.description}: "{claim.matched_text}"',
            impact=FindingImpact.MEDIUM,
            rule_reference=PRIVILEGE_REFERENCE,
        )
        for claim in claims
    ]

    if claims:
        logger.info(f"Privilege screen flagged {len(claims)} passage(s) for review")

    return PrivilegeAnalysis(
        claims=claims,
        redaction_required=bool(claims),
        findings=findings,
        recommendations=list(PRIVILEGE_RECOMMENDATIONS) if claims else [],
    )


def screen_evidence(evidence: EvidenceItem) -> PrivilegeAnalysis:
    """Screen an evidence item's name and description."""
    parts = [evidence.name or "", evidence.description]
    return screen_privilege("\n".join(p for p in parts if p))
