"""
ProofStack - Scoring Profiles

Tunable base scores and increments for the per-rule scorers.

Each scorer starts from a fixed base score and adds or subtracts fixed
increments when specific metadata is present or absent. The magnitudes were
tuned empirically, so they live here as data rather than in the scorers:

- DEFAULT: the calibration used by the questionnaire
- CONSERVATIVE: smaller bonuses, larger penalties

Any profile must keep the relative ordering the scorers rely on (an original
outscores a justified copy, which outscores an unjustified one; a hearsay
reset sits below every other FRE 803 path; and so on). The compliance
threshold is not part of a profile.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Dict

logger = logging.getLogger(__name__)

ENV_VAR_PROFILE = "PROOFSTACK_SCORING_PROFILE"


@dataclass(frozen=True)
class ScoringProfile:
    """
    Scoring constants for the built-in rule scorers.

    Attributes:
        name: Profile identifier (e.g., "DEFAULT")
        description: Human-readable description of the profile
        auth_base: FRE 901 base score
        auth_signature_bonus: FRE 901 bonus for a digital signature
        auth_custody_bonus: FRE 901 bonus for chain of custody entries
        self_auth_base: FRE 902 base score
        self_auth_public_record_bonus: FRE 902 bonus for public records
        self_auth_authority_bonus: FRE 902 bonus for a named issuing authority
        best_evidence_base: FRE 1001 base score
        best_evidence_original_bonus: FRE 1001 bonus for an original
        best_evidence_justified_copy_bonus: FRE 1001 bonus for a justified copy
        hearsay_base: FRE 803 base score
        hearsay_business_record_bonus: FRE 803(6) business record bonus
        hearsay_exception_bonus: FRE 803 bonus for another stated exception
        hearsay_record_tag_bonus: FRE 803 bonus for a business_record tag
            without a complete foundation
        hearsay_reset_score: FRE 803 score for hearsay without an exception
        relevance_base: FRE 401 base score
        relevance_multiplier: FRE 401 points per relevance score point
        prejudice_base: FRE 403 admissible-by-default base score
        prejudice_low_bonus: FRE 403 bonus for a low prejudicial risk
        prejudice_medium_penalty: FRE 403 penalty for a medium risk
        prejudice_high_penalty: FRE 403 penalty for a high risk
    """
    name: str
    description: str
    auth_base: int = 40
    auth_signature_bonus: int = 30
    auth_custody_bonus: int = 30
    self_auth_base: int = 45
    self_auth_public_record_bonus: int = 45
    self_auth_authority_bonus: int = 10
    best_evidence_base: int = 35
    best_evidence_original_bonus: int = 60
    best_evidence_justified_copy_bonus: int = 45
    hearsay_base: int = 35
    hearsay_business_record_bonus: int = 50
    hearsay_exception_bonus: int = 40
    hearsay_record_tag_bonus: int = 10
    hearsay_reset_score: int = 20
    relevance_base: int = 35
    relevance_multiplier: float = 0.65
    prejudice_base: int = 70
    prejudice_low_bonus: int = 20
    prejudice_medium_penalty: int = 15
    prejudice_high_penalty: int = 30

    def __post_init__(self) -> None:
        if self.best_evidence_original_bonus <= self.best_evidence_justified_copy_bonus:
            raise ValueError("An original must outscore a justified copy")
        if self.best_evidence_justified_copy_bonus <= 0:
            raise ValueError("A justified copy must outscore an unjustified copy")
        if self.hearsay_reset_score >= self.hearsay_base:
            raise ValueError("Hearsay reset score must sit below the FRE 803 base")
        if self.prejudice_high_penalty <= self.prejudice_medium_penalty:
            raise ValueError("High prejudicial risk must cost more than medium")
        if self.relevance_multiplier <= 0:
            raise ValueError("Relevance multiplier must be positive")
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (int, float)) and value < 0:
                raise ValueError(f"{f.name} must not be negative")


# Built-in scoring profiles

DEFAULT = ScoringProfile(
    name="DEFAULT",
    description="Calibration used by the evidence questionnaire",
)

CONSERVATIVE = ScoringProfile(
    name="CONSERVATIVE",
    description=(
        "Smaller bonuses and larger penalties - fewer rules reach the "
        "compliance threshold on partial documentation"
    ),
    auth_base=35,
    auth_signature_bonus=30,
    auth_custody_bonus=30,
    self_auth_base=40,
    self_auth_public_record_bonus=45,
    self_auth_authority_bonus=10,
    best_evidence_base=30,
    best_evidence_original_bonus=60,
    best_evidence_justified_copy_bonus=40,
    hearsay_base=30,
    hearsay_business_record_bonus=45,
    hearsay_exception_bonus=35,
    hearsay_record_tag_bonus=5,
    hearsay_reset_score=15,
    relevance_base=30,
    relevance_multiplier=0.7,
    prejudice_base=70,
    prejudice_low_bonus=15,
    prejudice_medium_penalty=20,
    prejudice_high_penalty=40,
)

PROFILES: Dict[str, ScoringProfile] = {
    "default": DEFAULT,
    "conservative": CONSERVATIVE,
}


def get_profile(name: str) -> ScoringProfile:
    """
    Look up a built-in profile by name.

    Args:
        name: Profile name, case-insensitive ('default', 'conservative')

    Returns:
        The matching ScoringProfile

    Raises:
        ValueError: If no profile has that name
    """
    key = name.strip().lower()
    try:
        return PROFILES[key]
    except KeyError:
        raise ValueError(
            f"Invalid scoring profile: '{name}'. "
            f"Must be one of: {', '.join(PROFILES)}"
        )


def profile_from_env() -> ScoringProfile:
    """Select a profile from PROOFSTACK_SCORING_PROFILE, defaulting to DEFAULT."""
    name = os.environ.get(ENV_VAR_PROFILE, "").strip()
    if not name:
        return DEFAULT
    try:
        return get_profile(name)
    except ValueError as e:
        logger.warning(f"{e}. Defaulting to DEFAULT profile.")
        return DEFAULT
