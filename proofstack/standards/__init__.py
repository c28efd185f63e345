"""
ProofStack - Rules of Evidence Package

Rule catalog and compliance evaluator for scoring evidence against the
Federal and Indiana Rules of Evidence. Public APIs are re-exported here.

Module Organization:
- catalog.py: RuleCatalog, embedded rule tables, alias normalization
- profiles.py: ScoringProfile constants (DEFAULT, CONSERVATIVE)
- scorecard.py: Scorecard accumulator used by the scorers
- engine.py: ComplianceEvaluator and aggregation helpers
- rules_authentication.py: FRE 901, IRE 901, FRE 902
- rules_best_evidence.py: FRE 1001-1008
- rules_hearsay.py: FRE 803 / 803(6)
- rules_relevance.py: FRE 401, FRE 403
"""

from proofstack.standards.catalog import (
    ANALYSIS_CRITERIA,
    CATALOG_VERSION,
    FEDERAL_RULES,
    INDIANA_RULES,
    RULE_ALIASES,
    RuleCatalog,
    normalize_rule_id,
)
from proofstack.standards.engine import (
    APPLICABLE_RULES,
    ComplianceEvaluator,
    classify_admissibility,
    coerce_evidence,
    overall_compliance,
)
from proofstack.standards.profiles import (
    CONSERVATIVE,
    DEFAULT,
    ScoringProfile,
    get_profile,
    profile_from_env,
)

__all__ = [
    # Catalog
    "ANALYSIS_CRITERIA",
    "CATALOG_VERSION",
    "FEDERAL_RULES",
    "INDIANA_RULES",
    "RULE_ALIASES",
    "RuleCatalog",
    "normalize_rule_id",
    # Engine
    "APPLICABLE_RULES",
    "ComplianceEvaluator",
    "classify_admissibility",
    "coerce_evidence",
    "overall_compliance",
    # Profiles
    "CONSERVATIVE",
    "DEFAULT",
    "ScoringProfile",
    "get_profile",
    "profile_from_env",
]
