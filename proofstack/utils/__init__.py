"""
Utility modules for ProofStack.

This package contains shared utilities, currently the custom exception
hierarchy used across the catalog, evaluator and command line interface.
"""

from proofstack.utils.exceptions import (
    CatalogError,
    EvidenceInputError,
    ProofStackError,
    UnknownRuleError,
)

__all__ = [
    "ProofStackError",
    "UnknownRuleError",
    "CatalogError",
    "EvidenceInputError",
]
