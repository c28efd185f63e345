"""
ProofStack - Evidence Analysis Package

Jurisdiction-aware admissibility analysis, privilege screening and prompts
for narrative services.
"""

from proofstack.analysis.evidence_analyzer import (
    DOCUMENTARY_TYPES,
    CustodyAnalysis,
    EvidenceAnalyzer,
    analyze_chain_of_custody,
    determine_authenticity,
)
from proofstack.analysis.narrative import (
    NarrativeGenerator,
    NarrativeResponse,
    parse_narrative,
    request_narrative,
)
from proofstack.analysis.privilege import screen_evidence, screen_privilege

__all__ = [
    "DOCUMENTARY_TYPES",
    "CustodyAnalysis",
    "EvidenceAnalyzer",
    "analyze_chain_of_custody",
    "determine_authenticity",
    "NarrativeGenerator",
    "NarrativeResponse",
    "parse_narrative",
    "request_narrative",
    "screen_evidence",
    "screen_privilege",
]
