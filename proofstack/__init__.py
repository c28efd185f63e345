"""
ProofStack - rules of evidence compliance scoring.

Scores evidence items against the Federal and Indiana Rules of Evidence and
classifies their likelihood of admissibility.
"""

__version__ = "0.1.0"
