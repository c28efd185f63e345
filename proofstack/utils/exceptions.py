"""
Custom exception classes for ProofStack evidence scoring.

This module defines the exception hierarchy for error conditions that can
occur while building the rule catalog, loading evidence, or evaluating
evidence against a rule.
"""


class ProofStackError(Exception):
    """
    Base exception class for all ProofStack errors.

    All custom exceptions in this module inherit from this base class,
    allowing for broad exception handling when needed.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the base exception.

        Args:
            message: Error message describing what went wrong
            details: Optional dictionary with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return a string representation of the exception."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class UnknownRuleError(ProofStackError):
    """
    Raised when a rule id cannot be resolved to a scorable rule.

    A rule is scorable when, after alias normalization, the catalog holds
    both the rule and its analysis criteria and a scorer is registered
    for it. Callers decide how to surface this (skip the rule, show
    "analysis unavailable"); it is never retried or defaulted.

    Attributes:
        rule_id: The rule id exactly as the caller supplied it
        normalized_id: The id after case-folding and alias resolution
    """

    def __init__(self, rule_id: str, normalized_id: str = None):
        """
        Initialize the unknown rule exception.

        Args:
            rule_id: Rule id as supplied by the caller (e.g., 'FRE_999')
            normalized_id: Canonical form that was looked up (e.g., 'fre-999')
        """
        self.rule_id = rule_id
        self.normalized_id = normalized_id or rule_id

        details = {}
        if self.normalized_id != rule_id:
            details["normalized_id"] = self.normalized_id

        super().__init__(f"Unknown rule: {rule_id}", details)


class CatalogError(ProofStackError):
    """
    Raised when a rule catalog cannot be built.

    This exception is raised when:
    - Two rules share the same id
    - Analysis criteria reference a rule that is not in the catalog
    - A custom catalog file is missing, has an unsupported format,
      or does not match the rule schema

    Attributes:
        reason: Specific reason for the failure
        source: Optional path of the catalog file being loaded
    """

    def __init__(self, reason: str, source: str = None):
        """
        Initialize the catalog error.

        Args:
            reason: Specific reason for the failure
            source: Optional path of the catalog file
        """
        self.reason = reason
        self.source = source

        if source:
            message = f"Invalid rule catalog {source}: {reason}"
        else:
            message = f"Invalid rule catalog: {reason}"

        details = {}
        if source:
            details["source"] = source

        super().__init__(message, details)


class EvidenceInputError(ProofStackError):
    """
    Raised when evidence input cannot be read or validated.

    Missing metadata fields are never an error; this covers only input
    that is structurally unusable, such as unreadable files, invalid
    JSON, or values of the wrong type.

    Attributes:
        reason: Specific reason for the failure
        source: Optional path of the evidence file
        cause: Optional underlying exception
    """

    def __init__(
        self,
        reason: str,
        source: str = None,
        cause: Exception = None
    ):
        """
        Initialize the evidence input error.

        Args:
            reason: Specific reason for the failure
            source: Optional path of the evidence file
            cause: Optional underlying exception
        """
        self.reason = reason
        self.source = source
        self.cause = cause

        if source:
            message = f"Failed to load evidence: {source}. {reason}"
        else:
            message = f"Failed to load evidence. {reason}"

        details = {}
        if source:
            details["source"] = source
        if cause:
            details["cause_type"] = type(cause).__name__

        super().__init__(message, details)
