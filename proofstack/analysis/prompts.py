"""
Prompt templates for legally grounded evidence narratives.

The templates embed the text of the applicable rules so that any narrative
produced by an external text-generation service is anchored to the same
rule catalog the compliance scores come from.
"""

CRITIQUE_PROMPT = """As a legal expert specializing in evidence law, analyze the following evidence submission for compliance with Federal Rules of Evidence and Indiana Rules of Evidence.

RELEVANT LEGAL STANDARDS:
{rule_context}

EVIDENCE DETAILS:
Type: {evidence_type}
Description: {description}
Jurisdiction: {jurisdiction}
Is Original: {is_original}

CHAIN OF CUSTODY STATUS:
Complete: {custody_complete}
Entries: {custody_entries}
{custody_gaps}
METADATA AVAILABLE:
{metadata_fields}

RULE-BASED COMPLIANCE SCORES:
{compliance_summary}

Please provide a detailed analysis focusing on:
1. Specific rule compliance issues
2. Authentication challenges under FRE/IRE 901-902
3. Best Evidence Rule considerations under FRE/IRE 1001-1008
4. Chain of custody concerns
5. Technical authentication requirements
6. Specific recommendations with rule citations

Format your response as JSON:

{{
  "strengths": ["... (rule citation)"],
  "weaknesses": ["... (rule citation)"],
  "recommendations": ["... (rule citation)"]
}}
"""

SUGGESTIONS_PROMPT = """As a legal expert, provide specific suggestions for strengthening this evidence submission for court admissibility.

RELEVANT LEGAL STANDARDS:
{rule_context}

EVIDENCE TYPE: {evidence_type}
JURISDICTION: {jurisdiction}

OPEN ISSUES FROM RULE-BASED REVIEW:
{open_issues}

Focus on actionable steps that address:
1. Authentication requirements (FRE/IRE 901-902)
2. Chain of custody documentation
3. Technical verification methods
4. Metadata preservation
5. Best Evidence Rule compliance

Provide specific, practical recommendations with rule citations. Format your response as JSON:

{{
  "strengths": [],
  "weaknesses": [],
  "recommendations": ["... (rule citation)"]
}}
"""

RULE_CONTEXT_ENTRY = """{rule_number}: {title}
{description}
Requirements: {requirements}"""

PROMPTS = {
    "critique": CRITIQUE_PROMPT,
    "suggestions": SUGGESTIONS_PROMPT,
}
