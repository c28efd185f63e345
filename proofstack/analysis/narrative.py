"""
Narrative requests to an external text-generation service.

The service itself is out of scope; anything with a ``generate(prompt)``
method can be plugged in. Replies are expected to hold a JSON object with
strengths, weaknesses and recommendations. Replies that do not parse are
kept as raw text so callers can still show them.
"""

import json
import logging
from typing import List, Optional, Protocol

from pydantic import BaseModel, Field, field_validator

from proofstack.analysis.evidence_analyzer import EvidenceAnalyzer
from proofstack.standards.engine import EvidenceInput

logger = logging.getLogger(__name__)


class NarrativeGenerator(Protocol):
    """Anything that turns a prompt into a text reply."""

    def generate(self, prompt: str) -> str:
        ...


class NarrativeResponse(BaseModel):
    """Parsed narrative reply."""

    kind: str = Field(..., description="Prompt kind: critique or suggestions")
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    raw_text: Optional[str] = Field(None, description="Unparsed reply when JSON was not found")

    @field_validator("strengths", "weaknesses", "recommendations", mode="before")
    @classmethod
    def coerce_items(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(item) for item in v]

    @property
    def is_structured(self) -> bool:
        return self.raw_text is None


def parse_narrative(response: str, kind: str) -> NarrativeResponse:
    """
    Extract the JSON object from a narrative reply.

    Args:
        response: Text returned by the generator
        kind: Prompt kind the reply answers

    Returns:
        NarrativeResponse; raw_text is set when no usable JSON was found
    """
    json_start = response.find("{")
    json_end = response.rfind("}") + 1
    if json_start < 0 or json_end <= json_start:
        logger.warning("Narrative response missing JSON, keeping raw text")
        return NarrativeResponse(kind=kind, raw_text=response)

    try:
        result = json.loads(response[json_start:json_end])
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse narrative JSON response: {e}, keeping raw text")
        return NarrativeResponse(kind=kind, raw_text=response)

    if not isinstance(result, dict):
        logger.warning("Narrative JSON is not an object, keeping raw text")
        return NarrativeResponse(kind=kind, raw_text=response)

    return NarrativeResponse(
        kind=kind,
        strengths=result.get("strengths"),
        weaknesses=result.get("weaknesses"),
        recommendations=result.get("recommendations"),
    )


def request_narrative(
    generator: NarrativeGenerator,
    evidence: EvidenceInput,
    analyzer: Optional[EvidenceAnalyzer] = None,
    kind: str = "critique",
) -> NarrativeResponse:
    """
    Build a prompt for the evidence, send it to the generator and parse the reply.

    Errors raised by the generator propagate to the caller.

    Raises:
        ValueError: If kind is not a known prompt kind
    """
    analyzer = analyzer or EvidenceAnalyzer()
    prompt = analyzer.build_prompt(evidence, kind)
    logger.debug(f"Requesting {kind} narrative ({len(prompt)} characters)")
    response = generator.generate(prompt)
    return parse_narrative(response, kind)
