"""Tests for narrative requests and reply parsing."""

import logging

import pytest

from proofstack.analysis.narrative import NarrativeResponse, parse_narrative, request_narrative


class FakeGenerator:
    """Records prompts and returns a canned reply."""

    def __init__(self, reply: str):
        self.reply = reply
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class FailingGenerator:
    def generate(self, prompt: str) -> str:
        raise ConnectionError("service unavailable")


JSON_REPLY = """Here is my analysis:
{
  "strengths": ["Original document provided (FRE 1002)"],
  "weaknesses": ["No hash values (FRE 901(b)(9))"],
  "recommendations": ["Generate SHA-256 hashes (FRE 901(b)(9))"]
}
Let me know if you need more."""


class TestParseNarrative:
    """Tests for JSON extraction from replies."""

    def test_embedded_json(self):
        response = parse_narrative(JSON_REPLY, "critique")
        assert response.is_structured
        assert response.strengths == ["Original document provided (FRE 1002)"]
        assert response.weaknesses == ["No hash values (FRE 901(b)(9))"]
        assert len(response.recommendations) == 1

    def test_missing_keys_default_empty(self):
        response = parse_narrative('{"recommendations": "Obtain a certification"}', "suggestions")
        assert response.strengths == []
        assert response.recommendations == ["Obtain a certification"]

    def test_no_json_keeps_raw_text(self, caplog):
        with caplog.at_level(logging.WARNING, logger="proofstack.analysis.narrative"):
            response = parse_narrative("The evidence looks fine.", "critique")
        assert not response.is_structured
        assert response.raw_text == "The evidence looks fine."
        assert "missing JSON" in caplog.text

    def test_invalid_json_keeps_raw_text(self, caplog):
        reply = "{strengths: [unquoted]}"
        with caplog.at_level(logging.WARNING, logger="proofstack.analysis.narrative"):
            response = parse_narrative(reply, "critique")
        assert response.raw_text == reply
        assert "Failed to parse" in caplog.text

    def test_response_model(self):
        response = NarrativeResponse(kind="critique", strengths=None)
        assert response.strengths == []


class TestRequestNarrative:
    """Tests for the end-to-end narrative request."""

    def test_prompt_sent_and_reply_parsed(self, strong_evidence):
        generator = FakeGenerator(JSON_REPLY)
        response = request_narrative(generator, strong_evidence, kind="critique")
        assert len(generator.prompts) == 1
        assert "RELEVANT LEGAL STANDARDS" in generator.prompts[0]
        assert response.kind == "critique"
        assert response.is_structured

    def test_suggestions_kind(self, bare_evidence):
        generator = FakeGenerator("no json here")
        response = request_narrative(generator, bare_evidence, kind="suggestions")
        assert "OPEN ISSUES" in generator.prompts[0]
        assert response.raw_text == "no json here"

    def test_invalid_kind(self, bare_evidence):
        with pytest.raises(ValueError):
            request_narrative(FakeGenerator("{}"), bare_evidence, kind="summary")

    def test_generator_errors_propagate(self, bare_evidence):
        with pytest.raises(ConnectionError):
            request_narrative(FailingGenerator(), bare_evidence)
