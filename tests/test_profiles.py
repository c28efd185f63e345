"""Tests for scoring profiles."""

import logging
from dataclasses import FrozenInstanceError

import pytest

from proofstack.standards.profiles import (
    CONSERVATIVE,
    DEFAULT,
    ENV_VAR_PROFILE,
    PROFILES,
    ScoringProfile,
    get_profile,
    profile_from_env,
)


class TestBuiltInProfiles:
    """Tests for the DEFAULT and CONSERVATIVE profiles."""

    def test_profiles_registered(self):
        assert PROFILES == {"default": DEFAULT, "conservative": CONSERVATIVE}

    def test_conservative_is_stricter(self):
        assert CONSERVATIVE.auth_base <= DEFAULT.auth_base
        assert CONSERVATIVE.prejudice_high_penalty > DEFAULT.prejudice_high_penalty
        assert CONSERVATIVE.hearsay_reset_score < DEFAULT.hearsay_reset_score

    def test_profiles_are_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT.auth_base = 0


class TestProfileValidation:
    """Tests for the ordering checks in ScoringProfile."""

    def test_original_must_beat_justified_copy(self):
        with pytest.raises(ValueError, match="original"):
            ScoringProfile(
                name="BAD",
                description="",
                best_evidence_original_bonus=40,
                best_evidence_justified_copy_bonus=45,
            )

    def test_hearsay_reset_below_base(self):
        with pytest.raises(ValueError, match="reset"):
            ScoringProfile(name="BAD", description="", hearsay_reset_score=40)

    def test_high_penalty_above_medium(self):
        with pytest.raises(ValueError, match="High prejudicial"):
            ScoringProfile(
                name="BAD",
                description="",
                prejudice_medium_penalty=30,
                prejudice_high_penalty=30,
            )

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError, match="must not be negative"):
            ScoringProfile(name="BAD", description="", auth_signature_bonus=-5)


class TestGetProfile:
    """Tests for profile lookup."""

    def test_case_insensitive(self):
        assert get_profile("CONSERVATIVE") is CONSERVATIVE
        assert get_profile(" default ") is DEFAULT

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Invalid scoring profile"):
            get_profile("lenient")


class TestProfileFromEnv:
    """Tests for environment-driven profile selection."""

    def test_unset_defaults(self, monkeypatch):
        monkeypatch.delenv(ENV_VAR_PROFILE, raising=False)
        assert profile_from_env() is DEFAULT

    def test_env_selects_profile(self, monkeypatch):
        monkeypatch.setenv(ENV_VAR_PROFILE, "conservative")
        assert profile_from_env() is CONSERVATIVE

    def test_invalid_env_warns_and_defaults(self, monkeypatch, caplog):
        monkeypatch.setenv(ENV_VAR_PROFILE, "lenient")
        with caplog.at_level(logging.WARNING, logger="proofstack.standards.profiles"):
            assert profile_from_env() is DEFAULT
        assert "Invalid scoring profile" in caplog.text
