"""Tests for the rule catalog."""

import json

import pytest
import yaml

from proofstack.models import Jurisdiction, LegalRule, RuleCategory
from proofstack.standards.catalog import (
    ANALYSIS_CRITERIA,
    FEDERAL_RULES,
    INDIANA_RULES,
    RULE_ALIASES,
    RuleCatalog,
    normalize_rule_id,
)
from proofstack.utils.exceptions import CatalogError


class TestNormalizeRuleId:
    """Tests for rule id normalization and aliases."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("fre-901", "fre-901"),
            ("FRE_901", "fre-901"),
            ("FRE 901", "fre-901"),
            ("FRE_1002", "fre-1001"),
            ("fre-1008", "fre-1001"),
            ("FRE_803_6", "fre-803"),
            ("IRE_1001", "fre-1001"),
            ("ire_901", "ire-901"),
            ("fre-999", "fre-999"),
        ],
    )
    def test_normalization(self, raw, expected):
        assert normalize_rule_id(raw) == expected

    def test_aliases_are_read_only(self):
        with pytest.raises(TypeError):
            RULE_ALIASES["fre-9999"] = "fre-901"


class TestDefaultCatalog:
    """Tests for the embedded catalog."""

    def test_contains_embedded_rules(self, catalog):
        assert len(catalog) == len(FEDERAL_RULES) + len(INDIANA_RULES)
        for rule_id in ("fre-901", "fre-902", "fre-1001", "fre-401", "fre-403",
                        "fre-803", "fre-502", "frcp-26", "ire-901"):
            assert rule_id in catalog

    def test_every_criteria_sums_to_one_hundred(self):
        for criteria in ANALYSIS_CRITERIA:
            assert criteria.max_score == 100, criteria.rule_id

    def test_get_rule_by_legacy_id(self, catalog):
        rule = catalog.get_rule_by_id("FRE_1002")
        assert rule is not None
        assert rule.rule_id == "fre-1001"

    def test_unknown_rule_is_none(self, catalog):
        assert catalog.get_rule_by_id("fre-999") is None
        assert catalog.get_criteria_for_rule("fre-999") is None
        assert "fre-999" not in catalog

    def test_rules_without_criteria(self, catalog):
        assert catalog.get_rule_by_id("fre-502") is not None
        assert catalog.get_criteria_for_rule("fre-502") is None

    def test_get_rules_by_category(self, catalog):
        ids = [r.rule_id for r in catalog.get_rules_by_category(RuleCategory.RELEVANCE)]
        assert ids == ["fre-401", "fre-402", "fre-403"]
        assert catalog.get_rules_by_category("Hearsay")[0].rule_id == "fre-803"

    def test_get_rules_by_unknown_category(self, catalog):
        assert catalog.get_rules_by_category("Spoliation") == []

    def test_get_rules_by_jurisdiction(self, catalog):
        indiana = catalog.get_rules_by_jurisdiction(Jurisdiction.INDIANA)
        assert [r.rule_id for r in indiana] == ["ire-901"]
        federal = catalog.get_rules_by_jurisdiction("Federal")
        assert "ire-901" not in [r.rule_id for r in federal]

    def test_generate_citations_skips_unknown(self, catalog):
        citations = catalog.generate_citations(["fre-901", "fre-999", "FRE_1002"])
        assert citations == ["Fed. R. Evid. 901", "Fed. R. Evid. 1001-1008"]

    def test_catalog_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog._rules["fre-999"] = catalog.get_rule_by_id("fre-901")


class TestCatalogConstruction:
    """Tests for catalog validation."""

    def test_duplicate_rule_ids(self):
        with pytest.raises(CatalogError, match="Duplicate rule id"):
            RuleCatalog(FEDERAL_RULES + FEDERAL_RULES[:1])

    def test_criteria_for_unknown_rule(self):
        with pytest.raises(CatalogError, match="unknown rule"):
            RuleCatalog(FEDERAL_RULES, ANALYSIS_CRITERIA)

    def test_duplicate_criteria(self):
        with pytest.raises(CatalogError, match="Duplicate criteria"):
            RuleCatalog(
                FEDERAL_RULES + INDIANA_RULES,
                ANALYSIS_CRITERIA + ANALYSIS_CRITERIA[:1],
            )


CUSTOM_RULE = {
    "id": "fre-406",
    "title": "Habit; Routine Practice",
    "jurisdiction": "Federal",
    "ruleNumber": "FRE 406",
    "category": "Relevance",
    "description": "Evidence of a routine practice may be admitted.",
    "requirements": ["Routine practice established"],
    "citation": "Fed. R. Evid. 406",
}


class TestCatalogFromFile:
    """Tests for loading custom catalogs."""

    def test_load_yaml(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(yaml.safe_dump({"rules": [CUSTOM_RULE]}), encoding="utf-8")

        catalog = RuleCatalog.from_file(rules_file)
        assert "fre-406" in catalog
        assert "fre-901" in catalog
        assert catalog.get_criteria_for_rule("fre-406") is None

    def test_load_json_with_criteria(self, tmp_path):
        rules_file = tmp_path / "rules.json"
        rules_file.write_text(json.dumps({
            "rules": [CUSTOM_RULE],
            "criteria": [{
                "ruleId": "fre-406",
                "weight": 4,
                "scoringFactors": [{"factor": "Routine", "maxPoints": 50}],
            }],
        }), encoding="utf-8")

        catalog = RuleCatalog.from_file(rules_file)
        assert catalog.get_criteria_for_rule("fre-406").max_score == 50

    def test_custom_rule_replaces_embedded(self, tmp_path):
        override = dict(CUSTOM_RULE, id="fre-401", title="Relevance (local)")
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(yaml.safe_dump({"rules": [override]}), encoding="utf-8")

        catalog = RuleCatalog.from_file(rules_file)
        assert catalog.get_rule_by_id("fre-401").title == "Relevance (local)"
        assert len(catalog) == len(RuleCatalog.default())

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            RuleCatalog.from_file(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        rules_file = tmp_path / "rules.txt"
        rules_file.write_text("rules: []", encoding="utf-8")
        with pytest.raises(CatalogError, match="Unsupported format"):
            RuleCatalog.from_file(rules_file)

    def test_missing_rules_key(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(yaml.safe_dump({"criteria": []}), encoding="utf-8")
        with pytest.raises(CatalogError, match="'rules' key"):
            RuleCatalog.from_file(rules_file)

    def test_invalid_rule_definition(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(yaml.safe_dump({"rules": [{"id": "fre-406"}]}), encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid rule definition"):
            RuleCatalog.from_file(rules_file)

    def test_malformed_json(self, tmp_path):
        rules_file = tmp_path / "rules.json"
        rules_file.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Could not parse"):
            RuleCatalog.from_file(rules_file)

    def test_loaded_rules_are_models(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(yaml.safe_dump({"rules": [CUSTOM_RULE]}), encoding="utf-8")
        rule = RuleCatalog.from_file(rules_file).get_rule_by_id("FRE_406")
        assert isinstance(rule, LegalRule)
        assert rule.requirements == ("Routine practice established",)
