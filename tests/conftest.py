"""Pytest configuration and shared fixtures for ProofStack tests."""

import json

import pytest

from proofstack.models import EvidenceItem
from proofstack.standards.catalog import RuleCatalog
from proofstack.standards.engine import ComplianceEvaluator


@pytest.fixture
def catalog():
    """Default embedded rule catalog."""
    return RuleCatalog.default()


@pytest.fixture
def evaluator(catalog):
    """Evaluator using the default catalog and scoring profile."""
    return ComplianceEvaluator(catalog)


@pytest.fixture
def custody_chain():
    """Complete, signed and witnessed chain of custody."""
    return [
        {
            "handler": "Officer Smith",
            "timestamp": "2023-03-01T10:00:00",
            "action": "collected",
            "location": "Evidence room A",
            "purpose": "Initial seizure",
            "signature": "sig-smith",
            "witnessSignature": "sig-doe",
        },
        {
            "handler": "Analyst Jones",
            "timestamp": "2023-03-02T08:30:00",
            "action": "transferred",
            "location": "Forensic lab",
            "purpose": "Imaging",
            "signature": "sig-jones",
        },
    ]


@pytest.fixture
def strong_evidence_data(custody_chain):
    """Evidence mapping with every metadata field documented (camelCase keys)."""
    return {
        "id": "EV-001",
        "type": "Digital",
        "name": "Accounts ledger export",
        "description": "Ledger exported from the accounting server",
        "source": "Accounting server",
        "dateCollected": "2023-03-01T10:00:00",
        "jurisdiction": "Federal",
        "metadata": {
            "fileName": "ledger.xlsx",
            "fileSize": 20480,
            "fileType": "xlsx",
            "createdDate": "2023-01-05T09:00:00",
            "modifiedDate": "2023-02-01T17:30:00",
            "hashSHA256": "ab" * 32,
            "hashMD5": "cd" * 16,
            "digitalSignature": "sig-abc123",
            "chainOfCustody": custody_chain,
            "isOriginal": True,
            "documentType": "public_record",
            "issuingAuthority": "County Recorder",
            "recordKeeper": "Jane Clerk",
            "regularCourse": True,
            "isHearsay": True,
            "hearsayException": "business records",
            "relevanceScore": 100,
            "probativeValue": "high",
            "prejudicialRisk": "low",
            "deviceInfo": "Dell PowerEdge R740",
            "softwareVersion": "FTK Imager 4.7",
        },
    }


@pytest.fixture
def strong_evidence(strong_evidence_data):
    """Validated EvidenceItem with every metadata field documented."""
    return EvidenceItem.model_validate(strong_evidence_data)


@pytest.fixture
def bare_evidence():
    """Evidence with no metadata at all."""
    return EvidenceItem(id="EV-000", type="Digital")


@pytest.fixture
def evidence_file(tmp_path, strong_evidence_data):
    """Strong evidence written to a JSON file."""
    file_path = tmp_path / "evidence.json"
    file_path.write_text(json.dumps(strong_evidence_data), encoding="utf-8")
    return file_path


@pytest.fixture
def bare_evidence_file(tmp_path):
    """Evidence JSON file with an empty metadata record."""
    file_path = tmp_path / "bare.json"
    file_path.write_text(json.dumps({"id": "EV-000", "metadata": {}}), encoding="utf-8")
    return file_path
