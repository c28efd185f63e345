"""Output formatters for analysis results."""

from proofstack.output.json_export import EvidenceJSONEncoder, JSONExporter, export_to_json

__all__ = ["EvidenceJSONEncoder", "JSONExporter", "export_to_json"]
