"""JSON export for compliance and admissibility analysis results.

Serializes ComplianceResult and AnalysisResult models (or lists of them),
handling datetimes, enums, paths and nested Pydantic models.
"""

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from proofstack.models import AnalysisResult, ComplianceResult

Exportable = Union[AnalysisResult, ComplianceResult, Sequence[Union[AnalysisResult, ComplianceResult]]]


class EvidenceJSONEncoder(json.JSONEncoder):
    """JSON encoder for evidence analysis data types.

    Handles datetimes (ISO 8601), paths, enum values and nested
    Pydantic models left in the plain data returned by to_dict.
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        if hasattr(obj, "model_dump"):
            return obj.model_dump()
        return super().default(obj)


class JSONExporter:
    """Exporter for analysis results to JSON strings or files."""

    def __init__(self, indent: int = 2, sort_keys: bool = False):
        """Initialize the JSON exporter.

        Args:
            indent: Number of spaces for indentation (default: 2)
            sort_keys: Whether to sort keys alphabetically (default: False)
        """
        self.indent = indent
        self.sort_keys = sort_keys

    def to_dict(self, result: Exportable) -> Union[dict, List[dict]]:
        """Convert a result (or list of results) to dictionaries.

        Datetimes and enums are kept as Python objects; to_json converts
        them with EvidenceJSONEncoder. ComplianceResult entries gain a
        ``percentage`` key and
        AnalysisResult entries a ``compliant_rules`` key.
        """
        if isinstance(result, (AnalysisResult, ComplianceResult)):
            return self._result_dict(result)
        return [self._result_dict(r) for r in result]

    def _result_dict(self, result: Union[AnalysisResult, ComplianceResult]) -> dict:
        if isinstance(result, ComplianceResult):
            return self._compliance_dict(result)
        if not isinstance(result, AnalysisResult):
            raise TypeError(f"Cannot export {type(result).__name__} as an analysis result")

        data = result.model_dump()
        data["rule_compliance"] = [self._compliance_dict(r) for r in result.rule_compliance]
        data["compliant_rules"] = result.compliant_rules
        return data

    def _compliance_dict(self, result: ComplianceResult) -> dict:
        data = result.model_dump()
        data["percentage"] = round(result.percentage, 1)
        return data

    def to_json(self, result: Exportable) -> str:
        return json.dumps(
            self.to_dict(result),
            cls=EvidenceJSONEncoder,
            indent=self.indent,
            sort_keys=self.sort_keys,
        )

    def to_file(
        self,
        result: Exportable,
        file_path: Union[str, Path],
        encoding: str = "utf-8",
    ) -> None:
        """Save a result to a JSON file, creating parent directories."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding=encoding) as f:
            f.write(self.to_json(result))


def export_to_json(
    result: Exportable,
    output_path: Optional[Union[str, Path]] = None,
    indent: int = 2,
) -> str:
    """Export a result to JSON, optionally writing it to output_path.

    Returns:
        JSON string representation of the result
    """
    exporter = JSONExporter(indent=indent)
    json_str = exporter.to_json(result)

    if output_path:
        exporter.to_file(result, output_path)

    return json_str
