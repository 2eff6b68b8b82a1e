from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PayloadKind(str, Enum):
    """Shape family of a parsed upload."""

    TABULAR_CSV = "tabular-csv"
    TABULAR_SPREADSHEET = "tabular-spreadsheet"
    STRUCTURED_JSON = "structured-json"


@dataclass(frozen=True)
class ParsedPayload:
    """Normalized row-oriented content of an uploaded file."""

    kind: PayloadKind
    rows: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """JSONB-ready representation stored alongside the file record."""
        return {"kind": self.kind.value, "rows": [dict(row) for row in self.rows]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParsedPayload":
        return cls(
            kind=PayloadKind(data["kind"]),
            rows=tuple(dict(row) for row in data.get("rows", [])),
        )
