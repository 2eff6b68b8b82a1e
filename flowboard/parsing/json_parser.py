import json
from typing import Any

from flowboard.ingestion.exceptions import ParseError
from flowboard.parsing.base import BaseContentParser
from flowboard.parsing.models import ParsedPayload, PayloadKind


def _reject_constant(token: str) -> Any:
    raise ParseError(
        f"Invalid JSON: {token} is not a JSON value",
        user_message="The JSON file is not valid JSON.",
    )


class JsonParser(BaseContentParser):
    """Parses a JSON document into records.

    An array of objects passes through unchanged and a single object becomes a
    one-element list. Any other top-level shape is rejected, as are the
    non-standard ``NaN``, ``Infinity`` and ``-Infinity`` literals.
    """

    def parse(self, raw_bytes: bytes) -> ParsedPayload:
        try:
            document = json.loads(raw_bytes.decode("utf-8-sig"), parse_constant=_reject_constant)
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"JSON is not valid UTF-8: {exc}",
                user_message="The JSON file is not UTF-8 encoded.",
            ) from exc
        except json.JSONDecodeError as exc:
            raise ParseError(
                f"Invalid JSON: {exc}",
                user_message="The JSON file is not valid JSON.",
            ) from exc

        return ParsedPayload(kind=PayloadKind.STRUCTURED_JSON, rows=self._to_rows(document))

    @staticmethod
    def _to_rows(document: Any) -> tuple[dict[str, Any], ...]:
        if isinstance(document, dict):
            return (document,)
        if not isinstance(document, list):
            raise ParseError(
                f"JSON document must be an object or an array, got {type(document).__name__}",
                user_message="The JSON file must contain an object or a list of objects.",
            )
        for index, item in enumerate(document):
            if not isinstance(item, dict):
                raise ParseError(
                    f"JSON array item {index} is {type(item).__name__}, expected object",
                    user_message="The JSON file must contain an object or a list of objects.",
                )
        return tuple(document)
