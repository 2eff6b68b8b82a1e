from flowboard.ingestion.exceptions import ParseError
from flowboard.parsing import media_types
from flowboard.parsing.base import BaseContentParser
from flowboard.parsing.csv_parser import CsvParser
from flowboard.parsing.json_parser import JsonParser
from flowboard.parsing.models import ParsedPayload
from flowboard.parsing.spreadsheet_parser import XlsParser, XlsxParser


class ParserFactory:
    """Creates the parser adapter registered for a media type."""

    ADAPTERS: dict[str, type[BaseContentParser]] = {
        media_types.CSV: CsvParser,
        media_types.XLS: XlsParser,
        media_types.XLSX: XlsxParser,
        media_types.JSON: JsonParser,
    }

    @classmethod
    def for_media_type(cls, media_type: str) -> BaseContentParser:
        normalized = media_types.normalize_media_type(media_type)
        adapter_cls = cls.ADAPTERS.get(normalized)
        if adapter_cls is None:
            raise ParseError(
                f"No parser for media type '{normalized}'. Choose from: {sorted(cls.ADAPTERS)}",
                user_message="This file type is not supported.",
            )
        return adapter_cls()


def parse(raw_bytes: bytes, media_type: str) -> ParsedPayload:
    """Parse raw upload bytes with the adapter registered for ``media_type``."""
    return ParserFactory.for_media_type(media_type).parse(raw_bytes)
