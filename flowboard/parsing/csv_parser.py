import io

import pandas as pd

from flowboard.ingestion.exceptions import ParseError
from flowboard.parsing.base import BaseContentParser
from flowboard.parsing.frames import frame_to_records
from flowboard.parsing.models import ParsedPayload, PayloadKind


class CsvParser(BaseContentParser):
    """Parses CSV uploads with pandas, keeping every value as text.

    The first row is the header. Rows shorter than the header get empty
    strings for the missing trailing fields; rows longer than the header are
    rejected. Duplicate header names are suffixed by pandas (``name.1``).
    """

    def parse(self, raw_bytes: bytes) -> ParsedPayload:
        try:
            frame = pd.read_csv(
                io.BytesIO(raw_bytes),
                dtype=str,
                keep_default_na=False,
                encoding="utf-8-sig",
            )
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"CSV is not valid UTF-8: {exc}",
                user_message="The CSV file is not UTF-8 encoded.",
            ) from exc
        except pd.errors.EmptyDataError as exc:
            raise ParseError(
                "CSV has no header row",
                user_message="The CSV file is empty.",
            ) from exc
        except pd.errors.ParserError as exc:
            raise ParseError(
                f"Malformed CSV: {exc}",
                user_message="The CSV file is malformed.",
            ) from exc

        # pandas silently promotes the first column to an index when every
        # data row carries one field more than the header.
        if len(frame) and not isinstance(frame.index, pd.RangeIndex):
            raise ParseError(
                "Malformed CSV: data rows have more fields than the header",
                user_message="The CSV file is malformed.",
            )
        return ParsedPayload(kind=PayloadKind.TABULAR_CSV, rows=frame_to_records(frame))
