import io
from typing import ClassVar

import pandas as pd

from flowboard.ingestion.exceptions import ParseError
from flowboard.parsing.base import BaseContentParser
from flowboard.parsing.frames import frame_to_records
from flowboard.parsing.models import ParsedPayload, PayloadKind


class SpreadsheetParser(BaseContentParser):
    """Reads the first sheet of a workbook; its first row supplies the keys."""

    ENGINE: ClassVar[str] = ""

    def parse(self, raw_bytes: bytes) -> ParsedPayload:
        try:
            frame = pd.read_excel(io.BytesIO(raw_bytes), sheet_name=0, engine=self.ENGINE)
        except Exception as exc:
            raise ParseError(
                f"{self.ENGINE} could not read workbook: {exc}",
                user_message="The spreadsheet could not be read.",
            ) from exc
        return ParsedPayload(
            kind=PayloadKind.TABULAR_SPREADSHEET,
            rows=frame_to_records(frame),
        )


class XlsxParser(SpreadsheetParser):
    """Office Open XML workbooks (.xlsx) via openpyxl."""

    ENGINE = "openpyxl"


class XlsParser(SpreadsheetParser):
    """Legacy BIFF workbooks (.xls) via xlrd."""

    ENGINE = "xlrd"
