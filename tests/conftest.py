import io

import pytest
from openpyxl import Workbook


@pytest.fixture()
def sample_csv_bytes() -> bytes:
    """Three data rows under an id,name header."""
    return b"id,name\n1,Alice\n2,Bob\n3,Cara"


@pytest.fixture()
def sample_json_bytes() -> bytes:
    return b'[{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]'


@pytest.fixture()
def sample_xlsx_bytes() -> bytes:
    """Generate a workbook whose first sheet holds a header and two rows."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "People"
    sheet.append(["id", "name"])
    sheet.append([1, "Alice"])
    sheet.append([2, "Bob"])
    other = workbook.create_sheet("Ignored")
    other.append(["unused"])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()
