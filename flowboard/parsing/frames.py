import math
from datetime import date, datetime, time
from typing import Any

import numpy as np
import pandas as pd


def unique_labels(columns: Any) -> list[str]:
    """Stringify column labels, suffixing repeats the way pandas does (``name.1``).

    Labels that only differ in type, such as ``1`` and ``"1"``, collide once
    stringified and get suffixed as well.
    """
    seen: set[str] = set()
    labels: list[str] = []
    for column in columns:
        base = label = str(column)
        suffix = 0
        while label in seen:
            suffix += 1
            label = f"{base}.{suffix}"
        seen.add(label)
        labels.append(label)
    return labels


def json_value(value: Any) -> Any:
    """Map one cell to a JSON-safe Python value without losing float precision."""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (datetime, date, time, pd.Timedelta)):
        return value.isoformat()
    return value


def frame_to_records(frame: pd.DataFrame) -> tuple[dict[str, Any], ...]:
    """Convert a DataFrame into JSON-safe records, one dict per row.

    Column labels become unique strings, missing cells become None and
    timestamps become ISO-8601 strings, so the records can be stored as JSONB
    and posted to the automation endpoint unchanged.
    """
    labels = unique_labels(frame.columns)
    return tuple(
        {label: json_value(cell) for label, cell in zip(labels, row)}
        for row in frame.itertuples(index=False, name=None)
    )
