"""Reading wind speed series from delimited text files."""

from __future__ import annotations

import csv
import io
from pathlib import Path

import numpy as np
from numpy.typing import NDArray


class WindDataError(ValueError):
    """Raised when a wind speed file cannot be interpreted."""


def parse_wind_csv(
    csv_text: str,
    column: str | int | None = None,
    has_header: bool = True,
    delimiter: str = ",",
) -> NDArray[np.float64]:
    """Parse one column of wind speeds out of delimited text.

    Args:
        csv_text: File content as a string.
        column: Column to read.  A header name when *has_header* is true,
            otherwise (or additionally) a zero-based index.  Defaults to the
            first column.
        has_header: Whether the first non-blank row holds column names.
        delimiter: Field separator.

    Returns:
        Wind speeds as a float64 array, in file order.

    Raises:
        WindDataError: on an unknown column or a non-numeric value.
    """
    reader = csv.reader(io.StringIO(csv_text), delimiter=delimiter)
    rows = (
        (line_no, row)
        for line_no, row in enumerate(reader, start=1)
        if any(field.strip() for field in row)
    )

    index = 0
    if has_header:
        first = next(rows, None)
        if first is None:
            return np.array([], dtype=np.float64)
        header = [name.strip() for name in first[1]]
        if isinstance(column, str):
            if column not in header:
                raise WindDataError(
                    f"Column '{column}' not found; available columns: {', '.join(header)}"
                )
            index = header.index(column)
        elif column is not None:
            index = int(column)
    elif isinstance(column, str):
        raise WindDataError("A column name requires a header row; pass an index instead.")
    elif column is not None:
        index = int(column)

    speeds: list[float] = []
    for line_no, row in rows:
        try:
            speeds.append(float(row[index]))
        except IndexError:
            raise WindDataError(f"Line {line_no}: no value in column {index}") from None
        except ValueError:
            raise WindDataError(
                f"Line {line_no}: cannot parse wind speed {row[index]!r}"
            ) from None

    return np.array(speeds, dtype=np.float64)


def load_wind_csv(
    path: str | Path,
    column: str | int | None = None,
    has_header: bool = True,
    delimiter: str = ",",
) -> NDArray[np.float64]:
    """Read a wind speed column from the file at *path*.

    :class:`FileNotFoundError` propagates unchanged.
    """
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_wind_csv(text, column=column, has_header=has_header, delimiter=delimiter)
