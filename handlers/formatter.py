"""
Delimited text formatting shared by the output handlers
"""
import csv
from typing import Iterable, Sequence, TextIO


def write_rows(stream: TextIO, rows: Iterable[Sequence[str]], delimiter: str = '\t') -> int:
    """
    Write rows as delimited text, one line per row, no header

    Fields are quoted only when they contain the delimiter, a quote
    character or a line break.

    Args:
        stream: Text stream opened with newline=''
        rows: Rows of string fields
        delimiter: Single character field separator

    Returns:
        Number of rows written
    """
    writer = csv.writer(
        stream,
        delimiter=delimiter,
        quotechar='"',
        quoting=csv.QUOTE_MINIMAL,
        lineterminator='\n',
    )
    count = 0
    for row in rows:
        writer.writerow(row)
        count += 1
    return count
