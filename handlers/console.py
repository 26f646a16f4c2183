"""
Console output handler
"""
import sys
from typing import Sequence

from handlers.formatter import write_rows


class Handler:
    """Console output handler class"""

    def __init__(self, delimiter: str = '\t'):
        self.delimiter = delimiter

    def __call__(self, rows: Sequence[Sequence[str]]) -> None:
        write_rows(sys.stdout, rows, self.delimiter)
        sys.stdout.flush()
