"""
File output handler
"""
import logging
from pathlib import Path
from typing import Sequence

from handlers.formatter import write_rows


class Handler:
    """File writer handler class"""

    def __init__(self, output_file: str, delimiter: str = '\t'):
        """
        Initialize file output handler

        Args:
            output_file: Output file path, created or truncated on write
            delimiter: Field delimiter
        """
        self.output_file = Path(output_file)
        self.delimiter = delimiter

    def __call__(self, rows: Sequence[Sequence[str]]) -> None:
        """
        Write rows to file

        Raises:
            OSError: If the file cannot be created or written
        """
        with open(self.output_file, 'w', encoding='utf-8', newline='') as f:
            count = write_rows(f, rows, self.delimiter)
        logging.info(f"{count} row(s) written to file: {self.output_file}")
