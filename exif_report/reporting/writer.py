import sys
from typing import Iterable, Optional, Sequence, TextIO


class ReportWriter:
    """Writes a finished report to a text stream (stdout unless told otherwise)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def write(self, header: Sequence[str], rows: Iterable[str], separator: str):
        # Resolved late so pytest's capsys sees the replaced stdout
        out = self.stream if self.stream is not None else sys.stdout

        out.write(separator.join(header) + "\n")
        for row in rows:
            out.write(row + "\n")
        out.flush()
