"""Row-oriented access to CSV tables: read, append and undo the last row."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

logger = logging.getLogger(__name__)

Record = Dict[str, str]

# One dialect for reading and writing, so an append followed by remove_last
# gives back the exact bytes that were there before.
_WRITE_OPTS = {"lineterminator": "\n", "quoting": csv.QUOTE_MINIMAL}


class TableError(Exception):
    pass


class MalformedRowError(TableError):
    def __init__(self, path: Path, line: int, expected: int, got: int):
        super().__init__(f"{path}:{line}: expected {expected} fields, got {got}")
        self.path = path
        self.line = line


class EmptyTableError(TableError):
    pass


@dataclass
class _Row:
    values: List[str]
    start: int  # character offset of the row in the file text
    line: int


class CsvStore:
    """A CSV file seen as a table of string records keyed by its header row."""

    def __init__(self, path: str | Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def exists(self) -> bool:
        return self.path.exists()

    def read_headers(self) -> List[str]:
        with self.path.open("r", encoding=self.encoding, newline="") as f:
            return next(csv.reader(f), [])

    def read_all(self) -> Iterator[Record]:
        """Yields every data row as a dict. Re-reads the file on each call."""
        with self.path.open("r", encoding=self.encoding, newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                return
            for values in reader:
                if not values:
                    continue
                if len(values) != len(header):
                    raise MalformedRowError(self.path, reader.line_num, len(header), len(values))
                yield dict(zip(header, values))

    def append(self, record: Record) -> None:
        """Appends one row, creating the file (header from the record keys) if needed.

        Keys unknown to the existing header widen the table: the file is
        rewritten with the new columns added at the end and older rows padded
        with empty strings.
        """
        if not self.exists() or self.path.stat().st_size == 0:
            header = list(record.keys())
            self._write_rows([header, [record[k] for k in header]], mode="w")
            return

        header = self.read_headers()
        new_keys = [k for k in record if k not in header]
        if new_keys:
            logger.info("Adding columns %s to %s", new_keys, self.path)
            full_header = header + new_keys
            _, rows = self._scan()
            padded = [r.values + [""] * len(new_keys) for r in rows[1:]]
            self._write_rows([full_header] + padded, mode="w")
            header = full_header

        if not self._ends_with_newline():
            with self.path.open("a", encoding=self.encoding, newline="") as f:
                f.write("\n")
        self._write_rows([[record.get(k, "") for k in header]], mode="a")

    def remove_last(self) -> Record:
        """Removes the most recently appended row and returns it.

        The file is cut back to where that row started, so append then
        remove_last restores the previous bytes except when the append had to
        add a missing trailing newline, created the file (a header-only file
        is left) or widened the table (the rewrite uses "\\n" line endings).
        """
        if not self.exists():
            raise EmptyTableError(f"{self.path} does not exist")
        text, rows = self._scan()
        if len(rows) < 2:
            raise EmptyTableError(f"{self.path} has no rows to remove")
        header, last = rows[0].values, rows[-1]
        if len(last.values) != len(header):
            raise MalformedRowError(self.path, last.line, len(header), len(last.values))
        with self.path.open("w", encoding=self.encoding, newline="") as f:
            f.write(text[: last.start])
        return dict(zip(header, last.values))

    def _scan(self) -> Tuple[str, List[_Row]]:
        """Parses the whole file, remembering where each row starts."""
        with self.path.open("r", encoding=self.encoding, newline="") as f:
            text = f.read()

        lines = list(io.StringIO(text, newline=""))
        consumed = [0]

        def feed():
            for line in lines:
                consumed[0] += len(line)
                yield line

        reader = csv.reader(feed())
        rows: List[_Row] = []
        start = 0
        for values in reader:
            if values:
                rows.append(_Row(values=values, start=start, line=reader.line_num))
            start = consumed[0]
        # header row is rows[0]; the data rows follow
        return text, rows

    def _ends_with_newline(self) -> bool:
        with self.path.open("rb") as f:
            f.seek(-1, io.SEEK_END)
            return f.read(1) in (b"\n", b"\r")

    def _write_rows(self, rows: List[List[str]], mode: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open(mode, encoding=self.encoding, newline="") as f:
            writer = csv.writer(f, **_WRITE_OPTS)
            writer.writerows(rows)

