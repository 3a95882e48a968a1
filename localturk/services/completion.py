from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from ..utils.records import is_superset_of, normalize_values


class CompletionIndex:
    """Answers "was this task already answered?" for a snapshot of the output table.

    A task counts as done when some output row contains all of its fields
    with equal values (after normalization). Output rows may carry extra
    columns such as the worker id or the answer fields themselves.

    Rows are indexed by (key, value) pair; a lookup intersects the posting
    sets of the task's pairs, which gives the same answer as scanning every
    row with ``is_superset_of``.
    """

    def __init__(self, rows: List[Dict[str, str]]):
        self._rows = rows
        self._postings: Dict[Tuple[str, str], Set[int]] = defaultdict(set)
        for i, row in enumerate(rows):
            for pair in row.items():
                self._postings[pair].add(i)

    @classmethod
    def build(cls, outputs: Iterable[Mapping[str, str]]) -> "CompletionIndex":
        return cls([normalize_values(row) for row in outputs])

    def __len__(self) -> int:
        return len(self._rows)

    def contains(self, task: Mapping[str, str]) -> bool:
        norm_task = normalize_values(task)
        if not norm_task:
            return len(self._rows) > 0

        candidates: Set[int] | None = None
        # smallest posting set first keeps the intersection cheap
        for pair in sorted(norm_task.items(), key=lambda p: len(self._postings.get(p, ()))):
            posting = self._postings.get(pair)
            if not posting:
                return False
            candidates = set(posting) if candidates is None else candidates & posting
            if not candidates:
                return False
        return True

    def contains_by_scan(self, task: Mapping[str, str]) -> bool:
        norm_task = normalize_values(task)
        return any(is_superset_of(row, norm_task) for row in self._rows)
