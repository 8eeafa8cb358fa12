"""Sort directive compiler."""

from __future__ import annotations

from typing import Iterable

from SearchDSL.core.query import FieldSort, ScoreSort, Sorter
from SearchDSL.utils.log import log

_DIRECTIONS = {"asc": True, "desc": False}


def compile_sort(pairs: Iterable[tuple[str, str]]) -> list[Sorter]:
    """Compile ordered (field, direction) pairs into sort criteria.

    Pairs whose direction is not ``asc``/``desc`` are dropped. A descending
    relevance-score criterion is always appended last as the tiebreak.

    Args:
        pairs: Ordered (field, direction) pairs.

    Returns:
        Sort criteria in input order, followed by the score criterion.
    """
    sorters: list[Sorter] = []
    for field, direction in pairs:
        ascending = _DIRECTIONS.get(str(direction).strip().lower())
        if ascending is None or not str(field).strip():
            log.debug("Dropping sort directive: field=%s direction=%s", field, direction)
            continue
        sorters.append(FieldSort(str(field).strip(), ascending=ascending))
    sorters.append(ScoreSort())
    return sorters
