#!/usr/bin/env python3
"""
Palette Studio – Combinatorics
Cartesian products, permutations and combinations over index positions.

    permutations([0, 1, 2], 2)                  # [[0,1],[0,2],[1,0],[1,2],[2,0],[2,1]]
    combinations([0, 1, 2, 3], 2)               # [[0,1],[0,2],[0,3],[1,2],[1,3],[2,3]]
    combinations_with_replacement([0, 1, 2], 2) # [[0,0],[0,1],[0,2],[1,1],[1,2],[2,2]]
    product("me", "hi")                         # [('m','h'),('m','i'),('e','h'),('e','i')]
    product({"who": ["me", "you"], "say": ["hi", "by"]})
"""
from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MAX_ARRANGEMENTS = 1_000_000
# 0 ** k and 1 ** k never trip MAX_ARRANGEMENTS, so k is bounded on its own
MAX_K = 32


# ── Guards ────────────────────────────────────────────────────────────────────
def _as_sequence(obj: Iterable[Any]) -> List[Any]:
    """Strings become lists of characters; everything else is materialised."""
    return list(obj)


def _resolve_k(seq: Sequence[Any], k: Optional[int]) -> int:
    if k is None:
        k = len(seq)
    if isinstance(k, bool) or not isinstance(k, int) or k < 0:
        raise ValueError(f"k must be a non-negative integer, got {k!r}")
    if k > MAX_K:
        raise ValueError(f"k={k} exceeds the limit of {MAX_K}")
    total = len(seq) ** k
    if total > MAX_ARRANGEMENTS:
        raise ValueError(
            f"{len(seq)} elements taken {k} at a time gives {total} arrangements "
            f"(limit {MAX_ARRANGEMENTS})"
        )
    return k


# ── Cartesian products ────────────────────────────────────────────────────────
def cartesian_product(sequences: Iterable[Iterable[Any]]) -> List[Tuple[Any, ...]]:
    """Odometer-ordered product of the given sequences (last one varies fastest)."""
    pools = [_as_sequence(s) for s in sequences]
    return list(itertools.product(*pools))


def cartesian_product_named(options: Mapping[str, Iterable[Any]]) -> List[Dict[str, Any]]:
    """Product of named sequences, each arrangement keyed by the original names.

    >>> cartesian_product_named({"who": ["me", "you"], "say": ["hi"]})
    [{'who': 'me', 'say': 'hi'}, {'who': 'you', 'say': 'hi'}]
    """
    keys = list(options)
    combos = cartesian_product(options[key] for key in keys)
    return [dict(zip(keys, combo)) for combo in combos]


def product(*args: Any) -> List[Any]:
    """Product of mappings, a list of sequences, or several sequences."""
    if len(args) == 1 and isinstance(args[0], Mapping):
        return cartesian_product_named(args[0])
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return cartesian_product(args[0])
    return cartesian_product(args)


# ── Index arrangements ────────────────────────────────────────────────────────
def _index_product(seq: Sequence[Any], k: int) -> List[Tuple[int, ...]]:
    return cartesian_product([range(len(seq))] * k)


def permutations(obj: Iterable[Any], k: Optional[int] = None) -> List[List[Any]]:
    """Ordered k-length selections by index.

    Values at different indices count as different elements. Only positions 0
    and 1 are checked for a repeated index, so for k > 2 later positions may
    repeat an index.
    """
    seq = _as_sequence(obj)
    k = _resolve_k(seq, k)
    arrangements = [ix for ix in _index_product(seq, k) if len(ix) < 2 or ix[0] != ix[1]]
    logger.debug("permutations: %d elements, k=%d -> %d", len(seq), k, len(arrangements))
    return [[seq[i] for i in ix] for ix in arrangements]


def _is_sorted(indices: Sequence[int]) -> bool:
    # indices compare as strings, so 10 sorts before 2
    return all(str(a) <= str(b) for a, b in zip(indices, indices[1:]))


def combinations(obj: Iterable[Any], k: Optional[int] = None) -> List[List[Any]]:
    """Unordered k-length selections: index permutations kept in sorted order."""
    seq = _as_sequence(obj)
    k = _resolve_k(seq, k)
    return [[seq[i] for i in ix] for ix in permutations(range(len(seq)), k) if _is_sorted(ix)]


def combinations_with_replacement(obj: Iterable[Any], k: Optional[int] = None) -> List[List[Any]]:
    """Unordered k-length selections where an element may be picked repeatedly."""
    seq = _as_sequence(obj)
    k = _resolve_k(seq, k)
    arrangements = [
        ix for ix in _index_product(seq, k)
        if all(a <= b for a, b in zip(ix, ix[1:]))
    ]
    return [[seq[i] for i in ix] for ix in arrangements]
