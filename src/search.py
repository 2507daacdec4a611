# src/search.py
"""
Bisection search over a sorted sequence, with a linear-scan baseline.

Used in the control-flow lab to contrast O(log n) probing against an O(n)
membership scan. Two control-flow realizations are provided and return the
same (index, probes) pair for the same inputs:

- `bisect_iterative`: explicit loop over a mutable [lo, hi] subrange.
- `bisect_recursive`: the subrange and the attempt count are passed on each
  self-invocation. Call depth grows with the number of probes, so prefer the
  iterative form at scale.

Rule per probe (mid = (lo + hi) // 2):
- probe == target -> found
- probe <  target -> continue on [mid + 1, hi]
- probe >  target -> continue on [lo, mid]   (lower remainder keeps the probe)

A target that is absent can leave a one-element remainder alive, so every
search carries a probe budget. Running out of budget (or out of remainder) is
reported as `ExhaustedSearch`, a normal "not found" outcome.
"""
from __future__ import annotations

from typing import Optional, Tuple


class ExhaustedSearch(LookupError):
    """
    Target not found: the probe budget was consumed or the remainder emptied.

    Attributes
    ----------
    target : Any
        Value that was sought.
    probes : int
        Midpoint comparisons performed before giving up.
    max_probes : int
        Budget in force for the search.
    reason : str
        'budget' if the cap was reached, 'empty' if no candidates remained.
    """

    def __init__(self, target, probes: int, max_probes: int, reason: str):
        self.target = target
        self.probes = int(probes)
        self.max_probes = int(max_probes)
        self.reason = reason
        if reason == "budget":
            msg = f"{target!r} not found within the probe budget ({probes}/{max_probes} probes)"
        else:
            msg = f"{target!r} not found: no candidates left after {probes} probe(s)"
        super().__init__(msg)


def default_probe_budget(n: int) -> int:
    """
    Worst-case probe count for a present target in a sequence of length `n`.

    Each non-matching probe leaves at most ceil(size / 2) candidates, so a
    one-element remainder is reached within ceil(log2 n) probes and one more
    probe settles it: ceil(log2 n) + 1. An empty sequence gets 0.

    Parameters
    ----------
    n : int
        Sequence length.

    Returns
    -------
    int
    """
    n = int(n)
    if n < 0:
        raise ValueError(f"Sequence length must be non-negative, got {n}")
    if n == 0:
        return 0
    # (n - 1).bit_length() == ceil(log2 n) for n >= 1, exact for large ints
    return (n - 1).bit_length() + 1


def _resolve_budget(n: int, max_probes: Optional[int]) -> int:
    if max_probes is None:
        return default_probe_budget(n)
    budget = int(max_probes)
    if budget < 0:
        raise ValueError(f"max_probes must be non-negative, got {max_probes}")
    return budget


def bisect_iterative(sequence, target, max_probes: Optional[int] = None) -> Tuple[int, int]:
    """
    Locate `target` in sorted `sequence` with an explicit loop.

    Parameters
    ----------
    sequence : Sequence
        Sorted, indexable values (list, tuple, range, numpy array).
    target : Any
        Value to find; must be comparable with the elements.
    max_probes : int, optional
        Probe budget. Defaults to `default_probe_budget(len(sequence))`.

    Returns
    -------
    tuple[int, int]
        (index of the match, probes used).

    Raises
    ------
    ExhaustedSearch
        If the budget runs out or the candidate range becomes empty.
    """
    n = len(sequence)
    budget = _resolve_budget(n, max_probes)

    lo, hi = 0, n - 1
    probes = 0
    while lo <= hi:
        if probes >= budget:
            raise ExhaustedSearch(target, probes, budget, "budget")
        mid = (lo + hi) // 2
        probe = sequence[mid]
        probes += 1
        if probe == target:
            return mid, probes
        if probe < target:
            lo = mid + 1
        else:
            hi = mid
    raise ExhaustedSearch(target, probes, budget, "empty")


def _bisect_range(sequence, target, lo: int, hi: int, probes: int, budget: int) -> Tuple[int, int]:
    if lo > hi:
        raise ExhaustedSearch(target, probes, budget, "empty")
    if probes >= budget:
        raise ExhaustedSearch(target, probes, budget, "budget")
    mid = (lo + hi) // 2
    probe = sequence[mid]
    if probe == target:
        return mid, probes + 1
    if probe < target:
        return _bisect_range(sequence, target, mid + 1, hi, probes + 1, budget)
    return _bisect_range(sequence, target, lo, mid, probes + 1, budget)


def bisect_recursive(sequence, target, max_probes: Optional[int] = None) -> Tuple[int, int]:
    """
    Recursive twin of `bisect_iterative`; same arguments, result and errors.

    Recursion depth equals the number of probes, so a very large explicit
    `max_probes` on an absent target can hit the interpreter's recursion limit.
    """
    n = len(sequence)
    budget = _resolve_budget(n, max_probes)
    return _bisect_range(sequence, target, 0, n - 1, 0, budget)


_METHODS = {
    "iterative": bisect_iterative,
    "recursive": bisect_recursive,
}


def _bisect_fn(method: str):
    try:
        return _METHODS[method]
    except KeyError:
        raise ValueError(f"method must be one of {sorted(_METHODS)}, got: '{method}'") from None


def bisection_search(sequence, target, *, max_probes: Optional[int] = None, method: str = "iterative"):
    """
    Return the element of `sequence` equal to `target`.

    Parameters
    ----------
    sequence : Sequence
        Sorted, indexable values.
    target : Any
        Value to find.
    max_probes : int, optional
        Probe budget (default: ceil(log2 n) + 1).
    method : {'iterative', 'recursive'}
        Control-flow realization to use.

    Returns
    -------
    Any
        The matching element.

    Raises
    ------
    ExhaustedSearch
        If `target` is not found.
    ValueError
        If `method` is unknown or `max_probes` is negative.
    """
    idx, _ = _bisect_fn(method)(sequence, target, max_probes)
    return sequence[idx]


def linear_search(sequence, target) -> Tuple[int, int]:
    """
    Brute-force baseline: compare elements left to right.

    Returns
    -------
    tuple[int, int]
        (index of the match, comparisons used).

    Raises
    ------
    ExhaustedSearch
        After len(sequence) comparisons without a match.
    """
    comparisons = 0
    for idx, value in enumerate(sequence):
        comparisons += 1
        if value == target:
            return idx, comparisons
    raise ExhaustedSearch(target, comparisons, len(sequence), "empty")


def count_probes(sequence, target, *, method: str = "iterative", max_probes: Optional[int] = None) -> dict:
    """
    Run a search and report its cost without raising on "not found".

    Parameters
    ----------
    method : {'iterative', 'recursive', 'linear'}

    Returns
    -------
    dict
        {'found': bool, 'index': int | None, 'probes': int}
    """
    if method == "linear":
        fn = lambda seq, tgt, _budget: linear_search(seq, tgt)  # noqa: E731
    else:
        fn = _bisect_fn(method)
    try:
        idx, probes = fn(sequence, target, max_probes)
    except ExhaustedSearch as exc:
        return {"found": False, "index": None, "probes": exc.probes}
    return {"found": True, "index": idx, "probes": probes}
