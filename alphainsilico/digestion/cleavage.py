"""Cleavage site scanning and missed-cleavage expansion (Numba-compiled).

Two kernels do all of the digestion work:

1. `find_cleavage_sites` walks a region of an ord()-encoded sequence once,
   left to right, and returns the boundaries between fragments.
2. `expand_missed_cleavages` turns a boundary count into (start, end)
   boundary-index pairs covering 0..max_misses missed cleavages.

Both are pure functions: no scan position is kept between calls, so a
CleavageRule can be used from any number of threads at once.

Whitespace following a cleavage residue belongs to the preceding fragment:

    "AAR  \\n  GGR"  →  boundaries [0, 8, 11]  →  "AAR  \\n  ", "GGR"
"""

from typing import Optional

import numpy as np
import numba

from ..constants import WHITESPACE_MASK
from ..encoding import encode_sequence_to_ord
from .enzymes import CleavageRule


# =============================================================================
# Core Kernels (Numba-Compiled)
# =============================================================================

@numba.jit(nopython=True, cache=True)
def find_cleavage_sites(
    seq_ord: np.ndarray,
    cleave_mask: np.ndarray,
    exception_code: int,
    cleaves_after: bool,
    offset: int,
    length: int,
) -> np.ndarray:
    """Find fragment boundaries in seq_ord[offset:offset + length].

    Parameters
    ----------
    seq_ord : np.ndarray (uint8)
        Sequence as ord() values
    cleave_mask : np.ndarray (bool, 256)
        True for each ord() value the enzyme cleaves at
    exception_code : int
        ord() of the blocking residue, or -1 for none
    cleaves_after : bool
        True to cut after the residue, False to cut before it
    offset, length : int
        Region to scan

    Returns
    -------
    boundaries : np.ndarray (int64)
        Strictly increasing boundaries, first = offset, last = offset + length.
        A zero-length region gives [offset, offset].

    Notes
    -----
    The whitespace run after a cleavage residue is skipped before the
    exception residue is checked, so "R\\nP" is not cut by trypsin.
    """
    limit = offset + length
    n = len(seq_ord)
    adjustment = 0 if cleaves_after else 1

    # At most one boundary per residue, plus start and end
    boundaries = np.empty(length + 2, dtype=np.int64)
    boundaries[0] = offset
    n_boundaries = 1

    pos = offset
    while pos < limit:
        if not cleave_mask[seq_ord[pos]]:
            pos += 1
            continue

        pos += 1
        while pos < n and WHITESPACE_MASK[seq_ord[pos]]:
            pos += 1

        # Blocked cleavage (e.g. K/R followed by P)
        if exception_code >= 0 and pos < n and seq_ord[pos] == exception_code:
            continue

        if pos > limit:
            break

        site = pos - adjustment
        if site > boundaries[n_boundaries - 1]:
            boundaries[n_boundaries] = site
            n_boundaries += 1

    if n_boundaries == 1 or boundaries[n_boundaries - 1] != limit:
        boundaries[n_boundaries] = limit
        n_boundaries += 1

    return boundaries[:n_boundaries].copy()


@numba.jit(nopython=True, cache=True)
def expand_missed_cleavages(n_boundaries: int, max_misses: int) -> np.ndarray:
    """Overlap-collect boundary index pairs allowing missed cleavages.

    For each start index i and miss count k in 0..max_misses, emits
    (i, i + 1 + k) while the end index stays below n_boundaries. Pairs are
    ordered by start index, then by number of misses.

    Parameters
    ----------
    n_boundaries : int
        Number of boundaries (fragment count + 1)
    max_misses : int
        Maximum number of missed cleavages (>= 0)

    Returns
    -------
    pairs : np.ndarray (int64, shape (n_pairs, 2))
        (start_index, end_index) into the boundary array

    Examples
    --------
    >>> expand_missed_cleavages(4, 1).tolist()
    [[0, 1], [0, 2], [1, 2], [1, 3], [2, 3]]
    """
    n_pairs = 0
    for start in range(n_boundaries - 1):
        n_pairs += min(max_misses, n_boundaries - 2 - start) + 1

    pairs = np.empty((n_pairs, 2), dtype=np.int64)
    idx = 0
    for start in range(n_boundaries - 1):
        for n_miss in range(max_misses + 1):
            end = start + 1 + n_miss
            if end >= n_boundaries:
                break
            pairs[idx, 0] = start
            pairs[idx, 1] = end
            idx += 1

    return pairs


# =============================================================================
# String-Level Wrappers
# =============================================================================

def resolve_region(sequence: str, offset: int = 0, length: Optional[int] = None):
    """Validate a (offset, length) region of sequence; length defaults to the rest."""
    if offset < 0 or offset > len(sequence):
        raise ValueError(f"offset {offset} outside sequence of length {len(sequence)}")
    if length is None:
        length = len(sequence) - offset
    if length < 0 or offset + length > len(sequence):
        raise ValueError(
            f"region [{offset}, {offset + length}) outside sequence of length {len(sequence)}"
        )
    return offset, length


def cleavage_sites(
    sequence: str,
    rule: CleavageRule,
    offset: int = 0,
    length: Optional[int] = None,
) -> np.ndarray:
    """Cleavage boundaries of sequence[offset:offset + length] under a rule.

    Examples
    --------
    >>> cleavage_sites("AARGGR", get_enzyme("Trypsin")).tolist()
    [0, 3, 6]
    """
    offset, length = resolve_region(sequence, offset, length)
    seq_ord = encode_sequence_to_ord(sequence)
    return find_cleavage_sites(
        seq_ord,
        rule.cleave_mask,
        rule.exception_code,
        rule.cleaves_after,
        offset,
        length,
    )


def missed_cleavage_spans(boundaries: np.ndarray, max_misses: int = 0) -> np.ndarray:
    """Map overlap-collect index pairs back to (start, end) sequence positions."""
    if max_misses < 0:
        raise ValueError(f"max_misses must be >= 0, got {max_misses}")
    boundaries = np.asarray(boundaries, dtype=np.int64)
    pairs = expand_missed_cleavages(len(boundaries), max_misses)
    return boundaries[pairs]
