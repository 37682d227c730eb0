"""Cumulative residue-mass ladders (Numba-compiled).

The ladder of a sequence holds the running sum of residue masses:
ladder[i] = mass(sequence[0]) + ... + mass(sequence[i]). Every ion series is
derived from it, prefix series directly and suffix series by subtracting
from the last value.

Residue masses come from an ord()-indexed table. Build the table from any
mass source (monoisotopic, average, isotope-labelled) with
formula.residue_mass_table; the scan itself never changes.

Examples
--------
>>> ladder, locations = build_ladder("RPPGFSPFR", tracked_residues="PS")
>>> locations
{'P': [1, 2, 6], 'S': [5]}
>>> ladder.last == ladder.cumulative[-1]
True
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import numba

from ..encoding import encode_sequence_to_ord
from ..formula import MassSource, monoisotopic_mass, residue_mass_table


# =============================================================================
# Core Scan (Numba-Compiled)
# =============================================================================

@numba.jit(nopython=True, cache=True)
def scan_ladder(
    seq_ord: np.ndarray,
    residue_masses: np.ndarray,
    tracked_mask: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Single pass: cumulative masses plus positions of tracked residues.

    Parameters
    ----------
    seq_ord : np.ndarray (uint8)
        Sequence as ord() values
    residue_masses : np.ndarray (float64, 256)
        ord()-indexed residue masses; bytes missing from the table weigh 0
    tracked_mask : np.ndarray (bool, 256)
        True for each ord() value whose positions should be recorded

    Returns
    -------
    ladder : np.ndarray (float64)
        Cumulative residue masses, one per character
    located : np.ndarray (int64)
        Ladder indices of tracked residues, ascending
    """
    n = len(seq_ord)
    ladder = np.empty(n, dtype=np.float64)
    located = np.empty(n, dtype=np.int64)
    n_located = 0

    mass = 0.0
    for i in range(n):
        code = seq_ord[i]
        mass += residue_masses[code]
        if tracked_mask[code]:
            located[n_located] = i
            n_located += 1
        ladder[i] = mass

    return ladder, located[:n_located].copy()


# =============================================================================
# Mass Ladder
# =============================================================================

@dataclass(frozen=True, eq=False)
class MassLadder:
    """Cumulative residue masses of a sequence.

    Attributes
    ----------
    sequence : str
        The scanned sequence (whitespace kept, weighing 0)
    residue_masses : np.ndarray (float64, 256)
        ord()-indexed residue mass table used for the scan
    cumulative : np.ndarray (float64)
        cumulative[i] = summed residue mass of sequence[0..i]
    """

    sequence: str
    residue_masses: np.ndarray
    cumulative: np.ndarray

    def __len__(self) -> int:
        return len(self.cumulative)

    @property
    def last(self) -> float:
        """Total residue mass; undefined for an empty sequence."""
        if len(self.cumulative) == 0:
            raise ValueError("mass ladder of an empty sequence has no last value")
        return float(self.cumulative[-1])


def tracked_residue_mask(tracked_residues: Iterable[str]) -> np.ndarray:
    mask = np.zeros(256, dtype=np.bool_)
    for residue in tracked_residues:
        code = ord(residue)
        if code > 255:
            raise ValueError(f"cannot track residue {residue!r}")
        mask[code] = True
    return mask


def build_ladder(
    sequence: str,
    residue_masses: Optional[np.ndarray] = None,
    tracked_residues: Iterable[str] = '',
    mass_source: MassSource = monoisotopic_mass,
) -> Tuple[MassLadder, Dict[str, List[int]]]:
    """Build the mass ladder and residue location index of a sequence.

    Parameters
    ----------
    sequence : str
        Peptide sequence
    residue_masses : np.ndarray (float64, 256), optional
        ord()-indexed residue masses; built from mass_source when omitted
    tracked_residues : iterable of str
        Residue letters whose ladder indices are recorded
    mass_source : callable
        Element symbol → mass, used only when residue_masses is omitted

    Returns
    -------
    ladder : MassLadder
    locations : dict
        Residue letter → ascending ladder indices, one key per tracked
        letter (empty list when the residue does not occur)
    """
    if residue_masses is None:
        residue_masses = residue_mass_table(mass_source)
    residue_masses = np.ascontiguousarray(residue_masses, dtype=np.float64)
    if residue_masses.shape != (256,):
        raise ValueError(f"residue_masses must have shape (256,), got {residue_masses.shape}")

    tracked = ''.join(dict.fromkeys(tracked_residues))
    seq_ord = encode_sequence_to_ord(sequence)
    cumulative, located = scan_ladder(seq_ord, residue_masses, tracked_residue_mask(tracked))

    locations = {residue: [] for residue in tracked}
    for index in located:
        locations[sequence[index]].append(int(index))

    return MassLadder(sequence, residue_masses, cumulative), locations
