"""Fragment ion series for peptide sequences.

- Numba-compiled cumulative mass ladders with residue location tracking
- Spectrum: a/b/c/x/y/Y/z, immonium and ladder series with charge,
  modification, masking and caching
- Fragment: parent ion mass plus combined, sorted peak lists
"""

from .ladder import (
    MassLadder,
    build_ladder,
    scan_ladder,
)

from .spectrum import (
    IonType,
    SeriesSpec,
    Spectrum,
    parse_series,
    ION_SERIES_FORMULAS,
)

from .fragment import Fragment

__all__ = [
    'MassLadder',
    'build_ladder',
    'scan_ladder',
    'IonType',
    'SeriesSpec',
    'Spectrum',
    'parse_series',
    'ION_SERIES_FORMULAS',
    'Fragment',
]
