"""AlphaInSilico - In silico digestion and fragmentation for proteomics.

This library simulates enzymatic digestion of protein sequences and computes
theoretical fragment ion masses for peptides, with Numba-compiled kernels for
the sequence scans:

- digestion: enzyme library, cleavage site scanning, missed cleavages
- fragments: mass ladders, a/b/c/x/y/Y/z/immonium/ladder ion series,
  theoretical MS/MS spectra
"""

__version__ = "0.3.0"

from alphainsilico import constants
from alphainsilico import formula
from alphainsilico import digestion
from alphainsilico import fragments

from alphainsilico.exceptions import (
    InSilicoError,
    ConfigurationError,
    UnknownEnzymeError,
    UnknownSeriesError,
    ZeroChargeError,
    FormulaError,
)
from alphainsilico.digestion import Digester, get_digester, ENZYMES
from alphainsilico.fragments import Spectrum, Fragment

__all__ = [
    "constants",
    "formula",
    "digestion",
    "fragments",
    "InSilicoError",
    "ConfigurationError",
    "UnknownEnzymeError",
    "UnknownSeriesError",
    "ZeroChargeError",
    "FormulaError",
    "Digester",
    "get_digester",
    "ENZYMES",
    "Spectrum",
    "Fragment",
]
