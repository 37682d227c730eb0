"""Element masses, residue formulas and ord()-indexed lookup tables.

This module provides the physical constants and residue definitions used
throughout AlphaInSilico. Residue masses are not hard-coded: they are derived
from empirical formulas so that alternative mass sources (average masses,
isotope-labelled elements) reuse exactly the same tables.

The ord()-indexed residue mass arrays themselves live in formula.py, next to
the formula parser that produces them.

Key Features
------------
- Monoisotopic and average element masses for the small element vocabulary
  used by residues, termini and modifications (C, H, N, O, P, S)
- PROTON_MASS derived as hydrogen atom mass minus electron mass
- ord()-indexed WHITESPACE_MASK used by the cleavage scanner

Sources
-------
- Element masses: IUPAC/NIST atomic weights and isotopic compositions
- Residue compositions: https://www.unimod.org/masses.html
"""

import numpy as np

# =============================================================================
# Element Masses (Da)
# =============================================================================

# Monoisotopic masses (most abundant isotope of each element)
MONOISOTOPIC_ELEMENT_MASSES = {
    'C': 12.0,
    'H': 1.0078250321,
    'N': 14.0030740052,
    'O': 15.9949146221,
    'P': 30.97376151,
    'S': 31.97207069,
}

# Average masses (natural isotopic abundance)
AVERAGE_ELEMENT_MASSES = {
    'C': 12.0107,
    'H': 1.00794,
    'N': 14.0067,
    'O': 15.9994,
    'P': 30.973762,
    'S': 32.065,
}

# Electron mass
# Proton mass below is H - e, NOT the CODATA proton rest mass, so that
# [M+zH]/z values agree with Mascot/ProteinProspector style calculators
ELECTRON_MASS = 0.0005485799110  # Da

HYDROGEN_MASS = MONOISOTOPIC_ELEMENT_MASSES['H']
PROTON_MASS = HYDROGEN_MASS - ELECTRON_MASS

# =============================================================================
# Residue Formulas
# =============================================================================

# Standard 20 amino acids as residues (free amino acid minus H2O)
RESIDUE_FORMULAS = {
    'A': 'C3H5NO',     # Alanine
    'R': 'C6H12N4O',   # Arginine
    'N': 'C4H6N2O2',   # Asparagine
    'D': 'C4H5NO3',    # Aspartic acid
    'C': 'C3H5NOS',    # Cysteine (unmodified)
    'E': 'C5H7NO3',    # Glutamic acid
    'Q': 'C5H8N2O2',   # Glutamine
    'G': 'C2H3NO',     # Glycine
    'H': 'C6H7N3O',    # Histidine
    'I': 'C6H11NO',    # Isoleucine
    'L': 'C6H11NO',    # Leucine
    'K': 'C6H12N2O',   # Lysine
    'M': 'C5H9NOS',    # Methionine
    'F': 'C9H9NO',     # Phenylalanine
    'P': 'C5H7NO',     # Proline
    'S': 'C3H5NO2',    # Serine
    'T': 'C4H7NO2',    # Threonine
    'W': 'C11H10N2O',  # Tryptophan
    'Y': 'C9H9NO2',    # Tyrosine
    'V': 'C5H9NO',     # Valine
}

STANDARD_RESIDUES = ''.join(sorted(RESIDUE_FORMULAS))

# =============================================================================
# Whitespace
# =============================================================================

# Bytes treated as whitespace by the cleavage scanner (matches str.isspace()
# for ASCII: space, \t, \n, \v, \f, \r)
WHITESPACE_CHARACTERS = ' \t\n\v\f\r'

WHITESPACE_MASK = np.zeros(256, dtype=np.bool_)
for ch in WHITESPACE_CHARACTERS:
    WHITESPACE_MASK[ord(ch)] = True

# Water, used by the ladder series and for neutral peptide masses
H2O_MASS = 2 * HYDROGEN_MASS + MONOISOTOPIC_ELEMENT_MASSES['O']


def validate_constants():
    """Validate that constants are physically reasonable.

    Raises AssertionError if any constant is out of expected range.
    """
    assert 1.0072 < PROTON_MASS < 1.0073, f"PROTON_MASS is wrong: {PROTON_MASS}"
    assert 0.0005 < ELECTRON_MASS < 0.0006, f"ELECTRON_MASS is wrong: {ELECTRON_MASS}"
    assert 18.00 < H2O_MASS < 18.02, f"H2O_MASS is wrong: {H2O_MASS}"

    for aa, formula in RESIDUE_FORMULAS.items():
        assert len(aa) == 1 and aa.isupper(), f"bad residue code: {aa!r}"
        assert formula.startswith('C'), f"AA {aa} formula is wrong: {formula}"
