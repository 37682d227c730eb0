"""Empirical formula parsing and pluggable element mass sources.

Termini, modifications and the constant pieces of the ion-series formulas
(CHO, NH2, CO - H, H2O) are all written as empirical formulas. Their masses
are computed through a *mass source*: a callable mapping an element symbol to
its mass. Swapping the mass source (average masses, isotope labels) changes
every derived mass, residue tables included, without touching the code that
uses them.

Terms are parsed as pyteomics Compositions and priced with
pyteomics.mass.calculate_mass, with mass_data taken from the mass source.

Examples
--------
>>> parse_formula("C2H3NO")
{'C': 2, 'H': 3, 'N': 1, 'O': 1}

>>> parse_formula("CO - H")
{'C': 1, 'O': 1, 'H': -1}

>>> formula_mass("H2O")   # → 18.0105646863

>>> table = residue_mass_table(average_mass)
>>> table[ord('G')]     # → 57.05132
"""

import re
from functools import lru_cache
from typing import Callable, Dict, Optional, Union

import numpy as np
from pyteomics import mass
from pyteomics.auxiliary import PyteomicsError

from .constants import (
    AVERAGE_ELEMENT_MASSES,
    MONOISOTOPIC_ELEMENT_MASSES,
    RESIDUE_FORMULAS,
)
from .exceptions import FormulaError

MassSource = Callable[[str], float]

# Plain element symbols only; isotope-labelled masses come from the mass source
ELEMENT_PATTERN = re.compile(r"[A-Z][a-z]?")


# =============================================================================
# Mass Sources
# =============================================================================

def monoisotopic_mass(element: str) -> float:
    """Monoisotopic mass of an element (default mass source)."""
    try:
        return MONOISOTOPIC_ELEMENT_MASSES[element]
    except KeyError:
        raise FormulaError(f"unknown element: {element}") from None


def average_mass(element: str) -> float:
    """Average (natural abundance) mass of an element."""
    try:
        return AVERAGE_ELEMENT_MASSES[element]
    except KeyError:
        raise FormulaError(f"unknown element: {element}") from None


def labeled_mass_source(labels: Dict[str, float], base: MassSource = monoisotopic_mass) -> MassSource:
    """Build a mass source overriding some element masses.

    Parameters
    ----------
    labels : dict
        Element symbol → replacement mass (e.g. {'N': 15.0001088982} for 15N)
    base : callable
        Mass source used for all other elements

    Returns
    -------
    callable
        New mass source
    """
    labels = dict(labels)

    def mass_source(element: str) -> float:
        if element in labels:
            return labels[element]
        return base(element)

    return mass_source


# =============================================================================
# Formula Parsing
# =============================================================================

@lru_cache(maxsize=1024)
def _parse_terms(formula: str):
    compact = re.sub(r'\s', '', formula)
    if not compact:
        return ()

    # Alternating term, sign, term, ...; only the first term may be empty
    pieces = re.split(r'([+-])', compact)
    terms = pieces[0::2]
    signs = ['+'] + pieces[1::2]

    composition = mass.Composition({})
    for index, (sign, term) in enumerate(zip(signs, terms)):
        if not term:
            if index == 0:
                continue
            raise FormulaError(f"invalid formula: {formula!r}")
        try:
            part = mass.Composition(formula=term)
        except PyteomicsError:
            raise FormulaError(f"invalid formula: {formula!r}") from None

        for element in part:
            if not ELEMENT_PATTERN.fullmatch(element):
                raise FormulaError(f"invalid element {element!r} in formula: {formula!r}")

        composition = composition - part if sign == '-' else composition + part

    return tuple((element, count) for element, count in composition.items() if count)


def parse_formula(formula: str) -> Dict[str, int]:
    """Parse an empirical formula into element counts.

    Terms may be joined with '+' or '-' and whitespace is ignored, so
    "CO - H", "-H2O" and "+HPO3" are all valid. Each term is parsed as a
    pyteomics Composition; elements whose counts cancel are dropped.

    Raises
    ------
    FormulaError
        If the formula contains anything but element symbols, counts and
        +/- separators.
    """
    return dict(_parse_terms(formula))


def composition_mass_data(elements, mass_source: MassSource = monoisotopic_mass) -> Dict:
    """pyteomics mass_data for the given elements under a mass source."""
    return {element: {0: (mass_source(element), 1.0)} for element in elements}


def formula_mass(
    molecule: Optional[Union[str, float, int]],
    mass_source: MassSource = monoisotopic_mass,
) -> float:
    """Mass of a molecule given as a formula, a number, or None.

    None (no modification) weighs 0 and numbers are returned unchanged, so
    termini and modifications may be given either way. Formulas are priced
    with pyteomics using element masses from mass_source.
    """
    if molecule is None:
        return 0.0
    if isinstance(molecule, (int, float)):
        return float(molecule)

    counts = dict(_parse_terms(molecule))
    if not counts:
        return 0.0

    return mass.calculate_mass(
        composition=mass.Composition(counts),
        mass_data=composition_mass_data(counts, mass_source),
    )


# =============================================================================
# Residue Mass Tables
# =============================================================================

def residue_mass_dict(mass_source: MassSource = monoisotopic_mass) -> Dict[str, float]:
    """Residue letter → residue mass under the given mass source."""
    return {
        aa: formula_mass(formula, mass_source)
        for aa, formula in RESIDUE_FORMULAS.items()
    }


@lru_cache(maxsize=16)
def _cached_table(mass_source: MassSource) -> np.ndarray:
    table = np.zeros(256, dtype=np.float64)
    for aa, residue_mass in residue_mass_dict(mass_source).items():
        table[ord(aa)] = residue_mass
    return table


def residue_mass_table(mass_source: MassSource = monoisotopic_mass) -> np.ndarray:
    """Build the ord()-indexed residue mass array for a mass source.

    Bytes that are not residues (whitespace, digits, punctuation) weigh 0.
    Tables are cached per mass source; a fresh copy is returned each call.

    Examples
    --------
    >>> table = residue_mass_table()
    >>> table[ord('A')]   # → 71.03711...
    >>> table[ord(' ')]   # → 0.0
    """
    return _cached_table(mass_source).copy()


AA_MASSES_DICT = residue_mass_dict(monoisotopic_mass)
AA_AVERAGE_MASSES_DICT = residue_mass_dict(average_mass)

# ord()-indexed lookup array for Numba access
# Access via: AA_MASSES[ord('A')] → 71.037113...
AA_MASSES = residue_mass_table(monoisotopic_mass)
