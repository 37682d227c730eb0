"""Theoretical fragment ion series for a peptide.

Spectrum calculates the masses of the ions produced by fragmenting a
peptide (CID-style backbone cleavage). Formulas follow the Matrix Science
fragmentation help (http://www.matrixscience.com/help/fragmentation_help.html):
[N] is the mass of the neutral N-terminal group, [C] of the neutral
C-terminal group and [M] the summed mass of the neutral residues.

    Ion type    Neutral Mr           Direction
    a           [N]+[M]-CHO          prefix
    b           [N]+[M]-H            prefix
    c           [N]+[M]+NH2          prefix
    nladder     [M]+H2O              prefix (ladder sequencing)
    x           [C]+[M]+CO-H         suffix
    y           [C]+[M]+H            suffix
    Y           [C]+[M]-H            suffix
    z           [C]+[M]-NH2          suffix
    cladder     [M]+H2O              suffix (ladder sequencing)
    immonium    residue + mod - CO   per residue

m/z = (Mr + mod + charge * proton) / charge. Negative charges subtract
protons.

Series are requested by name, with '+'/'-' for charge and an optional
modification formula after whitespace:

    spectrum.series('b')            # b, charge 1
    spectrum.series('y++')          # y, charge 2
    spectrum.series('nladder-')     # nladder, charge -1
    spectrum.series('y HPO3')       # y series carrying +HPO3

Computed series are cached per (type, charge, modification) and positions
registered with mask_locations are returned negated.

Examples
--------
>>> spectrum = Spectrum("TVQQEL")
>>> spectrum.parent_ion_mass()          # → 717.377745628191
>>> spectrum.series('b')[0]             # → 102.054954926291
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union

import numpy as np

from ..constants import ELECTRON_MASS
from ..exceptions import ConfigurationError, UnknownSeriesError, ZeroChargeError
from ..formula import MassSource, formula_mass, monoisotopic_mass
from .ladder import build_ladder

logger = logging.getLogger(__name__)

Molecule = Union[str, float, int, None]


class IonType(Enum):
    """Fragment ion series (values are the request tokens)."""
    a = "a"
    b = "b"
    c = "c"
    x = "x"
    y = "y"
    Y = "Y"
    z = "z"
    immonium = "immonium"
    nladder = "nladder"
    cladder = "cladder"


def _ion_type(value: Union[str, IonType]) -> IonType:
    if isinstance(value, IonType):
        return value
    try:
        return IonType(value)
    except ValueError:
        raise UnknownSeriesError(f"unknown series: {value}") from None


def _normalize_modification(modification: Optional[str]) -> Optional[str]:
    if modification is None:
        return None
    if not isinstance(modification, str):
        raise TypeError(f"modification must be a formula string, got {modification!r}")
    return re.sub(r'\s', '', modification) or None


@dataclass(frozen=True)
class SeriesSpec:
    """One ion series request: ion type, non-zero charge, modification."""

    ion_type: IonType
    charge: int = 1
    modification: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'ion_type', _ion_type(self.ion_type))
        object.__setattr__(self, 'modification', _normalize_modification(self.modification))
        if self.charge == 0:
            raise ZeroChargeError(f"zero charge specified for series: {self.ion_type.value}")


SERIES_PATTERN = re.compile(
    r'^(immonium|nladder|cladder|[abcxyYz])(\+*)(-*)(\s[+\-\s\w]+)?$'
)


def parse_series(request: str) -> SeriesSpec:
    """Parse a series request such as 'b++', 'y---' or 'nladder- HPO3'.

    Charge is the number of '+' minus the number of '-' ('+' first), and 1
    when neither is given.

    Raises
    ------
    UnknownSeriesError
        If the request does not name a known ion type
    ZeroChargeError
        If '+' and '-' cancel out
    """
    request = str(request).strip()
    match = SERIES_PATTERN.match(request)
    if match is None:
        raise UnknownSeriesError(f"unknown series: {request}")

    ion_token, plus, minus, modification = match.groups()
    if not plus and not minus:
        charge = 1
    else:
        charge = len(plus) - len(minus)
        if charge == 0:
            raise ZeroChargeError(f"zero charge specified in series: {request}")

    return SeriesSpec(IonType(ion_token), charge, modification)


# =============================================================================
# Ion Series Formulas
# =============================================================================

# Each formula computes delta (all non-ladder mass, protons included) and
# hands it to the prefix or suffix generator

def _a_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.mass(spectrum.nterm) - spectrum.mass('CHO') + charge * spectrum.proton_mass
    return spectrum.nterm_series(delta, charge)


def _b_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.mass(spectrum.nterm) - spectrum.mass('H') + charge * spectrum.proton_mass
    return spectrum.nterm_series(delta, charge)


def _c_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.mass(spectrum.nterm) + spectrum.mass('NH2') + charge * spectrum.proton_mass
    return spectrum.nterm_series(delta, charge)


def _nladder_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    """Prefix ladder: index i covers residues 0..i.

    Older ladder-sequencing tools list nladder from the C-terminal side (and
    cladder from the N-terminal side); compare reversed against their output.
    """
    # Hydrolysis-capped ladder: water closes the ends, no terminal groups
    delta = spectrum.mass(mod) + spectrum.mass('H2O') + charge * spectrum.proton_mass
    return spectrum.nterm_series(delta, charge)


def _x_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.ladder_last + spectrum.mass(spectrum.cterm) + spectrum.mass('CO - H') + charge * spectrum.proton_mass
    return spectrum.cterm_series(delta, charge)


def _y_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.ladder_last + spectrum.mass(spectrum.cterm) + spectrum.mass('H') + charge * spectrum.proton_mass
    return spectrum.cterm_series(delta, charge)


def _Y_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.ladder_last + spectrum.mass(spectrum.cterm) - spectrum.mass('H') + charge * spectrum.proton_mass
    return spectrum.cterm_series(delta, charge)


def _z_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.ladder_last + spectrum.mass(spectrum.cterm) - spectrum.mass('NH2') + charge * spectrum.proton_mass
    return spectrum.cterm_series(delta, charge)


def _cladder_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) + spectrum.ladder_last + spectrum.mass('H2O') + charge * spectrum.proton_mass
    return spectrum.cterm_series(delta, charge)


def _immonium_series(spectrum: 'Spectrum', charge: int, mod: Optional[str]) -> List[float]:
    delta = spectrum.mass(mod) - spectrum.mass('CO')
    residue_masses = np.diff(spectrum.ladder, prepend=0.0)
    return ((residue_masses + delta + charge * spectrum.proton_mass) / charge).tolist()


SeriesFormula = Callable[['Spectrum', int, Optional[str]], List[float]]

ION_SERIES_FORMULAS: Dict[IonType, SeriesFormula] = {
    IonType.a: _a_series,
    IonType.b: _b_series,
    IonType.c: _c_series,
    IonType.x: _x_series,
    IonType.y: _y_series,
    IonType.Y: _Y_series,
    IonType.z: _z_series,
    IonType.immonium: _immonium_series,
    IonType.nladder: _nladder_series,
    IonType.cladder: _cladder_series,
}

def check_formula_table(formulas: Dict[IonType, SeriesFormula]) -> Dict[IonType, SeriesFormula]:
    """Return formulas as a dict after checking every IonType has an entry.

    Raises
    ------
    ConfigurationError
        If any ion type lacks a formula
    """
    missing = set(IonType) - set(formulas)
    if missing:
        raise ConfigurationError(
            f"ion types without a formula: {sorted(t.value for t in missing)}"
        )
    return dict(formulas)


check_formula_table(ION_SERIES_FORMULAS)


# =============================================================================
# Spectrum
# =============================================================================

class Spectrum:
    """Theoretical ion series of one peptide.

    Parameters
    ----------
    sequence : str
        Peptide sequence; whitespace is allowed and weighs 0
    nterm, cterm : str or float
        N- and C-terminal groups as formulas or masses (default H and OH)
    residue_masses : np.ndarray (float64, 256), optional
        ord()-indexed residue masses; derived from mass_source when omitted
    electron_mass : float
        Electron mass used for the proton mass (H - e)
    mass_source : callable
        Element symbol → mass for all formulas (monoisotopic by default)
    tracked_residues : str
        Residues whose positions are recorded in residue_locations
    masks : dict, optional
        Initial masks: ion type (or (ion type, modification)) → ladder indices
    formulas : dict, optional
        IonType → formula function; defaults to ION_SERIES_FORMULAS. Must
        cover every IonType, else ConfigurationError is raised.

    Notes
    -----
    Instances cache computed series and are not safe for concurrent use;
    give each thread its own Spectrum.
    """

    def __init__(
        self,
        sequence: str,
        nterm: Molecule = 'H',
        cterm: Molecule = 'OH',
        residue_masses: Optional[np.ndarray] = None,
        electron_mass: float = ELECTRON_MASS,
        mass_source: MassSource = monoisotopic_mass,
        tracked_residues: Iterable[str] = '',
        masks: Optional[Dict] = None,
        formulas: Optional[Dict[IonType, SeriesFormula]] = None,
    ):
        self.sequence = sequence
        self.nterm = nterm
        self.cterm = cterm
        self.electron_mass = electron_mass
        self.mass_source = mass_source
        self.formulas = check_formula_table(ION_SERIES_FORMULAS if formulas is None else formulas)

        self.mass_ladder, self.residue_locations = build_ladder(
            sequence,
            residue_masses=residue_masses,
            tracked_residues=tracked_residues,
            mass_source=mass_source,
        )
        self.residue_masses = self.mass_ladder.residue_masses
        self.ladder = self.mass_ladder.cumulative

        self._series_cache: Dict[tuple, List[float]] = {}
        self._series_mask: Dict[object, List[int]] = {}

        for key, locations in (masks or {}).items():
            if isinstance(key, tuple):
                ion_type, modification = key
            else:
                ion_type, modification = key, None
            self.mask_locations(ion_type, locations, modification)

        logger.debug(f"Spectrum {sequence!r}: {len(self.ladder)} ladder positions")

    # -------------------------------------------------------------------------
    # Masses
    # -------------------------------------------------------------------------

    def mass(self, molecule: Molecule) -> float:
        """Mass of a formula string, a number, or None (0) under mass_source."""
        return formula_mass(molecule, self.mass_source)

    @property
    def proton_mass(self) -> float:
        """Hydrogen minus an electron."""
        return self.mass('H') - self.electron_mass

    @property
    def ladder_last(self) -> float:
        return self.mass_ladder.last

    def parent_ion_mass(self, charge: int = 1) -> float:
        """m/z of the intact peptide at the given charge."""
        if charge == 0:
            raise ZeroChargeError("zero charge specified for parent ion")
        return (self.mass(self.nterm) + self.ladder_last + self.mass(self.cterm) + charge * self.proton_mass) / charge

    # -------------------------------------------------------------------------
    # Series
    # -------------------------------------------------------------------------

    def series(self, request: str) -> List[float]:
        """Series by name, e.g. 'y', 'b++', 'nladder-', 'y HPO3'.

        Returns the cached list itself: copy it before modifying, or later
        calls see the change.

        >>> spectrum = Spectrum('RPPGFSPFR')
        >>> spectrum.series('b++') == spectrum.b_series(2)
        True
        """
        return self.ion_series(parse_series(request))

    def ion_series(self, spec: SeriesSpec) -> List[float]:
        """Masked series for a SeriesSpec, computed once per instance.

        The returned list is the cached one and is shared between calls.
        """
        key = (spec.ion_type, spec.charge, spec.modification)
        cached = self._series_cache.get(key)
        if cached is not None:
            return cached

        if len(self.ladder) == 0:
            raise ValueError("cannot calculate ion series for an empty sequence")

        values = self.formulas[spec.ion_type](self, spec.charge, spec.modification)
        self._series_cache[key] = self._mask(values, spec.ion_type, spec.modification)
        return self._series_cache[key]

    def nterm_series(self, delta: float, charge: int) -> List[float]:
        """Prefix series: (ladder[i] + delta) / charge.

        delta must already include the protons added by charge.
        """
        return ((self.ladder + delta) / charge).tolist()

    def cterm_series(self, delta: float, charge: int) -> List[float]:
        """Suffix series: delta / charge, then (delta - ladder[i]) / charge.

        The last (zero-residue) value is dropped so the series has one value
        per ladder position. delta must already include the full ladder mass
        and the protons added by charge.
        """
        values = ((delta - self.ladder) / charge).tolist()
        values.insert(0, delta / charge)
        values.pop()
        return values

    def a_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.a, charge, mod))

    def b_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.b, charge, mod))

    def c_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.c, charge, mod))

    def x_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.x, charge, mod))

    def y_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.y, charge, mod))

    def Y_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.Y, charge, mod))

    def z_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.z, charge, mod))

    def immonium_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.immonium, charge, mod))

    def nladder_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.nladder, charge, mod))

    def cladder_series(self, charge: int = 1, mod: Optional[str] = None) -> List[float]:
        return self.ion_series(SeriesSpec(IonType.cladder, charge, mod))

    # -------------------------------------------------------------------------
    # Masking
    # -------------------------------------------------------------------------

    def mask_locations(
        self,
        ion_type: Union[str, IonType],
        locations: Iterable[int],
        modification: Optional[str] = None,
        overwrite: bool = False,
    ) -> List[int]:
        """Register ladder indices to negate in a series.

        Negative indices count from the end of the ladder. Locations stay
        unique, so no position is negated twice. With a modification, the
        mask applies only to series requested with that modification (in
        addition to the plain ion type mask).

        Returns
        -------
        list
            The mask now registered for the key
        """
        ion_type = _ion_type(ion_type)
        modification = _normalize_modification(modification)
        key = ion_type if modification is None else (ion_type, modification)

        n = len(self.ladder)
        normalized = []
        for location in locations:
            location = int(location)
            if location < 0:
                location += n
            if not 0 <= location < n:
                raise IndexError(f"mask location {location} outside ladder of length {n}")
            normalized.append(location)

        existing = [] if overwrite else self._series_mask.get(key, [])
        self._series_mask[key] = list(dict.fromkeys(existing + normalized))

        # Masks apply to series computed from now on
        for cache_key in [k for k in self._series_cache if k[0] is ion_type]:
            del self._series_cache[cache_key]

        return list(self._series_mask[key])

    def _mask(self, values: List[float], ion_type: IonType, modification: Optional[str]) -> List[float]:
        locations = list(self._series_mask.get(ion_type, []))
        if modification is not None:
            locations.extend(self._series_mask.get((ion_type, modification), []))

        for index in dict.fromkeys(locations):
            values[index] = -values[index]
        return values

    def __repr__(self):
        return f"Spectrum({self.sequence!r}, nterm={self.nterm!r}, cterm={self.cterm!r})"
