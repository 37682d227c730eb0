"""Theoretical MS/MS spectra: parent ion mass plus selected fragment series.

Fragment combines one or more ion series of a peptide into a single peak
list, optionally dropping masked (negative) positions, sorting by mass and
attaching a uniform intensity.

Examples
--------
>>> parent, masses = Fragment().process("TVQQEL")
>>> parent              # → 717.377745628191
>>> masses[:3]          # → [102.0549..., 132.1019..., 201.1233...]

>>> Fragment(series=("b",), intensity=100.0).process("TVQQEL")[1][0]
(102.05495..., 100.0)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .spectrum import Molecule, Spectrum

logger = logging.getLogger(__name__)

Peak = Union[float, Tuple[float, float]]


@dataclass
class Fragment:
    """Parameters and processing for theoretical MS/MS spectra.

    Attributes
    ----------
    series : sequence of str
        Series requests to include (default y and b)
    charge : int
        Charge of the parent ion
    intensity : float, optional
        Uniform intensity; when set, peaks are (mass, intensity) pairs
    nterm, cterm : str or float
        Terminal groups (formulas or masses)
    sort : bool
        Sort peaks by mass
    unmask : bool
        Drop masked (negative) masses
    """

    series: Sequence[str] = ('y', 'b')
    charge: int = 1
    intensity: Optional[float] = None
    nterm: Molecule = 'H'
    cterm: Molecule = 'OH'
    sort: bool = True
    unmask: bool = True

    def spectrum(self, peptide: str) -> Spectrum:
        """The Spectrum used for a peptide."""
        return Spectrum(peptide, self.nterm, self.cterm)

    def process(self, peptide: str) -> Tuple[float, List[Peak]]:
        """Parent ion mass and fragment peak list for a peptide."""
        logger.info(f"fragment {peptide}")
        spectrum = self.spectrum(peptide)
        return spectrum.parent_ion_mass(self.charge), self.peaks(spectrum)

    def peaks(self, spectrum: Spectrum) -> List[Peak]:
        masses: List[float] = []
        for request in self.series:
            masses.extend(spectrum.series(request))

        if self.unmask:
            masses = [mass for mass in masses if mass >= 0]
        if self.sort:
            masses.sort()
        if self.intensity is not None:
            return [(mass, self.intensity) for mass in masses]
        return masses

    def headers(self, spectrum: Spectrum) -> Dict[str, Any]:
        """Summary of the settings and parent ion mass for a spectrum."""
        return {
            'charge': self.charge,
            'nterm': spectrum.nterm,
            'cterm': spectrum.cterm,
            'parent_ion_mass': spectrum.parent_ion_mass(self.charge),
            'series': list(self.series),
        }
