"""Enzyme cleavage rules and the built-in enzyme library.

Rules are read from a small tabular definition (the Mascot enzymes file
layout), one enzyme per line:

    name    sense    residues    exception    (ignored)    (ignored)

`sense` is "C-Term" (cleaves after the residue) or "N-Term" (cleaves
before it). The exception is at most one residue; a C-terminal exception
suppresses cleavage when that residue follows the cleavage residue (trypsin
does not cut before proline).

The library is immutable after construction and is safe to share between
threads.

Examples
--------
>>> trypsin = ENZYMES.lookup("Trypsin")
>>> trypsin.cleavage_residues, trypsin.cterm_exception
('KR', 'P')
>>> "trypsin" in ENZYMES     # names are case-sensitive
False
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional

import numpy as np

from ..exceptions import ConfigurationError, UnknownEnzymeError

logger = logging.getLogger(__name__)


class CleavageSense(Enum):
    """Side of the cleavage residue the enzyme cuts on."""
    AFTER = "C-Term"   # cut between the residue and its successor
    BEFORE = "N-Term"  # cut between the residue and its predecessor


@dataclass(frozen=True)
class CleavageRule:
    """Immutable cleavage rule for one enzyme.

    Attributes
    ----------
    name : str
        Enzyme name (library key)
    cleavage_residues : str
        Residues the enzyme cleaves at (non-empty)
    cterm_exception : str or None
        Residue that blocks cleavage when it follows the cleavage residue
    sense : CleavageSense
        Whether cleavage occurs after or before the residue
    """

    name: str
    cleavage_residues: str
    cterm_exception: Optional[str] = None
    sense: CleavageSense = CleavageSense.AFTER

    # ord()-indexed lookup used by the Numba scanner
    cleave_mask: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Accepts any iterable of single characters; order kept, duplicates dropped
        residues = ''.join(dict.fromkeys(''.join(self.cleavage_residues)))
        if not residues:
            raise ConfigurationError(f"{self.name}: cleavage residues must not be empty")

        exception = self.cterm_exception or None
        if exception is not None and len(exception) != 1:
            raise ConfigurationError(
                f"cterm exceptions must be a single residue: {self.cterm_exception}"
            )

        mask = np.zeros(256, dtype=np.bool_)
        for residue in residues:
            code = ord(residue)
            if code > 255:
                raise ConfigurationError(f"{self.name}: invalid cleavage residue {residue!r}")
            mask[code] = True

        object.__setattr__(self, 'cleavage_residues', residues)
        object.__setattr__(self, 'cterm_exception', exception)
        object.__setattr__(self, 'cleave_mask', mask)

    @property
    def cleaves_after(self) -> bool:
        return self.sense is CleavageSense.AFTER

    @property
    def exception_code(self) -> int:
        """ord() of the exception residue, or -1 when there is none."""
        return ord(self.cterm_exception) if self.cterm_exception else -1


# =============================================================================
# Table Parsing
# =============================================================================

_FLAG_TOKENS = {"yes", "no"}


def parse_enzyme_line(line: str) -> CleavageRule:
    """Build a CleavageRule from one enzyme table line.

    Tab-separated lines keep empty columns, so an empty exception field is
    allowed. Whitespace-separated lines drop empty columns; there the
    trailing yes/no flags are recognised and whatever remains after the
    residues is the exception.

    Raises
    ------
    ConfigurationError
        On missing columns, an unknown sense token or a multi-residue
        exception.
    """
    if '\t' in line:
        fields = [f.strip() for f in line.strip('\r\n').split('\t')]
        rest = fields[3:4]
    else:
        fields = line.split()
        rest = fields[3:]
        while rest and rest[-1].lower() in _FLAG_TOKENS:
            rest.pop()

    if len(fields) < 3:
        raise ConfigurationError(f"enzyme definition needs name, sense and residues: {line!r}")

    name, sense_token, residues = fields[:3]
    try:
        sense = CleavageSense(sense_token)
    except ValueError:
        raise ConfigurationError(
            f"{name}: sense must be 'C-Term' or 'N-Term', got {sense_token!r}"
        ) from None

    if len(rest) > 1:
        raise ConfigurationError(f"cterm exceptions must be a single residue: {' '.join(rest)}")
    exception = rest[0] if rest else None

    return CleavageRule(name, residues, exception, sense)


def parse_enzyme_table(text: str) -> List[CleavageRule]:
    """Parse an enzyme table; blank lines and '#' comments are skipped."""
    rules = []
    for line in text.splitlines():
        if not line.strip() or line.lstrip().startswith('#'):
            continue
        rules.append(parse_enzyme_line(line))
    return rules


# =============================================================================
# Enzyme Library
# =============================================================================

class EnzymeLibrary:
    """Read-only mapping of enzyme name → CleavageRule.

    Lookup is an exact, case-sensitive match on the enzyme name.
    """

    def __init__(self, rules):
        by_name: Dict[str, CleavageRule] = {}
        for rule in rules:
            if rule.name in by_name:
                logger.warning(f"Duplicate enzyme definition replaced: {rule.name}")
            by_name[rule.name] = rule
        self._rules = MappingProxyType(by_name)

    @classmethod
    def from_table(cls, text: str) -> 'EnzymeLibrary':
        return cls(parse_enzyme_table(text))

    def lookup(self, name: str) -> CleavageRule:
        """Return the rule named `name` or raise UnknownEnzymeError."""
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownEnzymeError(name) from None

    def get(self, name: str, default=None) -> Optional[CleavageRule]:
        return self._rules.get(name, default)

    def names(self) -> List[str]:
        return list(self._rules)

    def __getitem__(self, name: str) -> CleavageRule:
        return self.lookup(name)

    def __contains__(self, name) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[CleavageRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self):
        return f"EnzymeLibrary({self.names()!r})"


# Mascot enzyme definitions
ENZYME_TABLE = """\
Arg-C\tC-Term\tR\tP\tno\tno
Asp-N\tN-Term\tBD\t\tno\tno
Asp-N_ambic\tN-Term\tDE\t\tno\tno
Chymotrypsin\tC-Term\tFLWY\tP\tno\tno
CNBr\tC-Term\tM\t\tno\tno
Lys-C\tC-Term\tK\tP\tno\tno
Lys-C/P\tC-Term\tK\t\tno\tno
PepsinA\tC-Term\tFL\t\tno\tno
Tryp-CNBr\tC-Term\tKMR\tP\tno\tno
TrypChymo\tC-Term\tFKLRWY\tP\tno\tno
Trypsin/P\tC-Term\tKR\t\tno\tno
V8-DE\tC-Term\tBDEZ\tP\tno\tno
V8-E\tC-Term\tEZ\tP\tno\tno
Trypsin\tC-Term\tKR\tP\tno\tno
V8-E+Trypsin\tC-Term\tEKRZ\tP\tno\tno
V8-DE+Trypsin\tC-Term\tBDEKRZ\tP\tno\tno
"""

ENZYMES = EnzymeLibrary.from_table(ENZYME_TABLE)


def get_enzyme(name: str) -> CleavageRule:
    """Look up a built-in enzyme by name (raises UnknownEnzymeError)."""
    return ENZYMES.lookup(name)
