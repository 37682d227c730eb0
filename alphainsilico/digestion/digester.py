"""Protein digestion into peptides.

A Digester wraps one CleavageRule and exposes the three digestion views:

- `cleavage_sites`: boundaries between fully cleaved fragments
- `site_digest`: (start, end) spans allowing missed cleavages
- `digest`: the peptide strings for those spans

Examples
--------
>>> trypsin = Digester.by_name("Trypsin")
>>> trypsin.digest("MIVIGRSIVHPYITNEYEPFAAEKQQILSIMAG")
['MIVIGR', 'SIVHPYITNEYEPFAAEK', 'QQILSIMAG']

>>> trypsin.site_digest("MIVIGRSIVHPYITNEYEPFAAEKQQILSIMAG", max_misses=1)
[(0, 6), (0, 24), (6, 24), (6, 33), (24, 33)]

Notes
-----
Whitespace is not removed: a whitespace run after a cleavage residue is
part of the preceding peptide. Strip it first (see pipeline.strip_whitespace)
when that is not wanted.
"""

from typing import List, Optional, Tuple

from .cleavage import cleavage_sites, missed_cleavage_spans
from .enzymes import CleavageRule, get_enzyme


class Digester:
    """Digests sequences with a single enzyme cleavage rule.

    Digesters hold no scanning state and may be shared between threads.
    """

    def __init__(self, rule: CleavageRule):
        self.rule = rule

    @classmethod
    def by_name(cls, name: str) -> 'Digester':
        """Digester for a built-in enzyme (raises UnknownEnzymeError)."""
        return cls(get_enzyme(name))

    @property
    def name(self) -> str:
        return self.rule.name

    def cleavage_sites(
        self,
        sequence: str,
        offset: int = 0,
        length: Optional[int] = None,
    ) -> List[int]:
        """Boundaries of the fully cleaved fragments of sequence[offset:offset+length].

        Fragment n spans sequence[sites[n]:sites[n + 1]].

        >>> Digester(CleavageRule("argp", "R", "P")).cleavage_sites("RRP")
        [0, 1, 3]
        """
        return cleavage_sites(sequence, self.rule, offset, length).tolist()

    def site_digest(
        self,
        sequence: str,
        max_misses: int = 0,
        offset: int = 0,
        length: Optional[int] = None,
    ) -> List[Tuple[int, int]]:
        """(start, end) spans of all peptides with up to max_misses missed cleavages."""
        boundaries = cleavage_sites(sequence, self.rule, offset, length)
        spans = missed_cleavage_spans(boundaries, max_misses)
        return [(int(start), int(end)) for start, end in spans]

    def digest(
        self,
        sequence: str,
        max_misses: int = 0,
        offset: int = 0,
        length: Optional[int] = None,
    ) -> List[str]:
        """Peptides with up to max_misses missed cleavages, in sequence order."""
        return [
            sequence[start:end]
            for start, end in self.site_digest(sequence, max_misses, offset, length)
        ]

    def __repr__(self):
        return f"Digester({self.rule.name!r})"


def get_digester(name: str) -> Digester:
    """Digester for a built-in enzyme (raises UnknownEnzymeError)."""
    return Digester.by_name(name)


TRYPSIN = Digester.by_name("Trypsin")
