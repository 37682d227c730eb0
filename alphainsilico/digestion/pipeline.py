"""Caller-side digestion workflow: cleanup, digestion, length filtering.

The core Digester keeps whitespace as part of the preceding peptide and
does no filtering. This module wraps it the way a digestion task does:
strip a FASTA header, digest with a named enzyme, then keep peptides within
a length window.

Examples
--------
>>> digest_sequence("MIVIGRSIVHPYITNEYEPFAAEKQQILSIMAG")
['MIVIGR', 'SIVHPYITNEYEPFAAEK', 'QQILSIMAG']

>>> digest_sequence("MIVIGRSIVHPYITNEYEPFAAEKQQILSIMAG", min_length=7)
['SIVHPYITNEYEPFAAEK', 'QQILSIMAG']
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .digester import Digester
from .fasta_reader import read_fasta, strip_fasta_header

logger = logging.getLogger(__name__)

Span = Tuple[int, int]


@dataclass
class DigestParams:
    """Parameters of a digestion run."""

    enzyme: str = "Trypsin"
    max_misses: int = 0
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    site_digest: bool = False  # return (start, end) spans instead of peptides


def strip_whitespace(sequence: str) -> str:
    """Remove all whitespace from a sequence."""
    return re.sub(r'\s', '', sequence)


def _length(item) -> int:
    if isinstance(item, str):
        return len(item)
    start, end = item
    return end - start


def filter_by_length(
    peptides: Sequence[Union[str, Span]],
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> List[Union[str, Span]]:
    """Keep peptides (strings or (start, end) spans) within a length window.

    Either bound may be None (unbounded). Order is preserved.
    """
    kept = []
    for peptide in peptides:
        length = _length(peptide)
        if min_length is not None and length < min_length:
            continue
        if max_length is not None and length > max_length:
            continue
        kept.append(peptide)
    return kept


def _preview(sequence: str) -> str:
    return sequence[:11] + ('...' if len(sequence) > 10 else '')


def digest_sequence(
    sequence: str,
    enzyme: str = "Trypsin",
    max_misses: int = 0,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    site_digest: bool = False,
) -> List[Union[str, Span]]:
    """Digest a sequence (optionally a FASTA entry) and filter by length.

    Parameters
    ----------
    sequence : str
        Protein sequence, or a single FASTA entry starting with '>'
    enzyme : str
        Enzyme name from the built-in library
    max_misses : int
        Maximum number of missed cleavages
    min_length, max_length : int, optional
        Peptide length window
    site_digest : bool
        Return (start, end) spans instead of peptide strings

    Returns
    -------
    list
        Peptides (or spans) in sequence order

    Raises
    ------
    UnknownEnzymeError
        If the enzyme is not in the library
    """
    digester = Digester.by_name(enzyme)
    sequence = strip_fasta_header(sequence)

    if site_digest:
        peptides = digester.site_digest(sequence, max_misses)
    else:
        peptides = digester.digest(sequence, max_misses)

    peptides = filter_by_length(peptides, min_length, max_length)

    logger.info(f"digest {_preview(sequence)} to {len(peptides)} peptides")

    return peptides


def digest_with_params(sequence: str, params: DigestParams) -> List[Union[str, Span]]:
    """digest_sequence driven by a DigestParams object."""
    return digest_sequence(
        sequence,
        enzyme=params.enzyme,
        max_misses=params.max_misses,
        min_length=params.min_length,
        max_length=params.max_length,
        site_digest=params.site_digest,
    )


def digest_fasta(
    fasta_path: Union[str, Path],
    params: Optional[DigestParams] = None,
) -> Dict[str, List[Union[str, Span]]]:
    """Digest every protein of a FASTA file.

    Returns
    -------
    dict
        protein_id → peptides (or spans), in file order
    """
    params = params or DigestParams()
    proteins = read_fasta(fasta_path)

    logger.info(f"Digesting {len(proteins):,} proteins with {params.enzyme}...")

    results = {}
    total = 0
    for protein_id, sequence, _description in proteins:
        peptides = digest_with_params(sequence, params)
        if protein_id in results:
            logger.warning(f"Duplicate protein ID {protein_id}; keeping the last entry")
        results[protein_id] = peptides
        total += len(peptides)

    logger.info(f"Digestion complete: {len(results):,} proteins, {total:,} peptides")

    return results
