"""FASTA reading for digestion workflows.

Input to the digesters comes either as one FASTA entry pasted as text
(`strip_fasta_header`) or as a FASTA file with many proteins (`read_fasta`).
Both hand the digester whitespace-free sequences.
"""

import logging
import re
from pathlib import Path
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)

# '>' header through the first newline, then the sequence body
_FASTA_ENTRY = re.compile(r'\A>.*?\n(.*)\Z', re.DOTALL)
_WHITESPACE = re.compile(r'\s')


def strip_fasta_header(text: str) -> str:
    """Remove a leading FASTA header line and the whitespace of the body.

    Text that does not start with a '>' header line is returned unchanged,
    whitespace included.

    Examples
    --------
    >>> strip_fasta_header(">sp|P12345|TEST\\nMIVIGRSIVH\\nPYITNEYEPF\\n")
    'MIVIGRSIVHPYITNEYEPF'
    >>> strip_fasta_header("MIVIGR SIVH")
    'MIVIGR SIVH'
    """
    match = _FASTA_ENTRY.match(text)
    if match is None:
        return text
    return _WHITESPACE.sub('', match.group(1))


def parse_protein_id(header: str) -> Tuple[str, str]:
    """Split a FASTA header (without '>') into the key used by digest_fasta.

    The accession field of a UniProt header (sp|P12345|NAME ...) becomes the
    key; any other header is keyed by its first word. The stripped header is
    returned alongside it.

    >>> parse_protein_id("sp|P12345|NAME_HUMAN Some protein")
    ('P12345', 'sp|P12345|NAME_HUMAN Some protein')
    """
    description = header.strip()
    if not description:
        return '', ''

    parts = description.split('|')
    if len(parts) >= 2 and parts[1]:
        protein_id = parts[1]
    else:
        protein_id = description.split()[0]

    return protein_id, description


def read_fasta(
    fasta_path: Union[str, Path],
    min_length: int = 0,
) -> List[Tuple[str, str, str]]:
    """Load the proteins of a multi-entry FASTA file for digestion.

    Sequence lines are joined with all whitespace removed, so the digester
    sees one contiguous sequence per protein. Entries with an empty
    sequence, or one shorter than min_length, are skipped.

    Returns
    -------
    list of (protein_id, sequence, header)
        In file order

    Raises
    ------
    FileNotFoundError
        If fasta_path does not exist
    """
    fasta_path = Path(fasta_path)

    if not fasta_path.exists():
        raise FileNotFoundError(f"FASTA file not found: {fasta_path}")

    proteins = []
    current_id = None
    current_description = None
    current_seq = []

    def flush():
        if current_id is None:
            return
        sequence = ''.join(current_seq)
        if sequence and len(sequence) >= min_length:
            proteins.append((current_id, sequence, current_description))

    with open(fasta_path) as f:
        for line in f:
            if line.startswith('>'):
                flush()
                current_id, current_description = parse_protein_id(line[1:])
                current_seq = []
            elif current_id is not None:
                current_seq.append(_WHITESPACE.sub('', line))
        flush()

    logger.info(f"{fasta_path.name}: {len(proteins):,} proteins to digest (min length {min_length})")

    return proteins
