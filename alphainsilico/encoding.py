"""ord() encoding of sequences for Numba kernels."""

import numpy as np


def encode_sequence_to_ord(sequence: str) -> np.ndarray:
    """Encode a sequence string to an ord() array for Numba processing.

    Parameters
    ----------
    sequence : str
        Protein or peptide sequence; whitespace is allowed and kept

    Returns
    -------
    sequence_ord : np.ndarray (uint8)
        Array of ord() values for each character

    Raises
    ------
    ValueError
        If the sequence contains characters outside the single-byte range

    Examples
    --------
    >>> encode_sequence_to_ord("PEPTIDE")
    array([80, 69, 80, 84, 73, 68, 69], dtype=uint8)
    """
    try:
        raw = sequence.encode('latin-1')
    except UnicodeEncodeError as err:
        raise ValueError(f"sequence contains non single-byte characters: {err}") from None
    return np.frombuffer(raw, dtype=np.uint8).copy()
