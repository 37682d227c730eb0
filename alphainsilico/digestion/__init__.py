"""In silico enzymatic digestion.

- Enzyme cleavage rules and the built-in (Mascot) enzyme library
- Numba-compiled cleavage site scanning and missed-cleavage expansion
- Digester API: cleavage_sites / site_digest / digest
- FASTA helpers and length filtering for digestion workflows
"""

from .enzymes import (
    CleavageRule,
    CleavageSense,
    EnzymeLibrary,
    ENZYMES,
    ENZYME_TABLE,
    get_enzyme,
    parse_enzyme_line,
    parse_enzyme_table,
)

from .cleavage import (
    find_cleavage_sites,
    expand_missed_cleavages,
    cleavage_sites,
    missed_cleavage_spans,
)

from .digester import (
    Digester,
    get_digester,
    TRYPSIN,
)

from .fasta_reader import (
    strip_fasta_header,
    parse_protein_id,
    read_fasta,
)

from .pipeline import (
    DigestParams,
    strip_whitespace,
    filter_by_length,
    digest_sequence,
    digest_with_params,
    digest_fasta,
)

__all__ = [
    # Enzymes
    'CleavageRule',
    'CleavageSense',
    'EnzymeLibrary',
    'ENZYMES',
    'ENZYME_TABLE',
    'get_enzyme',
    'parse_enzyme_line',
    'parse_enzyme_table',

    # Scanning
    'find_cleavage_sites',
    'expand_missed_cleavages',
    'cleavage_sites',
    'missed_cleavage_spans',

    # Digestion
    'Digester',
    'get_digester',
    'TRYPSIN',

    # FASTA
    'strip_fasta_header',
    'parse_protein_id',
    'read_fasta',

    # Workflow
    'DigestParams',
    'strip_whitespace',
    'filter_by_length',
    'digest_sequence',
    'digest_with_params',
    'digest_fasta',
]
