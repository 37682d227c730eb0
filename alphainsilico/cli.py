"""Command line interface.

    alphainsilico digest MIVIGRSIVHPYITNEYEPFAAEKQQILSIMAG
    alphainsilico digest proteins.fasta --enzyme Lys-C --max-misses 1 --min-length 7
    alphainsilico fragment TVQQEL --series y b --charge 2
    alphainsilico enzymes
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .digestion import ENZYMES, DigestParams, digest_fasta, digest_with_params
from .exceptions import InSilicoError
from .fragments import Fragment

logger = logging.getLogger(__name__)


def _format_peptide(peptide) -> str:
    if isinstance(peptide, str):
        return peptide
    start, end = peptide
    return f"{start}\t{end}"


def _digest_params(args: argparse.Namespace) -> DigestParams:
    return DigestParams(
        enzyme=args.enzyme,
        max_misses=args.max_misses,
        min_length=args.min_length,
        max_length=args.max_length,
        site_digest=args.site_digest,
    )


def run_digest(args: argparse.Namespace) -> int:
    params = _digest_params(args)
    path = Path(args.sequence)

    if path.is_file():
        for protein_id, peptides in digest_fasta(path, params).items():
            for peptide in peptides:
                print(f"{protein_id}\t{_format_peptide(peptide)}")
    else:
        for peptide in digest_with_params(args.sequence, params):
            print(_format_peptide(peptide))
    return 0


def run_fragment(args: argparse.Namespace) -> int:
    fragment = Fragment(
        series=args.series,
        charge=args.charge,
        intensity=args.intensity,
        nterm=args.nterm,
        cterm=args.cterm,
        sort=not args.no_sort,
        unmask=not args.keep_masked,
    )

    for peptide in args.peptides:
        parent, peaks = fragment.process(peptide)
        print(f"# {peptide}\t{parent!r}")
        for peak in peaks:
            if isinstance(peak, tuple):
                print(f"{peak[0]!r}\t{peak[1]!r}")
            else:
                print(repr(peak))
    return 0


def run_enzymes(args: argparse.Namespace) -> int:
    for rule in ENZYMES:
        exception = rule.cterm_exception or '-'
        print(f"{rule.name}\t{rule.sense.value}\t{rule.cleavage_residues}\t{exception}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='alphainsilico',
        description='In silico protein digestion and peptide fragmentation',
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: WARNING)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    digest = subparsers.add_parser('digest', help='Digest a protein sequence into peptides')
    digest.add_argument('sequence',
                        help='Protein sequence, single FASTA entry, or path to a FASTA file')
    digest.add_argument('--enzyme', default='Trypsin', help='Enzyme name (default: Trypsin)')
    digest.add_argument('--max-misses', type=int, default=0,
                        help='Maximum number of missed cleavages (default: 0)')
    digest.add_argument('--min-length', type=int, default=None, help='Minimum peptide length')
    digest.add_argument('--max-length', type=int, default=None, help='Maximum peptide length')
    digest.add_argument('--site-digest', action='store_true',
                        help='Print start/end positions instead of peptides')
    digest.set_defaults(func=run_digest)

    fragment = subparsers.add_parser('fragment', help='Theoretical MS/MS spectrum of peptides')
    fragment.add_argument('peptides', nargs='+', help='Peptide sequences')
    fragment.add_argument('--series', nargs='+', default=['y', 'b'],
                          help="Series to include, e.g. y b++ 'y HPO3' (default: y b)")
    fragment.add_argument('--charge', type=int, default=1, help='Parent ion charge (default: 1)')
    fragment.add_argument('--intensity', type=float, default=None,
                          help='Uniform intensity paired with each mass')
    fragment.add_argument('--nterm', default='H', help='N-terminal group formula (default: H)')
    fragment.add_argument('--cterm', default='OH', help='C-terminal group formula (default: OH)')
    fragment.add_argument('--no-sort', action='store_true', help='Keep series order')
    fragment.add_argument('--keep-masked', action='store_true',
                          help='Keep masked (negative) masses')
    fragment.set_defaults(func=run_fragment)

    enzymes = subparsers.add_parser('enzymes', help='List built-in enzymes')
    enzymes.set_defaults(func=run_enzymes)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        return args.func(args)
    except (InSilicoError, FileNotFoundError) as err:
        logger.error(str(err))
        return 1


if __name__ == '__main__':
    sys.exit(main())
