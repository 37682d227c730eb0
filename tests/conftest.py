"""Pytest configuration for AlphaInSilico tests.

Common fixtures: reference sequences, the built-in enzymes and the mass
constants the expected values were calculated with.
"""

import pytest


@pytest.fixture
def protein_sequence():
    """Reference protein used in the digestion examples."""
    return "MIVIGRSIVHPYITNEYEPFAAEKQQILSIMAG"


@pytest.fixture
def reference_peptide():
    """Peptide with validated parent ion and b series masses."""
    return "TVQQEL"


@pytest.fixture
def reference_b_series():
    """b+ series of TVQQEL (H / OH termini, monoisotopic)."""
    return [
        102.054954926291,
        201.123368842491,
        329.181946353891,
        457.240523865291,
        586.283116961491,
        699.367180941891,
    ]


@pytest.fixture
def trypsin():
    from alphainsilico.digestion import Digester
    return Digester.by_name("Trypsin")


@pytest.fixture
def arg_digester():
    """Cleaves after R, no exception."""
    from alphainsilico.digestion import CleavageRule, Digester
    return Digester(CleavageRule("arg", "R"))


@pytest.fixture
def argp_digester():
    """Cleaves after R unless followed by P."""
    from alphainsilico.digestion import CleavageRule, Digester
    return Digester(CleavageRule("argp", "R", "P"))


@pytest.fixture
def proton_mass():
    from alphainsilico.constants import PROTON_MASS
    return PROTON_MASS
