"""Tests for theoretical MS/MS spectra."""

import logging

import pytest

from alphainsilico.exceptions import UnknownSeriesError
from alphainsilico.fragments import Fragment, Spectrum


TVQQEL_YB = [
    102.054954926291,
    132.101905118891,
    201.123368842491,
    261.144498215091,
    329.181946353891,
    389.203075726491,
    457.240523865291,
    517.261653237891,
    586.283116961491,
    616.330067154091,
    699.367180941891,
    717.377745628191,
]


class TestFragmentProcess:
    """Test the default y/b fragmentation."""

    def test_process(self, reference_peptide):
        parent, masses = Fragment().process(reference_peptide)
        assert parent == pytest.approx(717.377745628191, abs=1e-9)
        assert masses == pytest.approx(TVQQEL_YB, abs=1e-9)

    def test_unsorted_keeps_series_order(self, reference_peptide):
        _, masses = Fragment(sort=False).process(reference_peptide)
        spectrum = Spectrum(reference_peptide)
        assert masses == spectrum.y_series() + spectrum.b_series()

    def test_intensity_pairs(self, reference_peptide):
        _, peaks = Fragment(series=("b",), intensity=100.0).process(reference_peptide)
        assert len(peaks) == 6
        assert peaks[0][0] == pytest.approx(102.054954926291, abs=1e-9)
        assert all(intensity == 100.0 for _, intensity in peaks)

    def test_parent_charge(self, reference_peptide):
        parent, _ = Fragment(charge=2).process(reference_peptide)
        spectrum = Spectrum(reference_peptide)
        assert parent == pytest.approx(spectrum.parent_ion_mass(2), abs=1e-12)

    def test_charged_series(self, reference_peptide):
        _, masses = Fragment(series=("b++",)).process(reference_peptide)
        assert masses == pytest.approx(sorted(Spectrum(reference_peptide).b_series(2)), abs=1e-12)

    def test_unknown_series(self, reference_peptide):
        with pytest.raises(UnknownSeriesError):
            Fragment(series=("q",)).process(reference_peptide)

    def test_logs_peptide(self, reference_peptide, caplog):
        with caplog.at_level(logging.INFO, logger="alphainsilico.fragments.fragment"):
            Fragment().process(reference_peptide)
        assert "fragment TVQQEL" in caplog.text


class TestFragmentMasking:
    """Test handling of masked positions in peak lists."""

    @pytest.fixture
    def masked_spectrum(self, reference_peptide):
        spectrum = Spectrum(reference_peptide)
        spectrum.mask_locations("y", [0])
        return spectrum

    def test_unmask_drops_masked(self, masked_spectrum):
        peaks = Fragment().peaks(masked_spectrum)
        assert len(peaks) == 11
        assert all(mass > 0 for mass in peaks)

    def test_keep_masked(self, masked_spectrum):
        peaks = Fragment(unmask=False).peaks(masked_spectrum)
        assert len(peaks) == 12
        assert peaks[0] == pytest.approx(-717.377745628191, abs=1e-9)


class TestFragmentHeaders:
    """Test spectrum summary."""

    def test_headers(self, reference_peptide):
        fragment = Fragment(series=("y", "b++"), charge=2)
        headers = fragment.headers(fragment.spectrum(reference_peptide))

        assert headers["charge"] == 2
        assert headers["nterm"] == "H"
        assert headers["cterm"] == "OH"
        assert headers["series"] == ["y", "b++"]
        assert headers["parent_ion_mass"] == pytest.approx(
            Spectrum(reference_peptide).parent_ion_mass(2), abs=1e-12,
        )

    def test_custom_termini(self, reference_peptide):
        fragment = Fragment(nterm="C2H3O")
        spectrum = fragment.spectrum(reference_peptide)
        assert spectrum.nterm == "C2H3O"
        assert fragment.headers(spectrum)["nterm"] == "C2H3O"
