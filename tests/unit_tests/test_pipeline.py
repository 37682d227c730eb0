"""Tests for FASTA handling, length filtering and the digestion workflow."""

import logging

import pytest

from alphainsilico.digestion import (
    DigestParams,
    digest_fasta,
    digest_sequence,
    digest_with_params,
    filter_by_length,
    parse_protein_id,
    read_fasta,
    strip_fasta_header,
    strip_whitespace,
)
from alphainsilico.exceptions import UnknownEnzymeError


# =============================================================================
# FASTA Handling
# =============================================================================

class TestStripFastaHeader:
    """Test single-entry FASTA cleanup."""

    def test_header_and_whitespace_removed(self):
        text = ">sp|P12345|TEST_HUMAN Test protein\nMIVIGRSIVH\nPYITNEYEPF AAEK\n"
        assert strip_fasta_header(text) == "MIVIGRSIVHPYITNEYEPFAAEK"

    def test_plain_sequence_unchanged(self):
        assert strip_fasta_header("MIVIGR SIVH\n") == "MIVIGR SIVH\n"

    def test_header_without_newline_unchanged(self):
        assert strip_fasta_header(">header only") == ">header only"

    def test_strip_whitespace(self):
        assert strip_whitespace(" SA\n  MPL\t \rE  ") == "SAMPLE"


class TestFastaReading:
    """Test FASTA file parsing."""

    def test_parse_uniprot_id(self):
        protein_id, desc = parse_protein_id("sp|P12345|NAME_HUMAN Some protein")
        assert protein_id == "P12345"
        assert desc == "sp|P12345|NAME_HUMAN Some protein"

    def test_parse_generic_id(self):
        protein_id, desc = parse_protein_id("PROT123 Description here")
        assert protein_id == "PROT123"
        assert desc == "PROT123 Description here"

    def test_read_fasta(self, tmp_path):
        fasta = tmp_path / "proteins.fasta"
        fasta.write_text(
            ">sp|P12345|TEST_HUMAN Test protein\n"
            "PEPTIDEKRPROT\n"
            "EINK\n"
            ">sp|Q98765|TEST2_HUMAN Another protein\n"
            "SEQUENCEK\n"
        )

        proteins = read_fasta(fasta)
        assert len(proteins) == 2
        assert proteins[0][:2] == ("P12345", "PEPTIDEKRPROTEINK")
        assert "TEST_HUMAN" in proteins[0][2]
        assert proteins[1][:2] == ("Q98765", "SEQUENCEK")

    def test_read_fasta_min_length(self, tmp_path):
        fasta = tmp_path / "short.fasta"
        fasta.write_text(">P1 Protein 1\nSHORTSEQ\n>P2 Protein 2\nSHORT\n")

        proteins = read_fasta(fasta, min_length=7)
        assert [p[0] for p in proteins] == ["P1"]

    def test_empty_entries_and_leading_lines_skipped(self, tmp_path, caplog):
        fasta = tmp_path / "gaps.fasta"
        fasta.write_text("ORPHAN\n>P0 Empty\n>P1 One\nAA RK\n\tGG\n")

        with caplog.at_level(logging.INFO, logger="alphainsilico.digestion.fasta_reader"):
            proteins = read_fasta(fasta)
        assert [p[:2] for p in proteins] == [("P1", "AARKGG")]
        assert "gaps.fasta: 1 proteins to digest" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_fasta(tmp_path / "missing.fasta")


# =============================================================================
# Length Filtering
# =============================================================================

class TestFilterByLength:
    """Test peptide length windows."""

    PEPTIDES = ["MIVIGR", "SIVHPYITNEYEPFAAEK", "QQILSIMAG"]

    def test_no_bounds(self):
        assert filter_by_length(self.PEPTIDES) == self.PEPTIDES

    def test_min_length(self):
        assert filter_by_length(self.PEPTIDES, min_length=7) == [
            "SIVHPYITNEYEPFAAEK", "QQILSIMAG",
        ]

    def test_max_length(self):
        assert filter_by_length(self.PEPTIDES, max_length=9) == ["MIVIGR", "QQILSIMAG"]

    def test_bounds_are_inclusive(self):
        assert filter_by_length(self.PEPTIDES, 6, 6) == ["MIVIGR"]

    def test_spans_filtered_by_span_length(self):
        spans = [(0, 6), (6, 24), (24, 33)]
        assert filter_by_length(spans, min_length=7) == [(6, 24), (24, 33)]


# =============================================================================
# Digestion Workflow
# =============================================================================

class TestDigestSequence:
    """Test the digestion task wrapper."""

    def test_default_trypsin(self, protein_sequence):
        assert digest_sequence(protein_sequence) == [
            "MIVIGR", "SIVHPYITNEYEPFAAEK", "QQILSIMAG",
        ]

    def test_fasta_entry(self):
        entry = ">test\nMIVIGRSIVHPYITNEYE\nPFAAEKQQILSIMAG\n"
        assert digest_sequence(entry) == ["MIVIGR", "SIVHPYITNEYEPFAAEK", "QQILSIMAG"]

    def test_missed_cleavages_and_filters(self, protein_sequence):
        peptides = digest_sequence(protein_sequence, max_misses=1, min_length=7, max_length=20)
        assert peptides == ["SIVHPYITNEYEPFAAEK", "QQILSIMAG"]

    def test_site_digest(self, protein_sequence):
        assert digest_sequence(protein_sequence, site_digest=True) == [
            (0, 6), (6, 24), (24, 33),
        ]

    def test_other_enzyme(self):
        assert digest_sequence("AAKPAAKAA", enzyme="Lys-C/P") == ["AAK", "PAAK", "AA"]
        assert digest_sequence("AAKPAAKAA", enzyme="Lys-C") == ["AAKPAAK", "AA"]

    def test_unknown_enzyme(self, protein_sequence):
        with pytest.raises(UnknownEnzymeError):
            digest_sequence(protein_sequence, enzyme="trypsin")

    def test_logs_summary(self, protein_sequence, caplog):
        with caplog.at_level(logging.INFO, logger="alphainsilico.digestion.pipeline"):
            digest_sequence(protein_sequence)
        assert "digest MIVIGRSIVHP... to 3 peptides" in caplog.text

    def test_params(self, protein_sequence):
        params = DigestParams(max_misses=1, min_length=10)
        assert digest_with_params(protein_sequence, params) == [
            "MIVIGRSIVHPYITNEYEPFAAEK",
            "SIVHPYITNEYEPFAAEK",
            "SIVHPYITNEYEPFAAEKQQILSIMAG",
        ]


class TestDigestFasta:
    """Test digestion of FASTA files."""

    def test_digest_fasta(self, tmp_path):
        fasta = tmp_path / "proteins.fasta"
        fasta.write_text(
            ">sp|P1|ONE_HUMAN One\nMIVIGRSIVHPYITNEYEPFAAEKQQILSIMAG\n"
            ">sp|P2|TWO_HUMAN Two\nAAKPAAKAA\n"
        )

        results = digest_fasta(fasta, DigestParams(enzyme="Lys-C/P"))
        assert list(results) == ["P1", "P2"]
        assert results["P1"] == ["MIVIGRSIVHPYITNEYEPFAAEK", "QQILSIMAG"]
        assert results["P2"] == ["AAK", "PAAK", "AA"]

    def test_default_params(self, tmp_path):
        fasta = tmp_path / "one.fasta"
        fasta.write_text(">P1\nAARGGR\n")
        assert digest_fasta(fasta) == {"P1": ["AAR", "GGR"]}
