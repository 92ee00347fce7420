"""
Tests for the enrichment module.
"""

import math

import pytest
from rbns.alphabet import KmerError
from rbns.counting import kmer_frequencies
from rbns.enrichment import (
    ValidationError, compute_enrichment, infer_k, is_valid_frequency_table,
    most_enriched, validate_frequency_table
)


class TestValidateFrequencyTable:
    """Tests for validate_frequency_table."""

    def test_valid(self):
        """Test a valid 1-mer distribution."""
        validate_frequency_table({"A": 0.5, "C": 0.5}, 1)

    def test_wrong_length(self):
        """Test that keys of the wrong length are rejected."""
        with pytest.raises(ValidationError, match="non-length 2 kmer") as excinfo:
            validate_frequency_table({"A": 0.5, "C": 0.5}, 2)
        assert excinfo.value.kmer in ("A", "C")

    def test_negative_value(self):
        """Test that negative frequencies are rejected."""
        with pytest.raises(ValidationError, match="freq for A is <0") as excinfo:
            validate_frequency_table({"A": -0.2, "C": 0.5}, 1)
        assert excinfo.value.kmer == "A"
        assert excinfo.value.value == -0.2

    def test_sum_not_one(self):
        """Test that a table not summing to 1 is rejected."""
        with pytest.raises(ValidationError, match="is not 1") as excinfo:
            validate_frequency_table({"A": 0.4999, "C": 0.5}, 1)
        assert excinfo.value.total == pytest.approx(0.9999)

    def test_non_acgt_kmer(self):
        """Test that non-ACGT keys are rejected."""
        with pytest.raises(ValidationError, match="non-ACGT kmer: 'N'"):
            validate_frequency_table({"A": 0.5, "N": 0.5}, 1)

    def test_within_tolerance(self):
        """Test that small rounding errors are accepted."""
        validate_frequency_table({"A": 0.5, "C": 0.5 + 5e-7}, 1)

    def test_length_checked_before_alphabet(self):
        """Test check order: key length comes first."""
        with pytest.raises(ValidationError, match="non-length"):
            validate_frequency_table({"A": 0.5, "NN": 0.5}, 1)

    def test_empty_table(self):
        """Test that an empty table does not sum to 1."""
        with pytest.raises(ValidationError, match="is not 1"):
            validate_frequency_table({}, 2)

    def test_nan_value(self):
        """Test that a NaN frequency is rejected."""
        with pytest.raises(ValidationError, match="freq for A is <0") as excinfo:
            validate_frequency_table({"A": float("nan"), "C": 1.0}, 1)
        assert excinfo.value.kmer == "A"
        assert math.isnan(excinfo.value.value)

    def test_infinite_sum(self):
        """Test that an infinite total is rejected by the sum check."""
        with pytest.raises(ValidationError, match="is not 1") as excinfo:
            validate_frequency_table({"A": float("inf"), "C": 0.5}, 1)
        assert math.isinf(excinfo.value.total)

    def test_is_valid_frequency_table(self):
        """Test the boolean form."""
        assert is_valid_frequency_table({"A": 0.5, "C": 0.5}, 1) is True
        assert is_valid_frequency_table({"A": 0.5, "C": 0.5}, 2) is False

    def test_error_hierarchy(self):
        """Test that ValidationError is a KmerError."""
        assert issubclass(ValidationError, KmerError)


class TestInferK:
    """Tests for infer_k."""

    def test_infer_k(self):
        """Test inferring k from the keys."""
        assert infer_k({"AC": 0.25, "GG": 0.25, "CG": 0.25, "GA": 0.25}) == 2
        assert infer_k({"GCCG": 0.1, "AAAA": 0.9}) == 4

    def test_empty(self):
        """Test that an empty table has k=0."""
        assert infer_k({}) == 0


class TestComputeEnrichment:
    """Tests for compute_enrichment."""

    def test_both_observed(self):
        """Test ratios when both libraries have the k-mer."""
        r = compute_enrichment({"A": 0.5, "C": 0.5}, {"A": 0.25, "C": 0.75})
        assert r == pytest.approx({"A": 2.0, "C": 0.5 / 0.75, "G": 1.0, "T": 1.0})

    def test_missing_from_input(self):
        """Test that a k-mer missing from input is neutral, not infinite."""
        r = compute_enrichment({"A": 0.5, "C": 0.5}, {"A": 0.25, "G": 0.75})
        assert r == {"A": 2.0, "C": 1.0, "G": 1.0, "T": 1.0}

    def test_zero_input_frequency(self):
        """Test that a zero input frequency gives the neutral ratio."""
        r = compute_enrichment({"A": 0.5, "C": 0.5}, {"A": 0.0, "C": 1.0})
        assert r["A"] == 1.0
        assert r["C"] == 0.5

    def test_covers_all_kmers(self):
        """Test that every possible k-mer gets a value."""
        r = compute_enrichment({"AC": 1.0}, {"AC": 0.5, "GT": 0.5})
        assert len(r) == 16
        assert r["AC"] == 2.0
        assert sum(1 for value in r.values() if value == 1.0) == 15

    def test_nan_frequency_rejected(self):
        """Test that NaN frequencies never produce NaN R values."""
        with pytest.raises(ValidationError):
            compute_enrichment({"A": float("nan"), "C": 1.0}, {"A": 0.5, "C": 0.5})
        with pytest.raises(ValidationError):
            compute_enrichment({"A": 0.5, "C": 0.5}, {"A": float("nan"), "C": 1.0})

    def test_pulldown_not_summing_to_one(self):
        """Test that an invalid pulldown is reported."""
        with pytest.raises(ValidationError, match="is not 1"):
            compute_enrichment({"A": 0.5, "C": 1.0}, {"A": 0.25, "G": 0.75})

    def test_input_non_acgt(self):
        """Test that a non-ACGT k-mer in the input is reported."""
        with pytest.raises(ValidationError, match="non-ACGT kmer"):
            compute_enrichment({"A": 0.5, "C": 0.5}, {"A": 0.25, "N": 0.75})

    def test_input_mixed_lengths(self):
        """Test that input k-mers of another length are reported."""
        with pytest.raises(ValidationError, match="non-length"):
            compute_enrichment(
                {"A": 0.5, "C": 0.5}, {"A": 0.25, "C": 0.75, "GT": 0.1}
            )

    def test_pulldown_checked_first(self):
        """Test that pulldown errors win over input errors."""
        with pytest.raises(ValidationError, match="freq for A is <0"):
            compute_enrichment({"A": -0.5, "C": 1.5}, {"A": 0.25, "N": 0.75})

    def test_empty_pulldown(self):
        """Test that an empty pulldown is rejected instead of using k=0."""
        with pytest.raises(ValidationError, match="empty"):
            compute_enrichment({}, {"A": 1.0})

    def test_library_pipeline(self):
        """Test enrichment of a motif planted in the pulldown reads."""
        input_freqs = kmer_frequencies(["ACGTACGT", "TTGGAAGC", "GATCGATC"], 2)
        pulldown = kmer_frequencies(["ACACACAC", "ACGTACGT", "CACACACA"], 2)
        r = compute_enrichment(pulldown, input_freqs)
        assert len(r) == 16
        assert r["AC"] > 1.0
        assert r["CA"] == 1.0  # absent from input


class TestMostEnriched:
    """Tests for most_enriched."""

    def test_most_enriched(self):
        """Test ranking of R values."""
        r = compute_enrichment({"A": 0.5, "C": 0.5}, {"A": 0.25, "C": 0.75})
        assert most_enriched(r, 2) == [("A", 2.0), ("G", 1.0)]

    def test_plain_dict(self):
        """Test ranking a plain dict."""
        assert most_enriched({"AA": 3.0, "CC": 0.5}, 5) == [("AA", 3.0), ("CC", 0.5)]

    def test_invalid_n(self):
        """Test that n <= 0 raises an error."""
        with pytest.raises(ValueError):
            most_enriched({"A": 1.0}, 0)
