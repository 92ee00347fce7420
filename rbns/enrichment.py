"""
rbns - Distribution Validation and Enrichment

Checks that frequency tables are probability distributions over k-mers
of one length and compares a pulldown library against an input library.

The enrichment (R value) of a k-mer is its pulldown frequency divided by
its input frequency. K-mers missing from either library, or with an
input frequency of exactly 0, get the neutral ratio 1.0 rather than an
error or infinity. This also hides strong enrichment of k-mers that are
very rare in the input; callers who care should filter on input
frequency themselves.
"""

import logging
from typing import List, Optional, Tuple

from .alphabet import KmerError, all_kmers, is_valid_kmer
from .table import EnrichmentTable, FrequencyTable, KmerTable

logger = logging.getLogger(__name__)

# Allowed distance between the sum of a frequency table and 1
FREQUENCY_TOLERANCE = 1e-6
NEUTRAL_ENRICHMENT = 1.0


class ValidationError(KmerError):
    """Raised when a frequency table is not a valid k-mer distribution."""
    def __init__(
        self,
        message: str,
        kmer: Optional[str] = None,
        value: Optional[float] = None,
        total: Optional[float] = None,
    ):
        self.kmer = kmer
        self.value = value
        self.total = total
        super().__init__(message)


def validate_frequency_table(
    table: FrequencyTable, k: int, tolerance: float = FREQUENCY_TOLERANCE
) -> None:
    """
    Check that table is a distribution over ACGT k-mers of length k.

    Checks run in order and the first one that fails is raised:

    1. every key has length k
    2. every key is an ACGT-only k-mer
    3. every value is >= 0 (NaN fails)
    4. the values sum to 1 within tolerance

    Raises:
        ValidationError: describing the first failed check
    """
    for kmer in table:
        if len(kmer) != k:
            raise ValidationError(
                f"Frequency table contains non-length {k} kmer: {kmer!r}", kmer=kmer
            )

    for kmer in table:
        if not is_valid_kmer(kmer):
            raise ValidationError(
                f"Frequency table contains non-ACGT kmer: {kmer!r}", kmer=kmer
            )

    for kmer, value in table.items():
        if not value >= 0:
            raise ValidationError(
                f"freq for {kmer} is <0 (negative or NaN): {value}", kmer=kmer, value=value
            )

    total = sum(table.values())
    if not abs(total - 1.0) <= tolerance:
        raise ValidationError(
            f"total freq for all kmers is not 1: {total}", total=total
        )


def is_valid_frequency_table(table: FrequencyTable, k: int) -> bool:
    """Return True if validate_frequency_table accepts the table."""
    try:
        validate_frequency_table(table, k)
    except ValidationError:
        return False
    return True


def infer_k(table: FrequencyTable) -> int:
    """Length of an arbitrary key of the table, 0 if it is empty."""
    for kmer in table:
        return len(kmer)
    return 0


def compute_enrichment(
    pulldown: FrequencyTable, input_freqs: FrequencyTable
) -> EnrichmentTable:
    """
    Compute the R value of every possible k-mer.

    k is taken from the pulldown table. Both tables are validated for that
    k, pulldown first, and the first failure is raised. The result has an
    entry for each of the 4**k k-mers, not only the observed ones.

    Raises:
        ValidationError: if pulldown is empty or either table is not a
            valid distribution
    """
    k = infer_k(pulldown)
    if k == 0:
        raise ValidationError("Pulldown frequency table is empty; cannot infer k")

    validate_frequency_table(pulldown, k)
    validate_frequency_table(input_freqs, k)

    enrichments = {}
    n_neutral = 0
    for kmer in all_kmers(k):
        pd_freq = pulldown.get(kmer)
        input_freq = input_freqs.get(kmer)
        if pd_freq is None or input_freq is None or input_freq == 0:
            enrichments[kmer] = NEUTRAL_ENRICHMENT
            n_neutral += 1
        else:
            enrichments[kmer] = pd_freq / input_freq

    logger.debug(
        "Computed %d %d-mer enrichments (%d neutral)", len(enrichments), k, n_neutral
    )
    return KmerTable(enrichments)


def most_enriched(enrichment: EnrichmentTable, n: int) -> List[Tuple[str, float]]:
    """
    Return the n k-mers with the highest R values.

    Ties are broken lexicographically.
    """
    if n <= 0:
        raise ValueError("N must be positive")
    return KmerTable(enrichment).most_common(n)
