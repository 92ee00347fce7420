"""
rbns - K-mer Counting and Normalization

Sliding-window k-mer counting, removal of k-mers with non-ACGT
characters, and conversion of counts to frequencies.

The counter does no alphabet filtering. Windows that span an N, a
lowercase base or any other character are still counted, and it is up
to filter_to_valid_kmers to drop them before normalizing:

    counts = count_kmers(read, k)
    freqs = counts_to_frequencies(filter_to_valid_kmers(counts))
"""

import logging
from collections import Counter
from typing import Dict, Iterable, Optional

from .alphabet import KmerError, is_valid_kmer
from .table import CountTable, FrequencyTable, KmerTable

logger = logging.getLogger(__name__)


class InvalidInputError(KmerError):
    """Raised when a count table cannot be turned into frequencies."""
    def __init__(
        self,
        message: str,
        kmer: Optional[str] = None,
        count: Optional[int] = None,
        total: Optional[int] = None,
    ):
        self.kmer = kmer
        self.count = count
        self.total = total
        super().__init__(message)


def count_kmers(sequence: str, k: int) -> CountTable:
    """
    Count every overlapping k-mer in a sequence.

    A sequence shorter than k has no k-mers and gives an empty table.
    k is not checked: k=0 counts len(sequence) + 1 empty windows.
    """
    n_kmers = len(sequence) - k + 1
    if n_kmers < 1:
        return KmerTable()

    counts: Dict[str, int] = {}
    for i in range(n_kmers):
        kmer = sequence[i:i + k]
        counts[kmer] = counts.get(kmer, 0) + 1

    return KmerTable(counts)


def count_kmers_in_sequences(sequences: Iterable[str], k: int) -> CountTable:
    """Sum the k-mer counts of every read in a library."""
    totals: Counter = Counter()
    n_reads = 0
    for sequence in sequences:
        totals.update(count_kmers(sequence, k))
        n_reads += 1

    logger.debug("Counted %d distinct %d-mers over %d reads", len(totals), k, n_reads)
    return KmerTable(dict(totals))


def filter_to_valid_kmers(table: CountTable) -> CountTable:
    """
    Keep only entries whose key is made of A, C, G and T.

    Counts are copied unchanged, zero counts included. Filtering an
    already filtered table returns an equal table.
    """
    kept = {kmer: count for kmer, count in table.items() if is_valid_kmer(kmer)}

    dropped = len(table) - len(kept)
    if dropped:
        logger.debug("Dropped %d k-mers with non-ACGT characters", dropped)
    return KmerTable(kept)


def counts_to_frequencies(table: CountTable) -> FrequencyTable:
    """
    Convert counts to frequencies that sum to 1.

    An empty table gives an empty table.

    Raises:
        InvalidInputError: if a key is not an ACGT-only k-mer, a count is
            negative, or the counts sum to zero
    """
    for kmer, count in table.items():
        if not is_valid_kmer(kmer):
            raise InvalidInputError(
                f"Count table contains non-ACGT kmer {kmer!r}", kmer=kmer
            )
        if count < 0:
            raise InvalidInputError(
                f"Count table contains negative counts for {kmer!r}: {count}",
                kmer=kmer,
                count=count,
            )

    if len(table) == 0:
        return KmerTable()

    total = sum(table.values())
    if total == 0:
        raise InvalidInputError(
            "Count table has no observations (total count is 0)", total=total
        )

    return KmerTable({kmer: count / total for kmer, count in table.items()})


def kmer_frequencies(sequences: Iterable[str], k: int) -> FrequencyTable:
    """
    Frequencies of the ACGT-only k-mers in a library of reads.

    Shorthand for counting, filtering and normalizing in one call.
    """
    counts = count_kmers_in_sequences(sequences, k)
    return counts_to_frequencies(filter_to_valid_kmers(counts))
