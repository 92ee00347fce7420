"""
rbns - K-mer Enrichment for RNA Bind-n-Seq

Counts k-mers in DNA reads, normalizes them to frequencies and compares
a pulldown library against an input library.

Modules:
    - alphabet: canonical base checks and k-mer enumeration
    - table: read-only k-mer to number mapping
    - counting: k-mer counting, filtering and normalization
    - enrichment: distribution validation and enrichment ratios
"""

from .alphabet import (
    BASES,
    ConfigurationError,
    KmerError,
    all_kmers,
    is_canonical_base,
    is_valid_kmer,
)
from .table import KmerTable, CountTable, FrequencyTable, EnrichmentTable
from .counting import (
    InvalidInputError,
    count_kmers,
    count_kmers_in_sequences,
    counts_to_frequencies,
    filter_to_valid_kmers,
    kmer_frequencies,
)
from .enrichment import (
    ValidationError,
    compute_enrichment,
    infer_k,
    is_valid_frequency_table,
    most_enriched,
    validate_frequency_table,
)

__version__ = "0.1.0"
__all__ = [
    "BASES",
    "KmerError",
    "ConfigurationError",
    "InvalidInputError",
    "ValidationError",
    "KmerTable",
    "CountTable",
    "FrequencyTable",
    "EnrichmentTable",
    "is_canonical_base",
    "is_valid_kmer",
    "all_kmers",
    "count_kmers",
    "count_kmers_in_sequences",
    "filter_to_valid_kmers",
    "counts_to_frequencies",
    "kmer_frequencies",
    "validate_frequency_table",
    "is_valid_frequency_table",
    "infer_k",
    "compute_enrichment",
    "most_enriched",
]
