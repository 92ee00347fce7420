"""
rbns - Alphabet and K-mer Enumeration

Checks for the four canonical DNA bases and generation of every
possible k-mer over them.

Only uppercase A, C, G and T are canonical. RNA (U), lowercase bases and
IUPAC ambiguity codes such as N are rejected.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)

# Enumeration order for all_kmers
BASES = "ACGT"
CANONICAL_BASES = frozenset(BASES)


class KmerError(Exception):
    """Base class for k-mer table errors."""
    pass


class ConfigurationError(KmerError):
    """
    Raised when k is not usable for enumeration.

    This is a caller or configuration mistake, not bad data: retrying with
    the same k fails the same way.
    """
    def __init__(self, k: int):
        self.k = k
        super().__init__(f"k must be at least 1, got {k}")


def is_canonical_base(c: str) -> bool:
    """Return True if c is exactly one of A, C, G, T."""
    return c in CANONICAL_BASES


def is_valid_kmer(s: str) -> bool:
    """
    Return True if s is a non-empty string of canonical bases.

    The empty string is not a k-mer, so it is rejected.
    """
    if len(s) == 0:
        return False
    return all(is_canonical_base(c) for c in s)


def _extend(kmers: List[str]) -> List[str]:
    """Prepend each base to every k-mer, giving all (k+1)-mers."""
    return [base + kmer for base in BASES for kmer in kmers]


def all_kmers(k: int) -> List[str]:
    """
    Return all 4**k k-mers over ACGT in lexicographic order.

    The list is grown from [""] one position at a time, prepending the
    bases in alphabetical order, so for k=2 it starts AA, AC, AG, AT, CA.

    Raises:
        ConfigurationError: if k < 1
    """
    if k < 1:
        raise ConfigurationError(k)

    kmers = [""]
    for _ in range(k):
        kmers = _extend(kmers)

    logger.debug("Enumerated %d %d-mers", len(kmers), k)
    return kmers
