"""
rbns - K-mer Tables

A single read-only mapping type shared by counts, frequencies and
enrichment ratios. Every pipeline stage builds a new table instead of
changing the one it was given.
"""

from typing import Dict, Iterator, List, Mapping, Optional, Tuple, TypeVar, Union

N = TypeVar("N", int, float)


class KmerTable(Mapping[str, N]):
    """
    Immutable mapping from k-mer to a number.

    Compares equal to any mapping with the same items, so tables can be
    checked against plain dicts:

        >>> KmerTable({"AC": 1}) == {"AC": 1}
        True
    """

    def __init__(self, entries: Optional[Mapping[str, N]] = None):
        self._entries: Dict[str, N] = dict(entries) if entries else {}

    def __getitem__(self, kmer: str) -> N:
        return self._entries[kmer]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"KmerTable({dict(self.sorted_items())!r})"

    def total(self) -> Union[int, float]:
        """Sum of all values."""
        return sum(self._entries.values())

    def sorted_items(self) -> List[Tuple[str, N]]:
        """Items in lexicographic key order, for reproducible output."""
        return sorted(self._entries.items())

    def most_common(self, n: int) -> List[Tuple[str, N]]:
        """
        Return the n entries with the highest values.

        Ties are broken lexicographically by k-mer.
        """
        if n <= 0:
            raise ValueError("N must be positive")

        ranked = sorted(self._entries.items(), key=lambda x: (-x[1], x[0]))
        return ranked[:n]

    def to_dict(self) -> Dict[str, N]:
        """Return a plain dict copy."""
        return dict(self._entries)


CountTable = KmerTable[int]
FrequencyTable = KmerTable[float]
EnrichmentTable = KmerTable[float]
