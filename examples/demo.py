#!/usr/bin/env python3
"""
rbns Demo

Walks through the k-mer enrichment pipeline on synthetic RNA Bind-n-Seq
libraries: random background reads for the input library, and reads
with a planted binding motif for the pulldown library.

Usage:
    python demo.py
    python demo.py --k 5 --motif GCATG --seed 7
"""

import argparse
import logging
import random
import sys
sys.path.insert(0, '..')

from rbns.alphabet import BASES, ConfigurationError, all_kmers
from rbns.counting import (
    InvalidInputError, count_kmers, counts_to_frequencies,
    filter_to_valid_kmers, kmer_frequencies
)
from rbns.enrichment import ValidationError, compute_enrichment, most_enriched

logger = logging.getLogger("rbns.demo")

READ_LENGTH = 40
# all_kmers and compute_enrichment build 4**k entries
MAX_K = 8
N_READS = 2000


def random_read(rng: random.Random, length: int) -> str:
    """A uniformly random ACGT read."""
    return ''.join(rng.choice(BASES) for _ in range(length))


def make_libraries(motif: str, seed: int):
    """Build input and pulldown read libraries."""
    rng = random.Random(seed)
    input_reads = [random_read(rng, READ_LENGTH) for _ in range(N_READS)]

    pulldown_reads = []
    for _ in range(N_READS):
        read = random_read(rng, READ_LENGTH)
        # Plant the motif in half of the bound reads
        if rng.random() < 0.5:
            pos = rng.randrange(READ_LENGTH - len(motif) + 1)
            read = read[:pos] + motif + read[pos + len(motif):]
        pulldown_reads.append(read)

    return input_reads, pulldown_reads


def example_single_read():
    """Example 1: Counting a single read"""
    print("Example 1: Counting a single read")
    print("---------------------------------")

    read = "ACGTNACGTACG"
    counts = count_kmers(read, 3)
    print(f"Read: {read}")
    print(f"Raw 3-mer counts: {dict(counts.sorted_items())}")

    filtered = filter_to_valid_kmers(counts)
    print(f"ACGT-only 3-mers: {dict(filtered.sorted_items())}")

    freqs = counts_to_frequencies(filtered)
    for kmer, freq in freqs.sorted_items():
        print(f"  {kmer}: {freq:.3f}")

    print()


def example_enrichment(k: int, motif: str, seed: int, top: int):
    """Example 2: Pulldown vs input enrichment"""
    print("Example 2: Pulldown vs input enrichment")
    print("---------------------------------------")

    input_reads, pulldown_reads = make_libraries(motif, seed)
    logger.info("Built %d input and %d pulldown reads", len(input_reads), len(pulldown_reads))

    input_freqs = kmer_frequencies(input_reads, k)
    pulldown_freqs = kmer_frequencies(pulldown_reads, k)
    print(f"Observed {len(input_freqs)} input and {len(pulldown_freqs)} pulldown "
          f"{k}-mers out of {len(all_kmers(k))} possible")

    enrichment = compute_enrichment(pulldown_freqs, input_freqs)

    print(f"\nTop {top} enriched {k}-mers (planted motif {motif}):")
    for kmer, r in most_enriched(enrichment, top):
        marker = " *" if kmer in motif else ""
        print(f"  {kmer}: R={r:.2f}{marker}")

    print()


def example_errors():
    """Example 3: Error handling"""
    print("Example 3: Error handling")
    print("-------------------------")

    try:
        all_kmers(0)
    except ConfigurationError as e:
        print(f"ConfigurationError: {e}")

    try:
        counts_to_frequencies({"ACG": 3, "ANG": 1})
    except InvalidInputError as e:
        print(f"InvalidInputError: {e} (kmer={e.kmer})")

    try:
        compute_enrichment({"A": 0.5, "C": 0.5}, {"A": 0.25, "C": 0.5})
    except ValidationError as e:
        print(f"ValidationError: {e} (total={e.total})")

    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='rbns enrichment demo')
    parser.add_argument('--k', type=int, default=4, help=f'K-mer length (1-{MAX_K})')
    parser.add_argument('--motif', default='GCATG', help='Motif planted in pulldown reads')
    parser.add_argument('--seed', type=int, default=7, help='Random seed')
    parser.add_argument('--top', type=int, default=10, help='Number of k-mers to report')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if not 1 <= args.k <= MAX_K:
        parser.error(f"--k must be between 1 and {MAX_K}")
    if len(args.motif) > READ_LENGTH or not all(c in BASES for c in args.motif):
        parser.error("--motif must be an ACGT string no longer than a read")

    print("rbns K-mer Enrichment Pipeline")
    print("==============================\n")

    example_single_read()
    example_enrichment(args.k, args.motif, args.seed, args.top)
    example_errors()

    print("All examples completed successfully!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
