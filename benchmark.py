#!/usr/bin/env python3
"""
rbns Benchmark Script

Times the counting, normalization and enrichment steps on synthetic
libraries.

Usage:
    python benchmark.py
    python benchmark.py --k 6
    python benchmark.py --numpy  # Include NumPy comparison
"""

import time
import argparse
import logging
import random
import sys
from typing import Callable, List

from rbns.alphabet import BASES, all_kmers
from rbns.counting import count_kmers, counts_to_frequencies, filter_to_valid_kmers, kmer_frequencies
from rbns.enrichment import compute_enrichment

logger = logging.getLogger("rbns.benchmark")


def time_function(func: Callable, *args, iterations: int = 1, **kwargs) -> float:
    """Time a function over multiple iterations."""
    start = time.perf_counter()
    for _ in range(iterations):
        result = func(*args, **kwargs)
    end = time.perf_counter()
    return (end - start) * 1000  # Return milliseconds


def random_reads(n_reads: int, read_length: int, seed: int = 0) -> List[str]:
    """Generate uniformly random ACGT reads."""
    rng = random.Random(seed)
    return [''.join(rng.choice(BASES) for _ in range(read_length)) for _ in range(n_reads)]


def benchmark_kmer_counting(k: int):
    """Benchmark k-mer counting on a single long sequence."""
    print("\n=== K-mer Counting Benchmark ===")

    sizes = [1000, 5000, 10000, 20000, 50000]

    for size in sizes:
        seq_str = 'ATGC' * (size // 4)

        # Warm up
        _ = count_kmers(seq_str, k)

        elapsed = time_function(count_kmers, seq_str, k, iterations=10)
        print(f"  {size:,} bp, k={k} x 10 iterations: {elapsed:.2f}ms ({elapsed/10:.4f}ms/call)")


def benchmark_frequencies(k: int):
    """Benchmark the count, filter and normalize steps over a read library."""
    print("\n=== Library Frequency Benchmark ===")

    read_length = 40
    for n_reads in [1000, 5000, 20000]:
        reads = random_reads(n_reads, read_length)

        elapsed = time_function(kmer_frequencies, reads, k, iterations=1)
        print(f"  {n_reads:,} reads x {read_length} bp, k={k}: {elapsed:.2f}ms")


def benchmark_enrichment():
    """Benchmark enrichment over all k-mers for increasing k."""
    print("\n=== Enrichment Benchmark ===")

    for k in range(3, 9):
        kmers = all_kmers(k)
        uniform = {kmer: 1 / len(kmers) for kmer in kmers}

        elapsed = time_function(compute_enrichment, uniform, uniform, iterations=1)
        print(f"  k={k} ({len(kmers):,} k-mers): {elapsed:.2f}ms")


def benchmark_numpy_comparison(k: int):
    """Compare dict-based counting with a NumPy 2-bit encoding."""
    print("\n=== NumPy Comparison ===")

    try:
        import numpy as np
    except ImportError:
        print("  NumPy not available, skipping comparison")
        return

    lookup = np.full(256, -1, dtype=np.int64)
    for code, base in enumerate(BASES):
        lookup[ord(base)] = code
    weights = 4 ** np.arange(k - 1, -1, -1, dtype=np.int64)

    def numpy_count(seq: str) -> dict:
        codes = lookup[np.frombuffer(seq.encode('ascii'), dtype=np.uint8)]
        windows = np.lib.stride_tricks.sliding_window_view(codes, k)
        valid = (windows >= 0).all(axis=1)
        indices = windows[valid] @ weights
        counts = np.bincount(indices, minlength=4 ** k)
        kmers = all_kmers(k)
        return {kmers[i]: int(c) for i, c in enumerate(counts) if c > 0}

    for size in [10000, 50000, 100000]:
        seq_str = random_reads(1, size)[0]

        dict_elapsed = time_function(
            lambda s: counts_to_frequencies(filter_to_valid_kmers(count_kmers(s, k))),
            seq_str, iterations=5,
        )
        numpy_elapsed = time_function(numpy_count, seq_str, iterations=5)

        # Both approaches must agree
        assert numpy_count(seq_str) == filter_to_valid_kmers(count_kmers(seq_str, k))

        print(f"  {size:,} bp, k={k}:")
        print(f"    Pure Python: {dict_elapsed/5:.2f}ms")
        print(f"    NumPy:       {numpy_elapsed/5:.2f}ms")
        if numpy_elapsed > 0:
            print(f"    Speedup:     {dict_elapsed/numpy_elapsed:.1f}x")


def run_all_benchmarks(k: int, include_numpy: bool = False):
    """Run all benchmarks."""
    print("rbns Python Benchmarks")
    print("=" * 50)

    benchmark_kmer_counting(k)
    benchmark_frequencies(k)
    benchmark_enrichment()

    if include_numpy:
        benchmark_numpy_comparison(k)

    print("\n" + "=" * 50)
    print("Benchmarks complete!")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='rbns Python Benchmarks')
    parser.add_argument('--k', type=int, default=5,
                        help='K-mer length for counting benchmarks')
    parser.add_argument('--numpy', action='store_true',
                        help='Include NumPy comparison benchmarks')
    parser.add_argument('--verbose', action='store_true',
                        help='Show debug logging from rbns')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if args.k < 1:
        parser.error("--k must be at least 1")

    logger.info("Running benchmarks with k=%d", args.k)
    run_all_benchmarks(args.k, include_numpy=args.numpy)
    return 0


if __name__ == '__main__':
    sys.exit(main())
