"""
Benchmark module for field cipher performance.

Measures encrypt/decrypt throughput and process memory for a range of value
sizes, to size the cost of encrypting a column before enabling it.
"""

import gc
import os
import statistics
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

import psutil

from ..provider.aes_new import AesNewProvider


@dataclass
class BenchmarkResult:
    """Container for benchmark results."""
    name: str
    operation: str
    value_size: int
    iterations: int
    total_time: float
    avg_time: float
    median_time: float
    throughput_mbps: float
    memory_usage: Optional[Dict[str, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class FieldCipherBenchmark:
    """
    Performance benchmarking for a field cipher provider.
    """

    def __init__(self, provider: Optional[AesNewProvider] = None):
        """
        Initialize benchmark suite.

        Args:
            provider: Provider to measure. A throwaway provider with a random
                passphrase is created when omitted.
        """
        if provider is None:
            provider = AesNewProvider(os.urandom(32), os.urandom(16))
        self.provider = provider
        self.results: List[BenchmarkResult] = []

    def measure_memory_usage(self) -> Dict[str, float]:
        """
        Measure current memory usage.

        Returns:
            Dictionary with memory statistics in MB
        """
        process = psutil.Process()
        memory_info = process.memory_info()

        return {
            'rss': memory_info.rss / 1024 / 1024,  # MB
            'vms': memory_info.vms / 1024 / 1024,  # MB
            'percent': process.memory_percent()
        }

    def _run(self, operation: str, func, value: Any, size: int, iterations: int) -> BenchmarkResult:
        gc.collect()
        memory_before = self.measure_memory_usage()

        timings = []
        for _ in range(iterations):
            start = time.perf_counter()
            func(value)
            timings.append(time.perf_counter() - start)

        memory_after = self.measure_memory_usage()
        total_time = sum(timings)
        throughput = (size * iterations) / total_time / (1024 * 1024) if total_time > 0 else 0.0

        result = BenchmarkResult(
            name=f"{operation.capitalize()}-{self.provider.name}-{size}B",
            operation=operation,
            value_size=size,
            iterations=iterations,
            total_time=total_time,
            avg_time=total_time / iterations,
            median_time=statistics.median(timings),
            throughput_mbps=throughput,
            memory_usage={
                'rss_delta': memory_after['rss'] - memory_before['rss'],
                'vms_delta': memory_after['vms'] - memory_before['vms']
            }
        )
        self.results.append(result)
        return result

    def benchmark_encryption(self, value_sizes: List[int], iterations: int = 1000) -> List[BenchmarkResult]:
        """
        Benchmark encryption across value sizes.

        Args:
            value_sizes: List of plaintext sizes in bytes
            iterations: Number of iterations per size

        Returns:
            List of benchmark results
        """
        if iterations < 1:
            raise ValueError("iterations must be positive")

        results = []
        for size in value_sizes:
            value = "x" * size
            results.append(self._run("encryption", self.provider.encrypt, value, size, iterations))
        return results

    def benchmark_decryption(self, value_sizes: List[int], iterations: int = 1000) -> List[BenchmarkResult]:
        """
        Benchmark decryption across value sizes.

        Args:
            value_sizes: List of plaintext sizes in bytes
            iterations: Number of iterations per size

        Returns:
            List of benchmark results
        """
        if iterations < 1:
            raise ValueError("iterations must be positive")

        results = []
        for size in value_sizes:
            ciphertext = self.provider.encrypt("x" * size)
            results.append(self._run("decryption", self.provider.decrypt, ciphertext, size, iterations))
        return results

    def get_summary(self) -> Dict[str, Any]:
        """Summarize collected results by operation."""
        summary: Dict[str, Any] = {}
        for operation in ('encryption', 'decryption'):
            results = [r for r in self.results if r.operation == operation]
            if not results:
                continue
            summary[operation] = {
                'runs': len(results),
                'avg_throughput_mbps': statistics.mean(r.throughput_mbps for r in results),
                'fastest_avg_time': min(r.avg_time for r in results),
            }
        return summary


def run_benchmark(value_sizes: List[int], iterations: int = 1000,
                  provider: Optional[AesNewProvider] = None) -> Dict[str, Any]:
    """
    Run encryption and decryption benchmarks.

    Returns:
        Dictionary with per-run results and a summary
    """
    benchmark = FieldCipherBenchmark(provider)
    benchmark.benchmark_encryption(value_sizes, iterations)
    benchmark.benchmark_decryption(value_sizes, iterations)

    return {
        'results': [r.to_dict() for r in benchmark.results],
        'summary': benchmark.get_summary(),
    }
