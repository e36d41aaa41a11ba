"""
Performance evaluation tools for fieldcrypt.
"""

from .benchmark import BenchmarkResult, FieldCipherBenchmark, run_benchmark

__all__ = [
    'BenchmarkResult',
    'FieldCipherBenchmark',
    'run_benchmark',
]
