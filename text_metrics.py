import math
from collections import Counter
from dataclasses import dataclass


def byte_size(text: str) -> int:
    """UTF-8 size in bytes (lone surrogates count as replacement bytes)."""
    return len(text.encode("utf-8", errors="replace"))


def calculate_entropy(text):
    """Calculate Shannon entropy in bits per symbol"""
    if not text:
        return 0

    freq = Counter(text)
    entropy = 0
    total = len(text)

    for count in freq.values():
        probability = count / total
        entropy -= probability * math.log2(probability)

    return entropy


def packed_bit_size(bits: str) -> int:
    """Bytes a 0/1 string would occupy once bit-packed."""
    return math.ceil(len(bits) / 8)


def space_saved(original_size, compressed_size):
    return (1 - compressed_size / original_size) * 100 if original_size > 0 else 0.0


@dataclass(frozen=True)
class CompressionResult:
    algorithm: str
    original_size: int
    compressed_size: int
    compression_ratio: float
    compressed_data: str

    @property
    def size_ratio(self) -> float:
        """original / compressed, the "N:1" figure."""
        if self.compressed_size == 0:
            return 0.0
        return self.original_size / self.compressed_size


def build_result(algorithm: str, text: str, compressed_data: str) -> CompressionResult:
    original_size = byte_size(text)
    compressed_size = byte_size(compressed_data)
    return CompressionResult(
        algorithm=algorithm,
        original_size=original_size,
        compressed_size=compressed_size,
        compression_ratio=space_saved(original_size, compressed_size),
        compressed_data=compressed_data,
    )
