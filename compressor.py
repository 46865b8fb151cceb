"""Uniform compress/decompress entry points over the three text codecs."""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from errors import InvalidInputError
from huffman import huffman_decoding, huffman_encoding
from lzw import LZW_decoding, LZW_encoding
from rle import run_length_decoding, run_length_encoding
from text_metrics import CompressionResult, build_result

logger = logging.getLogger(__name__)

ALGORITHMS = ("RLE", "Huffman", "LZW")

ALGORITHM_NAMES = {
    "RLE": "Run-Length Encoding (RLE)",
    "Huffman": "Huffman Coding",
    "LZW": "LZW Coding",
}


@dataclass(frozen=True)
class CompressedArtifact:
    data: str
    tree: Optional[str] = None


def _check_algorithm(algorithm):
    if algorithm not in ALGORITHMS:
        raise InvalidInputError(
            f"Unknown algorithm {algorithm!r}; expected one of {', '.join(ALGORITHMS)}"
        )


def compress(algorithm: str, text: str) -> CompressedArtifact:
    _check_algorithm(algorithm)

    if algorithm == "RLE":
        return CompressedArtifact(run_length_encoding(text))
    if algorithm == "Huffman":
        result = huffman_encoding(text)
        return CompressedArtifact(result.compressed, result.tree)
    return CompressedArtifact(LZW_encoding(text))


def decompress(algorithm: str, data: str, tree: Optional[str] = None) -> str:
    """Reverse :func:`compress`. ``tree`` is only read for Huffman."""
    _check_algorithm(algorithm)

    if algorithm == "RLE":
        return run_length_decoding(data)
    if algorithm == "Huffman":
        return huffman_decoding(data, tree)
    return LZW_decoding(data)


def compress_with_result(algorithm: str, text: str) -> Tuple[CompressedArtifact, CompressionResult]:
    artifact = compress(algorithm, text)
    result = build_result(algorithm, text, artifact.data)
    logger.info(
        "%s: %d -> %d bytes (%.1f%% saved)",
        algorithm, result.original_size, result.compressed_size, result.compression_ratio,
    )
    return artifact, result
