class CompressionError(Exception):
    """Base class for every failure reported by the text codecs."""


class InvalidInputError(CompressionError, ValueError):
    """Input the codec cannot interpret at all (bad token, bad count, unknown algorithm)."""


class MalformedCompressedDataError(CompressionError, ValueError):
    """Compressed data that parses but cannot be decoded consistently."""


class MissingAuxiliaryDataError(CompressionError):
    """Decoding needs an artifact that was not supplied (the Huffman tree)."""
