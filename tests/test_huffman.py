import json

import pytest

from errors import MalformedCompressedDataError, MissingAuxiliaryDataError
from huffman import (
    HuffmanInternal,
    HuffmanLeaf,
    build_frequency_table,
    build_huffman_tree,
    deserialize_tree,
    get_codes,
    huffman_decoding,
    huffman_encoding,
    serialize_tree,
)


class TestHuffmanEncoding:

    def test_empty_input(self):
        result = huffman_encoding("")
        assert result.compressed == ""
        assert result.tree == ""
        assert huffman_decoding("", "") == ""

    def test_single_unique_character(self):
        result = huffman_encoding("zzzz")
        assert len(result.compressed) == 4
        assert result.single_char == "z"
        assert json.loads(result.tree) == {"char": "z", "freq": 4}
        assert huffman_decoding(result.compressed, result.tree) == "zzzz"

    def test_two_characters(self):
        result = huffman_encoding("aab")
        assert result.compressed == "110"
        assert result.tree == '{"freq":3,"left":{"char":"b","freq":1},"right":{"char":"a","freq":2}}'
        assert result.single_char is None

    def test_equal_frequencies_get_equal_lengths(self):
        codes = get_codes(build_huffman_tree(build_frequency_table("abcd")))
        assert codes == {"a": "00", "d": "01", "c": "10", "b": "11"}

    def test_codes_are_prefix_free(self):
        text = "this is an example of a huffman tree"
        codes = list(get_codes(build_huffman_tree(build_frequency_table(text))).values())
        for i, a in enumerate(codes):
            for j, b in enumerate(codes):
                if i != j:
                    assert not b.startswith(a)

    def test_frequent_characters_get_shorter_codes(self):
        text = "e" * 50 + "t" * 20 + "q"
        codes = get_codes(build_huffman_tree(build_frequency_table(text)))
        assert len(codes["e"]) <= len(codes["t"]) <= len(codes["q"])

    def test_skewed_text_is_below_eight_bits_per_char(self):
        text = "a" * 60 + "b" * 25 + "c" * 10 + "d" * 5
        result = huffman_encoding(text)
        assert len(result.compressed) < 8 * len(text)

    def test_is_deterministic(self):
        text = "mississippi river banks"
        assert huffman_encoding(text) == huffman_encoding(text)


@pytest.mark.parametrize("text", [
    "a",
    "ab",
    "hello world",
    "naïve café — 東京",
    "0101 digits and \\ backslashes",
    "The quick brown fox jumps over the lazy dog\n" * 5,
])
def test_round_trip(text):
    result = huffman_encoding(text)
    assert huffman_decoding(result.compressed, result.tree) == text


class TestHuffmanDecodingErrors:

    @pytest.fixture
    def encoded(self):
        return huffman_encoding("abcd")

    def test_missing_tree(self, encoded):
        with pytest.raises(MissingAuxiliaryDataError):
            huffman_decoding(encoded.compressed, None)
        with pytest.raises(MissingAuxiliaryDataError):
            huffman_decoding(encoded.compressed, "")

    def test_invalid_bit(self, encoded):
        with pytest.raises(MalformedCompressedDataError):
            huffman_decoding("0120", encoded.tree)

    def test_missing_child(self):
        tree = json.dumps({"freq": 2, "left": {"char": "a", "freq": 2}})
        assert huffman_decoding("00", tree) == "aa"
        with pytest.raises(MalformedCompressedDataError):
            huffman_decoding("01", tree)

    def test_truncated_code(self, encoded):
        with pytest.raises(MalformedCompressedDataError):
            huffman_decoding(encoded.compressed[:-1], encoded.tree)

    @pytest.mark.parametrize("tree", [
        "not json",
        "[1, 2]",
        '{"char": "ab", "freq": 1}',
        '{"char": "a"}',
        '{"freq": 1}',
        '{"freq": 2, "left": 5}',
        '{"char": "a", "freq": 1, "left": {"char": "b", "freq": 1}}',
    ])
    def test_malformed_tree(self, tree):
        with pytest.raises(MalformedCompressedDataError):
            huffman_decoding("0", tree)


def test_tree_serialization_round_trip():
    root = HuffmanInternal(3, HuffmanLeaf("x", 1), HuffmanInternal(2, HuffmanLeaf("y", 1), HuffmanLeaf("z", 1)))
    assert deserialize_tree(serialize_tree(root)) == root
