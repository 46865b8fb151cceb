import json
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Union

from errors import MalformedCompressedDataError, MissingAuxiliaryDataError
from min_heap import MinHeap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HuffmanLeaf:
    char: str
    freq: int


@dataclass(frozen=True)
class HuffmanInternal:
    freq: int
    left: Optional["HuffmanNode"]
    right: Optional["HuffmanNode"]


HuffmanNode = Union[HuffmanLeaf, HuffmanInternal]


class HuffmanResult(NamedTuple):
    """Bit-string plus the serialized tree needed to decode it.

    ``single_char`` is set only for input made of one distinct character.
    In that case ``compressed`` is a run of "0" whose length is the only
    meaningful property: it is a length marker, not entropy-coded output,
    and should not be bit-packed or measured as such.
    """
    compressed: str
    tree: str
    single_char: Optional[str] = None


def build_frequency_table(text: str) -> Counter:
    # Counter keeps first-occurrence order, which fixes the heap tie-break
    return Counter(text)


def build_huffman_tree(freq) -> Optional[HuffmanNode]:
    """Merge the two lightest nodes until one root remains (first extracted = left)."""
    heap = MinHeap(lambda a, b: a.freq - b.freq)
    for char, count in freq.items():
        heap.insert(HuffmanLeaf(char, count))

    while heap.size() > 1:
        left = heap.extract_min()
        right = heap.extract_min()
        heap.insert(HuffmanInternal(left.freq + right.freq, left, right))

    return heap.extract_min()


def get_codes(root: Optional[HuffmanNode]) -> Dict[str, str]:
    """Walk the tree, appending 0 for a left edge and 1 for a right edge."""
    codes = {}
    if root is None:
        return codes

    stack = [(root, "")]
    while stack:
        node, code = stack.pop()
        if isinstance(node, HuffmanLeaf):
            codes[node.char] = code or "0"
            continue
        if node.right is not None:
            stack.append((node.right, code + "1"))
        if node.left is not None:
            stack.append((node.left, code + "0"))
    return codes


def tree_to_dict(node: HuffmanNode) -> dict:
    if isinstance(node, HuffmanLeaf):
        return {"char": node.char, "freq": node.freq}
    data = {"freq": node.freq}
    if node.left is not None:
        data["left"] = tree_to_dict(node.left)
    if node.right is not None:
        data["right"] = tree_to_dict(node.right)
    return data


def serialize_tree(node: HuffmanNode) -> str:
    return json.dumps(tree_to_dict(node), separators=(",", ":"))


def _node_from_dict(obj, path: str) -> HuffmanNode:
    if not isinstance(obj, dict):
        raise MalformedCompressedDataError(f"Huffman tree node at {path} is not an object")

    freq = obj.get("freq")
    if not isinstance(freq, int) or isinstance(freq, bool) or freq < 0:
        raise MalformedCompressedDataError(f"Huffman tree node at {path} has no valid 'freq'")

    has_children = "left" in obj or "right" in obj
    if "char" in obj:
        char = obj["char"]
        if not isinstance(char, str) or len(char) != 1:
            raise MalformedCompressedDataError(
                f"Huffman tree leaf at {path} must hold exactly one character"
            )
        if has_children:
            raise MalformedCompressedDataError(
                f"Huffman tree node at {path} has both a character and children"
            )
        return HuffmanLeaf(char, freq)

    if not has_children:
        raise MalformedCompressedDataError(
            f"Huffman tree node at {path} has neither a character nor children"
        )
    left = _node_from_dict(obj["left"], path + ".left") if "left" in obj else None
    right = _node_from_dict(obj["right"], path + ".right") if "right" in obj else None
    return HuffmanInternal(freq, left, right)


def deserialize_tree(tree: str) -> HuffmanNode:
    try:
        obj = json.loads(tree)
    except (ValueError, RecursionError) as e:
        raise MalformedCompressedDataError(f"Huffman tree is not valid JSON: {e}") from e

    try:
        return _node_from_dict(obj, "root")
    except RecursionError as e:
        raise MalformedCompressedDataError("Huffman tree is nested too deeply") from e


def huffman_encoding(text: str) -> HuffmanResult:
    """Returns: HuffmanResult(compressed bit-string, serialized tree, single_char)"""
    if not text:
        return HuffmanResult("", "")

    freq = build_frequency_table(text)

    if len(freq) == 1:
        # One distinct character: a lone leaf, payload only carries the length
        char = next(iter(freq))
        logger.debug("Huffman: single character %r repeated %d times", char, len(text))
        return HuffmanResult("0" * len(text), serialize_tree(HuffmanLeaf(char, len(text))), char)

    root = build_huffman_tree(freq)
    codes = get_codes(root)
    compressed = "".join(codes[char] for char in text)

    logger.debug("Huffman: %d chars, alphabet %d, %d bits", len(text), len(freq), len(compressed))
    return HuffmanResult(compressed, serialize_tree(root))


def huffman_decoding(compressed: str, tree: Optional[str]) -> str:
    """Decode a bit-string by replaying the serialized tree from the root."""
    if not compressed:
        return ""
    if not tree:
        raise MissingAuxiliaryDataError("Huffman decoding requires the serialized tree")

    root = deserialize_tree(tree)

    if isinstance(root, HuffmanLeaf):
        return root.char * len(compressed)

    output = []
    node = root
    for position, bit in enumerate(compressed):
        if bit == "0":
            child = node.left
        elif bit == "1":
            child = node.right
        else:
            logger.warning("Huffman: invalid bit %r at position %d", bit, position)
            raise MalformedCompressedDataError(f"Invalid bit {bit!r} at position {position}")

        if child is None:
            side = "left" if bit == "0" else "right"
            logger.warning("Huffman: missing %s child at position %d", side, position)
            raise MalformedCompressedDataError(
                f"Tree has no {side} child for bit at position {position}"
            )

        if isinstance(child, HuffmanLeaf):
            output.append(child.char)
            node = root
        else:
            node = child

    if node is not root:
        raise MalformedCompressedDataError("Compressed data ends in the middle of a code")

    return "".join(output)
