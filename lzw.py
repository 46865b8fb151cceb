import logging
import re
from typing import Dict, List, Tuple

from errors import InvalidInputError, MalformedCompressedDataError

logger = logging.getLogger(__name__)

SEED_SIZE = 256
CODE_DELIMITER = ","

# Read-only seed shared by every call; dictionaries are built fresh from it
_SEED = tuple(chr(i) for i in range(SEED_SIZE))
_CODE_PATTERN = re.compile(r"-?[0-9]+")


def LZW_codes(text: str) -> List[int]:
    """Single pass LZW; returns the emitted integer codes.

    Characters above U+00FF are not part of the seed. The first time one is
    read it is admitted under the literal code ``-ord(char)``, so phrase codes
    still start at 256 and the decoder can rebuild it without a table.
    """
    # Initialize dictionary with single-character Latin-1 codes
    dictionary = {char: code for code, char in enumerate(_SEED)}
    current_c = ""
    next_code = SEED_SIZE
    result = []

    for next_c in text:
        if next_c not in dictionary:
            dictionary[next_c] = -ord(next_c)

        combine = current_c + next_c
        if combine in dictionary:
            current_c = combine
        else:
            result.append(dictionary[current_c])
            dictionary[combine] = next_code
            next_code += 1
            current_c = next_c

    if current_c:
        result.append(dictionary[current_c])

    logger.debug("LZW: %d chars -> %d codes, dictionary size %d", len(text), len(result), next_code)
    return result


def LZW_encoding(text: str) -> str:
    """Comma separated decimal codes; empty text gives an empty string."""
    if not text:
        return ""
    return CODE_DELIMITER.join(str(code) for code in LZW_codes(text))


def parse_codes(compressed: str) -> List[int]:
    codes = []
    for position, token in enumerate(compressed.split(CODE_DELIMITER)):
        token = token.strip()
        if not _CODE_PATTERN.fullmatch(token):
            raise InvalidInputError(f"LZW code #{position} is not an integer: {token!r}")
        if token.startswith("-") and not token.strip("-0"):
            raise InvalidInputError(f"LZW code #{position} is negative zero: {token!r}")
        try:
            codes.append(int(token))
        except ValueError as e:
            raise InvalidInputError(f"LZW code #{position} is too large: {token[:20]!r}...") from e
    return codes


def _literal(code: int, position: int) -> str:
    # Negative codes only ever stand for a single character above U+00FF
    point = -code
    if point < SEED_SIZE:
        raise InvalidInputError(f"LZW code #{position} is negative: {code}")
    try:
        return chr(point)
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(f"LZW code #{position} is not a valid character: {code}") from e


def LZW_decode_codes(codeword: List[int]) -> Tuple[str, Dict[int, str]]:
    """Rebuild the text and the code -> phrase dictionary in lockstep with the encoder."""
    if not codeword:
        return "", {}

    dictionary = dict(enumerate(_SEED))
    next_code = SEED_SIZE

    first = codeword[0]
    if first < 0:
        previous = _literal(first, 0)
    elif first in dictionary:
        previous = dictionary[first]
    else:
        raise InvalidInputError(f"First LZW code {first} is not in the initial dictionary")

    output = [previous]

    for position in range(1, len(codeword)):
        current_code = codeword[position]

        if current_code < 0:
            entry = _literal(current_code, position)
        elif current_code in dictionary:
            entry = dictionary[current_code]
        elif current_code == next_code:
            # The encoder used the phrase it was just about to define
            entry = previous + previous[0]
        else:
            logger.warning("LZW: code %d at #%d is out of dictionary bounds", current_code, position)
            raise MalformedCompressedDataError(
                f"LZW code {current_code} at #{position} is out of dictionary bounds (next free {next_code})"
            )

        output.append(entry)

        # New entry: previous phrase + first char of the current entry
        dictionary[next_code] = previous + entry[0]
        next_code += 1
        previous = entry

    return "".join(output), dictionary


def LZW_decoding(compressed: str) -> str:
    """Decode comma separated codes back into text.

    Codes 0..255 are the seed, codes from 256 up are learned phrases. A
    negative code -n with n > 255 is the literal character chr(n) that the
    encoder admits for text above U+00FF; every other negative value
    (including "-0") is rejected as invalid input.
    """
    if not compressed:
        return ""
    text, dictionary = LZW_decode_codes(parse_codes(compressed))
    logger.debug("LZW: decoded %d chars, dictionary size %d", len(text), len(dictionary))
    return text
