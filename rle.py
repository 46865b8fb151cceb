import logging

from errors import InvalidInputError, MalformedCompressedDataError

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
ESCAPE = "\\"


def _literal(char: str) -> str:
    # Digits and the escape itself would be read back as counts/escapes
    if char in DIGITS or char == ESCAPE:
        return ESCAPE + char
    return char


def _run(count: int, char: str) -> str:
    return (str(count) if count > 1 else "") + _literal(char)


def run_length_encoding(text: str) -> str:
    """Encode each run as [count]char, the count omitted when it is 1.

    "AAABBC" -> "3A2BC". Literal digits and backslashes are written
    with a backslash in front so they cannot be mistaken for a count.
    """
    if not text:
        return ""

    output = []
    count = 1

    for i in range(1, len(text)):
        if text[i] == text[i - 1]:
            count += 1
        else:
            output.append(_run(count, text[i - 1]))
            count = 1

    # last run
    output.append(_run(count, text[-1]))

    result = "".join(output)
    logger.debug("RLE: %d chars -> %d chars", len(text), len(result))
    return result


def run_length_decoding(compressed: str) -> str:
    if not compressed:
        return ""

    output = []
    count_buffer = ""
    i = 0

    while i < len(compressed):
        char = compressed[i]

        if char in DIGITS:
            count_buffer += char
            i += 1
            continue

        if char == ESCAPE:
            if i + 1 >= len(compressed):
                raise MalformedCompressedDataError(
                    f"Escape at index {i} is not followed by a character"
                )
            i += 1
            char = compressed[i]

        try:
            repeat = int(count_buffer) if count_buffer else 1
        except ValueError as e:
            raise InvalidInputError(
                f"Bad repeat count {count_buffer!r} at index {i - len(count_buffer)}"
            ) from e
        if repeat < 0:
            raise InvalidInputError(
                f"Bad repeat count {count_buffer!r} at index {i - len(count_buffer)}"
            )

        output.append(char * repeat)
        count_buffer = ""
        i += 1

    if count_buffer:
        logger.warning("RLE: compressed data ends with a bare count %r", count_buffer)
        raise InvalidInputError(
            f"Compressed data cannot end with a number (trailing count {count_buffer!r})"
        )

    return "".join(output)
