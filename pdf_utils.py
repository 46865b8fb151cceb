"""Collaborators around the codecs: text extraction from uploads and a file-save sink."""
import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

from pypdf import PasswordType, PdfReader
from pypdf.errors import PyPdfError

logger = logging.getLogger(__name__)


class TextExtractionError(Exception):
    """Raised when an uploaded document yields no usable text."""


def extract_text_from_pdf(stream: Union[bytes, BinaryIO]) -> str:
    if isinstance(stream, (bytes, bytearray)):
        stream = io.BytesIO(stream)

    try:
        reader = PdfReader(stream)
        if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
            raise TextExtractionError(
                "The PDF file is password protected. Please remove the password protection and try again."
            )

        logger.info("PDF loaded, number of pages: %d", len(reader.pages))
        pages = []
        for number, page in enumerate(reader.pages, start=1):
            page_text = page.extract_text() or ""
            if page_text:
                pages.append(page_text + "\n")
            else:
                logger.debug("Page %d has no text content", number)
    except PyPdfError as e:
        logger.error("PDF processing error: %s", e)
        raise TextExtractionError("The file appears to be corrupted or is not a valid PDF file.") from e

    text = "".join(pages)
    if not text.strip():
        raise TextExtractionError(
            "The PDF appears to be empty or contains no extractable text. "
            "It might be a scanned document or contain only images."
        )

    logger.info("Extracted text, total length: %d", len(text))
    return text


def extract_text_from_upload(data: bytes, filename: str) -> str:
    if Path(filename).suffix.lower() == ".pdf":
        return extract_text_from_pdf(data)

    text = data.decode("utf-8", errors="replace")
    if not text:
        raise TextExtractionError(f"{filename} is empty")
    return text


def compressed_filename(source_name: str, algorithm: str) -> str:
    return f"{Path(source_name).stem}_{algorithm.lower()}_compressed.txt"


def tree_filename(source_name: str) -> str:
    return f"{Path(source_name).stem}_huffman_tree.json"


def save_compressed_file(content: str, filename: str, output_dir: Union[str, Path] = ".") -> Path:
    """Write ``content`` unchanged to ``output_dir/filename``."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / Path(filename).name
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.info("Saved %s (%d chars)", path, len(content))
    return path
