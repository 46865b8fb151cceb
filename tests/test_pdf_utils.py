import io

import pytest
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

from pdf_utils import (
    TextExtractionError,
    compressed_filename,
    extract_text_from_pdf,
    extract_text_from_upload,
    save_compressed_file,
    tree_filename,
)


def _pdf_bytes(text=None, password=None):
    writer = PdfWriter()
    page = writer.add_blank_page(width=612, height=792)
    if text is not None:
        font = DictionaryObject({
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/Type1"),
            NameObject("/BaseFont"): NameObject("/Helvetica"),
        })
        page[NameObject("/Resources")] = DictionaryObject({
            NameObject("/Font"): DictionaryObject({NameObject("/F1"): font}),
        })
        content = DecodedStreamObject()
        content.set_data(f"BT /F1 24 Tf 72 700 Td ({text}) Tj ET".encode("latin-1"))
        page[NameObject("/Contents")] = writer._add_object(content)
    if password is not None:
        writer.encrypt(password)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def test_extracts_page_text():
    text = extract_text_from_pdf(_pdf_bytes("Hello World"))
    assert "Hello World" in text
    assert text.endswith("\n")


def test_accepts_a_stream():
    text = extract_text_from_pdf(io.BytesIO(_pdf_bytes("Hello World")))
    assert "Hello World" in text


def test_pdf_without_text():
    with pytest.raises(TextExtractionError, match="no extractable text"):
        extract_text_from_pdf(_pdf_bytes())


def test_not_a_pdf():
    with pytest.raises(TextExtractionError, match="not a valid PDF"):
        extract_text_from_pdf(b"this is not a pdf")


def test_password_protected_pdf():
    with pytest.raises(TextExtractionError, match="password protected"):
        extract_text_from_pdf(_pdf_bytes("Secret", password="secret"))


def test_upload_dispatch():
    assert "Hello World" in extract_text_from_upload(_pdf_bytes("Hello World"), "report.PDF")
    assert extract_text_from_upload("plain text é".encode("utf-8"), "notes.txt") == "plain text é"
    with pytest.raises(TextExtractionError):
        extract_text_from_upload(b"", "empty.txt")


def test_filenames():
    assert compressed_filename("report.pdf", "Huffman") == "report_huffman_compressed.txt"
    assert compressed_filename("text_input.txt", "RLE") == "text_input_rle_compressed.txt"
    assert tree_filename("report.pdf") == "report_huffman_tree.json"


def test_save_writes_content_unchanged(tmp_path):
    content = "3A2BC\r\nline\n東"
    path = save_compressed_file(content, "out.txt", tmp_path / "nested")
    assert path == tmp_path / "nested" / "out.txt"
    assert path.read_bytes() == content.encode("utf-8")
