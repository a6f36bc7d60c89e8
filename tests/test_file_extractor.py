import io
import json

import pytest
from docx import Document
from openpyxl import Workbook
from PyPDF2 import PdfWriter

from sentiment_dashboard.core.exceptions import (
    EmptyContent,
    FileTooLarge,
    MalformedInput,
    UnsupportedFormat,
)
from sentiment_dashboard.services.file_extractor import (
    _EXTRACTORS,
    MAX_FILE_SIZE_BYTES,
    SUPPORTED_EXTENSIONS,
    FileFormat,
    extension_from_filename,
    extract_fragments,
    resolve_format,
)
from sentiment_dashboard.services.nlp_service import limit_fragments


def _make_pdf(page_texts):
    """Minimal PDF with one Helvetica text line per page."""
    objects = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    page_ids = []
    for i, text in enumerate(page_texts):
        page_id, content_id = 4 + 2 * i, 5 + 2 * i
        page_ids.append(page_id)
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
        objects[page_id] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_id} 0 R >>"
        ).encode()
        objects[content_id] = b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
    kids = " ".join(f"{p} 0 R" for p in page_ids)
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {len(page_ids)} >>".encode()

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for num in sorted(objects):
        offsets[num] = len(out)
        out += b"%d 0 obj\n" % num + objects[num] + b"\nendobj\n"
    xref_at = len(out)
    size = max(objects) + 1
    out += b"xref\n0 %d\n0000000000 65535 f \n" % size
    for num in range(1, size):
        out += b"%010d 00000 n \n" % offsets[num]
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (size, xref_at)
    return bytes(out)


def _make_docx(paragraphs):
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def _make_xlsx(sheets):
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        sheet = workbook.create_sheet(name)
        for row in rows:
            sheet.append(row)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


def test_supported_extensions():
    assert SUPPORTED_EXTENSIONS == [".txt", ".csv", ".json", ".pdf", ".docx", ".xlsx", ".xls"]
    assert resolve_format("XLS") is FileFormat.XLSX
    assert resolve_format(".Docx") is FileFormat.DOCX


def test_every_format_has_an_extractor():
    assert set(_EXTRACTORS) == set(FileFormat)


def test_extension_from_filename():
    assert extension_from_filename("Reviews.CSV") == ".csv"
    assert extension_from_filename("data.xyz") == ".xyz"
    assert extension_from_filename("README") == ""


def test_unsupported_extension_names_it():
    with pytest.raises(UnsupportedFormat) as exc:
        extract_fragments(b"hello", extension_from_filename("data.xyz"))
    assert exc.value.extension == ".xyz"
    assert ".xyz" in exc.value.message
    assert ".pdf" in exc.value.message


def test_oversized_file_rejected_before_dispatch():
    content = b"a" * (MAX_FILE_SIZE_BYTES + 1)
    with pytest.raises(FileTooLarge):
        extract_fragments(content, ".xyz")


def test_file_at_size_limit_is_accepted():
    content = b"a" * MAX_FILE_SIZE_BYTES
    assert len(extract_fragments(content, ".txt")) == 1


def test_txt_drops_blank_lines():
    content = b"First line\n\n   \nSecond line\r\nThird line\n"
    assert extract_fragments(content, ".txt") == ["First line", "Second line", "Third line"]


def test_txt_truncation_by_caller():
    content = "\n".join(f"Review number {i}" for i in range(150)).encode()
    fragments = extract_fragments(content, "txt")
    assert len(fragments) == 150
    kept, warning = limit_fragments(fragments, 100)
    assert len(kept) == 100
    assert warning is not None


def test_txt_splits_only_on_line_breaks():
    content = "Page one\x0cstill one line\nNext\u2028same line\r\nLast line".encode()
    assert extract_fragments(content, ".txt") == [
        "Page one\x0cstill one line",
        "Next\u2028same line",
        "Last line",
    ]


def test_csv_splits_only_on_line_breaks():
    content = "Good value\x85really,pos\nSlow shipping,neg".encode()
    assert extract_fragments(content, ".csv") == ["Good value\x85really", "Slow shipping"]


def test_txt_blank_file_is_empty_content():
    with pytest.raises(EmptyContent):
        extract_fragments(b"\n  \n", ".txt")


def test_csv_takes_first_column_and_skips_header():
    content = b'text,label\n"Great product",pos\nBad service,neg\n\n"Context matters",neu\n'
    assert extract_fragments(content, ".csv") == ["Great product", "Bad service"]


def test_json_array_in_order():
    assert extract_fragments(b'["good", "bad", "ok"]', ".json") == ["good", "bad", "ok"]


def test_json_array_serializes_non_strings():
    content = json.dumps(["fine", 3, {"a": 1}, None]).encode()
    assert extract_fragments(content, ".json") == ["fine", "3", '{"a":1}', "null"]


def test_json_object_values():
    content = b'{"first": "Loved it", "second": 42, "third": [1, 2]}'
    assert extract_fragments(content, ".json") == ["Loved it", "42", "[1,2]"]


def test_json_scalar_root():
    assert extract_fragments(b'"Just one review"', ".json") == ["Just one review"]
    assert extract_fragments(b"42", ".json") == ["42"]


def test_json_invalid_is_malformed():
    with pytest.raises(MalformedInput):
        extract_fragments(b'["unterminated"', ".json")


def test_json_huge_integer_is_malformed():
    with pytest.raises(MalformedInput):
        extract_fragments(b"[" + b"1" * 5000 + b"]", ".json")


def test_json_deep_nesting_is_malformed():
    content = b"[" * 100000 + b"]" * 100000
    with pytest.raises(MalformedInput):
        extract_fragments(content, ".json")


def test_json_empty_array_is_empty_content():
    with pytest.raises(EmptyContent):
        extract_fragments(b"[]", ".json")


def test_pdf_splits_sentences_across_pages():
    content = _make_pdf([
        "The new release is great. It crashed twice! Why?",
        "Support was very helpful today.",
    ])
    assert extract_fragments(content, ".pdf") == [
        "The new release is great",
        "It crashed twice",
        "Support was very helpful today",
    ]


def test_pdf_without_text_is_empty_content():
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buf = io.BytesIO()
    writer.write(buf)
    with pytest.raises(EmptyContent):
        extract_fragments(buf.getvalue(), ".pdf")


def test_pdf_corrupted_is_malformed():
    with pytest.raises(MalformedInput):
        extract_fragments(b"this is not a pdf at all", ".pdf")


def test_docx_paragraphs():
    content = _make_docx([
        "The onboarding flow was smooth and fast.",
        "Short",
        "Support answered every question quickly.",
    ])
    assert extract_fragments(content, ".docx") == [
        "The onboarding flow was smooth and fast.",
        "Support answered every question quickly.",
    ]


def test_docx_falls_back_to_whole_text():
    assert extract_fragments(_make_docx(["Nice", "Okay"]), ".docx") == ["Nice\n\nOkay"]


def test_docx_empty_is_empty_content():
    with pytest.raises(EmptyContent):
        extract_fragments(_make_docx([]), ".docx")


def test_docx_corrupted_is_malformed():
    with pytest.raises(MalformedInput):
        extract_fragments(b"not a zip container", ".docx")


def test_xlsx_first_non_empty_cell_per_row_across_sheets():
    content = _make_xlsx({
        "Feedback": [
            ["id"],
            [None, "The checkout page is confusing"],
            ["Great support team", "ignored"],
            ["short"],
        ],
        "More": [
            ["Second sheet comment here"],
        ],
    })
    assert extract_fragments(content, ".xlsx") == [
        "The checkout page is confusing",
        "Great support team",
        "Second sheet comment here",
    ]


def test_xlsx_without_long_cells_is_empty_content():
    content = _make_xlsx({"Sheet": [["abc"], ["12345"]]})
    with pytest.raises(EmptyContent):
        extract_fragments(content, ".xlsx")


def test_xlsx_corrupted_is_malformed():
    with pytest.raises(MalformedInput):
        extract_fragments(b"garbage bytes", ".xls")


def test_input_bytes_untouched():
    content = b'["good", "bad"]'
    snapshot = bytes(content)
    extract_fragments(content, ".json")
    assert content == snapshot
