"""
Turn uploaded file bytes into text fragments for batch classification.

The supported formats are a closed set; each maps to exactly one extraction
function. Every extractor either returns a non-empty list of fragments or
raises an ExtractionError subclass.
"""
import io
import json
import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

import pandas as pd
from docx import Document
from PyPDF2 import PdfReader

from sentiment_dashboard.core.exceptions import (
    EmptyContent,
    FileTooLarge,
    MalformedInput,
    UnsupportedFormat,
)

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
MIN_SENTENCE_LENGTH = 10
MIN_PARAGRAPH_LENGTH = 10
MIN_CELL_LENGTH = 5

SENTENCE_BOUNDARY_RE = re.compile(r"[.!?]+")
PARAGRAPH_BOUNDARY_RE = re.compile(r"\n\s*\n")
LINE_BREAK_RE = re.compile(r"\r?\n")


class FileFormat(str, Enum):
    TXT = "txt"
    CSV = "csv"
    JSON = "json"
    PDF = "pdf"
    DOCX = "docx"
    XLSX = "xlsx"


EXTENSION_FORMATS: Dict[str, FileFormat] = {
    ".txt": FileFormat.TXT,
    ".csv": FileFormat.CSV,
    ".json": FileFormat.JSON,
    ".pdf": FileFormat.PDF,
    ".docx": FileFormat.DOCX,
    ".xlsx": FileFormat.XLSX,
    ".xls": FileFormat.XLSX,
}

SUPPORTED_EXTENSIONS = list(EXTENSION_FORMATS)


@dataclass(frozen=True)
class PageText:
    page_number: int
    text: str


@dataclass(frozen=True)
class SheetRow:
    sheet: str
    row_number: int
    cells: List[Any]

    def first_text(self) -> Optional[str]:
        """First cell that is neither missing nor blank, as trimmed text."""
        for cell in self.cells:
            if cell is None or (not isinstance(cell, str) and pd.isna(cell)):
                continue
            value = str(cell).strip()
            if value:
                return value
        return None


def extension_from_filename(filename: str) -> str:
    return os.path.splitext(filename)[1].lower()


def normalize_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


def resolve_format(extension: str) -> FileFormat:
    ext = normalize_extension(extension)
    try:
        return EXTENSION_FORMATS[ext]
    except KeyError:
        raise UnsupportedFormat(ext, SUPPORTED_EXTENSIONS) from None


def extract_fragments(content: bytes, extension: str, max_size: int = MAX_FILE_SIZE_BYTES) -> List[str]:
    """
    Extract ordered text fragments from a file.

    Args:
        content: Raw file bytes (never modified)
        extension: File extension such as ".pdf" or "pdf"
        max_size: Largest accepted size in bytes

    Raises:
        FileTooLarge: content is larger than max_size
        UnsupportedFormat: extension is not one of SUPPORTED_EXTENSIONS
        EmptyContent: the file holds no usable text
        MalformedInput: the file could not be parsed as its declared format
    """
    if len(content) > max_size:
        raise FileTooLarge(len(content), max_size)

    file_format = resolve_format(extension)
    fragments = _EXTRACTORS[file_format](content)
    if not fragments:
        raise EmptyContent(f"No valid text content found in the {file_format.value.upper()} file")

    logger.info(f"Extracted {len(fragments)} fragments from {file_format.value} file ({len(content)} bytes)")
    return fragments


def _decode(content: bytes) -> str:
    return content.decode("utf-8-sig", errors="replace")


def _lines(content: bytes) -> List[str]:
    """Split on \\n or \\r\\n only; other Unicode separators stay in the line."""
    return LINE_BREAK_RE.split(_decode(content))


def _extract_txt(content: bytes) -> List[str]:
    return [line for line in _lines(content) if line.strip()]


def _extract_csv(content: bytes) -> List[str]:
    # Single-column intent: first field only, no quoting rules.
    fragments = []
    for line in _lines(content):
        value = line.split(",", 1)[0].replace('"', "").strip()
        if value and "text" not in value.lower():
            fragments.append(value)
    return fragments


def _json_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _extract_json(content: bytes) -> List[str]:
    try:
        data = json.loads(_decode(content))
    except json.JSONDecodeError as e:
        raise MalformedInput(f"Failed to parse JSON file: {e.msg} (line {e.lineno}, column {e.colno})") from e
    except (ValueError, RecursionError) as e:
        # Oversized integer literals and pathologically deep nesting.
        raise MalformedInput(f"Failed to parse JSON file: {e}") from e

    if isinstance(data, list):
        return [_json_text(item) for item in data]
    if isinstance(data, dict):
        return [_json_text(value) for value in data.values()]
    return [_json_text(data)]


def _pdf_pages(content: bytes) -> Iterator[PageText]:
    reader = PdfReader(io.BytesIO(content))
    for number, page in enumerate(reader.pages, start=1):
        text = page.extract_text() or ""
        yield PageText(page_number=number, text=" ".join(text.split()))


def _extract_pdf(content: bytes) -> List[str]:
    try:
        pages = list(_pdf_pages(content))
    except Exception as e:
        raise MalformedInput("Failed to parse PDF file. Please ensure it contains readable text.") from e

    full_text = " ".join(p.text for p in pages if p.text)
    sentences = (s.strip() for s in SENTENCE_BOUNDARY_RE.split(full_text))
    fragments = [s for s in sentences if len(s) >= MIN_SENTENCE_LENGTH]
    if not fragments:
        raise EmptyContent("No readable text found in the PDF file")
    return fragments


def _extract_docx(content: bytes) -> List[str]:
    try:
        document = Document(io.BytesIO(content))
    except Exception as e:
        raise MalformedInput("Failed to parse Word document. Please ensure it's a valid .docx file.") from e

    text = "\n\n".join(p.text for p in document.paragraphs).strip()
    if not text:
        raise EmptyContent("No text content found in the Word document")

    paragraphs = (p.strip() for p in PARAGRAPH_BOUNDARY_RE.split(text))
    fragments = [p for p in paragraphs if len(p) >= MIN_PARAGRAPH_LENGTH]
    return fragments or [text]


def _sheet_rows(content: bytes) -> Iterator[SheetRow]:
    sheets = pd.read_excel(io.BytesIO(content), sheet_name=None, header=None, dtype=object)
    for name, frame in sheets.items():
        for number, row in enumerate(frame.itertuples(index=False, name=None), start=1):
            yield SheetRow(sheet=str(name), row_number=number, cells=list(row))


def _extract_spreadsheet(content: bytes) -> List[str]:
    try:
        rows = list(_sheet_rows(content))
    except Exception as e:
        raise MalformedInput("Failed to parse Excel file. Please ensure it contains text data.") from e

    fragments = []
    for row in rows:
        value = row.first_text()
        if value is not None and len(value) > MIN_CELL_LENGTH:
            fragments.append(value)
    if not fragments:
        raise EmptyContent("No text content found in the Excel file")
    return fragments


_EXTRACTORS: Dict[FileFormat, Callable[[bytes], List[str]]] = {
    FileFormat.TXT: _extract_txt,
    FileFormat.CSV: _extract_csv,
    FileFormat.JSON: _extract_json,
    FileFormat.PDF: _extract_pdf,
    FileFormat.DOCX: _extract_docx,
    FileFormat.XLSX: _extract_spreadsheet,
}
