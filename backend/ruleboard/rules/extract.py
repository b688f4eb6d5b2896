# backend/ruleboard/rules/extract.py
"""
Plain-text extraction of the rules document (.docx, .pdf or .txt).

The output is the line-oriented text that parse_rules_text reads: Word tables
are flattened cell by cell, in document order, one cell per line.

Needs the `import` extra (python-docx, pypdf) for .docx and .pdf sources.
"""

import logging
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".txt", ".docx", ".pdf")


def _docx_lines(path: Path) -> Iterator[str]:
    import docx
    from docx.table import Table

    document = docx.Document(str(path))
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                for cell in row.cells:
                    yield cell.text
        else:
            yield block.text


def extract_docx(path: Union[str, Path]) -> str:
    return "\n".join(_docx_lines(Path(path)))


def extract_pdf(path: Union[str, Path]) -> str:
    from pypdf import PdfReader

    reader = PdfReader(str(path))
    logger.info("[Import] %s has %d pages", path, len(reader.pages))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def extract_text(path: Union[str, Path]) -> str:
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".docx":
        return extract_docx(path)
    if suffix == ".pdf":
        return extract_pdf(path)
    if suffix == ".txt":
        return path.read_text(encoding="utf-8")
    raise ValueError(f"Unsupported rules document type: {path.suffix or path.name}")
