from __future__ import annotations

import hashlib
from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .models import ParsedDoc, ParsedPage

PDF_MAGIC = b"%PDF-"


def _compute_doc_id(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()[:16]


def looks_like_pdf(content: bytes) -> bool:
    return content[:1024].lstrip().startswith(PDF_MAGIC)


def extract_pdf_text(content: bytes) -> ParsedDoc:
    warnings: list[str] = []
    pages: list[ParsedPage] = []

    try:
        reader = PdfReader(BytesIO(content))
        for index, page in enumerate(reader.pages, start=1):
            page_text = (page.extract_text() or "").strip()
            if page_text:
                pages.append(ParsedPage(page=index, text=page_text))
        if not pages:
            warnings.append("No extractable text found in PDF.")
    except (PdfReadError, ValueError) as exc:
        warnings.append(f"PDF parsing failed: {exc}")

    return ParsedDoc(
        doc_id=_compute_doc_id(content),
        text="\n".join(p.text for p in pages),
        pages=pages,
        warnings=warnings,
    )
