from .models import ParsedDoc, ParsedPage
from .parse import extract_pdf_text, looks_like_pdf

__all__ = ["ParsedDoc", "ParsedPage", "extract_pdf_text", "looks_like_pdf"]
