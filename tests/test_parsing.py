import unittest
from io import BytesIO

from pypdf import PdfWriter

from interview_coach.parsing import extract_pdf_text, looks_like_pdf


def _blank_pdf() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class ParsingTests(unittest.TestCase):
    def test_looks_like_pdf(self):
        self.assertTrue(looks_like_pdf(b"%PDF-1.7\n..."))
        self.assertTrue(looks_like_pdf(b"\n %PDF-1.4"))
        self.assertFalse(looks_like_pdf(b"PK\x03\x04"))
        self.assertFalse(looks_like_pdf(b""))

    def test_blank_pdf_reports_no_text(self):
        parsed = extract_pdf_text(_blank_pdf())
        self.assertEqual(parsed.text, "")
        self.assertEqual(parsed.pages, [])
        self.assertIn("No extractable text found in PDF.", parsed.warnings)
        self.assertEqual(len(parsed.doc_id), 16)

    def test_corrupt_pdf_is_a_warning_not_an_error(self):
        parsed = extract_pdf_text(b"%PDF-1.4 truncated")
        self.assertEqual(parsed.text, "")
        self.assertTrue(parsed.warnings)


if __name__ == "__main__":
    unittest.main()
