import json
import os
import unittest
from dataclasses import replace
from unittest.mock import patch

os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from fastapi.testclient import TestClient

from interview_coach.api.deps import get_ai
from interview_coach.api.v1 import resume as resume_routes
from interview_coach.main import app

from fakes import JOB_DESCRIPTION, ScriptedAIClient

PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n"

ANALYSIS = {
    "ats_score": 72,
    "keyword_score": 65.6,
    "format_score": 80,
    "experience_score": 70,
    "skills_score": 60,
    "missing_keywords": ["Kubernetes", "gRPC"],
    "section_feedback": {
        "summary": "Concise.",
        "experience": "Quantify impact.",
        "skills": "Add cloud tooling.",
        "education": "Fine.",
    },
    "recommendations": [
        {"priority": "High", "title": "Add keywords", "description": "Mention Kubernetes."}
    ],
    "summary_feedback": "Solid backend resume with a few gaps.",
    "extracted_resume_text": "Jane Doe Backend engineer",
}


class ResumeApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use_ai(self, *responses):
        ai = ScriptedAIClient(*responses)
        app.dependency_overrides[get_ai] = lambda: ai
        return ai

    def _analyze(self, filename="resume.pdf", content=PDF_BYTES, job_description=JOB_DESCRIPTION):
        data = {} if job_description is None else {"job_description": job_description}
        files = {} if filename is None else {"resume": (filename, content, "application/pdf")}
        return self.client.post("/api/analyze", data=data, files=files)

    def test_analyze_returns_normalized_analysis(self):
        ai = self._use_ai(json.dumps(ANALYSIS))
        response = self._analyze()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["ats_score"], 72)
        self.assertEqual(body["keyword_score"], 66)
        self.assertEqual(body["recommendations"][0]["priority"], "high")
        self.assertEqual(body["missing_keywords"], ["Kubernetes", "gRPC"])

        prompt, attachments = ai.calls[0]
        self.assertIn(JOB_DESCRIPTION, prompt)
        self.assertEqual(len(attachments), 1)
        self.assertEqual(attachments[0].mime_type, "application/pdf")
        self.assertEqual(attachments[0].data, PDF_BYTES)

    def test_missing_job_description(self):
        ai = self._use_ai()
        response = self._analyze(job_description=None)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Resume file and job description are required."})
        self.assertEqual(ai.calls, [])

    def test_missing_file(self):
        self._use_ai()
        response = self._analyze(filename=None)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Resume file and job description are required."})

    def test_non_pdf_extension_is_rejected(self):
        ai = self._use_ai()
        response = self._analyze(filename="resume.docx", content=b"PK\x03\x04")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Only PDF files are supported."})
        self.assertEqual(ai.calls, [])

    def test_pdf_extension_without_pdf_content_is_rejected(self):
        ai = self._use_ai()
        response = self._analyze(content=b"plain text pretending to be a pdf")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Only PDF files are supported."})
        self.assertEqual(ai.calls, [])

    def test_oversized_upload(self):
        ai = self._use_ai()
        small = replace(resume_routes.settings, max_upload_bytes=16)
        with patch.object(resume_routes, "settings", small):
            response = self._analyze()
        self.assertEqual(response.status_code, 413)
        self.assertIn("File too large", response.json()["error"])
        self.assertEqual(ai.calls, [])

    def test_malformed_analysis(self):
        self._use_ai(json.dumps({"ats_score": 50}))
        response = self._analyze()
        self.assertEqual(response.status_code, 500)
        self.assertIn("error", response.json())

    def test_non_json_analysis(self):
        self._use_ai("I could not read the file.")
        response = self._analyze()
        self.assertEqual(response.status_code, 500)


if __name__ == "__main__":
    unittest.main()
