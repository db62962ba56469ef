from __future__ import annotations

import logging

from pydantic import ValidationError

from interview_coach.ai.types import AIClient, Attachment
from interview_coach.errors import InvalidInputError, MalformedResponseError
from interview_coach.parsing import looks_like_pdf
from interview_coach.schemas.resume import ResumeAnalysis
from interview_coach.services.llm_json import json_completion

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = """You are an expert resume analyzer and ATS (Applicant Tracking System) specialist. Analyze the attached PDF resume against the job description comprehensively.

Job Description:
{job_description}

Provide the output in VALID JSON format (no markdown):
{{
  "ats_score": <number 0-100, overall ATS compatibility>,
  "keyword_score": <number 0-100, how well keywords match>,
  "format_score": <number 0-100, formatting and structure quality>,
  "experience_score": <number 0-100, experience alignment>,
  "skills_score": <number 0-100, skills match percentage>,
  "missing_keywords": [<list of important missing keywords as strings>],
  "section_feedback": {{
    "summary": "<feedback on summary/objective section>",
    "experience": "<feedback on experience section>",
    "skills": "<feedback on skills section>",
    "education": "<feedback on education section>"
  }},
  "recommendations": [
    {{
      "priority": "<high|medium|low>",
      "title": "<short recommendation title>",
      "description": "<actionable recommendation description>"
    }}
  ],
  "summary_feedback": "<overall 2-3 sentence summary of the resume quality>",
  "extracted_resume_text": "<full text content extracted from the PDF resume>"
}}"""


def validate_resume_upload(filename: str | None, content: bytes | None, job_description: str | None) -> None:
    if not filename or content is None or not (job_description or "").strip():
        raise InvalidInputError("Resume file and job description are required.")
    if not filename.lower().endswith(".pdf") or not looks_like_pdf(content):
        raise InvalidInputError("Only PDF files are supported.", code="unsupported_file_type")


async def analyze_resume(
    ai_client: AIClient, *, filename: str, content: bytes, job_description: str
) -> ResumeAnalysis:
    validate_resume_upload(filename, content, job_description)

    prompt = ANALYSIS_PROMPT.format(job_description=job_description.strip())
    payload = await json_completion(
        ai_client,
        prompt=prompt,
        attachments=[Attachment(mime_type="application/pdf", data=content, filename=filename)],
        operation="resume_analysis",
    )
    try:
        analysis = ResumeAnalysis.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(
            "The resume analysis does not match the expected schema.", code="invalid_schema"
        ) from exc

    logger.info(
        "resume_analysis_done ats_score=%s missing_keywords=%s recommendations=%s",
        analysis.ats_score,
        len(analysis.missing_keywords),
        len(analysis.recommendations),
    )
    return analysis
