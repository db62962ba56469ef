from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from interview_coach.ai.types import AIClient
from interview_coach.api.deps import get_ai
from interview_coach.core.config import settings
from interview_coach.core.rate_limit import rate_limit
from interview_coach.errors import InvalidInputError
from interview_coach.schemas.resume import ResumeAnalysis
from interview_coach.services.resume_analysis import analyze_resume

router = APIRouter()


async def _read_upload(upload: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await upload.read(1024 * 64)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/analyze", response_model=ResumeAnalysis)
@rate_limit()
async def resume_analyze(
    request: Request,
    resume: UploadFile | None = File(default=None),
    job_description: str | None = Form(default=None),
    ai_client: AIClient = Depends(get_ai),
):
    _ = request
    if resume is None or not (job_description or "").strip():
        raise InvalidInputError("Resume file and job description are required.")
    filename = resume.filename or ""
    if not filename.lower().endswith(".pdf"):
        raise InvalidInputError("Only PDF files are supported.", code="unsupported_file_type")

    content = await _read_upload(resume)
    return await analyze_resume(
        ai_client,
        filename=filename,
        content=content,
        job_description=job_description or "",
    )
