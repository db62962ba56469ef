from __future__ import annotations

from pydantic import BaseModel, Field


class ParsedPage(BaseModel):
    page: int
    text: str


class ParsedDoc(BaseModel):
    doc_id: str
    text: str
    pages: list[ParsedPage] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
