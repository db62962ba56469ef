from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class Attachment:
    mime_type: str
    data: bytes
    filename: str = ""


class AIClient(Protocol):
    async def generate(
        self, prompt: str, attachments: Sequence[Attachment] = ()
    ) -> str: ...
