from __future__ import annotations


class CoachError(RuntimeError):
    status_code = 500

    def __init__(self, message: str, *, code: str = "internal_error"):
        super().__init__(message)
        self.code = code


class InvalidInputError(CoachError):
    """Missing or unsupported input; no external call is attempted."""

    status_code = 400

    def __init__(self, message: str, *, code: str = "invalid_input"):
        super().__init__(message, code=code)


class UpstreamError(CoachError):
    """The AI collaborator or the transport to it failed."""

    def __init__(self, message: str, *, code: str = "upstream_error"):
        super().__init__(message, code=code)


class MalformedResponseError(UpstreamError):
    """The AI collaborator answered, but not with JSON matching the requested schema."""

    def __init__(self, message: str, *, code: str = "malformed_response"):
        super().__init__(message, code=code)
