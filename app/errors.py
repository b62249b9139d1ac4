from fastapi import HTTPException


class FetchError(Exception):
    """Base class for failures talking to the upstream Pokemon API."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class TransportError(FetchError):
    """Network failure, or the response body could not be read."""


class UpstreamStatusError(FetchError):
    def __init__(self, status_code: int, detail: str | None = None):
        super().__init__(detail or f"PokeAPI failed with status {status_code}")
        self.status_code = status_code


class DecodeError(FetchError):
    """Body was not JSON, or did not match the expected shape."""


class TemplateRenderError(Exception):
    def __init__(self, template_name: str, detail: str):
        super().__init__(f"{template_name}: {detail}")
        self.template_name = template_name
        self.detail = detail


# Raised by the HTTP layer when an upstream failure is surfaced to the API consumer
class APIClientError(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")


class FormParseError(Exception):
    """Request body or its Content-Type could not be parsed as a form."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail
