import re
from fastapi import Request
from app.errors import FormParseError

URLENCODED = "application/x-www-form-urlencoded"

_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_MEDIA_TYPE = re.compile(rf"^{_TOKEN}/{_TOKEN}$")
_PARAMETER = re.compile(rf'^{_TOKEN}=(?:{_TOKEN}|"(?:[^"\\]|\\.)*")$')
# "%" must start a two digit hex escape
_BAD_ESCAPE = re.compile(rb"%(?![0-9A-Fa-f]{2})")


def parse_media_type(content_type: str) -> str:
    """Returns the lowercased media type, rejecting malformed types and parameters."""
    media_type, *params = content_type.split(";")
    media_type = media_type.strip().lower()
    if not _MEDIA_TYPE.match(media_type):
        raise FormParseError(f"invalid media type: {content_type!r}")
    for param in params:
        param = param.strip()
        # a trailing ";" is tolerated
        if param and not _PARAMETER.match(param):
            raise FormParseError(f"invalid media parameter: {param!r}")
    return media_type


def check_urlencoded(body: bytes):
    match = _BAD_ESCAPE.search(body)
    if match:
        escape = body[match.start():match.start() + 3].decode("latin-1")
        raise FormParseError(f"invalid URL escape {escape!r}")


async def validate_form_request(request: Request):
    """
    Rejects bodies Starlette's lenient urlencoded parser would accept anyway.
    Multipart bodies are left to Starlette, which raises on its own.
    """
    content_type = request.headers.get("content-type")
    if not content_type:
        return
    if parse_media_type(content_type) == URLENCODED:
        check_urlencoded(await request.body())
