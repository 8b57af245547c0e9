"""
Bounded, in-memory multipart form reading.

Starlette's default form parsing spools file parts above 1MB to a
temporary file. Uploads here are capped, so the whole body is kept in
memory and the request stream is cut off once it passes the cap.
"""
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser
from starlette.requests import Request

# Room for part headers, boundaries and small non-file fields
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class BodyTooLarge(MultiPartException):
    """The request body passed the configured cap."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Request body exceeds {limit} bytes")


class TooManyFiles(MultiPartException):
    """More file parts were sent than allowed."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Too many files. Maximum number of files is {limit}.")


class InMemoryMultiPartParser(MultiPartParser):
    """MultiPartParser whose file parts never roll over to disk below spool_max_size."""

    def __init__(self, headers, stream, *, spool_max_size: int, file_limit: int, **kwargs):
        super().__init__(headers, stream, **kwargs)
        self.spool_max_size = spool_max_size
        self.file_limit = file_limit

    def on_part_end(self) -> None:
        super().on_part_end()
        files = sum(1 for _, value in self.items if isinstance(value, UploadFile))
        if files > self.file_limit:
            raise TooManyFiles(self.file_limit)


@dataclass(frozen=True)
class UploadedFile:
    """A single file part, fully buffered."""
    filename: str
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


async def _capped_stream(request: Request, limit: int) -> AsyncIterator[bytes]:
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise BodyTooLarge(limit)
        yield chunk


def is_multipart(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() == "multipart/form-data"


async def read_multipart_form(request: Request, max_file_bytes: int, max_files: int = 1) -> FormData:
    """
    Parse a multipart/form-data body without touching the filesystem.

    Raises:
        BodyTooLarge: If the declared or streamed body passes the cap
        TooManyFiles: If more than max_files file parts are sent
        MultiPartException: On malformed bodies
    """
    body_limit = max_file_bytes + MULTIPART_OVERHEAD_BYTES

    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > body_limit:
        raise BodyTooLarge(body_limit)

    parser = InMemoryMultiPartParser(
        request.headers,
        _capped_stream(request, body_limit),
        spool_max_size=body_limit,
        file_limit=max_files,
    )
    return await parser.parse()


async def read_upload(form: FormData, field: str) -> Optional[UploadedFile]:
    """Return the file sent under field, or None if absent or sent as plain text."""
    value = form.get(field)
    if not isinstance(value, UploadFile):
        return None

    data = await value.read()
    await value.close()
    return UploadedFile(
        filename=value.filename or "",
        content_type=value.content_type,
        data=data,
    )
