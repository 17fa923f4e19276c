"""
Outbound HTTP service for processors.

Thin async wrapper over httpx with JSON, multipart and urlencoded bodies.
Timeouts are given in milliseconds and abort the call when exceeded.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Union
from urllib.parse import urlencode, urljoin

import httpx
from pydantic import BaseModel, Field

from faas.common.core.http_client import HttpClientFactory
from faas.runtime.config import config

logger = logging.getLogger("faas.http_service")

ContentType = Literal["json", "form-data", "form-urlencoded"]

_MIME_TYPES = {
    # text
    "txt": "text/plain",
    "html": "text/html",
    "htm": "text/html",
    "css": "text/css",
    "js": "text/javascript",
    "json": "application/json",
    "xml": "application/xml",
    "csv": "text/csv",
    # images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "ico": "image/x-icon",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    # audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "aac": "audio/aac",
    "m4a": "audio/mp4",
    # video
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    "mov": "video/quicktime",
    "wmv": "video/x-ms-wmv",
    "flv": "video/x-flv",
    "webm": "video/webm",
    "mkv": "video/x-matroska",
    # documents
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "rtf": "application/rtf",
    "odt": "application/vnd.oasis.opendocument.text",
    "ods": "application/vnd.oasis.opendocument.spreadsheet",
    "odp": "application/vnd.oasis.opendocument.presentation",
    # archives
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    "bz2": "application/x-bzip2",
    # source code
    "ts": "text/typescript",
    "tsx": "text/tsx",
    "jsx": "text/jsx",
    "py": "text/x-python",
    "java": "text/x-java-source",
    "c": "text/x-c",
    "cpp": "text/x-c++src",
    "h": "text/x-c",
    "hpp": "text/x-c++hdr",
    "php": "text/x-php",
    "rb": "text/x-ruby",
    "go": "text/x-go",
    "rs": "text/x-rustsrc",
    "swift": "text/x-swift",
    "kt": "text/x-kotlin",
    "scala": "text/x-scala",
    # fonts
    "ttf": "font/ttf",
    "otf": "font/otf",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "eot": "application/vnd.ms-fontobject",
    # binaries
    "bin": "application/octet-stream",
    "exe": "application/x-msdownload",
    "dmg": "application/x-apple-diskimage",
    "iso": "application/x-iso9660-image",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def get_file_mime_type(extension: str) -> str:
    """Map a file extension (with or without the leading dot) to a MIME type."""
    normalized = extension.lower().lstrip(".")
    return _MIME_TYPES.get(normalized, DEFAULT_MIME_TYPE)


class HttpRequestError(Exception):
    """Raised when an outbound request fails before a response arrives."""

    def __init__(self, method: str, cause: Exception):
        self.method = method
        self.cause = cause
        super().__init__(f"{method} Request failed: {cause}")


@dataclass
class FormDataField:
    """A multipart field; bytes values are sent as a file part."""

    value: Union[str, int, float, bool, bytes]
    filename: Optional[str] = None
    content_type: Optional[str] = None


class HttpRequestConfig(BaseModel):
    headers: Dict[str, str] = Field(default_factory=dict)
    params: Dict[str, Union[str, int, float, bool]] = Field(default_factory=dict)
    timeout: Optional[float] = Field(default=None, description="Timeout in milliseconds")
    content_type: ContentType = "json"


class HttpResponse(BaseModel):
    data: Any = None
    status: int
    status_text: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    success: bool


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


FilePart = Tuple[str, Tuple[Optional[str], Union[str, bytes], Optional[str]]]


def _form_data_parts(body: Any) -> List[FilePart]:
    # Every field goes through ``files`` so httpx always emits multipart,
    # even when no binary attachment is present.
    parts: List[FilePart] = []
    if not isinstance(body, dict):
        return parts

    def add(key: str, item: Any) -> None:
        if isinstance(item, FormDataField):
            if isinstance(item.value, (bytes, bytearray)):
                filename = item.filename or "blob"
                mime = item.content_type or get_file_mime_type(filename.rpartition(".")[2])
                parts.append((key, (filename, bytes(item.value), mime)))
            else:
                parts.append((key, (None, _stringify(item.value).encode("utf-8"), None)))
        elif isinstance(item, (bytes, bytearray)):
            parts.append((key, ("blob", bytes(item), DEFAULT_MIME_TYPE)))
        else:
            parts.append((key, (None, _stringify(item).encode("utf-8"), None)))

    for key, value in body.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                add(key, item)
        else:
            add(key, value)
    return parts


def _urlencoded(body: Any) -> str:
    pairs: List[Tuple[str, str]] = []
    if isinstance(body, dict):
        for key, value in body.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((key, _stringify(item)) for item in value)
            else:
                pairs.append((key, _stringify(value)))
    return urlencode(pairs)


class HttpService:
    def __init__(
        self,
        base_url: str = "",
        default_headers: Optional[Dict[str, str]] = None,
        client_factory: Optional[HttpClientFactory] = None,
    ):
        self.base_url = base_url
        self.default_headers: Dict[str, str] = {"Content-Type": "application/json"}
        self.default_headers.update(default_headers or {})
        self.client_factory = client_factory or HttpClientFactory(config)

    def set_default_header(self, key: str, value: str) -> None:
        self.default_headers[key] = value

    def remove_default_header(self, key: str) -> None:
        self.default_headers.pop(key, None)

    def _build_url(self, endpoint: str) -> str:
        return urljoin(self.base_url, endpoint) if self.base_url else endpoint

    def _combine_headers(
        self,
        custom_headers: Optional[Dict[str, str]] = None,
        content_headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, str]:
        combined = dict(self.default_headers)
        if content_headers is not None and "Content-Type" not in content_headers:
            combined.pop("Content-Type", None)
        combined.update(content_headers or {})
        combined.update(custom_headers or {})
        return combined

    def _prepare_body(self, body: Any, content_type: ContentType) -> Tuple[Dict[str, Any], Dict[str, str]]:
        if content_type == "form-data":
            return {"files": _form_data_parts(body)}, {}
        if content_type == "form-urlencoded":
            return (
                {"content": _urlencoded(body)},
                {"Content-Type": "application/x-www-form-urlencoded"},
            )
        content = json.dumps(body) if body is not None else None
        return {"content": content}, {"Content-Type": "application/json"}

    @staticmethod
    def _process_response(response: httpx.Response) -> HttpResponse:
        data: Any
        if "application/json" in response.headers.get("content-type", ""):
            try:
                data = response.json()
            except json.JSONDecodeError:
                data = response.text
        else:
            data = response.text

        return HttpResponse(
            data=data,
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
            success=response.is_success,
        )

    def _timeout(self, request_config: HttpRequestConfig) -> float:
        if request_config.timeout is not None:
            return request_config.timeout / 1000.0
        return config.HTTP_TIMEOUT_SECONDS

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        request_config: Optional[HttpRequestConfig] = None,
        with_body: bool = True,
    ) -> HttpResponse:
        request_config = request_config or HttpRequestConfig()

        body_kwargs: Dict[str, Any] = {}
        content_headers: Optional[Dict[str, str]] = None
        if with_body:
            body_kwargs, content_headers = self._prepare_body(body, request_config.content_type)

        headers = self._combine_headers(request_config.headers, content_headers)
        params = {key: _stringify(value) for key, value in request_config.params.items()}

        try:
            async with self.client_factory.create_async_client(
                timeout=self._timeout(request_config)
            ) as client:
                response = await client.request(
                    method,
                    self._build_url(endpoint),
                    headers=headers,
                    params=params or None,
                    **body_kwargs,
                )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {endpoint} failed: {e}")
            raise HttpRequestError(method, e) from e

        return self._process_response(response)

    async def get(self, endpoint: str, config: Optional[HttpRequestConfig] = None) -> HttpResponse:
        return await self.request("GET", endpoint, request_config=config, with_body=False)

    async def post(
        self, endpoint: str, body: Any = None, config: Optional[HttpRequestConfig] = None
    ) -> HttpResponse:
        return await self.request("POST", endpoint, body, config)

    async def put(
        self, endpoint: str, body: Any = None, config: Optional[HttpRequestConfig] = None
    ) -> HttpResponse:
        return await self.request("PUT", endpoint, body, config)

    async def patch(
        self, endpoint: str, body: Any = None, config: Optional[HttpRequestConfig] = None
    ) -> HttpResponse:
        return await self.request("PATCH", endpoint, body, config)

    async def delete(
        self, endpoint: str, config: Optional[HttpRequestConfig] = None
    ) -> HttpResponse:
        return await self.request("DELETE", endpoint, request_config=config, with_body=False)

    async def upload_file(
        self,
        endpoint: str,
        file: Union[bytes, FormDataField],
        field_name: str = "file",
        additional_fields: Optional[Dict[str, Any]] = None,
        config: Optional[HttpRequestConfig] = None,
    ) -> HttpResponse:
        form: Dict[str, Any] = {field_name: file}
        form.update(additional_fields or {})
        request_config = (config or HttpRequestConfig()).model_copy(
            update={"content_type": "form-data"}
        )
        return await self.post(endpoint, form, request_config)

    async def upload_files(
        self,
        endpoint: str,
        files: List[Union[bytes, FormDataField]],
        field_name: str = "files",
        additional_fields: Optional[Dict[str, Any]] = None,
        config: Optional[HttpRequestConfig] = None,
    ) -> HttpResponse:
        form: Dict[str, Any] = {field_name: list(files)}
        form.update(additional_fields or {})
        request_config = (config or HttpRequestConfig()).model_copy(
            update={"content_type": "form-data"}
        )
        return await self.post(endpoint, form, request_config)
