"""Server-side asset fetching for the download endpoint.

Remote URLs are validated against SSRF before every hop (redirects are
followed manually); inline ``data:`` URLs are decoded locally.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import ipaddress
import logging
import mimetypes
import socket
import time
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import unquote_to_bytes, urljoin, urlparse

import filetype
import httpx

from assethub.assets.errors import DownloadError
from assethub.config import check_mime, config

log = logging.getLogger(__name__)

_ALLOWED_SCHEMES = {"http", "https"}
_MAX_REDIRECTS = 5
_GENERIC_MIMES = {"", "application/octet-stream", "binary/octet-stream"}


@dataclass
class DownloadedAsset:
    content: bytes
    content_type: str
    filename: str


def _invalid_url(message: str) -> DownloadError:
    return DownloadError(message, code="INVALID_URL", status_code=400)


async def validate_url(url: str) -> str:
    """Reject non-http(s) URLs and hosts resolving to internal addresses. Returns the hostname."""
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        raise _invalid_url("Only http, https and data URLs are allowed.")
    hostname = parsed.hostname
    if not hostname:
        raise _invalid_url("URL must contain a hostname.")
    loop = asyncio.get_running_loop()
    try:
        addrinfos = await loop.getaddrinfo(hostname, None, family=socket.AF_UNSPEC, type=socket.SOCK_STREAM)
    except socket.gaierror:
        raise _invalid_url("Could not resolve hostname.")
    if not addrinfos:
        raise _invalid_url("Could not resolve hostname.")
    for _family, _type, _proto, _canonname, sockaddr in addrinfos:
        ip = ipaddress.ip_address(sockaddr[0])
        if ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved:
            raise _invalid_url("URLs pointing to private/internal addresses are not allowed.")
    return hostname


def decode_data_url(url: str) -> tuple[bytes, str]:
    """Decode ``data:[<mediatype>][;base64],<data>`` into (bytes, mime)."""
    header, sep, payload = url[len("data:"):].partition(",")
    if not sep:
        raise _invalid_url("Malformed data URL.")
    parts = [p.strip() for p in header.split(";") if p.strip()]
    is_base64 = bool(parts) and parts[-1].lower() == "base64"
    if is_base64:
        parts = parts[:-1]
    mime = parts[0].lower() if parts and "/" in parts[0] else "text/plain"
    if is_base64:
        try:
            return base64.b64decode(unquote_to_bytes(payload), validate=True), mime
        except (binascii.Error, ValueError):
            raise _invalid_url("Malformed base64 payload in data URL.")
    return unquote_to_bytes(payload), mime


def _sniff_mime(content: bytes, declared: str | None) -> str:
    declared = (declared or "").split(";", 1)[0].strip().lower()
    if declared not in _GENERIC_MIMES:
        return declared
    detected = filetype.guess(content)
    return detected.mime if detected else "application/octet-stream"


def _extension(url: str, mime: str) -> str:
    if not url.startswith("data:"):
        suffix = PurePosixPath(urlparse(url).path).suffix.lstrip(".").lower()
        if suffix.isalnum() and len(suffix) <= 5:
            return suffix
    guessed = mimetypes.guess_extension(mime)
    return guessed.lstrip(".") if guessed else "file"


def default_filename(url: str, mime: str) -> str:
    return f"asset-{int(time.time() * 1000)}.{_extension(url, mime)}"


async def _fetch_remote(url: str) -> tuple[bytes, str | None]:
    max_bytes = config.assets.download_max_bytes
    headers = {"User-Agent": config.assets.user_agent}
    try:
        async with httpx.AsyncClient(follow_redirects=False) as client:
            await validate_url(url)
            resp = await client.get(url, headers=headers, timeout=config.assets.timeout)
            redirects = 0
            while resp.is_redirect and redirects < _MAX_REDIRECTS:
                location = resp.headers.get("location")
                if not location:
                    break
                url = urljoin(url, location)
                await validate_url(url)
                resp = await client.get(url, headers=headers, timeout=config.assets.timeout)
                redirects += 1
    except httpx.HTTPError as exc:
        log.warning("Asset download failed for %s", url, exc_info=True)
        raise DownloadError(f"Failed to download asset: {exc}") from exc

    if resp.is_redirect:
        raise DownloadError("Too many redirects.")
    if not resp.is_success:
        raise DownloadError(f"Failed to download asset: HTTP {resp.status_code}")
    if len(resp.content) > max_bytes:
        raise DownloadError(
            f"Asset exceeds {max_bytes} byte limit.", code="FILE_TOO_LARGE", status_code=413,
        )
    return resp.content, resp.headers.get("content-type")


async def download_asset(url: str, filename: str | None = None) -> DownloadedAsset:
    """Fetch *url* and return its bytes, content type and a download filename."""
    if url.startswith("data:"):
        content, declared = decode_data_url(url)
    else:
        content, declared = await _fetch_remote(url)

    mime = _sniff_mime(content, declared)
    if not check_mime(mime, config.assets.allowed_download_mimes):
        raise DownloadError(
            f"MIME type '{mime}' is not allowed.", code="UNSUPPORTED_MEDIA_TYPE", status_code=415,
        )
    return DownloadedAsset(content=content, content_type=mime, filename=filename or default_filename(url, mime))
