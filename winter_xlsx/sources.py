"""
CSV input sources.

Responsibilities:
- inline CSV text (wins when given)
- fetching a CSV location with optional request headers
- encoding detection + newline normalization of fetched bytes
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import httpx
from charset_normalizer import from_bytes

from .errors import InputRetrievalError

logger = logging.getLogger(__name__)

WESTERN_CODE_PAGES = ["cp1252", "latin_1", "utf_8"]


def decode_csv_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode fetched CSV bytes to text with LF newlines.

    Rules:
    - Strict UTF-8 first (the common case, BOM or not).
    - Otherwise detect among the Western code pages via charset-normalizer.
    - A UTF-8 BOM is consumed, never carried into the text.
    - If decode fails, fall back to UTF-8 with replacement characters and report it.
    """
    decode_fallback = False
    try:
        text = raw.decode("utf-8-sig")
        detected, decode_used = "utf_8", "utf-8-sig"
    except UnicodeDecodeError:
        detected = None
        match = from_bytes(raw, cp_isolation=WESTERN_CODE_PAGES).best()
        if match is not None:
            detected = match.encoding
        decode_used = detected or "cp1252"
        try:
            text = raw.decode(decode_used)
        except (UnicodeDecodeError, LookupError):
            # Last resort: keep going with replacement characters
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
            decode_fallback = True

    nl_before = {
        "crlf": text.count("\r\n"),
        "cr": text.count("\r") - text.count("\r\n"),
    }
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "newlines_changed": (nl_before["crlf"] > 0) or (nl_before["cr"] > 0),
    }
    return text, report


async def read_csv_text(
    url: Optional[str] = None,
    csv: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    *,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Inline CSV text if given, else the body of url, else ""."""
    if isinstance(csv, str) and csv:
        return csv
    if not url:
        return ""

    logger.info("fetching CSV from %s", url)
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
            resp = await client.get(url, headers=headers or None)
    except httpx.HTTPError as exc:
        logger.warning("fetch failed for %s: %s", url, exc)
        raise InputRetrievalError(url, reason=str(exc) or type(exc).__name__) from exc

    if not resp.is_success:
        logger.warning("fetch for %s returned status %d", url, resp.status_code)
        raise InputRetrievalError(url, status=resp.status_code)

    text, report = decode_csv_bytes(resp.content)
    logger.debug("decoded %s: %s", url, report)
    return text
