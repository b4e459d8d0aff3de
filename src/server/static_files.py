"""Lookup of widget assets (script, styles, icons) beside the index page."""

from __future__ import annotations

import mimetypes
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import unquote

# Platform mimetypes tables disagree on these, so the widget pins them.
_WIDGET_CONTENT_TYPES: dict[str, str] = {
    ".css": "text/css",
    ".html": "text/html",
    ".ico": "image/x-icon",
    ".js": "text/javascript",
    ".json": "application/json",
    ".svg": "image/svg+xml",
    ".webmanifest": "application/manifest+json",
    ".woff2": "font/woff2",
}

_CHARSET_TYPES = frozenset(
    {"application/json", "application/manifest+json", "image/svg+xml"}
)


def resolve_static_file(ui_root: Path, request_path: str) -> Optional[Path]:
    """Return the asset for `request_path` under `ui_root`, or None.

    Hidden files, NUL bytes and paths escaping the root are never served.
    """
    decoded = unquote(request_path or "")
    if "\x00" in decoded:
        return None

    parts = PurePosixPath(decoded).parts
    relative = [part for part in parts if part != "/"]
    if not relative or any(part.startswith(".") and part != ".." for part in relative):
        return None

    root = ui_root.resolve()
    try:
        candidate = root.joinpath(*relative).resolve()
    except (OSError, ValueError):
        return None
    if root not in candidate.parents or not candidate.is_file():
        return None
    return candidate


def guess_content_type(path: Path) -> str:
    suffix = path.suffix.lower()
    mime_type = _WIDGET_CONTENT_TYPES.get(suffix) or mimetypes.guess_type(path.name)[0]
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _CHARSET_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type
