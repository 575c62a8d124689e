"""Lookup of web UI files from a directory or a bundled set."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_CONTENT_TYPES = {
    "html": "text/html; charset=utf-8",
    "htm": "text/html; charset=utf-8",
    "css": "text/css; charset=utf-8",
    "js": "text/javascript",
    "mjs": "text/javascript",
    "json": "application/json",
    "txt": "text/plain; charset=utf-8",
    "xml": "text/xml; charset=utf-8",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "ttf": "font/ttf",
    "otf": "font/otf",
    "wasm": "application/wasm",
    "pdf": "application/pdf",
}


def content_type_for(file_path: str | Path) -> str:
    """Return the content type of a file judged by its extension."""
    suffix = PurePosixPath(str(file_path).replace("\\", "/")).suffix
    if not suffix:
        return DEFAULT_CONTENT_TYPE
    return _CONTENT_TYPES.get(suffix[1:].lower(), DEFAULT_CONTENT_TYPE)


@dataclass
class AssetResolver:
    """Finds a file first under ``asset_path``, then among the bundled assets."""

    asset_path: Path | str | None = None
    bundled: Mapping[str, bytes] = field(default_factory=dict)

    def resolve(self, file_path: str) -> bytes | None:
        """Return the contents of ``file_path`` or None when it is nowhere to be found."""
        if self.asset_path is not None:
            try:
                return (Path(self.asset_path) / file_path).read_bytes()
            except OSError:
                pass
        return self.bundled.get(file_path)

    def get_file(self, file_path: str) -> tuple[str, bytes] | None:
        """Return the content type and contents of ``file_path``, or None."""
        data = self.resolve(file_path)
        if data is None:
            return None
        return content_type_for(file_path), data