"""
Stable identifier helpers.

A file_id is an opaque URI string (e.g. file:///work/src/app.py). These
helpers convert between URIs and paths and derive playback clone names.
"""

import hashlib
import os
import posixpath
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

PLAYBACK_MARKER = "(playback)"


def stable_id(*parts: str) -> str:
    """
    Generate stable ID derived from inputs (no randomness).

    Returns:
        SHA-256 hash as hex string
    """
    raw = "|".join(parts).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def path_to_uri(path: str) -> str:
    """Absolute file:// URI for a filesystem path."""
    return Path(os.path.abspath(path)).as_uri()


def uri_to_path(uri: str) -> Optional[str]:
    """
    Filesystem path for a file:// URI.

    Returns None for non-file schemes (untitled:, remote schemes, ...).
    A bare path without a scheme is returned as-is.
    """
    parsed = urlparse(uri)
    if not parsed.scheme:
        return uri
    if parsed.scheme != "file":
        return None
    return url2pathname(parsed.path)


def uri_basename(uri: str) -> str:
    """Last path segment of a URI of any scheme."""
    parsed = urlparse(uri)
    path = unquote(parsed.path) if parsed.scheme else uri
    return posixpath.basename(path.replace("\\", "/"))


def playback_name(file_id: str, index: int = 1) -> str:
    """
    Clone file name: the playback marker goes before the last extension.

    Examples:
        app.py     -> app(playback).py
        .bashrc    -> .bashrc(playback)
        a.tar.gz   -> a.tar(playback).gz

    index > 1 disambiguates distinct sources sharing a basename:
        app.py, 2  -> app(playback-2).py
    """
    stem, ext = os.path.splitext(uri_basename(file_id))
    marker = PLAYBACK_MARKER if index <= 1 else f"(playback-{index})"
    return f"{stem}{marker}{ext}"
