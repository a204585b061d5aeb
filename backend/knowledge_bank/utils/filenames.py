"""
Filename utilities - Pure functions for storage paths and media placeholders.
"""
import re
import time
import unicodedata
from typing import Optional

_INVALID_CHARS = re.compile(r"[^a-z0-9._-]+")
_REPEATED_HYPHENS = re.compile(r"--+")


def sanitize_filename(filename: str) -> str:
    """
    Make a filename safe for object storage keys.

    Lowercases, strips accents, replaces runs of characters outside
    [a-z0-9._-] with a hyphen and trims hyphens from both ends.

    Example:
        sanitize_filename("Informe Año 2024.PDF") -> "informe-ano-2024.pdf"
    """
    name = unicodedata.normalize("NFD", (filename or "").lower())
    name = "".join(ch for ch in name if not unicodedata.combining(ch))
    name = _INVALID_CHARS.sub("-", name)
    name = _REPEATED_HYPHENS.sub("-", name)
    return name.strip("-")


def build_storage_path(user_id: str, filename: str, timestamp_ms: Optional[int] = None) -> str:
    """
    Build the storage key `{user_id}/{timestamp}-{clean name}`.

    Files live under a folder named after the owner; the millisecond
    timestamp prefix avoids collisions between uploads of the same name.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    clean_name = sanitize_filename(filename) or "document"
    return f"{user_id}/{timestamp_ms}-{clean_name}"


def strip_extension(filename: str) -> str:
    """
    Remove the last extension: "song.final.mp3" -> "song.final".

    A name without a dot is returned unchanged.
    """
    if "." not in filename:
        return filename
    return filename.rsplit(".", 1)[0]


def file_extension(filename: str) -> str:
    """Lowercased last extension including the dot, or '' when there is none."""
    if "." not in filename:
        return ""
    return "." + filename.rsplit(".", 1)[-1].lower()
