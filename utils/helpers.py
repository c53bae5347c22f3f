import os
from uuid import uuid4

from django.core.exceptions import SuspiciousFileOperation
from django.utils.text import get_valid_filename


def safe_name(name: str) -> str:
    try:
        cleaned = get_valid_filename(name or "file")
    except SuspiciousFileOperation:
        cleaned = "file"
    base, ext = os.path.splitext(cleaned)
    return f"{base[:40]}{ext.lower()}"


def unique_filename(original_name: str, prefix: str = "") -> str:
    """Storage backends don't dedupe, so every upload gets a fresh key."""
    name = f"{uuid4().hex}-{safe_name(original_name)}"
    return f"{prefix}-{name}" if prefix else name
