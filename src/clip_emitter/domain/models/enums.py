"""Enumerations for clipboard events."""

from __future__ import annotations

from enum import Enum

# Characters that make a short, space-free string look like a secret
_PASSWORD_SPECIALS = "!@#$%^&*()-_=+[]{};:,.<>?/\\|`~"

_ICONS = {
    "Text": "📝",
    "Url": "🔗",
    "Code": "💻",
    "Password": "🔒",
    "File": "📁",
    "Image": "🖼️",
    "Other": "📄",
}


class ContentType(str, Enum):
    """Kind of content written to the clipboard.

    Uses the same heuristic a clipboard history listener applies when it
    receives a new text selection, so the run summary shows what the
    listener is expected to display.
    """

    TEXT = "Text"
    URL = "Url"
    CODE = "Code"
    PASSWORD = "Password"
    FILE = "File"
    IMAGE = "Image"
    OTHER = "Other"

    @property
    def icon(self) -> str:
        return _ICONS[self.value]

    @classmethod
    def from_preview(cls, content: str) -> ContentType:
        """Classify a text preview.

        Rules are checked in order: URL scheme, code keywords, path-like
        strings, short password-like tokens, then plain text.
        """
        if content.startswith(("http://", "https://")):
            return cls.URL
        if "fn " in content or "impl " in content or "struct " in content:
            return cls.CODE
        if "/" in content and " " not in content and len(content) < 256:
            return cls.FILE
        if (
            content
            and len(content) < 50
            and " " not in content
            and any(ch in _PASSWORD_SPECIALS for ch in content)
        ):
            return cls.PASSWORD
        return cls.TEXT
