"""Day One markup -> Org markup."""

import re
from pathlib import Path

BULLET_RE = re.compile(r"^•", re.MULTILINE)
RULE_RE = re.compile(r"^---(\r?)$", re.MULTILINE)
LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")


def transform_text(text: str) -> str:
    """Rewrite an entry body for Org.

    - "•" at the start of a line becomes a "  -" list item
    - a line that is exactly "---" becomes "-----" (a CRLF ending is kept)
    - Markdown links [label](target) become [[target][label]]

    Everything else passes through untouched.
    """
    result = BULLET_RE.sub("  -", text)
    result = RULE_RE.sub(r"-----\1", result)
    result = LINK_RE.sub(r"[[\2][\1]]", result)
    return result


def photo_link(path: Path) -> str:
    """Org file link for a photo, using its absolute expanded path."""
    return f"[[file:{path.expanduser().absolute()}]]"
