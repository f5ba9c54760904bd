"""Parser for the free-form ``author`` string of a package manifest."""

from __future__ import annotations

import re
from typing import TypedDict

_NAME_RE = re.compile(r"^([^(<]+)")
_EMAIL_RE = re.compile(r"<([^>]+)>")
_URL_RE = re.compile(r"\(([^)]+)\)")


class Author(TypedDict, total=False):
    name: str
    email: str
    url: str


def parse_author(author: str) -> Author:
    """Parse ``"Name <email> (url)"``; each part is optional and independent.

    Only the keys that matched are present in the result.
    """
    result: Author = {}

    name_match = _NAME_RE.match(author)
    if name_match:
        name = name_match.group(1).strip()
        if name:
            result["name"] = name

    email_match = _EMAIL_RE.search(author)
    if email_match:
        result["email"] = email_match.group(1)

    url_match = _URL_RE.search(author)
    if url_match:
        result["url"] = url_match.group(1)

    return result
