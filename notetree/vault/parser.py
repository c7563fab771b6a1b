"""Parsing utilities for note links, file names, and org keyword lines."""

import re

from ..errors import MalformedAttributes

IDENTIFIER_PATTERN = r"\d{8}T\d{6}"

# Match [[denote:ID]], [[denote:ID][description]], [description](denote:ID)
LINK_PATTERN = re.compile(rf"denote:({IDENTIFIER_PATTERN})")

# ID==SIGNATURE--TITLE__KEYWORDS.ext, everything after the ID optional
FILENAME_PATTERN = re.compile(
    rf"^(?P<identifier>{IDENTIFIER_PATTERN})"
    r"(?:==(?P<signature>[^-_.]+))?"
    r"(?:--(?P<title>[^_.]+))?"
    r"(?:__(?P<keywords>[^.]+))?"
    r"(?:\..*)?$"
)

ORG_KEYWORD_PATTERN = re.compile(r"^#\+(\w+):[ \t]*(.*?)\s*$")


def extract_links(content: str) -> list[str]:
    """Extract linked identifiers from content.

    Returns identifiers in order of appearance. Duplicates are kept; deciding
    what to do with repeated targets is the walker's job.
    """
    return LINK_PATTERN.findall(content)


def parse_filename(name: str) -> dict[str, str | None]:
    """Split a note file name into its identifier, signature, title and keywords.

    Args:
        name: File name (with or without extension)

    Returns:
        Mapping with identifier, signature, title, keywords and date, or an
        empty dict when the name carries no identifier.
    """
    match = FILENAME_PATTERN.match(name)
    if not match:
        return {}

    identifier = match.group("identifier")
    title = match.group("title")
    keywords = match.group("keywords")
    signature = match.group("signature")

    return {
        "identifier": identifier,
        "signature": signature,
        "title": title.replace("-", " ") if title else None,
        "keywords": keywords if keywords else None,
        "date": f"{identifier[0:4]}-{identifier[4:6]}-{identifier[6:8]}",
    }


def parse_org_front_matter(content: str, identifier: str = "") -> dict[str, str]:
    """Read `#+key: value` lines from the top of an org note.

    Stops at the first line that is neither blank nor a keyword line.
    A key repeated with a different value is malformed.
    """
    result: dict[str, str] = {}
    for line in content.split("\n"):
        if not line.strip():
            continue
        match = ORG_KEYWORD_PATTERN.match(line)
        if not match:
            break
        key = match.group(1).lower()
        value = match.group(2)
        if key in result and result[key] != value:
            raise MalformedAttributes(identifier, f"conflicting #+{key} lines")
        result[key] = value
    return result


def split_org_body(content: str) -> str:
    """Return the part of an org note after its keyword lines."""
    lines = content.split("\n")
    for i, line in enumerate(lines):
        if line.strip() and not ORG_KEYWORD_PATTERN.match(line):
            return "\n".join(lines[i:])
    return ""
