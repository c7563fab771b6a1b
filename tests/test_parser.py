import pytest

from notetree.errors import MalformedAttributes
from notetree.vault.parser import extract_links, parse_filename, parse_org_front_matter, split_org_body


def test_extract_links_keeps_order_and_duplicates() -> None:
    content = "\n".join(
        [
            "See [[denote:20240102T100000]] and [[denote:20240103T100000][Beta]].",
            "Again [[denote:20240102T100000]], plus [md](denote:20240104T100000).",
            "Not a link: denote:2024 or [[other]].",
        ]
    )

    assert extract_links(content) == [
        "20240102T100000",
        "20240103T100000",
        "20240102T100000",
        "20240104T100000",
    ]


def test_extract_links_empty() -> None:
    assert extract_links("no links here") == []


def test_parse_filename_all_parts() -> None:
    parsed = parse_filename("20240101T120000==1a--my-first-note__emacs_notes.md")

    assert parsed == {
        "identifier": "20240101T120000",
        "signature": "1a",
        "title": "my first note",
        "keywords": "emacs_notes",
        "date": "2024-01-01",
    }


def test_parse_filename_identifier_only() -> None:
    parsed = parse_filename("20240101T120000.org")

    assert parsed["identifier"] == "20240101T120000"
    assert parsed["title"] is None
    assert parsed["keywords"] is None
    assert parsed["signature"] is None


def test_parse_filename_without_identifier() -> None:
    assert parse_filename("README.md") == {}


def test_org_front_matter_and_body() -> None:
    content = "\n".join(
        [
            "#+title:      Org note",
            "#+filetags:   :x:y:",
            "",
            "Body links [[denote:20240102T100000]]",
        ]
    )

    assert parse_org_front_matter(content) == {"title": "Org note", "filetags": ":x:y:"}
    assert split_org_body(content) == "Body links [[denote:20240102T100000]]"


def test_org_front_matter_conflicting_keys() -> None:
    content = "#+title: One\n#+title: Two\n"

    with pytest.raises(MalformedAttributes) as excinfo:
        parse_org_front_matter(content, "20240101T120000")

    assert excinfo.value.identifier == "20240101T120000"
