"""Shared fixtures for JSON Regex Mapper tests."""

import json

import pytest

DESCRIPTION = (
    "First: bk Second: 4 Third: 13 Fourth: Jack, tr Sec  [Encased string - (data)] "
    "(<a href='https://example.com/doc1/182031340621?pdf_header=&de_seq_num=44&caseid=456177'>9</a>)"
)

DOC_LINK = "https://example.com/doc1/182031340621?pdf_header=&de_seq_num=44&caseid=456177"


@pytest.fixture
def docket_record() -> dict:
    return {
        "dedup_key": "6fcb9fe530c24613ed1df3e51c0e86addd794251f49ec6cd77fd4381cc0e0ac2",
        "description": DESCRIPTION,
        "last_build_date": "Tue, 18 Apr 2023 15:00:01 GMT",
        "link": "https://www.example.comv/cgi-bin/DktRpt.pl?456177",
        "pub_date": "Mon, 17 Apr 2023 15:54:45 GMT",
        "title": "23-20670 Abby Lynn Hardy",
        "name": {
            "first": "Abby",
            "last": "Hardy",
            "ssn": "123-45-6789",
        },
    }


@pytest.fixture
def docket_payload(docket_record) -> bytes:
    return json.dumps(docket_record).encode("utf-8")


@pytest.fixture
def docket_spec() -> list:
    return [
        {"capture": {"regex": r"(?i)First:\s+(\w+)\b", "target": "/description", "output": "/parsed/first"}},
        {"capture": {"regex": r"(?i)Second:\s+(\w+)\b", "target": "/description", "output": "/parsed/second"}},
        {"capture": {"regex": r"(?i)Third:\s+(\w+)\b", "target": "/description", "output": "/parsed/third"}},
        {"capture": {"regex": r"(?i)Fourth:\s+([\w,\s\.\']*\S)\s*\[", "target": "/description", "output": "/parsed/fourth"}},
        {"capture": {"regex": r"href='([^']+)'", "target": "/description", "output": "/parsed/doc-link"}},
        {"replace": {"regex": r"\d{3}-\d{2}-\d{4}", "target": "/name/ssn", "with": "***-**-****"}},
    ]
