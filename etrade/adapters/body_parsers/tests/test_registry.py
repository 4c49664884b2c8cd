"""Unit tests for BodyParserRegistry."""

from dataclasses import dataclass
from typing import Optional

import pytest

from etrade.adapters.body_parsers import BodyParserRegistry, default_registry
from etrade.core.exceptions import MalformedResponse, UnsupportedContentType
from etrade.core.protocols import BodyParser


@dataclass
class ParseCase:
    desc: str
    content_type: str
    body: str
    expected: dict


PARSE_CASES = [
    ParseCase("json", "application/json", '{"oauth_token": "T123"}', {"oauth_token": "T123"}),
    ParseCase(
        "json with charset", "application/json; charset=UTF-8", '{"a": [1, 2]}', {"a": [1, 2]}
    ),
    ParseCase(
        "form",
        "application/x-www-form-urlencoded",
        "oauth_token=T%2B1&oauth_token_secret=S",
        {"oauth_token": "T+1", "oauth_token_secret": "S"},
    ),
    ParseCase(
        "form keeps blank values",
        "application/x-www-form-urlencoded",
        "a=&b=1",
        {"a": "", "b": "1"},
    ),
    ParseCase("media type case-insensitive", "Application/JSON", "{}", {}),
]


@pytest.mark.parametrize("case", PARSE_CASES, ids=lambda c: c.desc)
def test_default_registry_parses(case: ParseCase):
    assert default_registry().parse(case.content_type, case.body) == case.expected


@pytest.mark.parametrize("content_type", ["text/html", "text/plain; charset=UTF-8", "", None])
def test_unsupported_content_type(content_type: Optional[str]):
    with pytest.raises(UnsupportedContentType) as exc_info:
        default_registry().parse(content_type, "<html></html>")
    assert exc_info.value.content_type == content_type


@pytest.mark.parametrize("body", ["{not json", "[1, 2]", '"text"'])
def test_malformed_json(body: str):
    with pytest.raises(MalformedResponse):
        default_registry().parse("application/json", body)


def test_register_extends_only_that_registry():
    registry = default_registry()
    registry.register("text/plain", lambda body: {"text": body})

    assert registry.parse("text/plain", "hi") == {"text": "hi"}
    assert not default_registry().supports("text/plain")


def test_registered_parser_exception_becomes_malformed_response():
    def parse_xml(body: str):
        raise ValueError("bad xml")

    registry = default_registry()
    registry.register("application/xml", parse_xml)

    with pytest.raises(MalformedResponse, match="bad xml") as exc_info:
        registry.parse("application/xml", "<a>")
    assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.parametrize("value", [["a", "b"], None, "oauth_token=T"])
def test_registered_parser_must_return_mapping(value):
    registry = BodyParserRegistry({"text/plain": lambda body: value})

    with pytest.raises(MalformedResponse, match="expected a mapping"):
        registry.parse("text/plain", "x")


def test_content_types_listed():
    assert default_registry().content_types == [
        "application/json",
        "application/x-www-form-urlencoded",
    ]


def test_empty_registry_rejects_everything():
    with pytest.raises(UnsupportedContentType):
        BodyParserRegistry().parse("application/json", "{}")


def test_registry_satisfies_protocol():
    assert isinstance(default_registry(), BodyParser)
