from __future__ import annotations

import json

from bs4.builder import ParserRejectedMarkup
import pytest

from richdoc import (
    BoldMark,
    ConverterConfig,
    Document,
    HtmlConverter,
    InvalidNodeError,
    ItalicMark,
    Paragraph,
    ParseFailure,
    TextNode,
    convert_document,
)
from richdoc.core.config import MAX_DEPTH_LIMIT
from richdoc.core.exceptions import exception_hint
import richdoc.conversion as conversion_module


@pytest.mark.parametrize("html", ["", "   ", "\n\t\n", "<!-- only a comment -->"])
def test_empty_input_yields_single_empty_paragraph(html: str) -> None:
    document = convert_document(html)
    assert document.to_dict() == {"type": "doc", "content": [{"type": "paragraph"}]}


@pytest.mark.parametrize(
    "html",
    [
        "",
        "<div><div></div></div>",
        "<section></section>",
        "text only",
        "<p>x</p>",
        "<ul></ul>",
    ],
)
def test_document_is_never_empty(html: str) -> None:
    assert len(convert_document(html).content) >= 1


def test_conversion_is_deterministic() -> None:
    html = (
        "<h2>Plan</h2><p>Do <strong>this</strong> then <a href='/next'>that</a></p>"
        "<ol><li>one</li><li><em>two</em></li></ol><hr>"
    )
    first = convert_document(html)
    second = convert_document(html)
    assert first == second
    assert first.to_json() == second.to_json()


def test_consecutive_conversions_are_independent(converter: HtmlConverter) -> None:
    converter.convert("<p><b><i><u>deep</u></i></b></p>")
    assert converter.convert("<p>flat</p>").content == (
        Paragraph(content=(TextNode("flat"),)),
    )


def test_bytes_input_is_decoded() -> None:
    document = convert_document("<p>café</p>".encode())
    assert document.content == (Paragraph(content=(TextNode("café"),)),)


def test_bytes_input_respects_configured_encoding() -> None:
    config = ConverterConfig(encoding="latin-1")
    document = convert_document("<p>café</p>".encode("latin-1"), config=config)
    assert document.content == (Paragraph(content=(TextNode("café"),)),)


def test_undecodable_bytes_raise_parse_failure() -> None:
    with pytest.raises(ParseFailure) as excinfo:
        convert_document(b"<p>\xff\xfe broken</p>")
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
    assert "utf-8" in exception_hint(excinfo.value)


def test_parse_failure_is_reported_to_emitter(emitter) -> None:
    with pytest.raises(ParseFailure):
        convert_document(b"<p>\xff</p>", emitter=emitter)
    assert len(emitter.errors) == 1
    assert emitter.errors[0].startswith("Failed to parse HTML content: input is not valid utf-8")


def test_rejected_markup_raises_parse_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _reject(*_args: object, **_kwargs: object) -> None:
        raise ParserRejectedMarkup("unparseable")

    monkeypatch.setattr(conversion_module, "BeautifulSoup", _reject)
    with pytest.raises(ParseFailure, match="Failed to parse HTML content"):
        convert_document("<p>x</p>")


def test_unsupported_input_type() -> None:
    with pytest.raises(InvalidNodeError):
        convert_document(42)  # type: ignore[arg-type]


def test_parser_falls_back_to_builtin(emitter) -> None:
    converter = HtmlConverter(parser="nonexistent-parser")
    document = converter.convert("<p>Hello</p>", emitter=emitter)
    assert document.content == (Paragraph(content=(TextNode("Hello"),)),)
    assert emitter.named("parser_fallback") == [
        {"preferred": "nonexistent-parser", "fallback": "html.parser"}
    ]


def test_depth_cap_flattens_deep_formatting(emitter) -> None:
    converter = HtmlConverter(ConverterConfig(max_depth=2))
    document = converter.convert("<p><b><i>x</i></b></p>", emitter=emitter)
    assert document.content == (Paragraph(content=(TextNode("x", (BoldMark(),)),)),)
    assert emitter.named("depth_limit") == [{"tag": "i", "depth": 2}]


def test_pathological_nesting_does_not_crash() -> None:
    depth = 400
    html = "<p>" + "<b>" * depth + "core" + "</b>" * depth + "</p>"
    document = convert_document(html)
    assert document.content == (Paragraph(content=(TextNode("core", (BoldMark(),)),)),)


def test_deepest_allowed_cap_survives_very_deep_nesting() -> None:
    depth = 3000
    html = "<p>" + "<i>" * depth + "x" + "</i>" * depth + "</p>"
    config = ConverterConfig(max_depth=MAX_DEPTH_LIMIT)
    document = convert_document(html, config=config)
    assert document.content == (Paragraph(content=(TextNode("x", (ItalicMark(),)),)),)


def test_depth_is_restored_after_conversion(converter: HtmlConverter) -> None:
    context = converter.new_context()
    with context.descend() as depth:
        assert depth == 1
    assert context.depth == 0


def test_json_shape_round_trips_through_json_module() -> None:
    html = "<p>Visit <a href='https://example.com'>example</a></p>"
    payload = json.loads(convert_document(html).to_json())
    assert payload["type"] == "doc"
    link_text = payload["content"][0]["content"][1]
    assert link_text["text"] == "example"
    assert link_text["marks"][0]["attrs"]["rel"] == "noopener noreferrer nofollow"


def test_document_rejects_empty_content() -> None:
    with pytest.raises(InvalidNodeError):
        Document(content=())


def test_empty_document_factory() -> None:
    assert Document.empty().content == (Paragraph(),)
