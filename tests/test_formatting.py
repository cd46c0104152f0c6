from bs4 import BeautifulSoup

from richdoc import (
    BoldMark,
    HardBreak,
    HtmlConverter,
    ItalicMark,
    Paragraph,
    TextNode,
    UnderlineMark,
    compose_inline,
)


def _inline(converter: HtmlConverter, html: str) -> tuple:
    paragraph = converter.convert(html).content[0]
    assert isinstance(paragraph, Paragraph)
    assert paragraph.content is not None
    return paragraph.content


def test_strong_tag_adds_bold(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>This is <strong>bold</strong> text</p>")
    assert nodes == (
        TextNode("This is "),
        TextNode("bold", (BoldMark(),)),
        TextNode(" text"),
    )


def test_b_tag_adds_bold(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><b>bold</b></p>")
    assert nodes == (TextNode("bold", (BoldMark(),)),)


def test_emphasis_and_i_add_italic(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><em>one</em><i>two</i></p>")
    assert [node.marks for node in nodes] == [(ItalicMark(),), (ItalicMark(),)]


def test_underline_tag(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><u>note</u></p>")
    assert nodes == (TextNode("note", (UnderlineMark(),)),)


def test_nested_marks_apply_innermost_first(converter: HtmlConverter) -> None:
    html = (
        "<p>Text with <strong>bold</strong> and <em>italic</em> and "
        "<strong><em>both</em></strong></p>"
    )
    nodes = _inline(converter, html)
    assert len(nodes) == 6
    last = nodes[-1]
    assert last.text == "both"
    assert [mark.kind for mark in last.marks] == ["italic", "bold"]


def test_three_level_nesting_order(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><u><em><strong>deep</strong></em></u></p>")
    assert [mark.kind for mark in nodes[0].marks] == ["bold", "italic", "underline"]


def test_mark_applies_to_every_run(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><strong>Very <em>important</em> news</strong></p>")
    assert nodes == (
        TextNode("Very ", (BoldMark(),)),
        TextNode("important", (ItalicMark(), BoldMark())),
        TextNode(" news", (BoldMark(),)),
    )


def test_duplicate_marks_are_collapsed(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><b><strong>twice</strong></b></p>")
    assert nodes == (TextNode("twice", (BoldMark(),)),)


def test_line_break_inside_paragraph(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>first<br>second</p>")
    assert nodes == (TextNode("first"), HardBreak(), TextNode("second"))


def test_line_break_inside_formatting_passes_through(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><strong>a<br/>b</strong></p>")
    assert nodes == (
        TextNode("a", (BoldMark(),)),
        HardBreak(),
        TextNode("b", (BoldMark(),)),
    )


def test_whitespace_text_is_preserved(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><b>a</b> <i>b</i></p>")
    assert nodes[1] == TextNode(" ")


def test_whitespace_only_paragraph_keeps_run(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>   </p>")
    assert nodes == (TextNode("   "),)


def test_mixed_whitespace_between_elements_is_verbatim(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p><b>a</b>\n\t <i>b</i></p>")
    assert nodes == (
        TextNode("a", (BoldMark(),)),
        TextNode("\n\t "),
        TextNode("b", (ItalicMark(),)),
    )


def test_multiline_whitespace_only_paragraph_keeps_run(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>\n  \n</p>")
    assert nodes == (TextNode("\n  \n"),)


def test_unknown_inline_element_keeps_trimmed_text(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>Hi<span>  <b>there</b>  </span></p>")
    assert nodes == (TextNode("Hi"), TextNode("there"))


def test_empty_unknown_inline_element_is_dropped(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>Hi<span> </span><code>x</code></p>")
    assert nodes == (TextNode("Hi"), TextNode("x"))


def test_comments_are_not_text(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>a<!-- hidden -->b</p>")
    assert nodes == (TextNode("a"), TextNode("b"))


def test_entities_are_decoded(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>Fish &amp; chips</p>")
    assert nodes == (TextNode("Fish & chips"),)


def test_compose_inline_on_parsed_element() -> None:
    soup = BeautifulSoup("<li>Go <em>now</em></li>", "html.parser")
    nodes = compose_inline(soup.li)
    assert nodes == [TextNode("Go "), TextNode("now", (ItalicMark(),))]


def test_text_node_serialisation_omits_empty_marks() -> None:
    assert TextNode("plain").to_dict() == {"type": "text", "text": "plain"}
    assert TextNode("x", (ItalicMark(), BoldMark())).to_dict() == {
        "type": "text",
        "text": "x",
        "marks": [{"type": "italic"}, {"type": "bold"}],
    }


def test_cdata_inside_unknown_inline_element_is_dropped(converter: HtmlConverter) -> None:
    nodes = _inline(converter, "<p>Hi<span><![CDATA[hidden]]></span></p>")
    assert nodes == (TextNode("Hi"),)
