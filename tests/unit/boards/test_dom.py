"""Unit tests for the card element tree."""

import pytest

from issuebridge.boards import Element


@pytest.fixture
def tree() -> Element:
    return Element(
        "div",
        children=[
            Element(
                "div",
                classes=["card-assignee"],
                children=[
                    Element(
                        "a",
                        classes=["user-avatar-link"],
                        attrs={"href": "/a"},
                        children=[Element("img", classes=["avatar"], attrs={"src": "x.png"})],
                    ),
                    Element("span", classes=["avatar-counter"], text="+2"),
                ],
            ),
            Element("p", text="hello ", children=[Element("b", text="world")]),
        ],
    )


@pytest.mark.unit
class TestSelect:
    """Tests for Element.select."""

    def test_class_selector(self, tree: Element) -> None:
        assert len(tree.select(".avatar")) == 1

    def test_descendant_selector(self, tree: Element) -> None:
        assert tree.select_one(".card-assignee img").attrs["src"] == "x.png"

    def test_tag_and_class(self, tree: Element) -> None:
        assert tree.select_one("a.user-avatar-link") is not None
        assert tree.select_one("span.user-avatar-link") is None

    def test_attribute_presence(self, tree: Element) -> None:
        assert [el.tag for el in tree.select("[href]")] == ["a"]

    def test_root_not_matched(self, tree: Element) -> None:
        assert tree.select("div") == [tree.children[0]]

    def test_unsupported_selector(self, tree: Element) -> None:
        with pytest.raises(ValueError):
            tree.select("div > a")


@pytest.mark.unit
class TestContent:
    """Tests for text and HTML output."""

    def test_text_content_includes_children(self, tree: Element) -> None:
        assert tree.select_one("p").text_content == "hello world"

    def test_class_attribute(self, tree: Element) -> None:
        assert tree.select_one("span").get_attribute("class") == "avatar-counter"

    def test_void_tags_have_no_closing_tag(self) -> None:
        assert Element("img", attrs={"src": "a.png"}).to_html() == '<img src="a.png">'

    def test_attribute_values_escaped(self) -> None:
        html = Element("a", attrs={"title": 'say "hi"'}, text="a & b").to_html()

        assert html == '<a title="say &quot;hi&quot;">a &amp; b</a>'
