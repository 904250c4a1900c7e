"""
Queryable view over an HTML document.

Wraps a parsel Selector (lxml's HTML parser) so the scoring rules only deal
with a handful of lookups. lxml lower-cases tag and attribute names and
recovers from broken markup, so none of these lookups raise on malformed
input; missing elements simply produce empty results.
"""
from typing import Optional
from parsel import Selector

# Text inside these elements is never rendered
INVISIBLE_TAGS = ("script", "style", "noscript", "template")

_VISIBLE_TEXT_XPATH = "//body//text()[not({})]".format(
    " or ".join(f"ancestor::{tag}" for tag in INVISIBLE_TAGS)
)

# <title> elements of inline SVG or MathML are icon labels, not the document title
DOCUMENT_TITLE_XPATH = "//title[not(ancestor::svg) and not(ancestor::math)]"


def starts_with_doctype(html: str) -> bool:
    """True if the markup opens with a doctype, ignoring a byte-order mark, whitespace and case."""
    return (html or "").lstrip("\ufeff").strip().lower().startswith("<!doctype")


class HtmlDocument:
    """
    Parsed HTML document.

    Attributes:
        raw: The original HTML text, unmodified
        selector: parsel Selector over the parsed tree
    """

    def __init__(self, html: str):
        self.raw = html or ""
        self.selector = Selector(text=self.raw)

    def first_text(self, tag: str) -> str:
        """Trimmed text content of the first matching element, or an empty string."""
        element = self.selector.css(tag)
        if not element:
            return ""
        return element[0].xpath("string()").get("").strip()

    def document_title(self) -> str:
        """Trimmed text of the first document title, skipping SVG and MathML titles."""
        titles = self.selector.xpath(DOCUMENT_TITLE_XPATH)
        if not titles:
            return ""
        return titles[0].xpath("string()").get("").strip()

    def document_title_count(self) -> int:
        return len(self.selector.xpath(DOCUMENT_TITLE_XPATH))

    def has_doctype(self) -> bool:
        return starts_with_doctype(self.raw)

    def attr(self, selector: str, name: str) -> Optional[str]:
        """Attribute value of the first matching element, or None."""
        return self.selector.css(selector).attrib.get(name)

    def count(self, selector: str) -> int:
        return len(self.selector.css(selector))

    def elements_with_non_empty_attr(self, tag: str, name: str) -> int:
        """Count elements whose attribute value is non-empty after trimming."""
        values = self.selector.css(f"{tag}::attr({name})").getall()
        return sum(1 for value in values if value.strip())

    def all_text(self) -> str:
        """Visible body text, lower-cased, with text nodes joined by spaces."""
        return " ".join(self.selector.xpath(_VISIBLE_TEXT_XPATH).getall()).lower()
