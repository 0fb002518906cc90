"""
Markup sanitization for free-text bookmark fields.

Stored text is kept exactly as submitted; sanitize() is applied when a bookmark
is serialized for a response. Uses BeautifulSoup's html.parser so fragments are
not wrapped in <html>/<body>.
"""
import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    PageElement,
    ProcessingInstruction,
    Tag,
)

# Elements removed together with everything inside them
BLOCKED_TAGS = [
    "script",
    "style",
    "iframe",
    "frame",
    "frameset",
    "object",
    "embed",
    "applet",
    "base",
    "link",
    "meta",
    "svg",
    "math",
    "noscript",
    "template",
    "form",
]

# Attributes holding a URL that a browser may navigate to or load
URL_ATTRIBUTES = frozenset({
    "action",
    "background",
    "cite",
    "data",
    "dynsrc",
    "formaction",
    "href",
    "lowsrc",
    "poster",
    "src",
    "srcset",
    "xlink:href",
})

UNSAFE_URL_SCHEMES = ("javascript:", "vbscript:", "data:")

# Browsers ignore whitespace and control characters inside a scheme ("java\tscript:")
_SCHEME_NOISE = re.compile(r"[\x00-\x20]+")

_NON_TEXT_NODES = (CData, Comment, Declaration, Doctype, ProcessingInstruction)

# Keep whitespace-only text exactly as written instead of collapsing it to one
# space or newline; the document root is listed so the rule holds everywhere
PRESERVE_WHITESPACE_TAGS = {BeautifulSoup.ROOT_TAG_NAME, "pre", "textarea"}

# Short titles like "example.com" are text to sanitize, not filenames or URLs to fetch
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)


def _is_plain_text(soup: BeautifulSoup) -> bool:
    """True when the parsed text holds nothing but character data."""
    return all(type(node) is NavigableString for node in soup.descendants)


def _is_unsafe_url(value: str | list[str]) -> bool:
    if isinstance(value, list):
        value = " ".join(value)
    return _SCHEME_NOISE.sub("", value).lower().startswith(UNSAFE_URL_SCHEMES)


def _strip_unsafe_attributes(tag: Tag) -> None:
    for name in list(tag.attrs):
        lowered = name.lower()
        if lowered.startswith("on") or lowered == "style":
            del tag.attrs[name]
        elif lowered in URL_ATTRIBUTES and _is_unsafe_url(tag.attrs[name]):
            del tag.attrs[name]


def _remove_blocked_elements(soup: BeautifulSoup) -> None:
    # Re-query after each removal: decomposing a parent invalidates its descendants
    element: PageElement | None = soup.find(BLOCKED_TAGS)
    while element is not None:
        element.decompose()
        element = soup.find(BLOCKED_TAGS)


def sanitize(text: str | None) -> str | None:
    """
    Neutralize active markup in text while keeping its readable content.

    Text without any markup is returned unchanged. Otherwise script-bearing
    elements are dropped with their content, comments and declarations are
    dropped, event handler / style attributes and javascript:, vbscript: or
    data: URLs are removed, and the remaining fragment is re-serialized with
    minimal entity escaping. Whitespace between elements is kept as written.

    Idempotent: sanitize(sanitize(x)) == sanitize(x).
    """
    if text is None:
        return None

    soup = BeautifulSoup(
        text, "html.parser", preserve_whitespace_tags=PRESERVE_WHITESPACE_TAGS,
    )
    if _is_plain_text(soup):
        return text

    _remove_blocked_elements(soup)

    for node in soup.find_all(string=lambda s: isinstance(s, _NON_TEXT_NODES)):
        node.extract()

    for tag in soup.find_all(True):
        _strip_unsafe_attributes(tag)

    return soup.decode(formatter="minimal")
