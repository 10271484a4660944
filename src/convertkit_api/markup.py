"""
Legacy form and landing page markup.

Legacy forms are served as HTML documents whose asset and action URLs are relative
to the ConvertKit host. ``absolutize_markup`` rewrites those URLs so the markup can
be embedded on another site, and drops the ``html``/``head``/``body`` wrappers the
parser adds around fragments.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from lxml import etree
from lxml import html as lxml_html

# (tag, attribute) pairs whose values are rewritten
URL_ATTRIBUTES = (
    ("a", "href"),
    ("link", "href"),
    ("img", "src"),
    ("script", "src"),
    ("form", "action"),
)

GOOGLE_FONTS_HOST = "//fonts.googleapis.com"


def origin(url: str) -> str:
    """Return ``scheme://host[:port]`` for ``url``."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def absolutize(value: str, base: str) -> str:
    """Return ``value`` made absolute against ``base`` (an origin).

    Absolute URLs and Google Fonts stylesheets are returned unchanged; protocol
    relative URLs get the scheme of ``base``.
    """
    if not value:
        return value
    parts = urlsplit(value)
    if parts.scheme and parts.netloc:
        return value
    if GOOGLE_FONTS_HOST in value:
        return value
    if value.startswith("//"):
        return f"{urlsplit(base).scheme}:{value}"
    if value.startswith("/"):
        return f"{base}{value}"
    return f"{base}/{value}"


def _serialize_children(element: etree._Element | None) -> str:
    if element is None:
        return ""
    parts = [element.text or ""]
    for child in element:
        parts.append(etree.tostring(child, method="html", encoding="unicode"))
    return "".join(parts)


def absolutize_markup(markup: str, url: str) -> str:
    """Rewrite relative URLs in ``markup`` fetched from ``url``.

    Returns the contents of ``head`` followed by the contents of ``body``, without the
    wrapping tags.
    """
    if not markup or not markup.strip():
        return ""

    parser = lxml_html.HTMLParser(encoding="utf-8")
    document = lxml_html.document_fromstring(markup.encode("utf-8"), parser=parser)
    base = origin(url)

    for tag, attribute in URL_ATTRIBUTES:
        for element in document.iter(tag):
            value = element.get(attribute)
            if value:
                element.set(attribute, absolutize(value, base))

    return _serialize_children(document.find("head")) + _serialize_children(document.find("body"))


__all__ = ["URL_ATTRIBUTES", "origin", "absolutize", "absolutize_markup"]
