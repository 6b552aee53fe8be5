"""BBCode to HTML rendering engine

Parses BBCode (http://en.wikipedia.org/wiki/BBCode) in to a tree of nodes and
renders it as HTML. Badly nested BBCode is repaired so the HTML is always
well formed.
"""

__all__ = ["VERSION",
           "BBCode",
           "TagRegistry",
           "Document",
           "Node",
           "TextNode",
           "ContainerNode",
           "TagNode",
           "Parser",
           "parse_attribs",
           "render",
           "detect_links",
           "detect_emails",
           "detect_emoticons",
           "default_bbcodes",
           "create",
           "escape",
           "unescape",
           "BBCodeError",
           "MissingEndTagError",
           "InvalidNestingError",
           "INLINE_TAG",
           "BLOCK_TAG",
           "TEXT_NODE",
           "AUTO_DETECT_EXCLUDE_NONE",
           "AUTO_DETECT_EXCLUDE_URL",
           "AUTO_DETECT_EXCLUDE_EMAIL",
           "AUTO_DETECT_EXCLUDE_EMOTICON",
           "AUTO_DETECT_EXCLUDE_ALL",
           "render_bbcode",
           "strip_bbcode"]

VERSION = "1.0.0"

from sbbcode.autodetect import detect_emails, detect_emoticons, detect_links
from sbbcode.bbcode import (
    AUTO_DETECT_EXCLUDE_ALL,
    AUTO_DETECT_EXCLUDE_EMAIL,
    AUTO_DETECT_EXCLUDE_EMOTICON,
    AUTO_DETECT_EXCLUDE_NONE,
    AUTO_DETECT_EXCLUDE_URL,
    BLOCK_TAG,
    INLINE_TAG,
    TEXT_NODE,
    BBCode,
)
from sbbcode.document import Document
from sbbcode.escape import escape, unescape
from sbbcode.exceptions import BBCodeError, InvalidNestingError, MissingEndTagError
from sbbcode.nodes import ContainerNode, Node, TagNode, TextNode, render
from sbbcode.parser import Parser, parse_attribs
from sbbcode.registry import TagRegistry
from sbbcode.tags import create, default_bbcodes


def render_bbcode(bbcode, registry=None, auto_detect=True, throw_errors=False):
    """Converts bbcode to html in one call.

    bbcode -- String containing bbcode
    registry -- TagRegistry to use, a default one is created if omitted
    auto_detect -- If True, urls, email addresses and emoticons are detected
    throw_errors -- If True, malformed bbcode raises a BBCodeError

    """
    document = Document(registry, throw_errors=throw_errors)
    document.parse(bbcode)
    if auto_detect:
        document.detect_links()
        document.detect_emails()
        document.detect_emoticons()
    return document.get_html()


def strip_bbcode(bbcode, registry=None):
    """Strips bbcode tags from a string. The result is not escaped.

    bbcode -- A string to remove tags from

    """
    return Document(registry).parse(bbcode).get_text()
