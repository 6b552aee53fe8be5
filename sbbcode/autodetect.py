"""Passes that turn plain text urls, email addresses and emoticons into tags.

Each pass walks the text nodes of a parsed document, skipping the contents
of tags that opt out of that kind of detection, and replaces every text node
with a match by the equivalent sequence of text and tag nodes. A pass does
nothing if the tag it would create is not registered.
"""

import logging
import re

from sbbcode.bbcode import AUTO_DETECT_EXCLUDE_EMAIL, AUTO_DETECT_EXCLUDE_EMOTICON, AUTO_DETECT_EXCLUDE_URL
from sbbcode.escape import escape
from sbbcode.nodes import TagNode, TextNode

logger = logging.getLogger(__name__)

_re_url = re.compile(r"(?:(?:https?|ftp)://|(?:www|ftp)\.)"
                     r"(?:[a-zA-Z0-9\-.]{1,255}\.[a-zA-Z]{1,20})"
                     r"(?::[0-9]{1,5})?"
                     r"(?:/[^\s'\"]*)?"
                     r"(?:(?<![,).])|\S)")

_re_email = re.compile(r"[a-zA-Z0-9\-._]+@(?:[a-zA-Z0-9\-.]{1,255}\.[a-zA-Z]{1,20})")


def iter_text_nodes(container, exclude):
    """Yields the text nodes below container, skipping tags named in exclude.

    The children of each container are copied before being walked, so nodes
    may be replaced while iterating.
    """
    for child in container.children:
        if isinstance(child, TagNode):
            if child.name not in exclude:
                for node in iter_text_nodes(child, exclude):
                    yield node
        elif isinstance(child, TextNode):
            yield child


def replace_matches(document, pattern, make_node, exclude):
    """Replaces every match of pattern in the document's text with a tag node.

    pattern -- A compiled regular expression
    make_node -- Callable taking a match and returning the node to put in its place
    exclude -- Set of tag names whose contents are left alone

    Returns the number of replacements made.
    """
    count = 0
    for child in list(iter_text_nodes(document, exclude)):
        text = child.text
        replacement = []
        last_pos = 0
        for match in pattern.finditer(text):
            if match.start() > last_pos:
                replacement.append(TextNode(text[last_pos:match.start()]))
            replacement.append(make_node(match))
            last_pos = match.end()
            count += 1

        if not replacement:
            continue

        if last_pos < len(text):
            replacement.append(TextNode(text[last_pos:]))
        child.parent.replace_child(child, replacement)
    return count


def _link_node(match):
    text = match.group(0)
    if text.startswith("ftp") and text[3] != ":":
        url = "ftp://" + text
    elif text.startswith("w"):
        url = "http://" + text
    else:
        url = text

    node = TagNode("url", {"default": escape(url)})
    node.add_child(TextNode(text))
    return node


def _email_node(match):
    node = TagNode("email")
    node.add_child(TextNode(match.group(0)))
    return node


def detect_links(document):
    """Wraps plain text urls in [url] tags."""
    if "url" not in document.registry:
        return document
    count = replace_matches(document, _re_url, _link_node,
                            document.registry.excluded_tags(AUTO_DETECT_EXCLUDE_URL))
    logger.debug("Detected %d links", count)
    return document


def detect_emails(document):
    """Wraps plain text email addresses in [email] tags."""
    if "email" not in document.registry:
        return document
    count = replace_matches(document, _re_email, _email_node,
                            document.registry.excluded_tags(AUTO_DETECT_EXCLUDE_EMAIL))
    logger.debug("Detected %d email addresses", count)
    return document


def detect_emoticons(document):
    """Replaces emoticon text with [img] tags pointing at the emoticon images."""
    emoticons = document.registry.emoticons
    if not emoticons or "img" not in document.registry:
        return document

    # Reverse lexical order, so ':-))' is tried before ':-)'
    keys = sorted(emoticons.keys(), reverse=True)
    pattern = re.compile("|".join([re.escape(key) for key in keys]))

    def make_node(match):
        key = match.group(0)
        node = TagNode("img", {"alt": escape(key)})
        node.add_child(TextNode(emoticons[key]))
        return node

    count = replace_matches(document, pattern, make_node,
                            document.registry.excluded_tags(AUTO_DETECT_EXCLUDE_EMOTICON))
    logger.debug("Detected %d emoticons", count)
    return document
