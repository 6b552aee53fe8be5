"""Single pass BBCode scanner that builds the node tree of a Document."""

import logging
import re

from sbbcode.bbcode import TEXT_NODE
from sbbcode.escape import escape
from sbbcode.exceptions import InvalidNestingError, MissingEndTagError
from sbbcode.nodes import TagNode, TextNode

logger = logging.getLogger(__name__)

_re_newlines = re.compile(r"\r\n|\r")
_re_tag_split = re.compile(r"[ =]")
_re_attribute = re.compile(r"""([^\s=]+)=(?:"((?:\\"|[^"])*)"|'((?:\\'|[^'])*)'|([^'"\s]+))""")
_re_quoted_default = re.compile(r"""^(?:"((?:\\"|[^"])*)"|'((?:\\'|[^'])*)')""")


def _unquote(value):
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_attribs(attribs):
    """Parses the attribute part of an open tag into a dictionary.

    [tag=value] and [tag value] store value under "default", [tag key=value]
    stores key. Values may be quoted with single or double quotes. All values
    are html escaped.

    attribs -- The text after the tag name, e.g. '=red' or ' width=100 height=50'

    """
    ret = {"default": None}
    attribs = attribs.strip()

    if not attribs:
        return ret

    # [quote Will said...] style, the whole string is the default
    if "=" not in attribs:
        ret["default"] = escape(_unquote(attribs))
        return ret

    if attribs[0] == "=":
        value = attribs[1:].strip()
        if "=" not in value or not re.search(r"\s", value):
            ret["default"] = escape(_unquote(value))
            return ret

        match = _re_quoted_default.match(value)
        if match is not None:
            quoted = match.group(1) if match.group(1) is not None else match.group(2)
            ret["default"] = escape(quoted.replace("\\" + value[0], value[0]))
            attribs = value[match.end():]
        else:
            default, attribs = re.split(r"\s+", value, maxsplit=1)
            ret["default"] = escape(default)

    for match in _re_attribute.finditer(attribs):
        key, double_quoted, single_quoted, bare = match.groups()
        if double_quoted is not None:
            value = double_quoted.replace('\\"', '"')
        elif single_quoted is not None:
            value = single_quoted.replace("\\'", "'")
        else:
            value = bare
        ret[key] = escape(value)

    return ret


class Parser(object):
    """Parses bbcode into a document. The parser holds the position in the tree
    (the current container) while the document is being built."""

    def __init__(self, document):
        self.document = document
        self.current = document

    def lookup(self, name):
        return self.document.get_bbcode(name)

    @classmethod
    def parse_tag_token(cls, tag_token):
        """Splits the text between [ and ] into (name, attribs, closing).
        Returns None if the bracket is empty."""
        token = tag_token.strip()
        if not token:
            return None
        name = _re_tag_split.split(token, maxsplit=1)[0]
        attribs = token[len(name):]
        closing = name.startswith("/")
        if closing:
            name = name[1:]
        return name.lower(), attribs, closing

    def parse(self, text):
        """Parses text, adding nodes to the document.

        text -- A string containing bbcode

        """
        text = _re_newlines.sub("\n", text)
        self.current = self.document

        tag_open = False
        tag = []
        tag_text = []

        for c in text:
            if c == "[":
                if tag_open:
                    tag_text.append("[" + "".join(tag))
                tag_open = True
                tag = []
            elif c == "]" and tag_open:
                tag_open = False
                tag_token = "".join(tag)
                tag = []

                parsed = self.parse_tag_token(tag_token)
                if parsed is None or self.lookup(parsed[0]) is None:
                    tag_text.append("[%s]" % tag_token)
                    continue

                self.add_text("".join(tag_text))
                tag_text = []

                name, attribs, closing = parsed
                if closing:
                    handled = self.close_tag(name)
                    if not handled:
                        logger.debug("Stray close tag [/%s]", name)
                else:
                    handled = self.open_tag(name, parse_attribs(attribs))
                if not handled:
                    tag_text.append("[%s]" % tag_token)
            elif tag_open:
                tag.append(c)
            else:
                tag_text.append(c)

        if tag_open:
            tag_text.append("[" + "".join(tag))
        self.add_text("".join(tag_text))

        if self.current is not self.document:
            if self.document.throw_errors:
                raise MissingEndTagError(self.current.name)
            logger.debug("Tag [%s] left open at end of input, closing", self.current.name)
            self.current = self.document

        return self.document

    def add_text(self, text):
        if not text:
            return
        if isinstance(self.current, TagNode):
            bbcode = self.lookup(self.current.name)
            if bbcode is not None and not bbcode.accepts(TEXT_NODE):
                return
        self.current.add_child(TextNode(text))

    def open_tag(self, name, attribs):
        """Opens a tag. Returns False if the tag is not allowed at this point."""
        bbcode = self.lookup(name)

        if isinstance(self.current, TagNode):
            current_bbcode = self.lookup(self.current.name)
            if current_bbcode is not None and current_bbcode.closed_by_open(name):
                self.close_tag(self.current.name)

        if isinstance(self.current, TagNode):
            current_bbcode = self.lookup(self.current.name)
            if current_bbcode is not None:
                if not current_bbcode.accepts(name):
                    logger.debug("Tag [%s] not accepted inside [%s]", name, self.current.name)
                    return False

                if self.document.throw_errors and not bbcode.is_inline and current_bbcode.is_inline:
                    raise InvalidNestingError(name, self.current.name)

        node = TagNode(name, attribs)
        self.current.add_child(node)

        if not bbcode.is_self_closing:
            self.current = node

        return True

    def close_tag(self, name):
        """Closes a tag. Returns False if there is no open tag to close."""
        # A tag closed implicitly stays closed even if the close fails
        if isinstance(self.current, TagNode) and self.current.name != name:
            current_bbcode = self.lookup(self.current.name)
            if current_bbcode is not None and current_bbcode.closed_by_close(name):
                self.current = self.current.parent

        current = self.current
        if current is self.document:
            return False

        if current.name != name:
            # Overlapping tags such as [b][i]x[/b][/i]. Close back to the
            # matching tag and re-open the tags that were open inside it.
            node = current.find_parent_by_tag(name)
            if node is None:
                return False

            reopen = []
            while current is not node:
                reopen.append(current)
                current = current.parent

            current = node.parent
            for skipped in reversed(reopen):
                new_node = TagNode(skipped.name, skipped.attributes)
                current.add_child(new_node)
                current = new_node
        else:
            current = current.parent

        self.current = current
        return True
