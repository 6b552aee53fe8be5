"""The Document, root of a parsed bbcode tree."""

from sbbcode import autodetect
from sbbcode.nodes import ContainerNode
from sbbcode.parser import Parser
from sbbcode.registry import TagRegistry
from sbbcode.tags import create


class Document(ContainerNode):

    def __init__(self, registry=None, load_defaults=True, throw_errors=False):
        """Creates an empty document.

        registry -- The TagRegistry to parse against. If omitted, a registry with
                    the default tags is created (or an empty one if load_defaults
                    is False).
        throw_errors -- If True, bad bbcode raises MissingEndTagError or
                        InvalidNestingError rather than being silently fixed.

        """
        super(Document, self).__init__()
        if registry is None:
            if load_defaults:
                registry = create()
            else:
                registry = TagRegistry()
        self.registry = registry
        self.throw_errors = throw_errors

    def register_tag(self, bbcode, replace=True):
        return self.registry.register(bbcode, replace)

    def register_tags(self, bbcodes, replace=True):
        self.registry.register_many(bbcodes, replace)

    def unregister_tag(self, name):
        self.registry.unregister(name)

    def list_tags(self):
        return self.registry.list_names()

    def get_bbcode(self, name):
        return self.registry.lookup(name)

    def add_emoticon(self, key, url, replace=True):
        return self.registry.add_emoticon(key, url, replace)

    def add_emoticons(self, emoticons, replace=True):
        self.registry.add_emoticons(emoticons, replace)

    def remove_emoticon(self, key):
        return self.registry.remove_emoticon(key)

    def get_base_uri(self):
        return self.registry.get_base_uri()

    def set_base_uri(self, uri):
        self.registry.set_base_uri(uri)

    def parse(self, text):
        """Parses a bbcode string into this document. Returns the document.

        Raises MissingEndTagError or InvalidNestingError if throw_errors is set
        and the bbcode is malformed.

        """
        return Parser(self).parse(text)

    def detect_links(self):
        return autodetect.detect_links(self)

    def detect_emails(self):
        return autodetect.detect_emails(self)

    def detect_emoticons(self):
        return autodetect.detect_emoticons(self)

    def get_text(self):
        """Returns the text of the document with all tags removed. The text is
        not escaped, so it is NOT safe to output as html."""
        return super(Document, self).get_text()

    # Shortcuts
    render = ContainerNode.get_html
    raw_text = get_text

    def __repr__(self):
        return "<Document>"
