"""The BBCode class, an immutable description of how one tag is parsed and rendered."""

INLINE_TAG, BLOCK_TAG = range(2)

AUTO_DETECT_EXCLUDE_NONE = 0
AUTO_DETECT_EXCLUDE_URL = 1
AUTO_DETECT_EXCLUDE_EMAIL = 2
AUTO_DETECT_EXCLUDE_EMOTICON = 4
AUTO_DETECT_EXCLUDE_ALL = AUTO_DETECT_EXCLUDE_URL | AUTO_DETECT_EXCLUDE_EMAIL | AUTO_DETECT_EXCLUDE_EMOTICON

# Name used in accepted_children to allow literal text inside a tag
TEXT_NODE = "text_node"


class BBCode(object):

    def __init__(self,
                 tag,
                 handler,
                 tag_type=INLINE_TAG,
                 self_closing=False,
                 closing_tags=(),
                 accepted_children=(),
                 auto_detect_exclude=AUTO_DETECT_EXCLUDE_NONE):
        """Defines a tag.

        tag -- The name of the bbcode tag, matched case-insensitively
        handler -- Either a string where %content% is replaced with the rendered
                   contents of the tag, or a callable taking (content, attributes, node)
                   and returning html
        tag_type -- INLINE_TAG or BLOCK_TAG
        self_closing -- True if the tag never has contents or a close tag, e.g. [br]
        closing_tags -- Names of tags that implicitly close this tag. An entry of the
                        form "/name" only applies to the close tag [/name].
        accepted_children -- Names of the tags allowed inside this tag, plus TEXT_NODE
                             if literal text is allowed. Empty means anything goes.
        auto_detect_exclude -- Bitmask of AUTO_DETECT_EXCLUDE_* flags for auto-detection
                               passes that should skip the contents of this tag.

        """
        self._tag = tag.lower()
        self._handler = handler
        self._inline = tag_type == INLINE_TAG
        self._self_closing = bool(self_closing)
        self._closing_tags = frozenset(name.lower() for name in closing_tags)
        self._accepted_children = frozenset(name.lower() for name in accepted_children)
        self._auto_detect_exclude = auto_detect_exclude

    @property
    def tag(self):
        return self._tag

    @property
    def handler(self):
        return self._handler

    @property
    def is_inline(self):
        return self._inline

    @property
    def is_self_closing(self):
        return self._self_closing

    @property
    def closing_tags(self):
        return self._closing_tags

    @property
    def accepted_children(self):
        return self._accepted_children

    @property
    def auto_detect_exclude(self):
        return self._auto_detect_exclude

    def closed_by_open(self, name):
        """True if opening [name] implicitly closes this tag."""
        return name in self._closing_tags

    def closed_by_close(self, name):
        """True if [/name] implicitly closes this tag."""
        return name in self._closing_tags or ("/" + name) in self._closing_tags

    def accepts(self, name):
        """True if a child tag (or TEXT_NODE) may be added to this tag."""
        return not self._accepted_children or name in self._accepted_children

    def get_html(self, content, attributes, node):
        """Renders a tag node using this definition.

        content -- The already rendered html of the node's children
        attributes -- The node's attribute dictionary
        node -- The TagNode being rendered

        """
        if callable(self._handler):
            return self._handler(content, attributes, node)
        return self._handler.replace("%content%", content)

    def __repr__(self):
        return "<BBCode [%s]>" % self._tag
