"""The document tree.

Containers own their children. A child only keeps a weak reference to its
parent, so a tree is freed as soon as the caller drops the document.
"""

import weakref

from sbbcode.escape import escape_text


class Node(object):

    _parent = None

    @property
    def parent(self):
        """The containing node, or None for a root or detached node."""
        if self._parent is None:
            return None
        return self._parent()

    def _set_parent(self, parent):
        if parent is None:
            self._parent = None
        else:
            self._parent = weakref.ref(parent)

    def root(self):
        """Returns the top-most node of the tree, normally the Document."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def get_html(self, nl2br=True):
        raise NotImplementedError()

    def get_text(self):
        raise NotImplementedError()


class TextNode(Node):
    """Literal user text."""

    def __init__(self, text):
        self.text = text

    def get_html(self, nl2br=True):
        return escape_text(self.text, nl2br)

    def get_text(self):
        return self.text

    def __repr__(self):
        return "<TextNode %r>" % self.text


class ContainerNode(Node):

    def __init__(self):
        self._children = []

    @property
    def children(self):
        return tuple(self._children)

    def add_child(self, child):
        child._set_parent(self)
        self._children.append(child)

    def _index_of(self, child):
        for index, node in enumerate(self._children):
            if node is child:
                return index
        raise ValueError("%r is not a child of %r" % (child, self))

    def replace_child(self, what, with_nodes):
        """Replaces one child with a sequence of nodes, in place.

        what -- The existing child node
        with_nodes -- A list of nodes to put in its place

        """
        index = self._index_of(what)
        with_nodes = list(with_nodes)
        for node in with_nodes:
            node._set_parent(self)
        self._children[index:index + 1] = with_nodes
        what._set_parent(None)

    def remove_child(self, child):
        del self._children[self._index_of(child)]
        child._set_parent(None)

    def last_tag_node(self):
        """Returns the last direct child that is a TagNode, or None."""
        for node in reversed(self._children):
            if isinstance(node, TagNode):
                return node
        return None

    def find_parent_by_tag(self, name):
        """Returns the nearest ancestor TagNode called name, or None."""
        node = self.parent
        while isinstance(node, TagNode):
            if node.name == name:
                return node
            node = node.parent
        return None

    def get_html(self, nl2br=True):
        return "".join([child.get_html(nl2br) for child in self._children])

    def get_text(self):
        return "".join([child.get_text() for child in self._children])


class TagNode(ContainerNode):

    def __init__(self, name, attributes=None):
        """A bbcode tag and its contents.

        name -- The tag name
        attributes -- Dictionary of attributes. The key "default" holds the value
                      of [tag=value] and is always present.

        """
        super(TagNode, self).__init__()
        self.name = name.lower()
        self.attributes = dict(attributes or {})
        self.attributes.setdefault("default", None)

    def get_bbcode(self):
        """Returns the definition of this tag from the owning document, if any."""
        root = self.root()
        get_bbcode = getattr(root, "get_bbcode", None)
        if get_bbcode is None:
            return None
        return get_bbcode(self.name)

    def get_html(self, nl2br=True):
        content = super(TagNode, self).get_html(nl2br)
        bbcode = self.get_bbcode()
        if bbcode is None:
            return content
        return bbcode.get_html(content, dict(self.attributes), self)

    def __repr__(self):
        return "<TagNode [%s]>" % self.name


def render(node, nl2br=True):
    """Renders any node to html.

    nl2br -- If True, newlines in text are converted to break tags

    """
    return node.get_html(nl2br)
