"""The table of tag definitions and emoticons a document is parsed against."""

import logging

from sbbcode.bbcode import BBCode

logger = logging.getLogger(__name__)

DEFAULT_BASE_URI = "/"


class TagRegistry(object):

    def __init__(self, base_uri=None):
        """Creates an empty registry.

        base_uri -- Prefix for relative links and images. Defaults to DEFAULT_BASE_URI.

        """
        self.tags = {}
        self._emoticons = {}
        self._base_uri = base_uri

    def register(self, bbcode, replace=True):
        """Adds a tag definition. Returns False, leaving the registry untouched,
        if replace is False and the tag already exists."""
        if not replace and bbcode.tag in self.tags:
            return False
        self.tags[bbcode.tag] = bbcode
        return True

    def register_many(self, bbcodes, replace=True):
        for bbcode in bbcodes:
            self.register(bbcode, replace)

    def unregister(self, name):
        """Removes a tag definition.

        name -- Tag name or BBCode instance

        """
        if isinstance(name, BBCode):
            name = name.tag
        self.tags.pop(name.lower(), None)

    def lookup(self, name, default=None):
        return self.tags.get(name.lower(), default)

    def list_names(self):
        """Returns a sorted list of the registered tag names."""
        return sorted(self.tags.keys())

    def __contains__(self, name):
        return name.lower() in self.tags

    def excluded_tags(self, kind):
        """Returns the names of all tags whose auto-detect exclusion includes kind.

        kind -- One of the AUTO_DETECT_EXCLUDE_* flags

        """
        return set(name for name, bbcode in self.tags.items() if bbcode.auto_detect_exclude & kind)

    @property
    def emoticons(self):
        return dict(self._emoticons)

    def add_emoticon(self, key, url, replace=True):
        """Adds an emoticon. Returns False if the key is empty, or if replace
        is False and the key already exists."""
        if not key:
            return False
        if not replace and key in self._emoticons:
            return False
        self._emoticons[key] = url
        return True

    def add_emoticons(self, emoticons, replace=True):
        """Adds emoticons from a mapping of emoticon text to image url."""
        for key, url in emoticons.items():
            self.add_emoticon(key, url, replace)

    def remove_emoticon(self, key):
        if key not in self._emoticons:
            return False
        del self._emoticons[key]
        return True

    def get_base_uri(self):
        if self._base_uri is not None:
            return self._base_uri
        return DEFAULT_BASE_URI

    def set_base_uri(self, uri):
        logger.debug("Base URI set to %r", uri)
        self._base_uri = uri
