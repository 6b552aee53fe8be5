"""HTML escaping primitives used by text nodes, the attribute parser and tag handlers."""

import re


# http://effbot.org/zone/python-replace.htm
class MultiReplace(object):
    def __init__(self, repl_dict):
        # string to string mapping; use a regular expression
        keys = sorted(repl_dict.keys(), reverse=True)  # lexical order
        pattern = "|".join([re.escape(key) for key in keys])
        self.pattern = re.compile(pattern)
        self.dict = repl_dict
        self.sub = self.pattern.sub

    def replace(self, s):
        # apply replacement dictionary to string
        get = self.dict.get

        def repl(match):
            item = match.group(0)
            return get(item, item)
        return self.sub(repl, s)

    __call__ = replace


standard_replace = MultiReplace({'<': '&lt;',
                                 '>': '&gt;',
                                 '&': '&amp;',
                                 '"': '&quot;',
                                 "'": '&#039;'})

standard_unreplace = MultiReplace({'&lt;': '<',
                                   '&gt;': '>',
                                   '&amp;': '&',
                                   '&quot;': '"',
                                   '&#039;': "'"})

newline_replace = MultiReplace({'\n': '<br />'})

space_replace = MultiReplace({'  ': ' &nbsp;'})


def escape(s):
    """Escapes the characters that are special in HTML, quotes included."""
    return standard_replace(s)


def unescape(s):
    """Reverses escape."""
    return standard_unreplace(s)


def escape_text(s, nl2br=True):
    """Escapes literal user text for display.

    s -- The text to escape
    nl2br -- If True, newlines are converted to break tags

    """
    s = standard_replace(s)
    if nl2br:
        s = newline_replace(s)
    return space_replace(s)
