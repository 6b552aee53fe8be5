"""Exceptions raised by the BBCode parser.

Exceptions are only raised when a document is created with
``throw_errors=True``. In the default lenient mode bad markup is repaired
or passed through as literal text instead.

- BBCodeError (base exception)

  - MissingEndTagError (document ended with an open tag)
  - InvalidNestingError (block tag opened inside an inline tag)

"""


class BBCodeError(Exception):
    """Base class for all sbbcode errors.

    message -- Human readable description of the error

    """

    def __init__(self, message):
        super(BBCodeError, self).__init__(message)
        self.message = message


class MissingEndTagError(BBCodeError):
    """Raised at the end of a parse when a tag was never closed."""

    def __init__(self, tag):
        super(MissingEndTagError, self).__init__("Missing closing tag for tag [%s]" % tag)
        self.tag = tag


class InvalidNestingError(BBCodeError):
    """Raised when a block level tag is opened within an inline tag."""

    def __init__(self, tag, parent_tag):
        super(InvalidNestingError, self).__init__(
            "Block level tag [%s] was opened within an inline tag [%s]" % (tag, parent_tag))
        self.tag = tag
        self.parent_tag = parent_tag
