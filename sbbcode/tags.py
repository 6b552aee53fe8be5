"""The default set of tags, and create() which builds a registry from them."""

import logging
import re
from urllib.parse import quote_plus

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from sbbcode.bbcode import (
    AUTO_DETECT_EXCLUDE_ALL,
    AUTO_DETECT_EXCLUDE_EMOTICON,
    BLOCK_TAG,
    INLINE_TAG,
    TEXT_NODE,
    BBCode,
)
from sbbcode.escape import escape, unescape
from sbbcode.registry import TagRegistry

logger = logging.getLogger(__name__)

_re_dimensions = re.compile(r"^([0-9]+)[Xx*]([0-9]+)$")
_re_number = re.compile(r"^[0-9]+\Z")
_re_color = re.compile(r"^(#[a-fA-F0-9]{3,6}|[A-Za-z]+)$")
_re_font = re.compile(r"^[A-Za-z0-9,\- ]+$")
_re_anchor = re.compile(r"[^a-zA-Z0-9_\-]+")
_re_goto = re.compile(r"[^a-zA-Z0-9_\-#]+")
_re_vimeo = re.compile(r"^https?://(?:www\.)?vimeo\.com/([0-9]{4,10})")
_re_gist = re.compile(r"https://gist\.github\.com/(?:[\w\-]+/)?([0-9a-f]+)")
_re_pastebin = re.compile(r"https?://pastebin\.com/([a-zA-Z0-9]+)")

_TABLE_CHILDREN = ("table", "th", "h", "tr", "row", "r", "td", "col", "c")
_LIST_CHILDREN = ("*", "li", "ul", "ol", "list")

_font_sizes = {"1": "xx-small",
               "2": "small",
               "3": "medium",
               "4": "large",
               "5": "x-large",
               "6": "xx-large",
               "7": "48px"}

_list_styles = {"d": ("ul", "disc"),
                "s": ("ul", "square"),
                "1": ("ol", "decimal"),
                "a": ("ol", "lower-alpha"),
                "A": ("ol", "upper-alpha"),
                "i": ("ol", "lower-roman"),
                "I": ("ol", "upper-roman")}


def _text(node):
    """The literal text inside a node, stripped and escaped."""
    return escape(node.get_text().strip())


def _absolute_uri(uri, node):
    """Makes www. links absolute, and resolves relative links against the base URI."""
    if uri.startswith("www"):
        return "http://" + uri
    if uri.startswith(("http", "ftp", "/")):
        return uri
    return node.root().get_base_uri() + uri


def _search(url):
    """Handler for tags that link to a search for their contents.

    url -- A url with a %s where the quoted search goes

    """
    def handler(content, attribs, node):
        query = quote_plus(node.get_text().strip())
        return '<a href="%s">%s</a>' % (escape(url % query), content)
    return handler


def _abbr(html_tag):
    def handler(content, attribs, node):
        return '<%s title="%s">%s</%s>' % (html_tag, attribs["default"] or "", content, html_tag)
    return handler


def _youtube(content, attribs, node):
    uri = _text(node)
    if not re.match(r"^https?://www\.youtube\.com/", uri):
        uri = "http://www.youtube.com/v/" + uri
    return '<iframe width="480" height="390" src="%s" frameborder="0"></iframe>' % uri


def _vimeo(content, attribs, node):
    uri = _text(node)
    match = _re_vimeo.match(uri)
    if re.match(r"^https?://player\.vimeo\.com/", uri):
        pass
    elif match is not None:
        uri = "http://player.vimeo.com/video/%s?title=0&amp;byline=0&amp;portrait=0" % match.group(1)
    else:
        uri = "http://player.vimeo.com/video/%s?title=0&amp;byline=0&amp;portrait=0" % uri
    return '<iframe src="%s" width="400" height="225" frameborder="0"></iframe>' % uri


def _flash(content, attribs, node):
    width, height = "640", "385"
    uri = _text(node)
    if not uri.startswith("http"):
        uri = node.root().get_base_uri() + uri

    if _re_number.match(attribs.get("width") or ""):
        width = attribs["width"]
    if _re_number.match(attribs.get("height") or ""):
        height = attribs["height"]

    # [flash=200,100]
    if attribs["default"] and "," in attribs["default"]:
        w, h = [value.strip() for value in attribs["default"].split(",", 1)]
        if _re_number.match(w) and int(w) > 20:
            width = w
        if _re_number.match(h) and int(h) > 20:
            height = h

    return ('<object width="%(width)s" height="%(height)s">'
            '<param name="movie" value="%(uri)s"></param>'
            '<embed src="%(uri)s" type="application/x-shockwave-flash" '
            'width="%(width)s" height="%(height)s"></embed>'
            '</object>') % dict(width=width, height=height, uri=uri)


def _gist(content, attribs, node):
    gist_id = _text(node)
    if not re.match(r"^[0-9a-f]+$", gist_id):
        match = _re_gist.search(gist_id)
        gist_id = match.group(1) if match is not None else ""
    return '<script src="https://gist.github.com/%s.js"></script>' % gist_id


def _pastebin(content, attribs, node):
    paste_id = _text(node)
    if not re.match(r"^[a-zA-Z0-9]+$", paste_id):
        match = _re_pastebin.search(paste_id)
        paste_id = match.group(1) if match is not None else ""
    return '<script src="http://pastebin.com/embed_js.php?i=%s"></script>' % paste_id


def _googlemaps(content, attribs, node):
    query = quote_plus(node.get_text().strip())
    return ('<iframe src="http://maps.google.com/maps?q=%s&amp;output=embed" '
            'scrolling="no" width="100%%" height="350" frameborder="0"></iframe>') % escape(query)


def _pdf(content, attribs, node):
    url = quote_plus(node.get_text().strip())
    return ('<iframe src="http://docs.google.com/gview?url=%s&amp;embedded=true" '
            'width="100%%" height="500" frameborder="0"></iframe>') % escape(url)


def _pre(content, attribs, node):
    content = "".join([child.get_html(False) for child in node.children])
    return "<pre>%s</pre>" % content


def _code(use_pygments, line_numbers):
    """Handler for [code] and [code=language]. With Pygments the code is
    highlighted when the language is known."""
    def handler(content, attribs, node):
        language = attribs["default"]
        if use_pygments and language:
            try:
                lexer = get_lexer_by_name(unescape(language))
            except ClassNotFound:
                logger.warning("No Pygments lexer for language %r", language)
            else:
                formatter = HtmlFormatter(linenos=line_numbers, cssclass="code")
                return highlight(node.get_text().strip("\n"), lexer, formatter).strip()
        return "<code>%s</code>" % content
    return handler


def _php(use_pygments):
    def handler(content, attribs, node):
        if use_pygments:
            lexer = get_lexer_by_name("php", startinline=True)
            content = highlight(node.get_text(), lexer, HtmlFormatter(nowrap=True)).strip("\n")
        return '<code class="php">%s</code>' % content
    return handler


def _quote(content, attribs, node):
    cite = ""
    if attribs["default"]:
        cite = "<cite>%s:</cite>" % attribs["default"]

    # Nested quotes close the paragraph of the outer quote
    if node.find_parent_by_tag("quote") is not None:
        return "</p><blockquote><p>%s%s</p></blockquote><p>" % (cite, content)

    return "<blockquote><p>%s%s</p></blockquote>" % (cite, content)


def _font(content, attribs, node):
    font = attribs["default"]
    if not font or not _re_font.match(font):
        font = "Arial"
    return '<span style="font-family: %s">%s</span>' % (font, content)


def _size(content, attribs, node):
    value = attribs["default"]
    if value is None:
        size = "xx-small"
    elif value in _font_sizes:
        size = _font_sizes[value]
    elif value.endswith("%") and _re_number.match(value[:-1]):
        size = value
    else:
        try:
            pixels = int(value)
        except ValueError:
            pixels = 13
        size = "%dpx" % max(6, min(48, pixels))
    return '<span style="font-size: %s">%s</span>' % (size, content)


def _color(content, attribs, node):
    color = attribs["default"]
    if not color or not _re_color.match(color):
        color = "#000"
    return '<span style="color: %s">%s</span>' % (color, content)


def _list(content, attribs, node):
    html_tag, style = _list_styles.get(attribs["default"], ("ul", "circle"))
    return '<%s style="list-style: %s">%s</%s>' % (html_tag, style, content, html_tag)


def _anchor(content, attribs, node):
    name = attribs["default"]
    if not name:
        # [anchor]name[/anchor], the contents are the name
        name = node.get_text()
        content = ""
    return '<a name="%s">%s</a>' % (_re_anchor.sub("", name), content)


def _goto(content, attribs, node):
    name = attribs["default"] or node.get_text()
    return '<a href="#%s">%s</a>' % (_re_goto.sub("", name), content)


def _img(content, attribs, node):
    attrs = []
    default = attribs["default"]
    width = attribs.get("width")
    height = attribs.get("height")

    if default:
        match = _re_dimensions.match(default)
        if match is not None:
            width, height = match.groups()
            default = None
        elif _re_number.match(default):
            width = height = default
            default = None

    src = _text(node)
    if default:
        attrs.append(' alt="%s"' % default)
    elif attribs.get("alt"):
        attrs.append(' alt="%s"' % attribs["alt"])
    else:
        attrs.append(' alt="%s"' % src)

    # Only numbers, anything else could be used for XSS
    if width and _re_number.match(width):
        attrs.append(' width="%s"' % width)
    if height and _re_number.match(height):
        attrs.append(' height="%s"' % height)

    return '<img%s src="%s" />' % ("".join(attrs), _absolute_uri(src, node))


def _email(content, attribs, node):
    address = attribs["default"] or _text(node)
    return '<a href="mailto:%s">%s</a>' % (address, content)


def _url(content, attribs, node):
    url = attribs["default"] or _text(node)
    return '<a href="%s">%s</a>' % (_absolute_uri(url, node), content)


def default_bbcodes(use_pygments=True, pygments_line_numbers=False):
    """Returns a new list of the default BBCode definitions.

    use_pygments -- If True, Pygments (http://pygments.org/) is used to highlight
                    [code=language] and [php] tags
    pygments_line_numbers -- If True, highlighted code gets line numbers

    """
    text_only = dict(tag_type=INLINE_TAG,
                     accepted_children=(TEXT_NODE,),
                     auto_detect_exclude=AUTO_DETECT_EXCLUDE_ALL)
    embed = dict(text_only, tag_type=BLOCK_TAG)

    bbcodes = [
        BBCode("b", "<strong>%content%</strong>"),
        BBCode("i", "<em>%content%</em>"),
        BBCode("strong", "<strong>%content%</strong>"),
        BBCode("em", "<em>%content%</em>"),
        BBCode("u", '<span style="text-decoration: underline">%content%</span>'),
        BBCode("s", '<span style="text-decoration: line-through">%content%</span>'),
        BBCode("sub", "<sub>%content%</sub>"),
        BBCode("sup", "<sup>%content%</sup>"),
        BBCode("ins", "<ins>%content%</ins>"),
        BBCode("del", "<del>%content%</del>"),

        BBCode("right", '<div style="text-align: right">%content%</div>', BLOCK_TAG),
        BBCode("left", '<div style="text-align: left">%content%</div>', BLOCK_TAG),
        BBCode("center", '<div style="text-align: center">%content%</div>', BLOCK_TAG),
        BBCode("justify", '<div style="text-align: justify">%content%</div>', BLOCK_TAG),

        # notes are only shown while editing
        BBCode("note", ""),
        BBCode("hidden", ""),

        BBCode("abbr", _abbr("abbr")),
        BBCode("acronym", _abbr("acronym")),

        BBCode("bing", _search("http://www.bing.com/search?q=%s"), **text_only),
        BBCode("google", _search("http://www.google.com/search?q=%s"), **text_only),
        BBCode("wikipedia", _search("http://www.wikipedia.org/wiki/Special:Search?search=%s"), **text_only),

        BBCode("youtube", _youtube, **embed),
        BBCode("vimeo", _vimeo, **embed),
        BBCode("flash", _flash, BLOCK_TAG),
        BBCode("gist", _gist, **text_only),
        BBCode("pastebin", _pastebin, **text_only),
        BBCode("googlemaps", _googlemaps, **embed),
        BBCode("pdf", _pdf, **embed),

        BBCode("spoiler", '<details class="spoiler"><summary>Spoiler</summary><div>%content%</div></details>',
               BLOCK_TAG),
        BBCode("tt", '<span style="font-family: monospace">%content%</span>'),
        BBCode("pre", _pre, BLOCK_TAG),
        BBCode("code", _code(use_pygments, pygments_line_numbers), BLOCK_TAG,
               accepted_children=(TEXT_NODE,), auto_detect_exclude=AUTO_DETECT_EXCLUDE_EMOTICON),
        BBCode("php", _php(use_pygments), BLOCK_TAG,
               accepted_children=(TEXT_NODE,), auto_detect_exclude=AUTO_DETECT_EXCLUDE_EMOTICON),
        BBCode("quote", _quote, BLOCK_TAG),

        BBCode("font", _font),
        BBCode("size", _size),
        BBCode("color", _color),

        BBCode("list", _list, BLOCK_TAG, accepted_children=_LIST_CHILDREN),
        BBCode("ul", "<ul>%content%</ul>", BLOCK_TAG),
        BBCode("ol", "<ol>%content%</ol>", BLOCK_TAG),
        BBCode("li", "<li>%content%</li>"),
        BBCode("*", "<li>%content%</li>", BLOCK_TAG,
               closing_tags=("*", "li", "ul", "ol", "/list")),

        BBCode("table", "<table>%content%</table>", BLOCK_TAG, accepted_children=_TABLE_CHILDREN),
        BBCode("th", "<th>%content%</th>"),
        BBCode("h", "<th>%content%</th>"),
        BBCode("tr", "<tr>%content%</tr>", BLOCK_TAG, accepted_children=_TABLE_CHILDREN),
        BBCode("row", "<tr>%content%</tr>", BLOCK_TAG, accepted_children=_TABLE_CHILDREN),
        BBCode("r", "<tr>%content%</tr>", BLOCK_TAG, accepted_children=_TABLE_CHILDREN),
        BBCode("td", "<td>%content%</td>"),
        BBCode("col", "<td>%content%</td>"),
        BBCode("c", "<td>%content%</td>"),

        BBCode("notag", "%content%", **text_only),
        BBCode("nobbc", "%content%", **text_only),
        BBCode("noparse", "%content%", **text_only),

        BBCode("h1", "<h1>%content%</h1>"),
        BBCode("h2", "<h2>%content%</h2>"),
        BBCode("h3", "<h3>%content%</h3>"),
        BBCode("h4", "<h4>%content%</h4>"),
        BBCode("h5", "<h5>%content%</h5>"),
        BBCode("h6", "<h6>%content%</h6>"),
        BBCode("big", '<span style="font-size: large">%content%</span>'),
        BBCode("small", '<span style="font-size: x-small">%content%</span>'),

        BBCode("br", "<br />", self_closing=True),
        BBCode("sp", "&nbsp;", self_closing=True),
        BBCode("hr", "<hr />", self_closing=True),

        BBCode("anchor", _anchor),
        BBCode("goto", _goto),
        BBCode("jumpto", _goto),

        BBCode("img", _img, **text_only),
        BBCode("email", _email, **text_only),
        BBCode("url", _url, **text_only),
    ]
    return bbcodes


def create(include=None,
           exclude=None,
           use_pygments=True,
           emoticons=None,
           base_uri=None,
           **kwargs):
    """Create a registry of the default tags. Registries are independent of
    each other, and one registry can be shared by any number of documents as
    long as it isn't modified while they are parsed.

    include -- List or similar iterable containing the names of the tags to use
               If omitted, all tags will be used
    exclude -- List or similar iterable containing the names of the tags to exclude.
               If omitted, no tags will be excluded
    use_pygments -- If True, Pygments (http://pygments.org/) will be used for the
                    code and php tags, otherwise they are output as plain text
    emoticons -- Mapping of emoticon text to image url
    base_uri -- Prefix for relative links and images
    kwargs -- Remaining keyword arguments are passed to default_bbcodes.

    """
    registry = TagRegistry(base_uri=base_uri)

    for bbcode in default_bbcodes(use_pygments=use_pygments, **kwargs):
        if include is not None and bbcode.tag not in include:
            continue
        if exclude is not None and bbcode.tag in exclude:
            continue
        registry.register(bbcode)

    if emoticons:
        registry.add_emoticons(emoticons)

    return registry
