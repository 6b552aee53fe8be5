import unittest

from sbbcode import (
    AUTO_DETECT_EXCLUDE_EMAIL,
    AUTO_DETECT_EXCLUDE_EMOTICON,
    AUTO_DETECT_EXCLUDE_URL,
    BLOCK_TAG,
    TEXT_NODE,
    BBCode,
    Document,
    TagRegistry,
    create,
)


class TestBBCode(unittest.TestCase):

    def test_definition(self):
        bbcode = BBCode("LIST", "<ul>%content%</ul>", BLOCK_TAG,
                        closing_tags=("*", "/List"), accepted_children=("*", TEXT_NODE))
        self.assertEqual(bbcode.tag, "list")
        self.assertFalse(bbcode.is_inline)
        self.assertFalse(bbcode.is_self_closing)
        self.assertEqual(bbcode.closing_tags, frozenset(["*", "/list"]))
        self.assertTrue(bbcode.closed_by_open("*"))
        self.assertFalse(bbcode.closed_by_open("list"))
        self.assertTrue(bbcode.closed_by_close("list"))
        self.assertTrue(bbcode.accepts("*"))
        self.assertFalse(bbcode.accepts("b"))

    def test_unrestricted(self):
        bbcode = BBCode("b", "<strong>%content%</strong>")
        self.assertTrue(bbcode.is_inline)
        self.assertTrue(bbcode.accepts("b"))
        self.assertTrue(bbcode.accepts(TEXT_NODE))

    def test_handlers(self):
        """Test string and callable handlers"""
        template = BBCode("b", "<b>%content%</b><!-- %content% -->")
        self.assertEqual(template.get_html("x", {"default": None}, None), "<b>x</b><!-- x -->")

        function = BBCode("abbr", lambda content, attribs, node: "%s:%s" % (attribs["default"], content))
        self.assertEqual(function.get_html("x", {"default": "y"}, None), "y:x")


class TestTagRegistry(unittest.TestCase):

    def test_register(self):
        registry = TagRegistry()
        bold = BBCode("b", "<b>%content%</b>")
        strong = BBCode("b", "<strong>%content%</strong>")

        self.assertTrue(registry.register(bold))
        self.assertFalse(registry.register(strong, replace=False))
        self.assertIs(registry.lookup("b"), bold)
        self.assertTrue(registry.register(strong))
        self.assertIs(registry.lookup("b"), strong)

    def test_lookup(self):
        registry = TagRegistry()
        bold = BBCode("b", "<b>%content%</b>")
        registry.register(bold)
        self.assertIs(registry.lookup("B"), bold)
        self.assertIsNone(registry.lookup("i"))
        self.assertIn("b", registry)
        self.assertNotIn("i", registry)

    def test_unregister(self):
        registry = TagRegistry()
        bold = BBCode("b", "<b>%content%</b>")
        registry.register_many([bold, BBCode("i", "<i>%content%</i>"), BBCode("u", "<u>%content%</u>")])
        registry.unregister("i")
        registry.unregister(bold)
        registry.unregister("missing")
        self.assertEqual(registry.list_names(), ["u"])

    def test_excluded_tags(self):
        registry = create()
        urls = registry.excluded_tags(AUTO_DETECT_EXCLUDE_URL)
        emails = registry.excluded_tags(AUTO_DETECT_EXCLUDE_EMAIL)
        emoticons = registry.excluded_tags(AUTO_DETECT_EXCLUDE_EMOTICON)

        for name in ("url", "img", "email", "noparse"):
            self.assertIn(name, urls)
            self.assertIn(name, emails)
            self.assertIn(name, emoticons)

        self.assertNotIn("code", urls)
        self.assertIn("code", emoticons)
        self.assertNotIn("b", urls | emails | emoticons)

    def test_emoticons(self):
        registry = TagRegistry()
        self.assertTrue(registry.add_emoticon(":)", "smile.png"))
        self.assertFalse(registry.add_emoticon(":)", "grin.png", replace=False))
        self.assertEqual(registry.emoticons, {":)": "smile.png"})

        registry.add_emoticons({":)": "happy.png", ":(": "sad.png"}, replace=False)
        self.assertEqual(registry.emoticons, {":)": "smile.png", ":(": "sad.png"})

        self.assertTrue(registry.remove_emoticon(":("))
        self.assertFalse(registry.remove_emoticon(":("))

        emoticons = registry.emoticons
        emoticons[";)"] = "wink.png"
        self.assertNotIn(";)", registry.emoticons)

    def test_empty_emoticon(self):
        """Test an empty emoticon key is rejected"""
        registry = TagRegistry()
        self.assertFalse(registry.add_emoticon("", "blank.png"))
        registry.add_emoticons({"": "blank.png", ":)": "smile.png"})
        self.assertEqual(registry.emoticons, {":)": "smile.png"})

        registry = create(include=["img"], emoticons={"": "blank.png"})
        document = Document(registry).parse("abc").detect_emoticons()
        self.assertEqual(document.get_html(), "abc")

    def test_base_uri(self):
        registry = TagRegistry()
        self.assertEqual(registry.get_base_uri(), "/")
        registry.set_base_uri("http://example.com/forum/")
        self.assertEqual(registry.get_base_uri(), "http://example.com/forum/")
        self.assertEqual(TagRegistry(base_uri="/board/").get_base_uri(), "/board/")


class TestCreate(unittest.TestCase):

    def test_include_exclude(self):
        self.assertEqual(create(include=["b", "i"]).list_names(), ["b", "i"])

        registry = create(exclude=["b"])
        self.assertNotIn("b", registry)
        self.assertIn("i", registry)

    def test_options(self):
        registry = create(emoticons={":)": "smile.png"}, base_uri="/forum/")
        self.assertEqual(registry.emoticons, {":)": "smile.png"})
        self.assertEqual(registry.get_base_uri(), "/forum/")

    def test_independent(self):
        """Test registries don't share state"""
        first = create()
        second = create()
        first.unregister("b")
        self.assertIn("b", second)

    def test_document_registry(self):
        document = Document()
        self.assertIn("quote", document.list_tags())
        document.unregister_tag("quote")
        self.assertNotIn("quote", document.list_tags())
        self.assertTrue(document.register_tag(BBCode("quote", "<q>%content%</q>")))
        self.assertFalse(document.register_tag(BBCode("quote", "%content%"), replace=False))
        self.assertEqual(document.parse("[quote]x[/quote]").get_html(), "<q>x</q>")

    def test_shared_registry(self):
        registry = create(include=["b"])
        first = Document(registry).parse("[b]one[/b]")
        second = Document(registry).parse("[b]two[/b]")
        self.assertEqual(first.get_html(), "<strong>one</strong>")
        self.assertEqual(second.get_html(), "<strong>two</strong>")

    def test_no_defaults(self):
        document = Document(load_defaults=False)
        self.assertEqual(document.list_tags(), [])
