import unittest

from sbbcode import BBCode, Document, TagRegistry, render, render_bbcode, strip_bbcode


class TestRender(unittest.TestCase):

    def setUp(self):
        self.registry = TagRegistry(base_uri="http://example.com/")
        self.registry.register(BBCode("b", "<strong>%content%</strong>"))
        self.document = Document(self.registry)

    def test_template(self):
        self.registry.register(BBCode("twice", "%content%|%content%"))
        self.assertEqual(self.document.parse("[twice]a<b[/twice]").get_html(), "a&lt;b|a&lt;b")

    def test_handler_arguments(self):
        """Test handlers get the rendered contents, attributes and the live node"""
        calls = []

        def handler(content, attribs, node):
            calls.append((content, attribs, node))
            return "<x>%s</x>" % content

        self.registry.register(BBCode("x", handler))
        self.document.parse("[x=1 y=2][b]a[/b]\n[/x]")
        self.assertEqual(self.document.get_html(), "<x><strong>a</strong><br /></x>")

        content, attribs, node = calls[0]
        self.assertEqual(content, "<strong>a</strong><br />")
        self.assertEqual(attribs, {"default": "1", "y": "2"})
        self.assertIs(node, self.document.children[0])
        self.assertEqual(node.get_text(), "a\n")

    def test_handler_base_uri(self):
        self.registry.register(BBCode("link", lambda content, attribs, node:
                                      '<a href="%s%s">%s</a>' % (node.root().get_base_uri(), content, content)))
        self.assertEqual(self.document.parse("[link]page[/link]").get_html(),
                         '<a href="http://example.com/page">page</a>')

    def test_handler_attributes_copied(self):
        """Test handlers can't change the attributes of a node"""
        def handler(content, attribs, node):
            attribs["default"] = "changed"
            return content

        self.registry.register(BBCode("x", handler))
        self.document.parse("[x=original]a[/x]").get_html()
        self.assertEqual(self.document.children[0].attributes["default"], "original")

    def test_unregistered_after_parse(self):
        """Test tags removed from the registry render their contents"""
        self.document.parse("[b]bold[/b]")
        self.document.unregister_tag("b")
        self.assertEqual(self.document.get_html(), "bold")

    def test_nl2br(self):
        self.document.parse("[b]a\nb[/b]")
        self.assertEqual(render(self.document), "<strong>a<br />b</strong>")
        self.assertEqual(render(self.document, nl2br=False), "<strong>a\nb</strong>")
        self.assertEqual(self.document.render(), self.document.get_html())

    def test_raw_text(self):
        self.document.parse("[b]a < b[/b] & [foo]")
        self.assertEqual(self.document.raw_text(), "a < b & [foo]")
        self.assertEqual(self.document.get_text(), "a < b & [foo]")


class TestRenderBBCode(unittest.TestCase):

    def test_render_bbcode(self):
        tests = [("[b]Hello[/b]", "<strong>Hello</strong>"),
                 ("[b]www.example.com[/b]",
                  '<strong><a href="http://www.example.com">www.example.com</a></strong>'),
                 ("<script>", "&lt;script&gt;")]

        for test, result in tests:
            self.assertEqual(render_bbcode(test), result)

    def test_no_auto_detect(self):
        self.assertEqual(render_bbcode("www.example.com", auto_detect=False), "www.example.com")

    def test_strip_bbcode(self):
        """Test strip_bbcode function"""
        tests = [("[b]Not bold[/b]", "Not bold"),
                 ("Just text", "Just text"),
                 ("[b][i][url]", ""),
                 ("[foo]kept[/foo]", "[foo]kept[/foo]")]

        for test, result in tests:
            self.assertEqual(strip_bbcode(test), result)
