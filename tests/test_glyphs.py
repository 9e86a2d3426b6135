import json
import unittest

from svgfontdump.errors import MalformedSource
from svgfontdump.glyphs import SourceFormat, load_fontello, load_glyphs, load_svg_font


SVG_FONT = """\
<?xml version="1.0" standalone="no"?>
<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">
<svg xmlns="http://www.w3.org/2000/svg">
<defs>
<font id="test" horiz-adv-x="1000">
<font-face font-family="test" units-per-em="1000" ascent="850" descent="-150" />
<missing-glyph horiz-adv-x="1000" d="M0 0L10 10" />
<glyph glyph-name="square" unicode="&#xe800;" d="M0 0L100 0L100 100L0 100Z" horiz-adv-x="500" />
<glyph glyph-name="space" unicode=" " horiz-adv-x="250" />
<glyph unicode="&#x1f600;" d="M0 850L100 850Z" />
</font>
</defs>
</svg>
"""

SVG_FONT_2048 = """\
<svg>
<font horiz-adv-x="2048">
<font-face units-per-em="2048" ascent="1638" />
<glyph glyph-name="half" unicode="h" horiz-adv-x="1024" d="M0 0L2048 0" />
</font>
</svg>
"""

FONTELLO = {
    "name": "",
    "glyphs": [
        {
            "uid": "abc",
            "css": "home",
            "code": 0xE801,
            "search": ["house"],
            "svg": {"path": "M0 0L100 0L100 100Z", "width": 1000},
        },
        {"uid": "def", "css": "empty", "code": 0xE802},
        {"uid": "ghi", "css": "nopath", "code": 0xE803, "svg": {"width": 1000}},
        {"code": 0x1F600, "svg": {"path": "M10.04 10L20 20", "width": 857.14}},
    ],
}


class TestSvgFont(unittest.TestCase):
    def test_load(self):
        glyphs = load_svg_font(SVG_FONT)
        self.assertEqual(len(glyphs), 2)

        square, smile = glyphs
        self.assertEqual(square.name, "square")
        self.assertEqual(square.unicode, "\ue800")
        self.assertEqual(square.width, "500.0")
        self.assertEqual(square.height, 1000)
        self.assertEqual(square.path_data, "M0 850l100 0 0-100-100 0z")
        self.assertIsNone(square.uid)
        self.assertEqual(square.search, [])

        self.assertEqual(smile.name, "glyph\U0001F600")
        self.assertEqual(smile.unicode, "\U0001F600")
        self.assertEqual(smile.width, "1000.0")
        self.assertEqual(smile.path_data, "M0 0l100 0z")

    def test_normalized_em(self):
        (glyph,) = load_svg_font(SVG_FONT_2048)
        self.assertEqual(glyph.width, "500.0")
        self.assertEqual(glyph.height, 1000)
        self.assertEqual(glyph.path_data, "M0 799.8l1000 0")

    def test_missing_font_face(self):
        with self.assertRaises(MalformedSource):
            load_svg_font('<svg><font horiz-adv-x="1000"><glyph unicode="a" d="M0 0L1 1"/></font></svg>')

    def test_missing_font(self):
        with self.assertRaises(MalformedSource):
            load_svg_font('<svg><font-face units-per-em="1000"/></svg>')

    def test_invalid_xml(self):
        with self.assertRaises(MalformedSource):
            load_svg_font("<svg><font>")

    def test_bad_path(self):
        with self.assertRaises(MalformedSource):
            load_svg_font(
                '<svg><font horiz-adv-x="1000"><font-face ascent="800"/>'
                '<glyph unicode="a" d="L0 0"/></font></svg>'
            )


class TestFontello(unittest.TestCase):
    def test_load(self):
        glyphs = load_fontello(FONTELLO)
        self.assertEqual([g.name for g in glyphs], ["home", "glyph128512"])

        home, smile = glyphs
        self.assertEqual(home.path_data, "M0 0l100 0 0 100z")
        self.assertEqual(home.width, "1000.0")
        self.assertEqual(home.height, 1000)
        self.assertEqual(home.unicode, "\ue801")
        self.assertEqual(home.uid, "abc")
        self.assertEqual(home.search, ["house"])

        self.assertEqual(smile.path_data, "M10 10l10 10")
        self.assertEqual(smile.width, "857.1")
        self.assertEqual(smile.unicode, "\U0001F600")
        self.assertIsNone(smile.uid)
        self.assertEqual(smile.search, [])

    def test_code_out_of_range(self):
        for code in (-1, 0x110000):
            data = {"glyphs": [{"css": "bad", "code": code, "svg": {"path": "M0 0L1 1", "width": 1000}}]}
            with self.assertRaises(MalformedSource, msg=code):
                load_fontello(data)

    def test_highest_code_point(self):
        data = {"glyphs": [{"css": "top", "code": 0x10FFFF, "svg": {"path": "M0 0L1 1", "width": 1000}}]}
        (glyph,) = load_fontello(data)
        self.assertEqual(glyph.unicode, "\U0010FFFF")

    def test_missing_glyphs(self):
        with self.assertRaises(MalformedSource):
            load_fontello({"name": "x"})


class TestSourceFormat(unittest.TestCase):
    def test_from_path(self):
        self.assertIs(SourceFormat.from_path("fonts/icons.svg"), SourceFormat.SVG_FONT)
        self.assertIs(SourceFormat.from_path("fonts/ICONS.SVG"), SourceFormat.SVG_FONT)
        self.assertIs(SourceFormat.from_path("config.json"), SourceFormat.FONTELLO_JSON)
        self.assertIs(SourceFormat.from_path("config.txt"), SourceFormat.FONTELLO_JSON)

    def test_load_glyphs_dispatch(self):
        self.assertEqual(len(load_glyphs(json.dumps(FONTELLO), SourceFormat.FONTELLO_JSON)), 2)
        self.assertEqual(len(load_glyphs(SVG_FONT, SourceFormat.SVG_FONT)), 2)

    def test_invalid_json(self):
        with self.assertRaises(MalformedSource):
            load_glyphs("{glyphs:", SourceFormat.FONTELLO_JSON)


if __name__ == "__main__":
    unittest.main()
