import unittest

from svgfontdump.codepoints import char_code_at, from_char_code, utf16_units


class TestCodepoints(unittest.TestCase):
    def test_bmp_character(self):
        self.assertEqual(char_code_at("A"), 0x41)
        self.assertEqual(char_code_at("\ue800"), 0xE800)

    def test_only_first_character_counts(self):
        self.assertEqual(char_code_at("AB"), 0x41)

    def test_astral_character(self):
        self.assertEqual(utf16_units("\U0001F600"), [0xD83D, 0xDE00])
        self.assertEqual(char_code_at("\U0001F600"), 0x1F600)

    def test_explicit_surrogate_pair(self):
        self.assertEqual(char_code_at("\ud83d\ude00"), 0x1F600)

    def test_unpaired_surrogate_falls_back_to_first_unit(self):
        self.assertEqual(char_code_at("\ud83dA"), 0xD83D)
        self.assertEqual(char_code_at("\ude00\ud83d"), 0xDE00)

    def test_empty_text(self):
        with self.assertRaises(ValueError):
            char_code_at("")

    def test_encode(self):
        self.assertEqual(from_char_code(0x41), "A")
        self.assertEqual(from_char_code(0x1F600), "\U0001F600")
        self.assertEqual(utf16_units(from_char_code(0x10FFFF)), [0xDBFF, 0xDFFF])

    def test_round_trip(self):
        codes = list(range(0, 0x110000, 0x3F1)) + [0xD7FF, 0xE000, 0xFFFF, 0x10000, 0x10FFFF]
        for code in codes:
            if 0xD800 <= code <= 0xDFFF:
                continue
            self.assertEqual(char_code_at(from_char_code(code)), code)


if __name__ == "__main__":
    unittest.main()
