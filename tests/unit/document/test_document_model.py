"""Document snapshot construction and offset tests."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from contextpin.document import Document, Position, StyleSpan


class DocumentModelTests(unittest.TestCase):
    def test_line_ranges_count_terminator_as_one_character(self) -> None:
        document = Document.from_text("ab\r\ncde\n\nf")
        self.assertEqual([(line.start, line.end) for line in document.lines], [(0, 2), (3, 6), (7, 7), (8, 9)])
        self.assertEqual(document.text, "ab\ncde\n\nf")
        self.assertTrue(document.lines[2].is_blank)

    def test_form_feed_and_unicode_separators_do_not_break_lines(self) -> None:
        document = Document.from_text("class A:\n    def f(self):\x0c  # page\n        x = 1\u2028y\n        z = 2\n")
        self.assertEqual(len(document), 4)
        self.assertEqual(document.line_text(1), "    def f(self):\x0c  # page")
        self.assertEqual(document.line_text(3), "        z = 2")
        self.assertEqual(document.lines[3].start, len("class A:\n    def f(self):\x0c  # page\n        x = 1\u2028y\n"))

    def test_lone_carriage_return_and_empty_text(self) -> None:
        self.assertEqual([line.text for line in Document.from_text("a\rb\r\n").lines], ["a", "b"])
        self.assertEqual(len(Document.from_text("")), 0)

    def test_clamp_and_offsets_stay_inside_document(self) -> None:
        document = Document.from_lines(["abc", "de"])
        self.assertEqual(document.clamp(Position(9, 9)), Position(1, 2))
        self.assertEqual(document.clamp(Position(-3, 1)), Position(0, 1))
        self.assertEqual(document.offset_of(Position(1, 1)), 5)
        self.assertEqual(Document().clamp(Position(4, 4)), Position(0, 0))

    def test_line_lookup_outside_range_is_empty(self) -> None:
        document = Document.from_lines(["only"])
        self.assertIsNone(document.line(1))
        self.assertEqual(document.line_text(-1), "")

    def test_spans_attach_to_their_lines(self) -> None:
        spans = {1: (StyleSpan(0, 2, "kw"),)}
        document = Document.from_lines(["a", "if x"], spans=spans)
        self.assertEqual(document.lines[0].spans, ())
        self.assertEqual(document.lines[1].spans, (StyleSpan(0, 2, "kw"),))

    def test_from_path_decodes_latin1_and_resolves_identity(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "legacy.txt"
            target.write_bytes("caf\xe9:\n  menu\n".encode("latin-1"))
            document = Document.from_path(target)
            self.assertEqual(document.path, target.resolve())
        self.assertEqual(document.line_text(0), "caf\xe9:")
        self.assertEqual(len(document), 2)


if __name__ == "__main__":
    unittest.main()
