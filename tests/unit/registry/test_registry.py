"""Document-type resolution and extractor selection tests."""

from __future__ import annotations

import re
import unittest
from pathlib import Path

from contextpin.chain import chain_texts
from contextpin.document import Document, Position
from contextpin.registry import ExtractorRegistry, resolve_document_type


class ResolveDocumentTypeTests(unittest.TestCase):
    def test_explicit_type_wins(self) -> None:
        document = Document.from_lines(["x"], path=Path("/work/a.py"), document_type=" Org ")
        self.assertEqual(resolve_document_type(document), "org")

    def test_suffix_table_is_consulted(self) -> None:
        self.assertEqual(resolve_document_type(Document.from_lines(["x"], path=Path("/w/README.MD"))), "markdown")
        self.assertEqual(resolve_document_type(Document.from_lines(["x"], path=Path("/w/schema.sql"))), "sql")

    def test_pygments_resolves_suffixes_outside_the_table(self) -> None:
        self.assertEqual(resolve_document_type(Document.from_lines(["x"], path=Path("/w/setup.ini"))), "ini")

    def test_unknown_or_unnamed_documents_have_no_type(self) -> None:
        self.assertIsNone(resolve_document_type(Document.from_lines(["x"], path=Path("/w/blob.zzqqxx"))))
        self.assertIsNone(resolve_document_type(Document.from_lines(["x"])))


class ExtractorSelectionTests(unittest.TestCase):
    def test_outline_types_get_heading_extractor(self) -> None:
        document = Document.from_lines(["# Title", "## Part", "text"])
        extractor = ExtractorRegistry().select_extractor("markdown")
        self.assertEqual(chain_texts(extractor(document, Position(2, 0))), ["# Title\n", "## Part\n"])

    def test_unknown_types_fall_back_to_indentation(self) -> None:
        document = Document.from_lines(["* not a heading here", "  nested line", "    deeper"])
        for document_type in (None, "haskell"):
            with self.subTest(document_type=document_type):
                extractor = ExtractorRegistry().select_extractor(document_type)
                self.assertEqual(
                    chain_texts(extractor(document, Position(2, 0))),
                    ["* not a heading here\n", "  nested line\n"],
                )

    def test_registered_factory_overrides_builtin(self) -> None:
        registry = ExtractorRegistry()
        registry.register("ORG", lambda _type, _overrides: (lambda _doc, _pos: []))
        document = Document.from_lines(["* Top", "text"])
        self.assertEqual(registry.select_extractor("org")(document, Position(1, 0)), [])

    def test_validity_overrides_reach_indentation_extractor(self) -> None:
        document = Document.from_lines(["BEGIN", "  -- note", "    stmt one", "    stmt two"])
        registry = ExtractorRegistry(validity_overrides={"sql": re.compile(r"^(?!\s*--)\s*.*[^\W_].*[^\W_]")})
        chain = registry.select_extractor("sql")(document, Position(3, 0))
        self.assertEqual(chain_texts(chain), ["BEGIN\n", "    stmt one\n"])

    def test_extractor_for_uses_document_path(self) -> None:
        document = Document.from_lines(["* Top", "** Sub", "text"], path=Path("/w/plan.org"))
        chain = ExtractorRegistry().extractor_for(document)(document, Position(2, 0))
        self.assertEqual([entry.depth for entry in chain], [1, 2])


if __name__ == "__main__":
    unittest.main()
