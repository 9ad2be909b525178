from __future__ import annotations

import unittest

from takhrij_client import reference_data


class CollectionKeyMapTests(unittest.TestCase):
    def test_nine_canonical_collections(self) -> None:
        mapping = reference_data.collection_key_map()
        self.assertEqual(len(mapping), 9)
        self.assertEqual(mapping["Sahih Bukhari"], "bukhari")
        self.assertEqual(mapping["Jami` at-Tirmidhi"], "tirmidhi")
        self.assertEqual(mapping["Sunan ad-Darimi"], "darimi")

    def test_map_is_read_only(self) -> None:
        mapping = reference_data.collection_key_map()
        with self.assertRaises(TypeError):
            mapping["Riyad as-Salihin"] = "riyadussalihin"  # type: ignore[index]

    def test_resolve_uses_first_two_tokens(self) -> None:
        self.assertEqual(reference_data.resolve_collection_key("Sahih Muslim 2564a"), "muslim")
        self.assertEqual(reference_data.resolve_collection_key("Sahih  Bukhari"), "bukhari")
        self.assertEqual(reference_data.resolve_collection_key("Sahih"), "")
        self.assertEqual(reference_data.resolve_collection_key(""), "")
        self.assertEqual(reference_data.resolve_collection_key("AI Generated"), "")

    def test_three_word_names_match_on_first_two_tokens(self) -> None:
        self.assertEqual(reference_data.resolve_collection_key("Sunan Ibn Majah 224"), "ibnmajah")
        self.assertEqual(reference_data.resolve_collection_key("Sunan Abu Dawood 4031"), "abudawud")

    def test_lookup_is_case_sensitive(self) -> None:
        self.assertEqual(reference_data.resolve_collection_key("sahih bukhari 1"), "")


class GlossaryTests(unittest.TestCase):
    def test_glossary_entries(self) -> None:
        entries = reference_data.glossary()
        self.assertEqual(len(entries), 13)
        self.assertEqual(entries[0].term, "Hadith")
        self.assertEqual(entries[-1].term, "Ahad")

    def test_find_is_case_insensitive(self) -> None:
        entry = reference_data.find_glossary_entry("  isnad ")
        self.assertIsNotNone(entry)
        assert entry is not None
        self.assertEqual(entry.definition, "The chain of narrators who transmitted the Hadith.")

    def test_unknown_term(self) -> None:
        self.assertIsNone(reference_data.find_glossary_entry("Tafsir"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
