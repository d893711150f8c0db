import unittest
from types import MappingProxyType

from timesafe.services.taxonomy import (
    INTENTS,
    MENU_SHORTCUTS,
    PRIORITY,
    Intent,
    IntentCategory,
    TaxonomyError,
    keywords_for,
    templates_for,
    validate_taxonomy,
)


class TestTaxonomyTable(unittest.TestCase):
    def test_every_category_has_keywords_and_templates(self):
        for category in IntentCategory:
            self.assertTrue(keywords_for(category), category)
            self.assertTrue(templates_for(category), category)

    def test_table_follows_priority_order(self):
        self.assertEqual(tuple(i.category for i in INTENTS), PRIORITY)
        self.assertEqual(PRIORITY[0], IntentCategory.ORDER)
        self.assertEqual(PRIORITY[-1], IntentCategory.COMPLAINT)

    def test_hindi_keywords_present(self):
        self.assertIn("मटन", keywords_for(IntentCategory.PRODUCT))
        self.assertIn("ऑर्डर", keywords_for(IntentCategory.ORDER))

    def test_menu_covers_digits_one_to_five(self):
        self.assertEqual(sorted(MENU_SHORTCUTS), ["1", "2", "3", "4", "5"])

    def test_menu_is_read_only(self):
        with self.assertRaises(TypeError):
            MENU_SHORTCUTS["6"] = "nope"


class TestValidateTaxonomy(unittest.TestCase):
    def _replace(self, category, **changes):
        intents = []
        for intent in INTENTS:
            if intent.category == category:
                intent = Intent(
                    category=intent.category,
                    keywords=changes.get("keywords", intent.keywords),
                    templates=changes.get("templates", intent.templates),
                )
            intents.append(intent)
        return tuple(intents)

    def test_shipped_table_is_valid(self):
        validate_taxonomy()

    def test_empty_template_pool_rejected(self):
        with self.assertRaises(TaxonomyError) as cm:
            validate_taxonomy(self._replace(IntentCategory.VENDOR, templates=()))
        self.assertIn("vendor", str(cm.exception))

    def test_empty_keyword_list_rejected(self):
        with self.assertRaises(TaxonomyError):
            validate_taxonomy(self._replace(IntentCategory.HELP, keywords=()))

    def test_blank_keyword_rejected(self):
        # "" would match every message
        with self.assertRaises(TaxonomyError):
            validate_taxonomy(self._replace(IntentCategory.HELP, keywords=("help", "")))

    def test_uppercase_keyword_rejected(self):
        with self.assertRaises(TaxonomyError):
            validate_taxonomy(self._replace(IntentCategory.ORDER, keywords=("Order",)))

    def test_reordered_categories_rejected(self):
        swapped = (INTENTS[1], INTENTS[0]) + INTENTS[2:]
        with self.assertRaises(TaxonomyError):
            validate_taxonomy(swapped)

    def test_missing_category_rejected(self):
        with self.assertRaises(TaxonomyError):
            validate_taxonomy(INTENTS[:-1])

    def test_incomplete_menu_rejected(self):
        menu = MappingProxyType({k: v for k, v in MENU_SHORTCUTS.items() if k != "5"})
        with self.assertRaises(TaxonomyError):
            validate_taxonomy(shortcuts=menu)

    def test_blank_menu_reply_rejected(self):
        menu = dict(MENU_SHORTCUTS)
        menu["3"] = "  "
        with self.assertRaises(TaxonomyError):
            validate_taxonomy(shortcuts=menu)


if __name__ == "__main__":
    unittest.main()
