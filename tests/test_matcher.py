import unittest

from timesafe.services.matcher import classify, matched_keyword
from timesafe.services.taxonomy import INTENTS, IntentCategory, keywords_for


class TestClassify(unittest.TestCase):
    def test_quick_replies(self):
        self.assertEqual(classify("Order status?"), IntentCategory.ORDER)
        self.assertEqual(classify("Delivery time?"), IntentCategory.DELIVERY)
        self.assertEqual(classify("मटन का rate?"), IntentCategory.PRODUCT)
        self.assertEqual(classify("Payment options?"), IntentCategory.PAYMENT)
        self.assertEqual(classify("Help needed"), IntentCategory.HELP)

    def test_greeting(self):
        self.assertEqual(classify("Hi"), IntentCategory.GREETING)
        self.assertEqual(classify("namaste"), IntentCategory.GREETING)
        self.assertEqual(classify("नमस्ते"), IntentCategory.GREETING)

    def test_each_category_reachable(self):
        self.assertEqual(classify("login nahi ho raha"), IntentCategory.ACCOUNT)
        self.assertEqual(classify("I want to sell"), IntentCategory.VENDOR)
        self.assertEqual(classify("गलत item आया"), IntentCategory.COMPLAINT)

    def test_case_insensitive(self):
        self.assertEqual(classify("ORDER STATUS"), IntentCategory.ORDER)
        self.assertEqual(classify("MuTtOn"), IntentCategory.PRODUCT)

    def test_substring_not_whole_word(self):
        self.assertEqual(classify("refunded?"), IntentCategory.PAYMENT)
        # "shipping" contains "hi"
        self.assertEqual(classify("shipping"), IntentCategory.GREETING)

    def test_devanagari_survives_lowercasing(self):
        self.assertEqual(classify("मेरा ऑर्डर कहाँ है"), IntentCategory.ORDER)

    def test_unclassified(self):
        self.assertIsNone(classify(""))
        self.assertIsNone(classify("   "))
        self.assertIsNone(classify("!!!???"))
        self.assertIsNone(classify("xyz123 random gibberish"))

    def test_very_long_input(self):
        self.assertIsNone(classify("z" * 100_000))
        self.assertEqual(classify("z" * 100_000 + " refund"), IntentCategory.PAYMENT)

    def test_lone_surrogate_does_not_raise(self):
        self.assertIsNone(classify("\udcff\udcfe"))


class TestPriority(unittest.TestCase):
    def test_order_beats_every_lower_priority_keyword(self):
        for intent in INTENTS[1:]:
            for keyword in intent.keywords:
                text = f"{keyword} and my order"
                self.assertEqual(classify(text), IntentCategory.ORDER, text)

    def test_order_and_payment_is_order(self):
        self.assertEqual(classify("order payment failed"), IntentCategory.ORDER)

    def test_product_beats_delivery(self):
        self.assertEqual(classify("chicken delivery time"), IntentCategory.PRODUCT)

    def test_time_is_delivery_keyword(self):
        self.assertIn("time", keywords_for(IntentCategory.DELIVERY))
        self.assertNotIn("time", keywords_for(IntentCategory.PRODUCT))

    def test_first_keyword_reported(self):
        self.assertEqual(
            matched_keyword("track my chicken"),
            (IntentCategory.ORDER, "track"),
        )
        self.assertIsNone(matched_keyword("xyz"))


if __name__ == "__main__":
    unittest.main()
