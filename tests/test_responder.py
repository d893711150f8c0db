import random
import unittest

from timesafe.services import responder
from timesafe.services.menu import shortcut
from timesafe.services.responder import (
    ROUTE_FALLBACK,
    ROUTE_INTENT,
    ROUTE_SHORTCUT,
    Responder,
)
from timesafe.services.taxonomy import (
    FALLBACK_RESPONSE,
    MENU_SHORTCUTS,
    IntentCategory,
    templates_for,
)


class LastChoice:
    """Randomness stub that always picks the last template."""

    def choice(self, seq):
        return seq[-1]


class TestMenuShortcut(unittest.TestCase):
    def test_exact_digits(self):
        for key, reply in MENU_SHORTCUTS.items():
            self.assertEqual(shortcut(key), reply)

    def test_no_normalization(self):
        for text in (" 1", "1 ", "1.", "01", "6", "0", "१", ""):
            self.assertIsNone(shortcut(text), repr(text))


class TestResponder(unittest.TestCase):
    def setUp(self):
        self.responder = Responder(random.Random(1234))

    def test_digits_return_shortcuts(self):
        for key, reply in MENU_SHORTCUTS.items():
            self.assertEqual(self.responder.respond(key), reply)

    def test_padded_digit_falls_back(self):
        self.assertEqual(self.responder.respond(" 1"), FALLBACK_RESPONSE)

    def test_empty_and_gibberish_fall_back(self):
        self.assertEqual(self.responder.respond(""), FALLBACK_RESPONSE)
        self.assertEqual(self.responder.respond("   "), FALLBACK_RESPONSE)
        self.assertEqual(self.responder.respond("xyz123 random gibberish"), FALLBACK_RESPONSE)

    def test_fallback_lists_help_topics(self):
        for topic in ("Products & Pricing", "Order Tracking", "Delivery Info", "Payment Help", "Account Support"):
            self.assertIn(topic, FALLBACK_RESPONSE)

    def test_replies_stay_in_pool(self):
        pool = set(templates_for(IntentCategory.ORDER))
        seen = {self.responder.respond("order status?") for _ in range(200)}
        self.assertTrue(seen <= pool)
        self.assertEqual(seen, pool)

    def test_module_level_respond_stays_in_pool(self):
        pool = set(templates_for(IntentCategory.PRODUCT))
        for _ in range(100):
            self.assertIn(responder.respond("मटन का rate?"), pool)

    def test_injected_randomness_is_used(self):
        pinned = Responder(LastChoice())
        self.assertEqual(pinned.respond("Hi"), templates_for(IntentCategory.GREETING)[-1])

    def test_same_seed_same_replies(self):
        a = Responder(random.Random(7))
        b = Responder(random.Random(7))
        texts = ["Hi", "order?", "refund", "vendor"] * 5
        self.assertEqual([a.respond(t) for t in texts], [b.respond(t) for t in texts])

    def test_never_empty(self):
        samples = ["", " ", "\n\t", "?", "1", "9", "हाँ", "\udcff", "a" * 50_000, "Hi", "bad"]
        for text in samples:
            reply = self.responder.respond(text)
            self.assertTrue(reply.strip(), repr(text))

    def test_explain_routes(self):
        decision = self.responder.explain("3")
        self.assertEqual(decision.route, ROUTE_SHORTCUT)
        self.assertIsNone(decision.category)

        decision = self.responder.explain("मटन का rate?")
        self.assertEqual(decision.route, ROUTE_INTENT)
        self.assertEqual(decision.category, IntentCategory.PRODUCT)
        self.assertEqual(decision.keyword, "मटन")
        self.assertIn(decision.reply, templates_for(IntentCategory.PRODUCT))

        decision = self.responder.explain("qwerty")
        self.assertEqual(decision.route, ROUTE_FALLBACK)
        self.assertEqual(decision.reply, FALLBACK_RESPONSE)


if __name__ == "__main__":
    unittest.main()
