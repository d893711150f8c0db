"""
Intent taxonomy — trigger keywords and reply templates for every support topic.

The table is held in matching priority order. It is validated when the module
is imported, so a category without keywords or templates stops the process
before any message is answered.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class TaxonomyError(Exception):
    """Raised when the intent or menu tables are misconfigured."""


class IntentCategory(str, Enum):
    ORDER = "order"
    PRODUCT = "product"
    DELIVERY = "delivery"
    PAYMENT = "payment"
    ACCOUNT = "account"
    VENDOR = "vendor"
    HELP = "help"
    GREETING = "greeting"
    COMPLAINT = "complaint"


@dataclass(frozen=True)
class Intent:
    category: IntentCategory
    keywords: Tuple[str, ...]
    templates: Tuple[str, ...]


# ─────────────────────────────────────────────────────────
#  INTENTS (priority order)
# ─────────────────────────────────────────────────────────

INTENTS: Tuple[Intent, ...] = (
    Intent(
        category=IntentCategory.ORDER,
        keywords=("order", "ऑर्डर", "आर्डर", "track", "status"),
        templates=(
            "📦 Order Status: अपना order track करने के लिए 'My Orders' section में जाएं। Order ID डालकर real-time status देख सकते हैं।",
            "⏰ Delivery Time: हमारी standard delivery time 30 minutes है। Traffic के अनुसार 20-45 minutes लग सकते हैं।",
            "📍 Order Tracking: आपका order live track हो रहा है। Delivery partner का contact number SMS में मिल जाएगा।",
        ),
    ),
    Intent(
        category=IntentCategory.PRODUCT,
        keywords=("product", "mutton", "chicken", "meat", "मटन", "चिकन", "मांस", "price", "दाम", "rate"),
        templates=(
            "🥩 Products: हमारे पास fresh mutton, chicken, fish और ready-to-cook items हैं। सभी products premium quality के हैं।",
            "💰 Pricing: Best prices guarantee! 250g, 500g, 1kg options available हैं। Bulk order पर extra discount मिलता है।",
            "✅ Quality: 100% fresh, hygienic cuts। Same day sourcing से direct आपके घर पहुंचता है।",
        ),
    ),
    Intent(
        category=IntentCategory.DELIVERY,
        keywords=("delivery", "डिलीवरी", "deliver", "time", "कितना", "समय", "area", "location"),
        templates=(
            "🚚 Delivery Areas: हम सभी nearby areas में deliver करते हैं। Pin code डालकर availability check कर सकते हैं।",
            "🕐 Delivery Timing: Morning 6 AM से Night 11 PM तक। Sunday भी available हैं।",
            "📞 Contact Delivery: Order confirm होने के बाद delivery partner का number मिल जाएगा।",
        ),
    ),
    Intent(
        category=IntentCategory.PAYMENT,
        keywords=("payment", "pay", "पेमेंट", "भुगतान", "paisa", "पैसा", "refund", "वापसी"),
        templates=(
            "💳 Payment Options: Cash on Delivery (COD), UPI, Credit/Debit Cards सभी accept करते हैं।",
            "🔒 Secure Payment: 100% secure payment gateway। आपकी details safe रहती हैं।",
            "💰 Refund Policy: किसी भी problem के case में full refund guarantee है।",
        ),
    ),
    Intent(
        category=IntentCategory.ACCOUNT,
        keywords=("account", "profile", "login", "register", "अकाउंट", "लॉगिन", "साइन"),
        templates=(
            "👤 Account: OTP से login करें। Phone number verify होने के बाद account ready हो जाता है।",
            "📱 Profile: My Profile section में अपनी details update कर सकते हैं।",
            "🏠 Address: Multiple addresses save कर सकते हैं delivery के लिए।",
        ),
    ),
    Intent(
        category=IntentCategory.VENDOR,
        keywords=("vendor", "sell", "business", "वेंडर", "बेचना", "व्यापार", "shop"),
        templates=(
            "🏪 Vendor Registration: Vendor बनने के लिए registration form भरें। Admin approval के बाद account activate होगा।",
            "📈 Vendor Dashboard: Products add/edit करें, orders manage करें, earnings track करें।",
            "💼 Commission: Competitive commission rates। Monthly payout guaranteed है।",
        ),
    ),
    Intent(
        category=IntentCategory.HELP,
        keywords=("help", "हेल्प", "सहायता", "madad", "मदद", "support"),
        templates=(
            "❓ Help Options:\n1️⃣ Order tracking\n2️⃣ Product info\n3️⃣ Delivery status\n4️⃣ Payment help\n5️⃣ Account issues\n\nकोई भी number type करें!",
            "📞 Contact Us: \n📧 Email: support@timesafe.in\n📱 WhatsApp: +91-9876543210\n🕐 Available: 24/7",
            "🆘 Emergency: अगर urgent help चाहिए तो direct call करें: +91-9876543210",
        ),
    ),
    Intent(
        category=IntentCategory.GREETING,
        keywords=("hi", "hello", "नमस्ते", "namaste", "hii", "hey"),
        templates=(
            "नमस्ते! TimeSafe में आपका स्वागत है! 🙏 Fresh mutton 30 minutes में deliver करते हैं। कैसे help कर सकता हूँ?",
            "Hello! Welcome to TimeSafe Delivery! 😊 आज क्या order करना चाहेंगे?",
            "Hi there! 👋 Fresh meat delivery के लिए आप right place पर हैं। कुछ पूछना है?",
        ),
    ),
    Intent(
        category=IntentCategory.COMPLAINT,
        keywords=("problem", "issue", "complaint", "समस्या", "परेशानी", "गलत", "wrong", "bad"),
        templates=(
            "😔 Sorry for the inconvenience! आपकी complaint को seriously लेते हैं। Details बताएं - तुरंत resolve करेंगे।",
            "🔧 Issue Resolution: Management को forward कर रहा हूँ। 10 minutes में callback आएगा।",
            "📝 Feedback: आपका feedback valuable है। Please share details - improvement के लिए जरूरी है।",
        ),
    ),
)

PRIORITY: Tuple[IntentCategory, ...] = (
    IntentCategory.ORDER,
    IntentCategory.PRODUCT,
    IntentCategory.DELIVERY,
    IntentCategory.PAYMENT,
    IntentCategory.ACCOUNT,
    IntentCategory.VENDOR,
    IntentCategory.HELP,
    IntentCategory.GREETING,
    IntentCategory.COMPLAINT,
)


# ─────────────────────────────────────────────────────────
#  MENU, FALLBACK, WIDGET COPY
# ─────────────────────────────────────────────────────────

MENU_SHORTCUTS: Mapping[str, str] = MappingProxyType({
    "1": "📦 Order Tracking: My Orders section में जाकर Order ID डालें। Real-time location और ETA देख सकते हैं।",
    "2": "🥩 Product Info: Fresh mutton (₹450/kg), Chicken (₹320/kg), Fish (₹280/kg)। सभी items ready-to-cook भी available हैं।",
    "3": "🚚 Delivery Status: Standard delivery 30 min। Express delivery 20 min (extra ₹50)। Live tracking available।",
    "4": "💳 Payment Help: COD, UPI, Cards accept। Failed payment auto-refund। Issues के लिए: support@timesafe.in",
    "5": "👤 Account Issues: OTP not received? Call +91-9876543210। Login problems? Clear browser cache।",
})

FALLBACK_RESPONSE = (
    "🤔 समझ नहीं आया। लेकिन मैं यह help कर सकता हूँ:\n\n"
    "🥩 Products & Pricing\n"
    "📦 Order Tracking\n"
    "🚚 Delivery Info\n"
    "💳 Payment Help\n"
    "👤 Account Support\n\n"
    "कोई specific question है? Detail में पूछें! 😊"
)

GREETING_MESSAGE = "नमस्ते! मैं TimeSafe का Assistant हूँ। आप क्या जानना चाहते हैं? 🤖"

QUICK_REPLIES: Tuple[str, ...] = (
    "Order status?",
    "Delivery time?",
    "मटन का rate?",
    "Payment options?",
    "Help needed",
)

_BY_CATEGORY: Mapping[IntentCategory, Intent] = MappingProxyType(
    {intent.category: intent for intent in INTENTS}
)


# ─────────────────────────────────────────────────────────
#  LOOKUP
# ─────────────────────────────────────────────────────────

def intent_for(category: IntentCategory) -> Intent:
    return _BY_CATEGORY[category]


def keywords_for(category: IntentCategory) -> Tuple[str, ...]:
    return _BY_CATEGORY[category].keywords


def templates_for(category: IntentCategory) -> Tuple[str, ...]:
    return _BY_CATEGORY[category].templates


# ─────────────────────────────────────────────────────────
#  VALIDATION
# ─────────────────────────────────────────────────────────

def validate_taxonomy(
    intents: Tuple[Intent, ...] = INTENTS,
    shortcuts: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Check the intent and menu tables, raising TaxonomyError on the first problem.

    Every category must appear exactly once and in priority order, with at
    least one non-empty keyword and one non-empty template. The menu must map
    exactly the keys "1".."5" to non-empty replies.
    """
    shortcuts = MENU_SHORTCUTS if shortcuts is None else shortcuts

    order = tuple(intent.category for intent in intents)
    if order != PRIORITY:
        raise TaxonomyError(
            f"Intent categories out of priority order: {[c.value for c in order]}"
        )

    for intent in intents:
        if not intent.keywords or not all(intent.keywords):
            raise TaxonomyError(f"Intent '{intent.category.value}' has no usable keywords")
        if not intent.templates or not all(t.strip() for t in intent.templates):
            raise TaxonomyError(f"Intent '{intent.category.value}' has no usable templates")
        for keyword in intent.keywords:
            if keyword != keyword.lower():
                raise TaxonomyError(
                    f"Keyword '{keyword}' of '{intent.category.value}' must be lowercase"
                )

    expected_keys = {str(n) for n in range(1, 6)}
    if set(shortcuts) != expected_keys:
        raise TaxonomyError(f"Menu shortcuts must cover exactly {sorted(expected_keys)}")
    if not all(reply.strip() for reply in shortcuts.values()):
        raise TaxonomyError("Menu shortcut replies must be non-empty")

    if not FALLBACK_RESPONSE.strip():
        raise TaxonomyError("Fallback response must be non-empty")


validate_taxonomy()
