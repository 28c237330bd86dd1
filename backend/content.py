"""
Static content for the dashboard and user-facing messages (English/Arabic).
"""
import random
from datetime import date
from typing import Optional

from storage import (
    DAILY_CONTENT_DATE_KEY,
    DAILY_VERSE_KEY,
    WISDOM_QUOTE_KEY,
    KeyValueStore,
)

QURANIC_VERSES = [
    {"ar": "إِنَّ مَعَ الْعُسْرِ يُسْرًا", "en": "Indeed, with hardship comes ease", "ref": "Quran 94:6"},
    {"ar": "فَاذْكُرُونِي أَذْكُرْكُمْ", "en": "Remember Me; I will remember you", "ref": "Quran 2:152"},
    {"ar": "وَهُوَ مَعَكُمْ أَيْنَ مَا كُنتُمْ", "en": "And He is with you wherever you are", "ref": "Quran 57:4"},
    {
        "ar": "إِنَّ اللَّهَ لَا يُضِيعُ أَجْرَ الْمُحْسِنِينَ",
        "en": "Indeed, Allah does not waste the reward of those who do good",
        "ref": "Quran 9:120",
    },
    {
        "ar": "وَمَن يَتَّقِ اللَّهَ يَجْعَل لَّهُ مَخْرَجًا",
        "en": "Whoever fears Allah, He will make a way out for him",
        "ref": "Quran 65:2",
    },
]

WISDOM_QUOTES = [
    {"ar": "العلم نور", "en": "Knowledge is light"},
    {"ar": "الصبر مفتاح الفرج", "en": "Patience is the key to relief"},
    {"ar": "من جد وجد", "en": "Whoever strives shall succeed"},
    {"ar": "خير الناس أنفعهم للناس", "en": "The best of people are those most beneficial to others"},
    {"ar": "اطلبوا العلم من المهد إلى اللحد", "en": "Seek knowledge from the cradle to the grave"},
]

QUICK_ACCESS = [
    {"key": "worship", "url": "/worship"},
    {"key": "study", "url": "/study"},
    {"key": "tasks", "url": "/tasks"},
    {"key": "reading", "url": "/reading"},
]

MESSAGES = {
    "en": {
        "success": "Success",
        "error": "Error",
        "generic_error": "An error occurred",
        "signed_in": "Signed in successfully",
        "signed_up": "Account created successfully",
        "worship": "Worship",
        "study": "Study",
        "tasks": "Tasks",
        "reading": "Reading",
    },
    "ar": {
        "success": "نجاح",
        "error": "خطأ",
        "generic_error": "حدث خطأ",
        "signed_in": "تم تسجيل الدخول بنجاح",
        "signed_up": "تم إنشاء الحساب بنجاح",
        "worship": "العبادة",
        "study": "الدراسة",
        "tasks": "المهام",
        "reading": "القراءة",
    },
}


def t(key: str, language: str = "en") -> str:
    """Look up a message, falling back to English."""
    table = MESSAGES.get(language, MESSAGES["en"])
    return table.get(key) or MESSAGES["en"][key]


def date_string(day: date) -> str:
    """Same shape as JS Date.toDateString(), e.g. 'Sun Oct 18 2026'."""
    return day.strftime("%a %b %d %Y")


def pick_daily_content(
    store: KeyValueStore,
    today: date,
    rng: Optional[random.Random] = None,
) -> tuple[dict, dict]:
    """
    Return (verse, quote) for `today`.

    A new random pair is drawn and stored the first time a day is seen;
    later calls on the same day return the stored pair.
    """
    rng = rng or random
    today_str = date_string(today)

    if store.get_item(DAILY_CONTENT_DATE_KEY) != today_str:
        verse = rng.choice(QURANIC_VERSES)
        quote = rng.choice(WISDOM_QUOTES)
        store.set_item(DAILY_CONTENT_DATE_KEY, today_str)
        store.set_json(DAILY_VERSE_KEY, verse)
        store.set_json(WISDOM_QUOTE_KEY, quote)
        return verse, quote

    verse = store.get_json(DAILY_VERSE_KEY) or QURANIC_VERSES[0]
    quote = store.get_json(WISDOM_QUOTE_KEY) or WISDOM_QUOTES[0]
    return verse, quote
