"""Reply-language heuristics for Czech, English and Romanian"""

from typing import Dict, List, Optional

import structlog

logger = structlog.get_logger(__name__)

SUPPORTED_LANGUAGES = ("cs", "en", "ro")
DEFAULT_LANGUAGE = "cs"

# Order matters: earlier languages win ties
EXPLICIT_REQUESTS: Dict[str, List[str]] = {
    "cs": ["mluvte česky", "v češtině", "česká odpověď", "přepni na češtinu"],
    "en": ["speak english", "in english", "switch to english", "english please"],
    "ro": ["vorbește română", "în română", "schimbă la română"],
}

CONVERSATIONAL_PHRASES: Dict[str, List[str]] = {
    "cs": ["jak se mas", "co delas", "muzes mi", "ahoj", "dekuji"],
    "en": ["how are you", "what are you", "can you", "hello", "thank you"],
    "ro": ["ce faci", "cum esti", "poti sa", "salut", "multumesc"],
}

# Diacritic-free spellings, as transcription of casual speech often comes back
TRANSCRIPT_MARKERS: Dict[str, List[str]] = {
    "cs": ["muzes", "muzeme", "dekuji", "prosim", "ahoj", "jsem", "jsi", "mas", "jak", "co", "kde"],
    "en": ["what", "how", "where", "when", "why", "doing", "think", "help", "please", "the", "and"],
    "ro": ["ce", "cum", "unde", "faci", "esti", "sunt", "multumesc", "salut", "cine", "sa", "si"],
}

RESPONSE_MARKERS: Dict[str, List[str]] = {
    "ro": ["astăzi", "prețul", "acțiunilor", "dolari", "douăzeci", "trei", "sute", "este"],
    "cs": ["dnes", "cena", "akcií", "korun", "dvacet", "tisíc", "je"],
    "en": ["today", "price", "stock", "dollars", "twenty", "thousand", "is"],
}

VENDOR_LANGUAGE_MAP = {
    "cs": "cs", "czech": "cs", "ces": "cs",
    "en": "en", "english": "en", "eng": "en",
    "ro": "ro", "romanian": "ro", "ron": "ro",
}

LANGUAGE_NAMES = {"cs": "Czech", "en": "English", "ro": "Romanian"}

# Native-language phrasing of "always answer in ..."
LANGUAGE_INSTRUCTIONS = {
    "cs": "\n\nVŽDY odpovídaj v jazyce: češtině",
    "en": "\n\nVŽDY odpovídaj v jazyce: English",
    "ro": "\n\nVŽDY odpovídaj v jazyce: română",
}
DEFAULT_LANGUAGE_INSTRUCTION = "\n\nVŽDY odpovídaj v jazyce, ve kterém se tě uživatel ptá"


def _first_phrase_match(text: str, table: Dict[str, List[str]]) -> Optional[str]:
    for language, phrases in table.items():
        if any(phrase in text for phrase in phrases):
            return language
    return None


def _marker_counts(text: str, table: Dict[str, List[str]]) -> Dict[str, int]:
    return {
        language: sum(1 for word in words if word in text)
        for language, words in table.items()
    }


def normalize_vendor_language(vendor_language: Optional[str]) -> Optional[str]:
    """Map a vendor-reported language name or code to cs/en/ro"""
    if not vendor_language:
        return None
    return VENDOR_LANGUAGE_MAP.get(vendor_language.strip().lower())


def detect_transcript_language(text: Optional[str], vendor_language: Optional[str] = None) -> str:
    """Choose the reply language for a user transcript.

    Explicit requests ("speak english") beat conversational phrases, which
    beat marker-word counts (at least two hits needed). The vendor's own
    guess is used only when the text is inconclusive; Czech is the fallback.
    Matching is by substring, so short markers also hit inside longer words.
    """
    if not text or not text.strip():
        return DEFAULT_LANGUAGE

    lowered = text.lower().strip()

    explicit = _first_phrase_match(lowered, EXPLICIT_REQUESTS)
    if explicit:
        return explicit

    conversational = _first_phrase_match(lowered, CONVERSATIONAL_PHRASES)
    if conversational:
        return conversational

    counts = _marker_counts(lowered, TRANSCRIPT_MARKERS)
    best = max(counts.values())
    if best >= 2:
        for language in SUPPORTED_LANGUAGES:
            if counts[language] == best:
                return language

    vendor = normalize_vendor_language(vendor_language)
    if vendor:
        return vendor

    return DEFAULT_LANGUAGE


def detect_response_language(text: Optional[str]) -> str:
    """Guess the language of a model answer; 'unknown' when there is no signal"""
    if not text or len(text) < 10:
        return "unknown"

    counts = _marker_counts(text.lower(), RESPONSE_MARKERS)
    ro, cs, en = counts["ro"], counts["cs"], counts["en"]

    if ro > cs and ro > en:
        return "ro"
    if cs > en:
        return "cs"
    if en > 0:
        return "en"
    return "unknown"


def language_name(code: Optional[str]) -> str:
    return LANGUAGE_NAMES.get(code, LANGUAGE_NAMES[DEFAULT_LANGUAGE])


def language_instruction(code: Optional[str]) -> str:
    """System-prompt suffix asking the model to answer in the given language"""
    if not code:
        return DEFAULT_LANGUAGE_INSTRUCTION
    return LANGUAGE_INSTRUCTIONS.get(code, "\n\nVŽDY odpovídaj v jazyce: kterém se tě uživatel ptá")
