"""Text cleanup on both sides of the speech vendors"""

import re
from typing import Optional

# Czech pronunciations of terms the TTS voice otherwise spells badly
ABBREVIATIONS = {
    "ChatGPT": "čet džípítí",
    "OpenAI": "oupn éj áj",
    "ElevenLabs": "ilevn labs",
    "Anthropic": "antropik",
    "Claude": "klód",
    "API": "éj pí áj",
    "URL": "jú ár el",
    "USD": "jú es dolar",
    "EUR": "euro",
    "GPT": "džípítí",
    "TTS": "tí tí es",
    "AI": "éj áj",
}

MARKDOWN_RULES = [
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"\*+"), ""),
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"#{1,6}"), ""),
    (re.compile(r"`([^`]+)`"), r"\1"),
]

# Fractions first, so "3/4" is not read as a division
SYMBOL_RULES = [
    (re.compile(r"(\d+)\/(\d+)"), r"\1 lomeno \2"),
    (re.compile(r"(\d+)\s*%"), r"\1 procent"),
    (re.compile(r"(\d+)\s*°C", re.IGNORECASE), r"\1 stupňů Celsia"),
    (re.compile(r"(\d+)\s*°F", re.IGNORECASE), r"\1 stupňů Fahrenheita"),
    (re.compile(r"(\d+)\s*Kč", re.IGNORECASE), r"\1 korun českých"),
    (re.compile(r"(\d+)\s*€"), r"\1 eur"),
    (re.compile(r"(\d+)\s*\$"), r"\1 dolarů"),
    (re.compile(r"÷"), " děleno "),
    (re.compile(r"×"), " krát "),
    (re.compile(r"−"), " mínus "),
    (re.compile(r"\+"), " plus "),
    (re.compile(r"≠"), " nerovná se "),
    (re.compile(r"≤"), " menší nebo rovno "),
    (re.compile(r"≥"), " větší nebo rovno "),
    (re.compile(r"="), " rovná se "),
    (re.compile(r"/"), " děleno "),
    (re.compile(r"<"), " menší než "),
    (re.compile(r">"), " větší než "),
]

ABBREVIATION_RULES = [
    (re.compile(rf"\b{re.escape(term)}\b"), spoken)
    for term, spoken in ABBREVIATIONS.items()
]

FILLER_WORDS = {
    "cs": re.compile(r"\b(?:uum|ehm)\b", re.IGNORECASE),
    "en": re.compile(r"\b(?:uh|um)\b", re.IGNORECASE),
    "ro": re.compile(r"\beh\b", re.IGNORECASE),
}

WHITESPACE_RE = re.compile(r"\s+")


def preprocess_for_tts(text: Optional[str]) -> str:
    """Turn chat-formatted text into something a voice can read out.

    Markdown is stripped before symbols are verbalised, otherwise ``**`` and
    headers would be read aloud. The result always ends in ``.``, ``!`` or
    ``?`` so the voice closes the sentence.
    """
    if not text or not isinstance(text, str):
        return ""

    processed = text
    for pattern, replacement in MARKDOWN_RULES:
        processed = pattern.sub(replacement, processed)
    for pattern, replacement in SYMBOL_RULES:
        processed = pattern.sub(replacement, processed)
    for pattern, replacement in ABBREVIATION_RULES:
        processed = pattern.sub(replacement, processed)

    processed = processed.replace("...", ", pauza,").replace("--", ", pauza,")
    processed = WHITESPACE_RE.sub(" ", processed).strip()

    if processed and processed[-1] not in ".!?":
        processed += "."
    return processed


def postprocess_transcription(text: Optional[str], language: Optional[str] = None) -> str:
    """Remove STT artefacts ([music], (laughs)) and filler words"""
    if not text:
        return ""

    cleaned = text.strip()
    cleaned = re.sub(r"\[.*?\]", "", cleaned)
    cleaned = re.sub(r"\(.*?\)", "", cleaned)
    cleaned = WHITESPACE_RE.sub(" ", cleaned)

    filler = FILLER_WORDS.get(language or "")
    if filler:
        cleaned = filler.sub("", cleaned)
        cleaned = WHITESPACE_RE.sub(" ", cleaned)

    return cleaned.strip()
