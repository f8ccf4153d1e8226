"""Tests for the reply-language heuristics"""

from omnia_gateway.text.language import (
    DEFAULT_LANGUAGE_INSTRUCTION,
    detect_response_language,
    detect_transcript_language,
    language_instruction,
    language_name,
    normalize_vendor_language,
)


def test_empty_transcript_defaults_to_czech():
    assert detect_transcript_language("") == "cs"
    assert detect_transcript_language("   ") == "cs"
    assert detect_transcript_language(None) == "cs"


def test_no_markers_defaults_to_czech():
    assert detect_transcript_language("xyz") == "cs"


def test_explicit_request_wins():
    assert detect_transcript_language("Prosím, speak english") == "en"
    assert detect_transcript_language("Odpověz v češtině") == "cs"
    assert detect_transcript_language("Te rog, în română") == "ro"


def test_conversational_phrases():
    assert detect_transcript_language("Ahoj jak se mas") == "cs"
    assert detect_transcript_language("Hello can you hear me") == "en"
    assert detect_transcript_language("ce faci azi") == "ro"


def test_marker_words_need_two_hits():
    assert detect_transcript_language("where is the library and museum") == "en"


def test_vendor_language_used_when_text_is_inconclusive():
    assert detect_transcript_language("xyz", "romanian") == "ro"
    assert detect_transcript_language("xyz", "eng") == "en"
    assert detect_transcript_language("xyz", "klingon") == "cs"


def test_normalize_vendor_language():
    assert normalize_vendor_language(" CES ") == "cs"
    assert normalize_vendor_language(None) is None
    assert normalize_vendor_language("de") is None


def test_detect_response_language():
    assert detect_response_language("The stock price today is twenty dollars") == "en"
    assert detect_response_language("Dnes je cena akcií dvacet korun") == "cs"
    assert detect_response_language("Astăzi prețul acțiunilor este douăzeci dolari") == "ro"
    assert detect_response_language("short") == "unknown"
    assert detect_response_language("xyz xyz xyz xyz") == "unknown"


def test_language_names_and_instructions():
    assert language_name("en") == "English"
    assert language_name("de") == "Czech"
    assert language_instruction("ro").endswith("română")
    assert language_instruction(None) == DEFAULT_LANGUAGE_INSTRUCTION
    assert "kterém se tě uživatel ptá" in language_instruction("de")
