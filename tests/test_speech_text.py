"""Tests for TTS preprocessing and transcript cleanup"""

import pytest

from omnia_gateway.text.speech_text import postprocess_transcription, preprocess_for_tts


@pytest.mark.parametrize("text,expected", [
    ("**Tučně** napsáno", "Tučně napsáno."),
    ("# Nadpis\nText", "Nadpis Text."),
    ("Použij `pip install`", "Použij pip install."),
    ("Teplota je 20°C", "Teplota je 20 stupňů Celsia."),
    ("Sleva 50 %", "Sleva 50 procent."),
    ("Stojí 100 Kč", "Stojí 100 korun českých."),
    ("3/4 pizzy", "3 lomeno 4 pizzy."),
    ("2 + 2 = 4", "2 plus 2 rovná se 4."),
    ("ChatGPT a AI", "čet džípítí a éj áj."),
    ("A... B", "A, pauza, B."),
    ("Hotovo!", "Hotovo!"),
])
def test_preprocess_for_tts(text, expected):
    assert preprocess_for_tts(text) == expected


def test_abbreviations_are_case_sensitive():
    assert preprocess_for_tts("Ai je jméno") == "Ai je jméno."


def test_preprocess_empty():
    assert preprocess_for_tts("") == ""
    assert preprocess_for_tts(None) == ""


def test_postprocess_removes_artefacts_and_fillers():
    assert postprocess_transcription("[music] um hello (laughs) there", "en") == "hello there"
    assert postprocess_transcription("ehm ahoj", "cs") == "ahoj"


def test_postprocess_keeps_fillers_of_other_languages():
    assert postprocess_transcription("um ahoj", "cs") == "um ahoj"
    assert postprocess_transcription("", "cs") == ""
