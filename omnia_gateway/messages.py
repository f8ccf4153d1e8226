"""User-facing message tables"""

from typing import Dict

from .config import settings

MESSAGES: Dict[str, Dict[str, str]] = {
    "config_missing": {
        "cs": "{service} API klíč není nastaven",
        "en": "{service} API key is not configured",
        "ro": "Cheia API {service} nu este configurată",
    },
    "invalid_messages": {
        "cs": "Messages musí být array",
        "en": "Messages must be an array",
        "ro": "Messages trebuie să fie un array",
    },
    "invalid_request": {
        "cs": "Neplatný požadavek",
        "en": "Invalid request",
        "ro": "Cerere invalidă",
    },
    "no_audio": {
        "cs": "Nebyla přijata žádná audio data",
        "en": "No audio data received",
        "ro": "Nu s-au primit date audio",
    },
    "audio_required": {
        "cs": "Audio data jsou povinná",
        "en": "Audio data is required",
        "ro": "Datele audio sunt obligatorii",
    },
    "audio_invalid": {
        "cs": "Audio data nejsou platný base64",
        "en": "Audio data is not valid base64",
        "ro": "Datele audio nu sunt base64 valid",
    },
    "audio_too_short": {
        "cs": "Audio nahrávka je příliš krátká nebo tichá",
        "en": "The audio recording is too short or silent",
        "ro": "Înregistrarea audio este prea scurtă sau silențioasă",
    },
    "audio_too_large": {
        "cs": "Audio nahrávka je příliš velká (max {limit})",
        "en": "The audio recording is too large (max {limit})",
        "ro": "Înregistrarea audio este prea mare (max {limit})",
    },
    "empty_transcription": {
        "cs": "Nepodařilo se rozpoznat žádný text",
        "en": "No speech could be recognised",
        "ro": "Nu s-a putut recunoaște niciun text",
    },
    "speak_louder": {
        "cs": "Zkuste mluvit hlasitěji nebo blíže k mikrofonu",
        "en": "Try speaking louder or closer to the microphone",
        "ro": "Încercați să vorbiți mai tare sau mai aproape de microfon",
    },
    "transcription_ok": {
        "cs": "Řeč úspěšně rozpoznána pomocí {service}",
        "en": "Speech recognised with {service}",
        "ro": "Vorbire recunoscută cu {service}",
    },
    "speech_not_recognised": {
        "cs": "Nepodařilo se rozpoznat řeč",
        "en": "Speech could not be recognised",
        "ro": "Vorbirea nu a putut fi recunoscută",
    },
    "transcription_failed": {
        "cs": "{service} rozpoznávání řeči selhalo - zkuste to znovu",
        "en": "{service} speech recognition failed - please try again",
        "ro": "Recunoașterea vocală {service} a eșuat - încercați din nou",
    },
    "stt_bad_format": {
        "cs": "Neplatný audio formát - zkuste jiný typ nahrávky",
        "en": "Invalid audio format - try a different recording type",
        "ro": "Format audio invalid - încercați alt tip de înregistrare",
    },
    "stt_too_large": {
        "cs": "Audio soubor je příliš velký - zkuste kratší nahrávku",
        "en": "The audio file is too large - try a shorter recording",
        "ro": "Fișierul audio este prea mare - încercați o înregistrare mai scurtă",
    },
    "rate_limited": {
        "cs": "Příliš mnoho požadavků - zkuste to za chvíli",
        "en": "Too many requests - try again in a moment",
        "ro": "Prea multe cereri - încercați din nou peste puțin timp",
    },
    "vendor_server_error": {
        "cs": "Chyba {service} serveru - zkuste to znovu za chvíli",
        "en": "{service} server error - try again in a moment",
        "ro": "Eroare de server {service} - încercați din nou peste puțin timp",
    },
    "stt_generic_error": {
        "cs": "Chyba rozpoznávání řeči ({status}) - zkuste to znovu",
        "en": "Speech recognition error ({status}) - please try again",
        "ro": "Eroare de recunoaștere vocală ({status}) - încercați din nou",
    },
    "text_required": {
        "cs": "Text pro syntézu je povinný",
        "en": "Text to synthesize is required",
        "ro": "Textul pentru sinteză este obligatoriu",
    },
    "invalid_api_key": {
        "cs": "Neplatný {service} API klíč",
        "en": "Invalid {service} API key",
        "ro": "Cheie API {service} invalidă",
    },
    "quota_exceeded": {
        "cs": "Překročen limit požadavků nebo vyčerpané kredity",
        "en": "Rate limit exceeded or quota reached",
        "ro": "Limita de cereri a fost depășită sau creditele au fost epuizate",
    },
    "tts_server_error": {
        "cs": "Chyba TTS serveru: {status}",
        "en": "TTS server error: {status}",
        "ro": "Eroare server TTS: {status}",
    },
    "tts_failed": {
        "cs": "Chyba serveru při generování řeči",
        "en": "Server error while generating speech",
        "ro": "Eroare de server la generarea vorbirii",
    },
    "speech_synthesis_failed": {
        "cs": "Nepodařilo se vygenerovat řeč",
        "en": "Speech could not be generated",
        "ro": "Vorbirea nu a putut fi generată",
    },
    "ai_failed": {
        "cs": "Nepodařilo se získat odpověď od AI",
        "en": "Could not get a response from the AI",
        "ro": "Nu s-a putut obține un răspuns de la AI",
    },
    "ai_empty": {
        "cs": "AI nevrátila žádnou odpověď",
        "en": "The AI returned no answer",
        "ro": "AI nu a returnat niciun răspuns",
    },
    "pipeline_failed": {
        "cs": "Chyba v hlasovém pipeline",
        "en": "Voice pipeline error",
        "ro": "Eroare în pipeline-ul vocal",
    },
    "query_required": {
        "cs": "Query je povinný",
        "en": "Query is required",
        "ro": "Query este obligatoriu",
    },
    "search_no_results": {
        "cs": "Nepodařilo se získat výsledky vyhledávání.",
        "en": "Could not get search results.",
        "ro": "Nu s-au putut obține rezultatele căutării.",
    },
    "google_credentials_missing": {
        "cs": "Google Cloud credentials nejsou kompletní",
        "en": "Google Cloud credentials are incomplete",
        "ro": "Credențialele Google Cloud sunt incomplete",
    },
    "google_searching": {
        "cs": "🔍 Vyhledávám aktuální data přes Google...",
        "en": "🔍 Searching Google for current data...",
        "ro": "🔍 Caut date actuale pe Google...",
    },
    "service_agents_provisioning": {
        "cs": "⏳ Google Cloud nastavuje servisní agenty pro dokumenty. "
              "Zkus to znovu za 5 minut nebo piš bez dokumentu.",
        "en": "⏳ Google Cloud is provisioning service agents for documents. "
              "Try again in 5 minutes or write without a document.",
        "ro": "⏳ Google Cloud configurează agenții de servicii pentru documente. "
              "Încearcă din nou peste 5 minute sau scrie fără document.",
    },
    "internal_error": {
        "cs": "Interní chyba serveru",
        "en": "Internal server error",
        "ro": "Eroare internă de server",
    },
    "unexpected_structure": {
        "cs": "Nečekaná struktura odpovědi.",
        "en": "Unexpected response structure.",
        "ro": "Structură neașteptată a răspunsului.",
    },
    "searching_latest": {
        "cs": "🔍 Vyhledávám nejnovější data...",
        "en": "🔍 Searching for the latest data...",
        "ro": "🔍 Caut cele mai noi date...",
    },
    "no_answer": {
        "cs": "Nepodařilo se získat odpověď.",
        "en": "Could not get an answer.",
        "ro": "Nu s-a putut obține un răspuns.",
    },
    "search_query_required": {
        "cs": "Vyhledávací dotaz je povinný",
        "en": "Search query is required",
        "ro": "Interogarea de căutare este obligatorie",
    },
    "no_search_results": {
        "cs": "Nenalezeny žádné výsledky",
        "en": "No results found",
        "ro": "Nu s-au găsit rezultate",
    },
    "search_failed": {
        "cs": "{service} vyhledávání selhalo",
        "en": "{service} search failed",
        "ro": "Căutarea {service} a eșuat",
    },
    "invalid_api_key": {
        "cs": "Neplatný API klíč",
        "en": "Invalid API key",
        "ro": "Cheie API invalidă",
    },
    "sts_unsupported_format": {
        "cs": "Audio formát není podporován - zkuste jiný formát nahrávky",
        "en": "Audio format not supported - try different recording format",
        "ro": "Formatul audio nu este suportat - încercați alt format de înregistrare",
    },
    "quota_exceeded": {
        "cs": "Překročen limit požadavků nebo kvóta",
        "en": "Rate limit exceeded or quota reached",
        "ro": "Limita de cereri sau cota a fost depășită",
    },
    "sts_failed": {
        "cs": "Transformace hlasu selhala",
        "en": "Voice transformation failed",
        "ro": "Transformarea vocii a eșuat",
    },
    "pdf_fields_required": {
        "cs": "Název a obsah jsou povinné",
        "en": "Title and content are required",
        "ro": "Titlul și conținutul sunt obligatorii",
    },
    "pdf_html_fallback": {
        "cs": "Obsah PDF připraven jako HTML (chyba vykreslení: {error})",
        "en": "PDF content generated (HTML fallback due to: {error})",
        "ro": "Conținut PDF generat ca HTML (eroare de randare: {error})",
    },
}


def localize(key: str, language: str = None, **params) -> str:
    """Look up a message in the requested language, falling back to the default"""
    table = MESSAGES[key]
    language = language or settings.default_language
    template = table.get(language) or table.get(settings.default_language) or table["cs"]
    return template.format(**params) if params else template
