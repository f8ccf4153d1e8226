"""Audio container sniffing for the speech-to-text vendors"""

WEBM_MAGIC = b"\x1a\x45\xdf\xa3"
MP4_BRAND = b"ftyp"
WAV_MAGIC = b"RIFF"
OGG_MAGIC = b"OggS"

AUDIO_FILENAMES = {
    "audio/mp4": "audio.m4a",
    "audio/wav": "audio.wav",
    "audio/webm": "audio.webm",
}


def detect_audio_mime_type(data: bytes) -> str:
    """MIME type from the first bytes; browsers mostly record WebM"""
    header = data[:12]
    if header[:4] == WEBM_MAGIC:
        return "audio/webm"
    if header[4:8] == MP4_BRAND:
        return "audio/mp4"
    if header[:4] == WAV_MAGIC:
        return "audio/wav"
    return "audio/webm"


def audio_filename(mime_type: str) -> str:
    return AUDIO_FILENAMES.get(mime_type, "audio.webm")


def detect_google_encoding(data: bytes) -> str:
    """Google Speech encoding enum for the container"""
    header = data[:12]
    if header[:4] == WEBM_MAGIC:
        return "WEBM_OPUS"
    if header[4:8] == MP4_BRAND:
        return "MP4"
    if header[:4] == WAV_MAGIC:
        return "LINEAR16"
    if header[:4] == OGG_MAGIC:
        return "OGG_OPUS"
    return "LINEAR16"


def google_sample_rate(encoding: str) -> int:
    # iOS records MP4 at 44.1 kHz
    return 44100 if encoding == "MP4" else 16000


def size_kb(data: bytes) -> int:
    return round(len(data) / 1024)


def format_limit(limit_bytes: int) -> str:
    """Human readable size limit for error messages"""
    if limit_bytes >= 1024 ** 3 and limit_bytes % 1024 ** 3 == 0:
        return f"{limit_bytes // 1024 ** 3}GB"
    return f"{limit_bytes // 1024 ** 2}MB"
