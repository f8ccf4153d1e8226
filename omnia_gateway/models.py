"""Data models for the gateway"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import settings


class ChatMessage(BaseModel):
    """One chat turn as the frontend sends it"""
    model_config = ConfigDict(extra="ignore")

    sender: Optional[Literal["user", "bot"]] = None
    text: Optional[str] = None
    isStreaming: Optional[bool] = None
    # OpenAI/Anthropic style payloads
    role: Optional[str] = None
    content: Optional[str] = None

    @property
    def body(self) -> str:
        return self.text or self.content or ""

    @property
    def is_user(self) -> bool:
        if self.sender is not None:
            return self.sender == "user"
        return self.role == "user"


class TranscriptionDetails(BaseModel):
    service: str
    originalLanguage: str
    detectedLanguage: str
    audioSize: int
    words: List[Any] = []
    originalText: str


class TranscriptionResult(BaseModel):
    """Speech-to-text result shared by every STT route"""
    success: bool = True
    text: str
    language: str
    confidence: float
    message: str
    details: TranscriptionDetails


class VoiceSettings(BaseModel):
    """ElevenLabs voice settings tuned for the Omnia voice"""
    stability: float = 0.30
    similarity_boost: float = 0.25
    style: float = 0.30
    use_speaker_boost: bool = True
    speed: Optional[float] = 1.0


class ErrorEnvelope(BaseModel):
    """Body of the JSON error responses"""
    success: bool = False
    error: str
    message: str
    details: Optional[Any] = None
    retryable: Optional[bool] = None


class Document(BaseModel):
    """Document attached to a Gemini request"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    geminiFileUri: Optional[str] = None
    extractedText: Optional[str] = None


# Request models

class ChatRequest(BaseModel):
    """Claude / OpenAI chat request; messages are validated by the route"""
    messages: Any = None


class WebSearchRequest(BaseModel):
    query: Optional[str] = None
    language: str = "cs"


class GeminiRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    requestId: Optional[str] = None
    messages: List[ChatMessage] = []
    system: Optional[str] = None
    max_tokens: int = Field(default_factory=lambda: settings.gemini_max_tokens)
    language: Optional[str] = None
    documents: List[Document] = []


class ElevenLabsTTSRequest(BaseModel):
    text: Optional[str] = None
    voice_id: Optional[str] = None
    model_id: Optional[str] = None
    voice_settings: VoiceSettings = VoiceSettings(speed=None)


class TTSStreamRequest(BaseModel):
    text: Optional[str] = None
    voice_id: Optional[str] = None
    model_id: Optional[str] = None
    language_code: Optional[str] = None
    output_format: Optional[str] = None
    voice_settings: VoiceSettings = VoiceSettings()
    stream_chunks: bool = True
    enable_ssml_parsing: bool = False


class VoiceRequest(BaseModel):
    text: Optional[str] = None


class GoogleTTSRequest(BaseModel):
    text: Optional[str] = None
    language: str = "cs"
    voice: str = "natural"


class VoicePipelineRequest(BaseModel):
    audio_data: Optional[str] = None
    conversation_history: List[ChatMessage] = []
    language_hint: Optional[str] = None
    voice_settings: VoiceSettings = VoiceSettings()
    streaming: bool = True


class PromptRequest(BaseModel):
    prompt: str = ""


class GrokRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: List[ChatMessage] = []
    system: Optional[str] = None
    language: Optional[str] = None


class SearchRequest(BaseModel):
    """Perplexity, Sonar and Google search query"""
    query: Optional[str] = None
    language: str = "cs"
    freshness: str = "recent"


class PdfRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    documentType: str = "document"
