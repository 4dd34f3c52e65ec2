"""ElevenLabs adapter for text-to-speech."""

import logging

import httpx

logger = logging.getLogger(__name__)


class SpeechError(Exception):
    """Speech synthesis failed."""

    def __init__(self, message: str, status_code: int = 500, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class SpeechNotConfiguredError(SpeechError):
    """No ElevenLabs API key configured."""

    def __init__(self) -> None:
        super().__init__("TTS service not configured", status_code=500)


class ElevenLabsAdapter:
    """Thin client for the ElevenLabs voice API."""

    VOICE_SETTINGS = {
        "stability": 0.5,
        "similarity_boost": 0.75,
        "style": 0.0,
        "use_speaker_boost": True,
    }

    def __init__(
        self,
        api_key: str | None = None,
        voice_id: str = "JBFqnCBsd6RMkjVDRZzb",
        model_id: str = "eleven_turbo_v2_5",
        base_url: str = "https://api.elevenlabs.io/v1",
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.voice_id = voice_id
        self.model_id = model_id
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_headers(self, accept: str = "application/json") -> dict[str, str]:
        if not self.api_key:
            raise SpeechNotConfiguredError()
        return {
            "xi-api-key": self.api_key,
            "Accept": accept,
            "Content-Type": "application/json",
        }

    async def synthesize(self, text: str) -> bytes:
        """
        Convert text to MPEG audio.

        Raises:
            SpeechError: On upstream failure or empty audio
        """
        headers = self._get_headers(accept="audio/mpeg")
        logger.info(f"Converting text to speech: {text[:50]!r}")

        try:
            response = await self._client.post(
                f"{self.base_url}/text-to-speech/{self.voice_id}",
                headers=headers,
                json={
                    "text": text,
                    "model_id": self.model_id,
                    "voice_settings": self.VOICE_SETTINGS,
                },
            )
        except httpx.HTTPError as e:
            raise SpeechError(f"Failed to generate speech: {e}")

        if response.is_error:
            logger.error(f"ElevenLabs API error {response.status_code}: {response.text[:500]}")
            raise SpeechError("TTS service error", status_code=response.status_code, details=response.text)

        if not response.content:
            raise SpeechError("TTS service returned empty audio")

        logger.info(f"Audio generated: {len(response.content)} bytes")
        return response.content

    async def count_voices(self) -> int:
        """Number of voices visible to the configured key."""
        try:
            response = await self._client.get(f"{self.base_url}/voices", headers=self._get_headers())
        except httpx.HTTPError as e:
            raise SpeechError(f"Cannot reach ElevenLabs API: {e}")

        if response.is_error:
            raise SpeechError(f"API returned {response.status_code}", status_code=response.status_code)

        return len(response.json().get("voices") or [])

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
