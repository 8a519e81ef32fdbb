"""
HTTP client for a running storefront assistant server.

Usage:
    # Start server first: storefront-assistant serve

    client = AssistantClient()
    result = client.query("show me the cart")

    with open("command.webm", "rb") as f:
        voice = client.send_audio(f.read())
"""

import logging
from typing import Any

import httpx

from storefront_assistant.assistant.actions import AssistantResult, VoiceResult
from storefront_assistant.assistant.handler import NOT_RECOGNIZED
from storefront_assistant.config import get_config

logger = logging.getLogger(__name__)


class AssistantClient:
    """Thin wrapper over the assistant REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Args:
            base_url: Server URL (default: from config)
            timeout: Request timeout in seconds
            transport: Custom httpx transport
        """
        config = get_config().client
        self.base_url = (base_url or config.base_url).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or config.timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "AssistantClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def is_connected(self) -> bool:
        """Check if the server answers its health check."""
        try:
            return self._client.get("/health").status_code == 200
        except httpx.HTTPError:
            return False

    def get_server_info(self) -> dict[str, Any]:
        """Get server information."""
        resp = self._client.get("/info")
        resp.raise_for_status()
        return resp.json()

    def get_commands(self) -> list[dict[str, Any]]:
        """Get the commands the server understands."""
        resp = self._client.get("/assistant/commands")
        resp.raise_for_status()
        return resp.json()["commands"]

    def query(self, text: str) -> AssistantResult:
        """
        Send a text query.

        Raises:
            httpx.HTTPError: On transport failure or an error status
        """
        resp = self._client.post("/assistant/query", json={"query": text})
        resp.raise_for_status()
        return AssistantResult.from_dict(resp.json())

    def speech_to_text(
        self,
        audio: bytes,
        filename: str = "audio.webm",
        content_type: str = "audio/webm",
    ) -> dict[str, Any]:
        """
        Upload a recording for transcription.

        Returns:
            The server's JSON body: ``{"text", "confidence"?}`` on success,
            ``{"detail"}`` on an error status
        """
        resp = self._client.post(
            "/assistant/speech-to-text",
            files={"audio": (filename, audio, content_type)},
        )
        if resp.is_error:
            logger.warning("Speech-to-text failed (%d): %s", resp.status_code, resp.text)
        return resp.json()

    def send_audio(
        self,
        audio: bytes,
        filename: str = "audio.webm",
        content_type: str = "audio/webm",
    ) -> VoiceResult:
        """
        Transcribe a recording, then run the transcript as a query.

        Never raises: failures come back as a VoiceResult with ``error`` set.
        The query endpoint is not called when nothing was recognized.
        """
        try:
            stt = self.speech_to_text(audio, filename, content_type)
            text = (stt.get("text") or "").strip()
            if not text:
                return VoiceResult(text="", error=NOT_RECOGNIZED)

            result = self.query(text)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Voice query failed: %s", e)
            return VoiceResult(text="", error=str(e))

        return VoiceResult(text=text, confidence=stt.get("confidence"), result=result)
