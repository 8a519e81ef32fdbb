"""
Audio playback for assistant responses.
"""

import asyncio
import logging
import mimetypes
import os
import tempfile
from abc import ABC, abstractmethod

from storefront_assistant.core.audio import find_audio_player, parse_data_uri

logger = logging.getLogger(__name__)


class PlaybackError(RuntimeError):
    """Raised when a response clip cannot be played."""


class AudioPlayer(ABC):
    """Plays a response clip; ``play`` completes when the clip ends."""

    @abstractmethod
    async def play(self, payload: str) -> None:
        """
        Play a data-URI payload.

        Raises:
            PlaybackError: If the clip cannot be decoded or played
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the current clip, if any."""
        pass


class NullAudioPlayer(AudioPlayer):
    """Player that plays nothing, for headless use."""

    async def play(self, payload: str) -> None:
        return None

    def stop(self) -> None:
        return None


class SubprocessAudioPlayer(AudioPlayer):
    """
    Plays clips through a command-line player (ffplay, mpg123, paplay...).

    The clip is written to a temporary file; ``stop`` terminates the player
    process, which makes the pending ``play`` return.
    """

    def __init__(self, command: list[str] | None = None):
        """
        Args:
            command: Player command prefix (auto-detected if None)
        """
        self._command = command or find_audio_player()
        self._proc: asyncio.subprocess.Process | None = None

    async def play(self, payload: str) -> None:
        if not self._command:
            raise PlaybackError("No audio player found (install ffmpeg or mpg123)")

        try:
            mime_type, data = parse_data_uri(payload)
        except ValueError as e:
            raise PlaybackError(str(e)) from e

        suffix = mimetypes.guess_extension(mime_type) or ".audio"
        with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as f:
            f.write(data)
            path = f.name

        try:
            self._proc = await asyncio.create_subprocess_exec(
                *self._command,
                path,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            returncode = await self._proc.wait()
        except asyncio.CancelledError:
            if self._proc is not None:
                if self._proc.returncode is None:
                    self._proc.terminate()
                await self._proc.wait()
            raise
        finally:
            self._proc = None
            os.unlink(path)

        # Negative return codes mean the player was terminated by stop()
        if returncode > 0:
            raise PlaybackError(f"{self._command[0]} exited with code {returncode}")

    def stop(self) -> None:
        if self._proc is not None and self._proc.returncode is None:
            logger.debug("Stopping playback")
            self._proc.terminate()
