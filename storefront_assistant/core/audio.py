"""
Audio processing utilities.
"""

import base64
import io
import shutil
import subprocess

import numpy as np

# Players tried in order for client-side playback, with their quiet flags
AUDIO_PLAYERS = {
    "ffplay": ["-nodisp", "-autoexit", "-loglevel", "quiet"],
    "mpg123": ["-q"],
    "paplay": [],
    "afplay": [],
}


def bytes_to_audio(wav_bytes: bytes) -> tuple[np.ndarray, int]:
    """
    Convert WAV bytes to audio array.

    Args:
        wav_bytes: WAV file bytes

    Returns:
        Tuple of (audio data, sample rate)
    """
    from scipy.io import wavfile

    buffer = io.BytesIO(wav_bytes)
    sample_rate, audio = wavfile.read(buffer)
    return audio, sample_rate


def to_mono_int16(audio: np.ndarray) -> np.ndarray:
    """Downmix to mono and convert to int16 PCM."""
    is_float = np.issubdtype(audio.dtype, np.floating)
    if audio.ndim > 1:
        audio = audio.mean(axis=1)

    if audio.dtype == np.int16:
        return audio
    if is_float:
        return np.clip(audio * 32767, -32768, 32767).astype(np.int16)
    return np.clip(audio, -32768, 32767).astype(np.int16)


def resample_audio(
    audio: np.ndarray,
    original_rate: int,
    target_rate: int,
) -> np.ndarray:
    """
    Resample audio to a different sample rate.

    Args:
        audio: Audio data
        original_rate: Original sample rate
        target_rate: Target sample rate

    Returns:
        Resampled audio
    """
    if original_rate == target_rate:
        return audio

    from scipy import signal

    num_samples = int(len(audio) * target_rate / original_rate)
    resampled = signal.resample(audio, num_samples)

    if audio.dtype == np.int16:
        resampled = np.clip(resampled, -32768, 32767).astype(np.int16)

    return resampled


def decode_with_ffmpeg(data: bytes, sample_rate: int = 16000) -> np.ndarray:
    """
    Decode any container ffmpeg understands (webm, ogg, mp3...) to PCM.

    Args:
        data: Encoded audio bytes
        sample_rate: Output sample rate in Hz

    Returns:
        Mono int16 PCM samples

    Raises:
        RuntimeError: If ffmpeg is missing or fails to decode
    """
    if shutil.which("ffmpeg") is None:
        raise RuntimeError("ffmpeg not found. Install ffmpeg to decode compressed audio.")

    proc = subprocess.run(
        [
            "ffmpeg", "-loglevel", "error",
            "-i", "pipe:0",
            "-ac", "1",
            "-ar", str(sample_rate),
            "-acodec", "pcm_s16le",
            "-f", "s16le",
            "pipe:1",
        ],
        input=data,
        capture_output=True,
        check=False,
    )
    if proc.returncode != 0:
        raise RuntimeError(f"ffmpeg error: {proc.stderr.decode(errors='ignore').strip()}")

    return np.frombuffer(proc.stdout, dtype=np.int16)


def decode_audio(data: bytes, sample_rate: int = 16000) -> np.ndarray:
    """
    Decode an uploaded recording to mono int16 PCM at the given rate.

    WAV is read directly; other formats go through ffmpeg.
    """
    if data[:4] == b"RIFF":
        audio, original_rate = bytes_to_audio(data)
        return resample_audio(to_mono_int16(audio), original_rate, sample_rate)

    return decode_with_ffmpeg(data, sample_rate)


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode bytes as a base64 data URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_uri(uri: str) -> tuple[str, bytes]:
    """
    Split a base64 data URI into MIME type and payload.

    Raises:
        ValueError: If the URI is not a base64 data URI
    """
    if not uri.startswith("data:") or ";base64," not in uri:
        raise ValueError("Not a base64 data URI")

    header, body = uri[5:].split(";base64,", 1)
    return header, base64.b64decode(body)


def find_audio_player() -> list[str] | None:
    """
    Find a command-line audio player.

    Returns:
        Player command prefix (without the file argument), or None
    """
    for player, flags in AUDIO_PLAYERS.items():
        if shutil.which(player):
            return [player, *flags]
    return None
