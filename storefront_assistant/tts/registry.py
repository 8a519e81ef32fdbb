"""
TTS backend registry for discovery and instantiation.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront_assistant.tts.base import TTSBackend

# Registry of available backends
_tts_backends: dict[str, type["TTSBackend"]] = {}


def register_tts_backend(name: str):
    """
    Decorator to register a TTS backend.

    Args:
        name: Backend name (e.g., "gtts")

    Example:
        @register_tts_backend("gtts")
        class GTTSBackend(TTSBackend):
            ...
    """

    def decorator(cls: type["TTSBackend"]) -> type["TTSBackend"]:
        cls.name = name
        _tts_backends[name] = cls
        return cls

    return decorator


def get_tts_backend(name: str) -> "TTSBackend":
    """
    Get a TTS backend instance by name.

    Args:
        name: Backend name

    Returns:
        TTSBackend instance

    Raises:
        ValueError: If backend not found
    """
    _discover_backends()

    if name not in _tts_backends:
        available = ", ".join(_tts_backends.keys())
        raise ValueError(f"TTS backend '{name}' not found. Available: {available}")

    return _tts_backends[name]()


def list_tts_backends() -> list[dict]:
    """
    List all available TTS backends.

    Returns:
        List of backend info dictionaries
    """
    _discover_backends()

    result = []
    for name, cls in _tts_backends.items():
        result.append({
            "name": name,
            "class": cls.__name__,
            "mime_type": getattr(cls, "mime_type", ""),
            "requires_network": getattr(cls, "requires_network", False),
        })
    return result


def _discover_backends() -> None:
    """Import bundled backends so they self-register."""
    # gTTS backend (Google Translate TTS)
    try:
        from storefront_assistant.tts import gtts  # noqa: F401
    except ImportError:
        pass
