"""
STT backend registry for discovery and instantiation.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront_assistant.stt.base import STTBackend

# Registry of available backends
_stt_backends: dict[str, type["STTBackend"]] = {}


def register_stt_backend(name: str):
    """
    Decorator to register an STT backend.

    Args:
        name: Backend name (e.g., "vosk")

    Example:
        @register_stt_backend("vosk")
        class VoskBackend(STTBackend):
            ...
    """

    def decorator(cls: type["STTBackend"]) -> type["STTBackend"]:
        cls.name = name
        _stt_backends[name] = cls
        return cls

    return decorator


def get_stt_backend(name: str) -> "STTBackend":
    """
    Get an STT backend instance by name.

    Args:
        name: Backend name

    Returns:
        STTBackend instance

    Raises:
        ValueError: If backend not found
    """
    _discover_backends()

    if name not in _stt_backends:
        available = ", ".join(_stt_backends.keys())
        raise ValueError(f"STT backend '{name}' not found. Available: {available}")

    return _stt_backends[name]()


def list_stt_backends() -> list[dict]:
    """
    List all available STT backends.

    Returns:
        List of backend info dictionaries
    """
    _discover_backends()

    result = []
    for name, cls in _stt_backends.items():
        result.append({
            "name": name,
            "class": cls.__name__,
            "sample_rate": getattr(cls, "sample_rate", 16000),
        })
    return result


def _discover_backends() -> None:
    """Import bundled backends so they self-register."""
    # Vosk backend (offline Kaldi recognizer)
    try:
        from storefront_assistant.stt import vosk  # noqa: F401
    except ImportError:
        pass
