"""
Storefront Assistant - rule-based shopping assistant with spoken responses.
"""

import logging

# Suppress chatty third-party loggers for cleaner output
logging.getLogger("gtts").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

__version__ = "0.1.0"

from storefront_assistant.assistant.handler import QueryHandler
from storefront_assistant.core.engine import SpeechEngine

__all__ = ["QueryHandler", "SpeechEngine", "__version__"]
