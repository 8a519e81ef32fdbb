"""LRU cache for synthesized audio, so repeated sentences are not re-synthesized."""

import hashlib
from collections import OrderedDict
from typing import Optional

from storefront_assistant.tts.base import SynthesisResult


class TTSCache:
    """LRU cache for synthesized clips keyed by text, voice and language."""

    def __init__(self, max_entries: int = 64, max_text_len: int = 120):
        self._max_entries = max_entries
        self._max_text_len = max_text_len
        self._cache: OrderedDict[str, SynthesisResult] = OrderedDict()

    def __len__(self) -> int:
        return len(self._cache)

    @staticmethod
    def _key(text: str, voice: str, lang: str) -> str:
        raw = f"{text}|{voice}|{lang}"
        return hashlib.md5(raw.encode()).hexdigest()

    def get(self, text: str, voice: str, lang: str) -> Optional[SynthesisResult]:
        if len(text) > self._max_text_len:
            return None
        key = self._key(text, voice, lang)
        if key in self._cache:
            self._cache.move_to_end(key)
            return self._cache[key]
        return None

    def put(self, text: str, voice: str, lang: str, result: SynthesisResult) -> None:
        if self._max_entries <= 0 or len(text) > self._max_text_len:
            return
        key = self._key(text, voice, lang)
        self._cache[key] = result
        self._cache.move_to_end(key)
        while len(self._cache) > self._max_entries:
            self._cache.popitem(last=False)

    def clear(self) -> None:
        self._cache.clear()
