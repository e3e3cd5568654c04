"""Translator interface, a fallback group and the module-wide translator."""

from __future__ import annotations

import abc
from typing import Optional

TR_NAME_GOOGLE = "google"
TR_NAME_AI = "ai"


class TranslateError(Exception):
    """Raised when a translation cannot be produced."""


class Translator(abc.ABC):
    """Something that translates text between languages."""

    @abc.abstractmethod
    def name(self) -> str:
        """Short name of the translator."""

    @abc.abstractmethod
    def translate(self, wording: str, src_lang: str, dst_lang: str) -> str:
        """Translate ``wording`` from ``src_lang`` to ``dst_lang``."""


class TranslatorGroup(Translator):
    """Tries each translator in turn and returns the first non-empty result."""

    def __init__(self, *args: Translator) -> None:
        self._translators = list(args)

    def name(self) -> str:
        return "G:[{}]".format(",".join(t.name() for t in self._translators))

    def translate(self, wording: str, src_lang: str, dst_lang: str) -> str:
        last_error: Optional[TranslateError] = None
        for translator in self._translators:
            try:
                result = translator.translate(wording, src_lang, dst_lang)
            except Exception as exc:
                last_error = TranslateError(
                    f"call {translator.name()} for translate failed, err:{exc}"
                )
                last_error.__cause__ = exc
                continue
            if not result:
                last_error = TranslateError(f"translator:{translator.name()} return no data")
                continue
            return result
        if last_error is not None:
            raise last_error
        return ""


class _TranslatorSlot:
    """Holds the module-wide translator."""

    def __init__(self) -> None:
        self.impl: Optional[Translator] = None


_slot = _TranslatorSlot()


def set_translator(translator: Optional[Translator]) -> Optional[Translator]:
    """Install the module-wide translator (None disables it); return the previous one."""
    if translator is not None:
        for method in ("name", "translate"):
            if not callable(getattr(translator, method, None)):
                raise TypeError(f"translator lacks method: {method}")
    previous = _slot.impl
    _slot.impl = translator
    return previous


def is_translator_enabled() -> bool:
    return _slot.impl is not None


def translate(text: str, src_lang: str, dst_lang: str) -> str:
    """Translate with the module-wide translator."""
    if _slot.impl is None:
        raise TranslateError("no translator configured")
    return _slot.impl.translate(text, src_lang, dst_lang)