"""Sign data and UI translation loading.

Sign data lives in ``data.json`` for the default language and
``data-<lang>.json`` for the others; translations in ``<lang>.json`` under
the language directory. A language whose file is missing, unreadable or
empty falls back to the default language.
"""

import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from lingqian.core.sign import SignRecord
from lingqian.errors import SignDataError

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class SignRepository:
    """Loads and caches sign records per language."""

    def __init__(self, data_dir: Path, default_language: str = "zh"):
        self.data_dir = Path(data_dir)
        self.default_language = default_language
        self._cache: Dict[str, List[SignRecord]] = {}

    def data_file(self, language: str) -> Path:
        if language == self.default_language:
            return self.data_dir / "data.json"
        return self.data_dir / f"data-{language.lower()}.json"

    def _read(self, language: str) -> List[SignRecord]:
        path = self.data_file(language)
        try:
            raw = _read_json(path)
        except (OSError, ValueError) as exc:
            logger.warning(f"Sign data for {language} ({path.name}) failed to load: {exc}")
            return []

        if not isinstance(raw, list):
            logger.warning(f"Sign data for {language} ({path.name}) is not a list")
            return []
        return [SignRecord.from_dict(entry) for entry in raw if isinstance(entry, dict)]

    def load(self, language: str) -> List[SignRecord]:
        """Signs for a language, falling back to the default language.

        Raises:
            SignDataError: if the default language has no usable data
        """
        cached = self._cache.get(language)
        if cached:
            return cached

        signs = self._read(language)
        if signs:
            self._cache[language] = signs
            return signs

        if language == self.default_language:
            raise SignDataError(
                f"Sign data for default language {language} is missing or empty"
            )

        logger.warning(f"Falling back to {self.default_language} sign data for {language}")
        signs = self.load(self.default_language)
        self._cache[language] = signs
        return signs

    def draw(self, language: str, rng: Optional[random.Random] = None) -> SignRecord:
        """Draw a random sign."""
        signs = self.load(language)
        return (rng or random).choice(signs)

    def find(self, language: str, sign_id: str) -> Optional[SignRecord]:
        """Look up a sign by id, e.g. to keep it when switching language."""
        for sign in self.load(language):
            if sign.id == str(sign_id):
                return sign
        return None

    def clear_cache(self) -> None:
        self._cache.clear()


class TranslationCatalog:
    """Loads flat key -> string UI translations per language."""

    def __init__(self, lang_dir: Path, default_language: str = "zh"):
        self.lang_dir = Path(lang_dir)
        self.default_language = default_language

    def load(self, language: str) -> Dict[str, str]:
        """Translations for a language; the default language's, or ``{}``."""
        path = self.lang_dir / f"{language.lower()}.json"
        try:
            raw = _read_json(path)
            if not isinstance(raw, dict):
                raise ValueError("translation file is not an object")
        except (OSError, ValueError) as exc:
            logger.warning(f"Translations for {language} not loaded: {exc}")
            if language != self.default_language:
                return self.load(self.default_language)
            return {}
        return {str(k): str(v) for k, v in raw.items() if v is not None}
