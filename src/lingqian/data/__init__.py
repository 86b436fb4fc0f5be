"""Sign data and translation loading."""

from lingqian.data.repository import SignRepository, TranslationCatalog

__all__ = ["SignRepository", "TranslationCatalog"]
