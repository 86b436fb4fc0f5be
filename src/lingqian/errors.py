"""Exception hierarchy for LINGQIAN."""


class LingqianError(Exception):
    """Base class for all LINGQIAN errors."""


class SignDataError(LingqianError):
    """Sign data could not be loaded, even from the default language."""


class CardError(LingqianError):
    """A card render was aborted. No partial image is produced."""


class MeasurementError(CardError):
    """The drawing surface could not report text metrics."""


class QRGenerationError(CardError):
    """The QR inset could not be generated."""


class CardRenderError(CardError):
    """Painting or serializing the card failed."""
