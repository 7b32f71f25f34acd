"""Exception hierarchy shared by every layer."""


class HanziSrsError(Exception):
    """Base class for all hanzi-srs errors."""


class InvalidQualityError(HanziSrsError, ValueError):
    """A review quality outside the integer range 0..5 was supplied."""

    def __init__(self, quality: object):
        self.quality = quality
        super().__init__(f"Quality must be an integer between 0 and 5, got {quality!r}")


class ProgressStoreError(HanziSrsError):
    """Persisting the progress set failed. In-memory progress is still valid."""


class VocabularyError(HanziSrsError):
    """The vocabulary source could not be loaded."""
