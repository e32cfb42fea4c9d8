"""Exception types raised by the export core."""


class BookpressError(Exception):
    """Base class for all export errors."""


class FatalInputError(BookpressError):
    """An essential artifact (plain text, metadata) cannot be produced.

    The whole export is rejected; there is no fallback entry for it.
    """


class DegradedArtifactError(BookpressError):
    """A non-essential artifact failed and may be replaced by a diagnostic note."""


class SerializationError(DegradedArtifactError):
    """The abstract document could not be rendered to the output format."""


class FontResourceError(DegradedArtifactError):
    """A font file required for rendering is missing or unreadable."""


class ConfigurationError(BookpressError, ValueError):
    """Page geometry or style values that cannot produce a valid layout."""
