"""Exceptions raised by content providers."""


class SafariError(Exception):
    """Base exception for spelling safari errors."""
    pass


class ContentFetchFailed(SafariError):
    """Sentence generation failed or returned unusable content.

    ``raw_text`` carries the response body when the provider answered but
    the body could not be decoded; the session then shows it as the
    sentence instead of giving up on the round.
    """

    def __init__(self, message: str, raw_text: str = None):
        super().__init__(message)
        self.raw_text = raw_text


class AnalysisFailed(SafariError):
    """Mistake analysis request failed."""
    pass
