"""Exceptions raised by the ADS client and result pipeline."""


class AdsError(Exception):
    """Base exception for all adsbib errors."""


class AuthError(AdsError):
    """No token configured, or the service rejected it."""


class TransportError(AdsError):
    """Network or HTTP failure talking to the service."""


class NotFoundError(AdsError):
    """The request succeeded but returned no record."""


class MalformedUpstreamError(AdsError):
    """A legacy listing row did not have the expected shape.

    Raised and absorbed inside the normalizer; callers never see it.
    """
