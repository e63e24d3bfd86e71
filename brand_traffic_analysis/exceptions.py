"""Exceptions raised by brand traffic analysis."""


class BrandTrafficError(Exception):
    """Base exception for brand traffic analysis"""

    pass


class DatasetRejectedError(BrandTrafficError):
    """The uploaded dataset cannot be analyzed at all"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
