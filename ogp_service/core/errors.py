"""
Error taxonomy for the OGP image service.

Every OGPError carries the HTTP status it is answered with. None of them are
retried; the request that observed the error terminates with that status.
"""


class OGPError(Exception):
    """Base class for request-terminating errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingParameter(OGPError):
    status_code = 400

    def __init__(self, name: str):
        super().__init__(f"`{name}` parameter is required")
        self.name = name


class UpstreamFetchFailed(OGPError):
    """The title source was unreachable (500) or answered with a non-success status (propagated)."""

    def __init__(self, url: str, status_code: int = 500):
        super().__init__(f"Failed to fetch page: {url}", status_code=status_code)
        self.url = url


class TitleExtractionFailed(OGPError):
    status_code = 500

    def __init__(self, message: str = "Failed to extract page title"):
        super().__init__(message)


class UnknownVariant(OGPError):
    status_code = 404

    def __init__(self, variant: str):
        super().__init__(f"Variant not found: {variant}")
        self.variant = variant


class AssetNotFound(OGPError):
    status_code = 500

    def __init__(self, path: str):
        super().__init__(f"Failed to fetch asset: {path}")
        self.path = path


class CacheStoreUnavailable(OGPError):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(f"Blob store unavailable: {detail}")


class StoreError(Exception):
    """A blob store operation failed but the store itself answered."""


class StoreUnavailable(StoreError):
    """The blob store could not be reached at all."""
