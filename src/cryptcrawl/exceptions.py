class CryptCrawlError(Exception):
    """Base exception for the cryptcrawl simulation core."""


class MapGenerationFailed(CryptCrawlError):
    """Raised when level generation accepted no room, leaving no stairs target."""


class OutOfBoundsIndex(CryptCrawlError, IndexError):
    """Raised when a coordinate or linear index falls outside the grid."""


class MissingRequiredComponent(CryptCrawlError):
    """Raised when a system touches an entity lacking a component it requires."""


class UndeclaredComponentAccess(CryptCrawlError):
    """Raised when a system reads or writes a table it did not declare."""


class PipelineOrderError(CryptCrawlError):
    """Raised when a turn pipeline would run a consumer before its producers."""
