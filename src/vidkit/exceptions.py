"""Exception hierarchy for vidkit.

Filename parsing and template rendering never raise; these exceptions come
from the collaborators around them (configuration, ffprobe, metadata
providers) and are caught per file by the rename pipeline.
"""


class VidkitError(Exception):
    """Base exception for all vidkit errors."""


class ConfigError(VidkitError):
    """Raised when the configuration is invalid or cannot be read/written."""


class ProbeError(VidkitError):
    """Raised when ffprobe fails or returns output that cannot be parsed."""


class ProviderError(VidkitError):
    """Base exception for metadata provider failures."""


class ProviderAPIError(ProviderError):
    """Exception for transport, HTTP status or response decoding failures."""


class NotFoundError(ProviderError):
    """Exception for when a search returns no results."""


class UnsupportedLookupError(ProviderError):
    """Raised when a provider is asked for a media type it does not serve.

    OMDb only answers movie lookups; TVMaze and TVDb only answer TV
    lookups.
    """
