"""Exceptions raised by labelkit collaborators."""


class LabelkitError(Exception):
    """Base class for labelkit errors."""


class StoreError(LabelkitError):
    """A bookmark store rejected or failed a request."""


class StoreUnavailableError(StoreError):
    """The bookmark store cannot be reached at all."""


class SuggestionProviderError(LabelkitError):
    """The suggestion provider failed to produce suggestions."""
