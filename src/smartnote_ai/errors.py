class SmartNoteError(Exception):
    """Base class for errors surfaced to the HTTP layer."""


class DraftValidationError(SmartNoteError):
    """The draft list is empty or malformed. Raised before any store access."""


class UpstreamUnavailable(SmartNoteError):
    """The AI analysis service is unreachable or returned an unusable response."""


class DuplicateKeyError(SmartNoteError):
    """The store rejected a create because (owner, folded name) already exists."""


class InternalError(SmartNoteError):
    """An unrecoverable failure while importing a draft."""
