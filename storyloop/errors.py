"""Error types shared across the session engine."""


class StoryloopError(Exception):
    """Base class for all Storyloop errors."""


class ChatFailure(StoryloopError):
    """The text-completion service could not produce a response.

    Raised for transport errors and for empty or malformed responses.
    The turn is abandoned: history is left untouched and nothing is saved.
    """

    def __init__(self, cause: str):
        super().__init__(cause)
        self.cause = cause


class PersistenceFailure(StoryloopError):
    """Writing the session file failed.

    The previously committed file is left intact and the in-memory session
    is kept so the player can retry.
    """


class CorruptSaveFailure(StoryloopError):
    """The session file exists but is not a structurally valid session."""
