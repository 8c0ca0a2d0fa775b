"""
Custom exceptions for all layers.

Hierarchy:
- SessionError (base: anything that makes the server decline an inbound event)
  - PuzzleError
    - PuzzleStateError (operation not allowed in the current puzzle state)
    - UnknownPieceError
  - PointerError
    - UnknownUserError
  - RepositoryError
  - InvalidRequestError (malformed payload)
"""


class SessionError(Exception):
    """Top level exception. The router declines any event that raises one of these."""


class PuzzleError(SessionError):
    """Something went wrong in the puzzle domain."""


class PuzzleStateError(PuzzleError):
    """Operation attempted outside of the puzzle state where it is valid."""


class UnknownPieceError(PuzzleError):
    """Piece id does not exist in the current puzzle."""


class PointerError(SessionError):
    """Something went wrong in the pointer registry."""


class UnknownUserError(PointerError):
    """Connection id has no pointer registered."""


class RepositoryError(SessionError):
    """Persistence layer could not fulfil the request."""


class InvalidRequestError(SessionError):
    """Payload of an inbound message is missing fields or has the wrong shape."""
