"""Errors raised by the game services.

Input errors (``OutOfRangeOrNotANumber``, ``DuplicateGuess``) are recoverable:
the guess is rejected and the session is left as it was. ``SessionAlreadyComplete``
is a caller bug. ``StorageError`` wraps failures of the score store.
"""


class GameError(Exception):
    code = 'game_error'
    status = 400

    def __init__(self, message: str = ''):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {'error': self.message, 'code': self.code}


class InvalidPlayerName(GameError):
    code = 'invalid_player_name'


class OutOfRangeOrNotANumber(GameError):
    code = 'out_of_range_or_not_a_number'


class DuplicateGuess(GameError):
    code = 'duplicate_guess'


class SessionAlreadyComplete(GameError):
    code = 'session_already_complete'
    status = 409


class SessionNotFound(GameError):
    code = 'session_not_found'
    status = 404


class StorageError(Exception):
    code = 'storage_error'
    status = 503

    def to_dict(self):
        return {'error': str(self) or 'Score storage unavailable', 'code': self.code}
