"""One round of the guessing game.

A ``GameSession`` is an immutable value. ``submit_guess`` returns the next
session together with the recorded ``GuessEntry``; a rejected guess raises and
leaves the caller's session exactly as it was.
"""

import random
import re
import string
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Tuple

from .errors import (
    DuplicateGuess,
    InvalidPlayerName,
    OutOfRangeOrNotANumber,
    SessionAlreadyComplete,
)
from .ranking import Score


MIN_NUMBER = 1
MAX_NUMBER = 100
MAX_PLAYER_NAME_LENGTH = 64

AWAITING_GUESS = 'awaiting_guess'
WON = 'won'

LOW = 'low'
HIGH = 'high'
CORRECT = 'correct'

# ASCII digits only; leading zeros are skipped so at most three digits reach int()
_INT_RE = re.compile(r"^([+-]?)0*([0-9]{1,3})\Z")


@dataclass(frozen=True)
class GuessEntry:
    number: int
    result: str  # low, high, correct
    timestamp: float

    def to_dict(self):
        return {'number': self.number, 'result': self.result, 'timestamp': self.timestamp}


def normalize_player_name(name) -> str:
    """Trim a player name, rejecting empty or overlong names."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidPlayerName('Player name is required')
    name = name.strip()
    if len(name) > MAX_PLAYER_NAME_LENGTH:
        raise InvalidPlayerName(f'Player name must be at most {MAX_PLAYER_NAME_LENGTH} characters')
    return name


def parse_guess(raw) -> int:
    if isinstance(raw, bool):
        raise OutOfRangeOrNotANumber(f'Enter a number between {MIN_NUMBER} and {MAX_NUMBER}')
    match = _INT_RE.match(raw.strip()) if isinstance(raw, str) else None
    if isinstance(raw, int):
        number = raw
    elif match:
        sign, digits = match.groups()
        number = int(sign + digits)
    else:
        raise OutOfRangeOrNotANumber(f'Enter a number between {MIN_NUMBER} and {MAX_NUMBER}')
    if not MIN_NUMBER <= number <= MAX_NUMBER:
        raise OutOfRangeOrNotANumber(f'Enter a number between {MIN_NUMBER} and {MAX_NUMBER}')
    return number


def classify(number: int, target: int) -> str:
    if number > target:
        return HIGH
    if number < target:
        return LOW
    return CORRECT


def generate_session_id(length=8, rng=random):
    return ''.join(rng.choices(string.ascii_uppercase + string.digits, k=length))


@dataclass(frozen=True)
class GameSession:
    session_id: str
    player_name: str
    target: int = field(repr=False)
    started_at: float
    state: str = AWAITING_GUESS
    history: Tuple[GuessEntry, ...] = ()
    finished_at: Optional[float] = None
    clock: Callable[[], float] = field(default=time.time, repr=False, compare=False)

    @classmethod
    def start(cls, player_name, clock: Callable[[], float] = time.time, rng=random, session_id=None):
        """Begin a round with a uniformly drawn hidden target."""
        name = normalize_player_name(player_name)
        return cls(
            session_id=session_id or generate_session_id(rng=rng),
            player_name=name,
            target=rng.randint(MIN_NUMBER, MAX_NUMBER),
            started_at=clock(),
            clock=clock,
        )

    @property
    def is_won(self) -> bool:
        return self.state == WON

    @property
    def attempts(self) -> int:
        return len(self.history)

    @property
    def score(self) -> Optional[Score]:
        if not self.is_won:
            return None
        elapsed = max(0.0, self.finished_at - self.started_at)
        return Score(attempts=self.attempts, time_seconds=round(elapsed, 2))

    def submit_guess(self, raw, now: Optional[float] = None) -> Tuple['GameSession', GuessEntry]:
        if self.is_won:
            raise SessionAlreadyComplete('This round is already won')
        number = parse_guess(raw)
        if any(e.number == number for e in self.history):
            raise DuplicateGuess(f'{number} was already guessed')

        now = self.clock() if now is None else now
        entry = GuessEntry(number=number, result=classify(number, self.target), timestamp=now)
        changes = {'history': (entry,) + self.history}
        if entry.result == CORRECT:
            changes['state'] = WON
            changes['finished_at'] = now
        return replace(self, **changes), entry

    def elapsed_display(self, now: Optional[float] = None) -> int:
        """Whole seconds on the running counter; stops once the round is won."""
        if self.is_won:
            end = self.finished_at
        else:
            end = self.clock() if now is None else now
        return max(0, int(end - self.started_at))

    def to_dict(self, now: Optional[float] = None):
        score = self.score
        return {
            'session_id': self.session_id,
            'player_name': self.player_name,
            'state': self.state,
            'attempts': self.attempts,
            'history': [e.to_dict() for e in self.history],
            'elapsed_seconds': self.elapsed_display(now),
            'score': score.to_dict() if score else None,
            # Only revealed after the winning guess
            'target': self.target if self.is_won else None,
        }
