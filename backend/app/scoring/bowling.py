"""Ten-pin bowling scoring engine.

Frames are immutable values; every function returns new frames instead of
mutating its input so callers can persist the result (or discard it) as they
see fit. An unset roll or an unresolved score is always ``None``, never ``0``.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

FRAME_COUNT = 10
PIN_COUNT = 10


class RollError(ValueError):
    """Base class for rolls the engine refuses to record."""

    code = "roll_error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidPinCount(RollError):
    code = "invalid_pin_count"


class InvalidRoll(RollError):
    code = "invalid_roll"


class GameAlreadyComplete(RollError):
    code = "game_already_complete"

    def __init__(self, detail: str = "game is already complete") -> None:
        super().__init__(detail)


@dataclass(frozen=True)
class Frame:
    number: int
    roll1: Optional[int] = None
    roll2: Optional[int] = None
    roll3: Optional[int] = None
    score: Optional[int] = None

    @property
    def is_last(self) -> bool:
        return self.number == FRAME_COUNT


def new_frames() -> List[Frame]:
    """Return ten empty frames numbered 1..10."""

    return [Frame(number=n) for n in range(1, FRAME_COUNT + 1)]


def _ordered(frames: Sequence[Frame]) -> List[Frame]:
    ordered = sorted(frames, key=lambda f: f.number)
    if [f.number for f in ordered] != list(range(1, FRAME_COUNT + 1)):
        raise ValueError(f"expected frames numbered 1..{FRAME_COUNT}")
    return ordered


def is_strike(frame: Frame) -> bool:
    return frame.roll1 == PIN_COUNT


def is_spare(frame: Frame) -> bool:
    if frame.roll1 is None or frame.roll2 is None or is_strike(frame):
        return False
    return frame.roll1 + frame.roll2 == PIN_COUNT


def is_complete(frame: Frame) -> bool:
    """Return ``True`` once ``frame`` has received every roll it is allowed."""

    if frame.roll1 is None:
        return False
    if not frame.is_last:
        return is_strike(frame) or frame.roll2 is not None
    if frame.roll2 is None:
        return False
    if frame.roll1 + frame.roll2 >= PIN_COUNT:
        return frame.roll3 is not None
    return True


def is_game_complete(frames: Sequence[Frame]) -> bool:
    return all(is_complete(f) for f in _ordered(frames))


def _check_pins(pins: int) -> None:
    # bool is a subclass of int
    if isinstance(pins, bool) or not isinstance(pins, int):
        raise InvalidPinCount(f"pins must be an integer, got {pins!r}")
    if not 0 <= pins <= PIN_COUNT:
        raise InvalidPinCount(f"pins must be between 0 and {PIN_COUNT}, got {pins}")


def _fill(frame: Frame, pins: int) -> Frame:
    if frame.roll1 is None:
        return replace(frame, roll1=pins)

    if frame.roll2 is None:
        # A fresh rack is only set up after a strike in the tenth frame.
        if not (frame.is_last and is_strike(frame)) and frame.roll1 + pins > PIN_COUNT:
            raise InvalidRoll(
                f"frame {frame.number}: {frame.roll1} + {pins} exceeds {PIN_COUNT} pins"
            )
        return replace(frame, roll2=pins)

    if not frame.is_last:
        raise InvalidRoll(f"frame {frame.number} does not allow a third roll")
    if frame.roll3 is not None or frame.roll1 + frame.roll2 < PIN_COUNT:
        raise InvalidRoll(f"frame {frame.number} has no bonus roll left")
    if is_strike(frame) and frame.roll2 < PIN_COUNT and frame.roll2 + pins > PIN_COUNT:
        raise InvalidRoll(
            f"frame {frame.number}: {frame.roll2} + {pins} exceeds {PIN_COUNT} pins"
        )
    return replace(frame, roll3=pins)


def record_roll(frames: Sequence[Frame], pins: int) -> List[Frame]:
    """Apply one roll to the first incomplete frame.

    Returns a new list of frames in which exactly one roll slot differs from
    ``frames``. Raises :class:`InvalidPinCount`, :class:`InvalidRoll` or
    :class:`GameAlreadyComplete`; the input is never modified.
    """

    _check_pins(pins)
    ordered = _ordered(frames)
    for i, frame in enumerate(ordered):
        if not is_complete(frame):
            updated = list(ordered)
            updated[i] = _fill(frame, pins)
            return updated
    raise GameAlreadyComplete()


def _frame_value(frames: List[Frame], i: int) -> Optional[int]:
    f = frames[i]
    if f.is_last:
        if not is_complete(f):
            return None
        return f.roll1 + f.roll2 + (f.roll3 or 0)

    nxt = frames[i + 1]
    if is_strike(f):
        if nxt.roll1 is None:
            return None
        if is_strike(nxt) and not nxt.is_last:
            second = frames[i + 2].roll1
        else:
            second = nxt.roll2
        if second is None:
            return None
        return PIN_COUNT + nxt.roll1 + second

    if f.roll2 is None:
        return None
    if is_spare(f):
        if nxt.roll1 is None:
            return None
        return PIN_COUNT + nxt.roll1
    return f.roll1 + f.roll2


def compute_scores(frames: Sequence[Frame]) -> List[Tuple[int, Optional[int]]]:
    """Return ``(frame number, cumulative score)`` pairs for all ten frames.

    Scoring stops at the first frame that has not been started or whose
    strike/spare bonus cannot be resolved yet; that frame and every later one
    get ``None``.
    """

    ordered = _ordered(frames)
    scores: List[Tuple[int, Optional[int]]] = []
    total: Optional[int] = 0
    for i, frame in enumerate(ordered):
        if total is not None:
            value = None if frame.roll1 is None else _frame_value(ordered, i)
            total = None if value is None else total + value
        scores.append((frame.number, total))
    return scores


def apply_scores(frames: Sequence[Frame]) -> List[Frame]:
    """Return ``frames`` with each ``score`` replaced by its computed value."""

    ordered = _ordered(frames)
    scores = dict(compute_scores(ordered))
    return [replace(f, score=scores[f.number]) for f in ordered]


def final_score(frames: Sequence[Frame]) -> Optional[int]:
    return compute_scores(frames)[-1][1]
