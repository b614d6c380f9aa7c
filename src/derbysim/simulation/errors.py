"""Precondition violations raised by the race engine."""


class RaceError(Exception):
    """Base class for race engine errors."""


class RaceSetupError(RaceError, ValueError):
    """Race cannot start with the given field."""


class UnknownRacerError(RaceError, KeyError):
    """A racer id that is not part of the race."""


class RaceNotCompleteError(RaceError, RuntimeError):
    """Result requested before every racer finished."""


class ClockError(RaceError, ValueError):
    """Wall clock moved backwards between ticks."""


class RaceStalledError(RaceError, RuntimeError):
    """Headless run exceeded its tick budget."""
