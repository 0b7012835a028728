# exceptions.py


class StatlabError(Exception):
    """Base class for errors raised by statlab."""


class ParseError(StatlabError, ValueError):
    """A dataset field (usually a timestamp) could not be parsed."""


class UndefinedStatisticError(StatlabError, ArithmeticError):
    """A statistic has a zero denominator for the given counts."""
