# conjax/errors.py


class ConjaxError(Exception):
    """base class for all errors raised by conjax"""


class ConstructionError(ConjaxError, ValueError):
    """a distribution could not be built from the given parameters"""


class InvalidParameter(ConstructionError):
    """
    A single parameter failed validation.
    :param name: name of the offending parameter
    :param reason: what the value should have been
    """
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"'{name}' {reason}")


class SuffStatUnderflow(ConjaxError, ValueError):
    """forget() was called for an observation the statistic does not hold"""
