class MersenneTwisterError(Exception):
    '''Base class for every error raised by the generator or its entropy source.'''


class InvalidRangeError(MersenneTwisterError, ValueError):
    """Bounded draw called with min_value >= max_value."""
    def __init__(self, min_value, max_value):
        self.min_value, self.max_value = min_value, max_value
        super().__init__(f"min_value ({min_value}) should be less than max_value ({max_value}).")


class RangeOverflowError(MersenneTwisterError, OverflowError):
    """A bound or a drawn value does not fit the requested integer width."""
    def __init__(self, value, bits, signed=True):
        self.value, self.bits, self.signed = value, bits, signed
        kind = 'signed' if signed else 'unsigned'
        super().__init__(f"{value} cannot be represented as a {bits}-bit {kind} integer.")


class EmptySeedKeyError(MersenneTwisterError, ValueError):
    def __init__(self, message="Seed key must hold at least one value."):
        super().__init__(message)


class EntropyUnavailableError(MersenneTwisterError, RuntimeError):
    """The entropy source could not read one of its inputs."""
    def __init__(self, reading, reason=None):
        self.reading = reading
        message = f"Cannot read {reading} for the seed key"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message + ".")
