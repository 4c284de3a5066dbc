"""Error taxonomy for chord sampling.

Every error propagates to the sampler's caller; nothing is replaced by a
default chord or probability.
"""


class ChordSamplingError(Exception):
    """Base class for all chord sampling failures."""


class OracleError(ChordSamplingError):
    """Estimator invocation failed or returned malformed probabilities."""


class ValidityError(ChordSamplingError):
    """Layout (validity predicate) failure, e.g. unknown keys or no legal chords."""


class EnumerationTooLarge(ChordSamplingError):
    """The legal chord set for a context exceeds the configured bound."""

    def __init__(self, limit: int, context=None):
        self.limit = limit
        self.context = context
        super().__init__(
            f"More than {limit} legal chords for context {context!r}; "
            f"enumeration aborted"
        )


class SamplingAttemptsExceeded(ChordSamplingError):
    """The rejection sampler hit its caller-imposed attempt cap."""

    def __init__(self, max_attempts: int):
        self.max_attempts = max_attempts
        super().__init__(f"No chord accepted within {max_attempts} attempts")
