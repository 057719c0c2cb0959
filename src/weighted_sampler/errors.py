"""Error taxonomy for the weighted sampler."""

from enum import Enum


class ErrorKind(Enum):
    """What went wrong when building or drawing from a sampler."""

    LENGTH_MISMATCH = "length_mismatch"
    PROBABILITY_OUT_OF_RANGE = "probability_out_of_range"
    PROBABILITY_SUM_INVALID = "probability_sum_invalid"
    SAMPLING_EXHAUSTED = "sampling_exhausted"


_MESSAGES = {
    ErrorKind.LENGTH_MISMATCH: (
        "Number of outcomes must match the number of probabilities."
    ),
    ErrorKind.PROBABILITY_OUT_OF_RANGE: (
        "Probabilities must be between 0 and 1 (inclusive)."
    ),
    ErrorKind.PROBABILITY_SUM_INVALID: (
        "Invalid probabilities. The sum of probabilities must be equal to 1."
    ),
    ErrorKind.SAMPLING_EXHAUSTED: (
        "Uniform draw fell past the end of the cumulative table."
    ),
}


class SamplerError(ValueError):
    """Raised for invalid sampler input or a broken sampling invariant.

    Subclasses ``ValueError`` so callers that only care about bad input can
    catch it as such; ``kind`` says which check failed.
    """

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        message = _MESSAGES[kind]
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
