from typing import TypeVar

from .exceptions import MissingArgumentError

T = TypeVar("T")


def not_null(value: T | None, message: str) -> T:
    """Return `value`, or raise `MissingArgumentError` with `message` if it is ``None``."""
    if value is None:
        raise MissingArgumentError(message)
    return value


def calculate_score_quotient(numerator_size: int, first_denominator_size: int, second_denominator_size: int) -> float:
    """Calculate ``|A|^2 / (|B| * |C|)``, the common shape of both parts of the Score measure.

    For a single rule and decision class `Cl` this is
    ``|[cond] ∩ Cl|^2 / (|[cond]| * |Cl|)``. Returns ``0.0`` if the denominator is zero.
    """
    denominator = first_denominator_size * second_denominator_size
    if not denominator:
        return 0.0
    return numerator_size**2 / denominator
