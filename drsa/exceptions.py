class DRSAError(Exception):
    """Base class for errors raised by the package."""


class MissingArgumentError(DRSAError, ValueError):
    """A required argument is ``None``."""


class InvalidTypeError(DRSAError, TypeError):
    """An attribute or a decision is of a kind that cannot be used here."""


class InvalidValueError(DRSAError, ValueError):
    """An attribute, a preference type or a version has an unacceptable value."""


class InvalidSizeError(DRSAError, ValueError):
    """A collection is empty where at least one element is required."""


class MissingDecisionsError(DRSAError, ValueError):
    """An information table carries no decisions."""


class UncomparableEvaluationsError(DRSAError, ValueError):
    """Two limiting evaluations cannot be ordered."""


class UnknownRuleSemanticsError(DRSAError, RuntimeError):
    """Rule semantics is neither "at least" nor "at most"."""
