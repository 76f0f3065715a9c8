"""Package-wide defaults.

Keep only simple, import-safe constants here.
"""
from .types import MissingEvaluation, ScoreVersion

# How ``None``/``NaN`` decision evaluations found in a DataFrame are read.
DEFAULT_MISSING_EVALUATION: MissingEvaluation = MissingEvaluation.COMPARABLE

# Whether an object belongs to its own dominance cones in the classical calculator.
REFLEXIVE_DOMINANCE: bool = True

# Formula used for the negative part of Score when covering rules disagree.
DEFAULT_SCORE_VERSION: ScoreVersion = ScoreVersion.COMPLEMENT

# Whether unions containing every decision (e.g. "at least worst class") are kept.
INCLUDE_TRIVIAL_UNIONS: bool = False
