import logging
from functools import cached_property
from numbers import Number
from typing import Any

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, mean_absolute_error, mean_squared_error

from .classifier import BaseClassifier
from .decision import Decision, SimpleDecision
from .exceptions import InvalidSizeError, InvalidTypeError, MissingDecisionsError
from .information_table import InformationTable

logger = logging.getLogger(__name__)


def _evaluations(decisions: list[Decision]) -> list[Any]:
    evaluations = []
    for decision in decisions:
        if not isinstance(decision, SimpleDecision):
            raise InvalidTypeError(f"Decision {decision!r} is not simple.")
        evaluations.append(decision.evaluation)
    return evaluations


class ClassificationValidationResult:
    def __init__(self, original_decisions: list[Decision], suggested_decisions: list[Decision]) -> None:
        """Comparison of original and suggested decisions of classified objects."""
        if len(original_decisions) != len(suggested_decisions):
            raise InvalidSizeError("Numbers of original and suggested decisions differ.")
        self.original = _evaluations(original_decisions)
        self.suggested = _evaluations(suggested_decisions)

    @property
    def number_of_objects(self) -> int:
        return len(self.original)

    @property
    def number_of_correct_assignments(self) -> int:
        return sum(1 for original, suggested in zip(self.original, self.suggested) if original == suggested)

    @property
    def overall_accuracy(self) -> float:
        return accuracy_score(self.original, self.suggested)

    @cached_property
    def labels(self) -> list[Any]:
        """Decision evaluations present in original or suggested decisions, sorted if possible."""
        labels = list(dict.fromkeys([*self.original, *self.suggested]))
        try:
            return sorted(labels)
        except TypeError:
            return labels

    @property
    def confusion_matrix(self) -> pd.DataFrame:
        """Rows: original decisions, columns: suggested decisions."""
        return pd.DataFrame(
            confusion_matrix(self.original, self.suggested, labels=self.labels),
            index=pd.Index(self.labels, name="original"),
            columns=pd.Index(self.labels, name="suggested"),
        )

    def _numeric(self) -> tuple[np.ndarray, np.ndarray]:
        if not all(isinstance(value, Number) for value in [*self.original, *self.suggested]):
            raise InvalidTypeError("Ordinal error measures require numeric decision evaluations.")
        return np.asarray(self.original, dtype=float), np.asarray(self.suggested, dtype=float)

    @property
    def mean_absolute_error(self) -> float:
        return mean_absolute_error(*self._numeric())

    @property
    def root_mean_squared_error(self) -> float:
        return float(np.sqrt(mean_squared_error(*self._numeric())))

    def __repr__(self) -> str:
        return f"accuracy: {self.overall_accuracy:.4f} ({self.number_of_correct_assignments}/{self.number_of_objects})"


def validate(classifier: BaseClassifier, information_table: InformationTable) -> ClassificationValidationResult:
    """Classify all objects of a table and compare suggestions with the decisions of the table."""
    if information_table.decisions is None:
        raise MissingDecisionsError("Validation table does not contain decisions.")

    results = classifier.classify_all(information_table)
    validation_result = ClassificationValidationResult(
        list(information_table.decisions), [result.suggested_decision for result in results]
    )
    logger.info("Validation on %d objects: %r", validation_result.number_of_objects, validation_result)
    return validation_result
