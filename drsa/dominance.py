import logging
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from .criterion import Criterion
from .decision import DecisionDistribution, is_missing, normalize_evaluation
from .exceptions import InvalidValueError, MissingDecisionsError
from .types import AttributeType, MissingEvaluation

if TYPE_CHECKING:
    from .information_table import InformationTable

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> float:
    if isinstance(value, MissingEvaluation):
        return np.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidValueError(f"Ordinal evaluation {value!r} is not numeric.")


class DominanceCones:
    def __init__(self, information_table: "InformationTable") -> None:
        """Dominance cones of all objects of an information table.

        ``x D y`` holds if `x` is at least as good as `y` on every active
        ordinal condition criterion and equal to `y` on every active nominal one.
        A comparable missing evaluation never blocks dominance, an uncomparable
        one blocks it in both directions (except for the object itself).

        Positive cone of `x`: objects dominating `x`.
        Negative cone of `x`: objects dominated by `x`.
        """
        self.number_of_objects = information_table.number_of_objects
        self.dominance_matrix = self._calculate_dominance_matrix(information_table)

        self._positive_cones = [
            frozenset(np.flatnonzero(self.dominance_matrix[:, i]).tolist()) for i in range(self.number_of_objects)
        ]
        self._negative_cones = [
            frozenset(np.flatnonzero(self.dominance_matrix[i, :]).tolist()) for i in range(self.number_of_objects)
        ]

        decisions = information_table.decisions
        self._positive_distributions: list[DecisionDistribution] | None = None
        self._negative_distributions: list[DecisionDistribution] | None = None
        if decisions is not None:
            self._positive_distributions = [
                DecisionDistribution(decisions[y] for y in cone) for cone in self._positive_cones
            ]
            self._negative_distributions = [
                DecisionDistribution(decisions[y] for y in cone) for cone in self._negative_cones
            ]

        logger.debug("Calculated dominance cones for %d objects", self.number_of_objects)

    @staticmethod
    def _calculate_dominance_matrix(information_table: "InformationTable") -> np.ndarray:
        """``matrix[x, y]`` is ``True`` if `x` dominates `y`."""
        n = information_table.number_of_objects
        dominates = np.ones((n, n), dtype=bool)

        for index, attribute in enumerate(information_table.attributes):
            if attribute.attribute_type != AttributeType.CONDITION or not attribute.is_active():
                continue
            if not isinstance(attribute, Criterion):
                continue

            evaluations = [normalize_evaluation(value) for value in information_table.data.iloc[:, index]]
            comparable = np.array([value is MissingEvaluation.COMPARABLE for value in evaluations], dtype=bool)
            uncomparable = np.array([value is MissingEvaluation.UNCOMPARABLE for value in evaluations], dtype=bool)

            if attribute.is_ordinal:
                values = np.array([_as_float(value) for value in evaluations], dtype=float)
                if attribute.is_cost:
                    values = -values
                relation = values[:, None] >= values[None, :]
            else:
                codes, _ = pd.factorize(pd.Series([None if is_missing(value) else value for value in evaluations]))
                relation = codes[:, None] == codes[None, :]

            relation |= comparable[:, None] | comparable[None, :]
            relation &= ~(uncomparable[:, None] | uncomparable[None, :])
            dominates &= relation

        # an object dominates itself even if some of its evaluations are uncomparable
        np.fill_diagonal(dominates, True)
        return dominates

    def dominates(self, x: int, y: int) -> bool:
        return bool(self.dominance_matrix[x, y])

    def positive_cone(self, object_index: int) -> frozenset[int]:
        return self._positive_cones[object_index]

    def negative_cone(self, object_index: int) -> frozenset[int]:
        return self._negative_cones[object_index]

    # missing values are treated symmetrically, so the relation used to build
    # inverted cones is the same as the plain dominance relation
    def positive_inv_cone(self, object_index: int) -> frozenset[int]:
        return self._positive_cones[object_index]

    def negative_inv_cone(self, object_index: int) -> frozenset[int]:
        return self._negative_cones[object_index]

    def _distributions(self, positive: bool) -> list[DecisionDistribution]:
        distributions = self._positive_distributions if positive else self._negative_distributions
        if distributions is None:
            raise MissingDecisionsError("Information table does not contain decisions.")
        return distributions

    def get_positive_dcone_decision_class_distribution(self, object_index: int) -> DecisionDistribution:
        return self._distributions(positive=True)[object_index]

    def get_negative_dcone_decision_class_distribution(self, object_index: int) -> DecisionDistribution:
        return self._distributions(positive=False)[object_index]

    def get_positive_inv_dcone_decision_class_distribution(self, object_index: int) -> DecisionDistribution:
        return self._distributions(positive=True)[object_index]

    def get_negative_inv_dcone_decision_class_distribution(self, object_index: int) -> DecisionDistribution:
        return self._distributions(positive=False)[object_index]
