import logging
from functools import cached_property
from typing import Any

import pandas as pd

from .criterion import BaseCriterion, Criterion
from .decision import (
    CompositeDecision,
    Decision,
    DecisionDistribution,
    SimpleDecision,
    normalize_evaluation,
    sort_decisions,
)
from .dominance import DominanceCones
from .exceptions import InvalidTypeError
from .types import AttributeType, PreferenceType

logger = logging.getLogger(__name__)


class InformationTable:
    def __init__(self, df: pd.DataFrame) -> None:
        """Objects (rows) evaluated on attributes (columns).

        Every column of `df` must be a `BaseCriterion`. Objects are addressed
        by position (``0 .. len(df) - 1``); the DataFrame index is kept only
        for presentation.
        """
        for column in df.columns:
            if not isinstance(column, BaseCriterion):
                raise InvalidTypeError(f"Column {column!r} is not a criterion.")

        self.data = df
        self.attributes: tuple[BaseCriterion, ...] = tuple(df.columns)

        self.decision_attribute_indices: tuple[int, ...] = tuple(
            index
            for index, attribute in enumerate(self.attributes)
            if attribute.attribute_type == AttributeType.DECISION and attribute.is_active()
        )

        self.decisions: tuple[Decision, ...] | None = None
        if self.decision_attribute_indices:
            self.decisions = tuple(self._read_decision(i) for i in range(self.number_of_objects))

    def _read_decision(self, object_index: int) -> Decision:
        simple_decisions = []
        for attribute_index in self.decision_attribute_indices:
            attribute = self.attributes[attribute_index]
            preference_type = attribute.preference_type if isinstance(attribute, Criterion) else PreferenceType.NONE
            simple_decisions.append(
                SimpleDecision(self.data.iat[object_index, attribute_index], attribute_index, preference_type)
            )

        if len(simple_decisions) == 1:
            return simple_decisions[0]
        return CompositeDecision(simple_decisions)

    @property
    def number_of_objects(self) -> int:
        return len(self.data)

    def __len__(self) -> int:
        return self.number_of_objects

    @property
    def number_of_attributes(self) -> int:
        return len(self.attributes)

    def get_attribute(self, index: int) -> BaseCriterion:
        return self.attributes[index]

    def get_evaluation(self, object_index: int, attribute_index: int) -> Any:
        return normalize_evaluation(self.data.iat[object_index, attribute_index])

    def get_decision(self, object_index: int) -> Decision | None:
        if self.decisions is None:
            return None
        return self.decisions[object_index]

    def get_ordered_unique_fully_determined_decisions(self) -> tuple[Decision, ...] | None:
        """Distinct decisions without missing evaluations, from the worst to the best."""
        if self.decisions is None:
            return None
        unique = {decision for decision in self.decisions if decision.is_fully_determined()}
        return tuple(sort_decisions(unique))

    @cached_property
    def decision_distribution(self) -> DecisionDistribution:
        return DecisionDistribution(self.decisions or ())

    @cached_property
    def dominance_cones(self) -> DominanceCones:
        logger.debug("Calculating dominance cones")
        return DominanceCones(self)

    def __repr__(self) -> str:
        return f"InformationTable({self.number_of_objects} objects, {self.number_of_attributes} attributes)"
