from abc import ABC, abstractmethod
from collections import Counter
from functools import cmp_to_key
from typing import Any, Iterable, Iterator

import pandas as pd

from . import config
from .exceptions import InvalidValueError, UncomparableEvaluationsError
from .types import MissingEvaluation, PreferenceType, TernaryLogicValue


def normalize_evaluation(value: Any) -> Any:
    """Map ``None``/``NaN`` to the configured `MissingEvaluation`; unwrap numpy scalars."""
    if isinstance(value, MissingEvaluation):
        return value
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return config.DEFAULT_MISSING_EVALUATION
    if hasattr(value, "item") and not isinstance(value, (int, float)):
        return value.item()
    return value


def is_missing(value: Any) -> bool:
    return isinstance(value, MissingEvaluation)


def _compare_missing(evaluation: Any, other: Any) -> TernaryLogicValue | None:
    if evaluation is MissingEvaluation.UNCOMPARABLE or other is MissingEvaluation.UNCOMPARABLE:
        return TernaryLogicValue.UNCOMPARABLE
    if evaluation is MissingEvaluation.COMPARABLE or other is MissingEvaluation.COMPARABLE:
        return TernaryLogicValue.TRUE
    return None


def is_at_least_as_good_as(evaluation: Any, other: Any, preference_type: PreferenceType) -> TernaryLogicValue:
    """Check if `evaluation` is at least as good as `other` on a criterion with given preference type."""
    result = _compare_missing(evaluation, other)
    if result is not None:
        return result

    if preference_type == PreferenceType.GAIN:
        return TernaryLogicValue.TRUE if evaluation >= other else TernaryLogicValue.FALSE
    if preference_type == PreferenceType.COST:
        return TernaryLogicValue.TRUE if evaluation <= other else TernaryLogicValue.FALSE

    # nominal values are ordered only by equality
    return TernaryLogicValue.TRUE if evaluation == other else TernaryLogicValue.UNCOMPARABLE


def is_at_most_as_good_as(evaluation: Any, other: Any, preference_type: PreferenceType) -> TernaryLogicValue:
    return is_at_least_as_good_as(other, evaluation, preference_type)


def is_equal_to(evaluation: Any, other: Any) -> TernaryLogicValue:
    result = _compare_missing(evaluation, other)
    if result is not None:
        return result
    return TernaryLogicValue.TRUE if evaluation == other else TernaryLogicValue.FALSE


def compare_evaluations(evaluation: Any, other: Any, preference_type: PreferenceType) -> int:
    """Compare two evaluations in preference order.

    :return: negative if `evaluation` is worse than `other`, ``0`` if equally good, positive otherwise
    :raises UncomparableEvaluationsError: if the evaluations cannot be ordered
    """
    if evaluation is MissingEvaluation.UNCOMPARABLE or other is MissingEvaluation.UNCOMPARABLE:
        raise UncomparableEvaluationsError(f"Cannot compare evaluations {evaluation!r} and {other!r}.")
    if evaluation is MissingEvaluation.COMPARABLE or other is MissingEvaluation.COMPARABLE:
        return 0

    if preference_type == PreferenceType.NONE:
        if evaluation == other:
            return 0
        raise UncomparableEvaluationsError(f"Cannot order nominal evaluations {evaluation!r} and {other!r}.")

    try:
        result = (evaluation > other) - (evaluation < other)
    except TypeError as e:
        raise UncomparableEvaluationsError(f"Cannot compare evaluations {evaluation!r} and {other!r}: {e}")
    return -result if preference_type == PreferenceType.COST else result


def _combine(results: Iterable[TernaryLogicValue]) -> TernaryLogicValue:
    results = list(results)
    if TernaryLogicValue.UNCOMPARABLE in results:
        return TernaryLogicValue.UNCOMPARABLE
    if all(result == TernaryLogicValue.TRUE for result in results):
        return TernaryLogicValue.TRUE
    return TernaryLogicValue.FALSE


class Decision(ABC):
    """Decision assigned to an object: evaluations on one or more decision attributes."""

    @property
    @abstractmethod
    def components(self) -> tuple["SimpleDecision", ...]: ...

    @property
    def attribute_indices(self) -> frozenset[int]:
        return frozenset(component.attribute_index for component in self.components)

    def is_fully_determined(self) -> bool:
        return not any(is_missing(component.evaluation) for component in self.components)

    def _compare_components(self, other: "Decision", at_least: bool) -> TernaryLogicValue:
        own = {component.attribute_index: component for component in self.components}
        others = {component.attribute_index: component for component in other.components}
        if own.keys() != others.keys():
            return TernaryLogicValue.UNCOMPARABLE

        compare = is_at_least_as_good_as if at_least else is_at_most_as_good_as
        return _combine(
            compare(component.evaluation, others[index].evaluation, component.preference_type)
            for index, component in own.items()
        )

    def is_at_least_as_good_as(self, other: "Decision") -> TernaryLogicValue:
        return self._compare_components(other, at_least=True)

    def is_at_most_as_good_as(self, other: "Decision") -> TernaryLogicValue:
        return self._compare_components(other, at_least=False)

    def is_equal_to(self, other: "Decision") -> TernaryLogicValue:
        return _combine(
            [self.is_at_least_as_good_as(other), self.is_at_most_as_good_as(other)]
        )


class SimpleDecision(Decision):
    def __init__(
        self,
        evaluation: Any,
        attribute_index: int,
        preference_type: PreferenceType = PreferenceType.GAIN,
    ) -> None:
        """Decision defined by a single evaluation of a single decision attribute."""
        self.evaluation = normalize_evaluation(evaluation)
        self.attribute_index = attribute_index
        self.preference_type = preference_type

    @property
    def components(self) -> tuple["SimpleDecision", ...]:
        return (self,)

    def __hash__(self) -> int:
        return hash((self.evaluation, self.attribute_index))

    def __eq__(self, __value: object) -> bool:
        if not isinstance(__value, SimpleDecision):
            return NotImplemented
        return self.evaluation == __value.evaluation and self.attribute_index == __value.attribute_index

    def __repr__(self) -> str:
        return f"{self.evaluation!r}@{self.attribute_index}"


class CompositeDecision(Decision):
    def __init__(self, decisions: Iterable[SimpleDecision]) -> None:
        """Decision built from evaluations of several decision attributes (multi-criteria sorting)."""
        self.decisions = tuple(sorted(decisions, key=lambda decision: decision.attribute_index))
        if not self.decisions:
            raise InvalidValueError("Composite decision requires at least one contributing evaluation.")

    @property
    def components(self) -> tuple[SimpleDecision, ...]:
        return self.decisions

    def __hash__(self) -> int:
        return hash(self.decisions)

    def __eq__(self, __value: object) -> bool:
        if not isinstance(__value, CompositeDecision):
            return NotImplemented
        return self.decisions == __value.decisions

    def __repr__(self) -> str:
        return "(" + ", ".join(repr(decision) for decision in self.decisions) + ")"


def _compare_decisions(decision: Decision, other: Decision) -> int:
    # lexicographic over contributing attributes: a linear extension of the dominance order
    for component, other_component in zip(decision.components, other.components):
        if component.preference_type == PreferenceType.NONE:
            first, second = str(component.evaluation), str(other_component.evaluation)
            result = (first > second) - (first < second)
        else:
            result = compare_evaluations(component.evaluation, other_component.evaluation, component.preference_type)
        if result:
            return result
    return 0


def sort_decisions(decisions: Iterable[Decision]) -> list[Decision]:
    """Sort fully determined decisions from the worst to the best one."""
    return sorted(decisions, key=cmp_to_key(_compare_decisions))


class DecisionDistribution:
    def __init__(self, decisions: Iterable[Decision] = ()) -> None:
        """Number of objects having each decision."""
        self._counts: Counter = Counter(decisions)

    def increase_count(self, decision: Decision, count: int = 1) -> None:
        self._counts[decision] += count

    def get_count(self, decision: Decision) -> int:
        return self._counts.get(decision, 0)

    def without_one(self, decision: Decision) -> "DecisionDistribution":
        """Return a copy with one occurrence of `decision` removed."""
        distribution = DecisionDistribution()
        distribution._counts = self._counts.copy()
        distribution._counts[decision] -= 1
        if distribution._counts[decision] <= 0:
            del distribution._counts[decision]
        return distribution

    @property
    def decisions(self) -> tuple[Decision, ...]:
        return tuple(self._counts)

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def __iter__(self) -> Iterator[Decision]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return dict(self._counts).__repr__()
