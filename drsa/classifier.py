import logging
from abc import ABC, abstractmethod
from numbers import Integral, Number
from typing import Any

import numpy as np
import pandas as pd

from .classification_result import SimpleClassificationResult
from .decision import SimpleDecision, compare_evaluations, is_equal_to
from .exceptions import InvalidTypeError
from .information_table import InformationTable
from .rule import BasicRuleCoverageInformation, Rule, RuleSet, RuleSetWithCharacteristics
from .types import PreferenceType, RuleSemantics, TernaryLogicValue
from .utils import not_null

logger = logging.getLogger(__name__)


class BaseClassifier(ABC):
    def __init__(self, rule_set: RuleSet, default_result: SimpleClassificationResult) -> None:
        """Base rule classifier in DRSA.

        :param default_result: returned when no rule covers a classified object
        """
        self.rule_set = not_null(rule_set, "Rule set is null.")
        self.default_result = not_null(default_result, "Default classification result is null.")

    @abstractmethod
    def classify(self, object_index: int, information_table: InformationTable) -> SimpleClassificationResult: ...

    def classify_all(self, information_table: InformationTable) -> list[SimpleClassificationResult]:
        """Classify every object of the table. The first error aborts the whole batch."""
        return [self.classify(i, information_table) for i in range(information_table.number_of_objects)]

    def predict(self, information_table: InformationTable) -> pd.Series:
        """Suggested decision evaluations, indexed like the table's DataFrame."""
        results = self.classify_all(information_table)
        return pd.Series(
            [result.suggested_decision.evaluation for result in results],
            index=information_table.data.index,
            dtype=object,
        )


class _PrudentLimits:
    """Most cautious "at least" and "at most" limits among rules covering one object."""

    def __init__(self) -> None:
        self.up_limit: Any = None
        self.down_limit: Any = None
        self.covering_rule_indices: list[int] = []
        self.at_least_rule_indices: list[int] = []
        self.at_most_rule_indices: list[int] = []
        self.decision_attribute_index: int | None = None
        self.preference_type = PreferenceType.GAIN

    def add(self, rule_index: int, rule: Rule) -> None:
        self.covering_rule_indices.append(rule_index)
        decision = rule.decision
        # decision attribute is taken from the first covering rule only
        if self.decision_attribute_index is None:
            self.decision_attribute_index = decision.attribute_index
            self.preference_type = decision.preference_type

        limit = decision.limiting_evaluation
        if rule.semantics == RuleSemantics.AT_LEAST:
            self.at_least_rule_indices.append(rule_index)
            if self.up_limit is None or compare_evaluations(limit, self.up_limit, decision.preference_type) > 0:
                self.up_limit = limit
        elif rule.semantics == RuleSemantics.AT_MOST:
            self.at_most_rule_indices.append(rule_index)
            if self.down_limit is None or compare_evaluations(limit, self.down_limit, decision.preference_type) < 0:
                self.down_limit = limit

    @property
    def is_conflicting(self) -> bool:
        return (
            self.up_limit is not None
            and self.down_limit is not None
            and is_equal_to(self.up_limit, self.down_limit) != TernaryLogicValue.TRUE
        )


class SimpleRuleClassifier(BaseClassifier):
    """Prudent classifier: intersection of the unions suggested by covering rules.

    "At least" rules ``>= 2`` and ``>= 3`` give class ``3``, "at most" rules
    ``<= 1`` and ``<= 2`` give class ``1``. When both kinds of rules cover an
    object and their limits differ, the mean of the two limits is returned.
    """

    def _find_limits(self, object_index: int, information_table: InformationTable) -> _PrudentLimits:
        limits = _PrudentLimits()
        for rule_index, rule in enumerate(self.rule_set):
            if rule.covers(object_index, information_table):
                limits.add(rule_index, rule)
        return limits

    def _resolve_conflict(self, limits: _PrudentLimits) -> Any:
        values = (limits.down_limit, limits.up_limit)
        if not all(isinstance(value, Number) for value in values):
            raise InvalidTypeError(f"Cannot average non-numeric limits {values!r}.")

        mean = np.mean(values).__float__()
        if all(isinstance(value, Integral) for value in values):
            return int(mean)
        return mean

    def _resolve(self, limits: _PrudentLimits) -> SimpleClassificationResult:
        if limits.up_limit is None and limits.down_limit is None:
            return self.default_result

        if limits.down_limit is None:
            evaluation = limits.up_limit
        elif limits.up_limit is None:
            evaluation = limits.down_limit
        elif not limits.is_conflicting:
            evaluation = limits.up_limit
        else:
            evaluation = self._resolve_conflict(limits)

        return SimpleClassificationResult(
            SimpleDecision(evaluation, limits.decision_attribute_index, limits.preference_type)
        )

    def classify(self, object_index: int, information_table: InformationTable) -> SimpleClassificationResult:
        return self._resolve(self._find_limits(object_index, information_table))


class SimpleOptimizingRuleClassifier(SimpleRuleClassifier):
    def __init__(
        self,
        rule_set: RuleSet,
        default_result: SimpleClassificationResult,
        learning_table: InformationTable | None = None,
    ) -> None:
        """Prudent classifier resolving conflicts by the more frequent of the two limits.

        A limit is counted among learning objects covered by the covering rules
        of its kind ("at least" for the upper limit, "at most" for the lower
        one) having exactly that decision; each object is counted once. Ties
        are resolved to the "at most" limit. The mode is used for numeric
        decisions too, it does not fall back to the mean of `SimpleRuleClassifier`.

        :param learning_table: table the rules were induced from; required unless
        `rule_set` already carries coverage information
        """
        super().__init__(rule_set, default_result)
        if isinstance(rule_set, RuleSetWithCharacteristics):
            self._coverage_informations = rule_set.coverage_informations
        else:
            learning_table = not_null(learning_table, "Learning information table is null.")
            self._coverage_informations = tuple(
                BasicRuleCoverageInformation(rule, learning_table) for rule in self.rule_set
            )

    def get_basic_rule_coverage_information(self, rule_index: int) -> BasicRuleCoverageInformation:
        return self._coverage_informations[rule_index]

    def _count_covered_objects_with_evaluation(self, evaluation: Any, rule_indices: list[int]) -> int:
        objects = set()
        for rule_index in rule_indices:
            coverage_information = self.get_basic_rule_coverage_information(rule_index)
            for object_index in coverage_information.covered_objects:
                decision = coverage_information.decisions_of_covered_objects[object_index]
                if not isinstance(decision, SimpleDecision):
                    raise InvalidTypeError(f"Decision {decision!r} of object {object_index} is not simple.")
                if is_equal_to(decision.evaluation, evaluation) == TernaryLogicValue.TRUE:
                    objects.add(object_index)
        return len(objects)

    def _resolve_conflict(self, limits: _PrudentLimits) -> Any:
        down_count = self._count_covered_objects_with_evaluation(limits.down_limit, limits.at_most_rule_indices)
        up_count = self._count_covered_objects_with_evaluation(limits.up_limit, limits.at_least_rule_indices)
        logger.debug("Conflicting limits %r (%d) and %r (%d)", limits.down_limit, down_count, limits.up_limit, up_count)
        return limits.up_limit if up_count > down_count else limits.down_limit

    def probe(
        self, object_index: int, information_table: InformationTable
    ) -> tuple[SimpleClassificationResult | None, list[int], bool]:
        """Find rules covering an object and check if their limits conflict.

        :return: classification result (``None`` for conflicting limits), indices of
        covering rules in rule set order and the conflict flag
        """
        limits = self._find_limits(object_index, information_table)
        if limits.is_conflicting:
            return None, limits.covering_rule_indices, True
        return self._resolve(limits), limits.covering_rule_indices, False
