from enum import IntEnum

import pandas as pd
import pytest

from drsa.calculator import ClassicalDominanceBasedRoughSetCalculator
from drsa.classification_result import SimpleClassificationResult
from drsa.criterion import Criterion, DecisionCriterion
from drsa.decision import SimpleDecision
from drsa.information_table import InformationTable
from drsa.rule import Condition, Operator, Rule, RuleSet


class G1(IntEnum):
    BAD = 1
    MEDIUM = 2
    GOOD = 3
    VERY_GOOD = 4


class Result(IntEnum):
    C1 = 1
    C2 = 2
    C3 = 3
    C4 = 4


@pytest.fixture
def alternatives() -> InformationTable:
    return InformationTable(
        pd.DataFrame(
            [
                [G1.BAD, 4, Result.C1],
                [G1.MEDIUM, 4, Result.C1],
                [G1.MEDIUM, 3, Result.C1],
                [G1.MEDIUM, 3, Result.C2],
                [G1.VERY_GOOD, 3, Result.C4],
                [G1.MEDIUM, 2, Result.C3],
                [G1.VERY_GOOD, 2, Result.C3],
                [G1.BAD, 1, Result.C2],
                [G1.GOOD, 1, Result.C4],
            ],
            index=["A", "B", "C", "D", "E", "F", "G", "H", "I"],
            columns=[Criterion("g1"), Criterion("g2", is_cost=True), DecisionCriterion("class")],
        )
    )


@pytest.fixture
def calculator() -> ClassicalDominanceBasedRoughSetCalculator:
    return ClassicalDominanceBasedRoughSetCalculator()


def decision(value: int, attribute_index: int = 2) -> SimpleDecision:
    return SimpleDecision(value, attribute_index)


@pytest.fixture
def expected_class_unions_at_least() -> dict[int, tuple[set, set, set]]:
    """(objects, lower approximation, upper approximation)"""
    return {
        2: ({3, 4, 5, 6, 7, 8}, {4, 5, 6, 7, 8}, {2, 3, 4, 5, 6, 7, 8}),
        3: ({4, 5, 6, 8}, {4, 5, 6, 8}, {4, 5, 6, 8}),
        4: ({4, 8}, {8}, {4, 6, 8}),
    }


@pytest.fixture
def expected_class_unions_at_most() -> dict[int, tuple[set, set, set]]:
    """(objects, lower approximation, upper approximation)"""
    return {
        1: ({0, 1, 2}, {0, 1}, {0, 1, 2, 3}),
        2: ({0, 1, 2, 3, 7}, {0, 1, 2, 3, 7}, {0, 1, 2, 3, 7}),
        3: ({0, 1, 2, 3, 5, 6, 7}, {0, 1, 2, 3, 5, 7}, {0, 1, 2, 3, 4, 5, 6, 7}),
    }


def make_table(g_values: list, d_values: list | None = None) -> InformationTable:
    """Table with one gain condition criterion ``g`` (index 0) and, optionally, a gain decision ``d`` (index 1)."""
    if d_values is None:
        return InformationTable(pd.DataFrame({Criterion("g"): g_values}))
    return InformationTable(pd.DataFrame({Criterion("g"): g_values, DecisionCriterion("d"): d_values}))


def at_least_rule(g_limit, d_limit) -> Rule:
    return Rule([Condition(0, Operator.GE, g_limit)], Condition(1, Operator.GE, d_limit))


def at_most_rule(g_limit, d_limit) -> Rule:
    return Rule([Condition(0, Operator.LE, g_limit)], Condition(1, Operator.LE, d_limit))


@pytest.fixture
def learning_table() -> InformationTable:
    return make_table([1, 2, 3, 4, 5, 6, 7, 8, 3], [1, 1, 2, 2, 3, 3, 3, 3, 1])


@pytest.fixture
def rules() -> list[Rule]:
    return [
        at_least_rule(3, 2),  # covers 2..8
        at_least_rule(5, 3),  # covers 4..7
        at_most_rule(2, 1),  # covers 0, 1
        at_most_rule(4, 2),  # covers 0, 1, 2, 3, 8
        Rule([Condition(0, Operator.GE, 7)], Condition(1, Operator.LE, 1)),  # covers 6, 7
    ]


@pytest.fixture
def rule_set(rules) -> RuleSet:
    return RuleSet(rules)


@pytest.fixture
def default_result() -> SimpleClassificationResult:
    return SimpleClassificationResult(SimpleDecision(2, 1))
