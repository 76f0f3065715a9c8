from unittest import mock

import pandas as pd
import pytest

from drsa.calculator import ClassicalDominanceBasedRoughSetCalculator, RoughSetCalculator
from drsa.criterion import Criterion, DecisionCriterion, IdentificationCriterion
from drsa.decision import SimpleDecision
from drsa.exceptions import InvalidSizeError, InvalidTypeError, InvalidValueError, MissingArgumentError
from drsa.information_table import InformationTable
from drsa.types import MissingEvaluation, PreferenceType, TernaryLogicValue, UnionType
from drsa.union import Union

from conftest import decision


def test_concordance_non_strict(alternatives, calculator):
    union = Union(UnionType.AT_LEAST, decision(2), alternatives, calculator)

    assert union.is_concordant_with_decision(decision(3)) == TernaryLogicValue.TRUE
    assert union.is_concordant_with_decision(decision(2)) == TernaryLogicValue.TRUE
    assert union.is_concordant_with_decision(decision(1)) == TernaryLogicValue.FALSE
    assert union.is_concordant_with_decision(decision(MissingEvaluation.COMPARABLE)) == TernaryLogicValue.TRUE
    assert union.is_concordant_with_decision(decision(MissingEvaluation.UNCOMPARABLE)) == TernaryLogicValue.UNCOMPARABLE

    union = Union(UnionType.AT_MOST, decision(2), alternatives, calculator)
    assert union.is_decision_positive(decision(1))
    assert union.is_decision_negative(decision(3))
    assert union.is_decision_neutral(decision(MissingEvaluation.UNCOMPARABLE))


def test_concordance_strict(alternatives, calculator):
    union = Union(UnionType.AT_LEAST, decision(2), alternatives, calculator, include_limiting_decision=False)

    assert union.is_concordant_with_decision(decision(2)) == TernaryLogicValue.FALSE
    assert union.is_concordant_with_decision(decision(3)) == TernaryLogicValue.TRUE
    assert union.objects == {4, 5, 6, 8}


def test_neutral_objects(calculator):
    table = InformationTable(
        pd.DataFrame(
            {
                Criterion("g"): [1, 2, 3],
                DecisionCriterion("d"): [1, MissingEvaluation.UNCOMPARABLE, 2],
            }
        )
    )
    union = Union(UnionType.AT_LEAST, SimpleDecision(2, 1), table, calculator)

    assert union.objects == {2}
    assert union.neutral_objects == {1}
    assert union.complementary_set_size == 1
    assert union.is_object_negative(0)
    assert not union.is_object_negative(1)


def test_complementary_union(alternatives, calculator):
    union = Union(UnionType.AT_LEAST, decision(3), alternatives, calculator)
    complementary_union = union.complementary_union

    assert complementary_union.union_type == UnionType.AT_MOST
    assert complementary_union.limiting_decision == decision(3)
    assert complementary_union.include_limiting_decision is False
    assert complementary_union.objects == {0, 1, 2, 3, 7}
    assert complementary_union.complementary_union is union
    assert union.complementary_union is complementary_union


def test_set_complementary_union_first_caller_wins(alternatives, calculator):
    union = Union(UnionType.AT_LEAST, decision(3), alternatives, calculator)
    first = Union(UnionType.AT_MOST, decision(2), alternatives, calculator)
    second = Union(UnionType.AT_MOST, decision(1), alternatives, calculator)

    assert union.set_complementary_union(first)
    assert not union.set_complementary_union(second)
    assert union.complementary_union is first


def test_approximations_are_memoized(alternatives):
    rough_set_calculator = mock.create_autospec(RoughSetCalculator, instance=True)
    rough_set_calculator.calculate_lower_approximation.return_value = frozenset({4, 8})
    rough_set_calculator.calculate_upper_approximation.return_value = frozenset({4, 6, 8})
    union = Union(UnionType.AT_LEAST, decision(4), alternatives, rough_set_calculator)

    assert union.lower_approximation == {4, 8}
    assert union.lower_approximation == {4, 8}
    assert union.upper_approximation == {4, 6, 8}
    assert union.upper_approximation == {4, 6, 8}

    rough_set_calculator.calculate_lower_approximation.assert_called_once_with(union)
    rough_set_calculator.calculate_upper_approximation.assert_called_once_with(union)


def test_regions(alternatives, calculator):
    union = Union(UnionType.AT_LEAST, decision(2), alternatives, calculator)

    assert union.positive_region == {4, 5, 6, 7, 8}
    assert union.negative_region == {2, 3}
    assert union.accuracy_of_approximation == pytest.approx(5 / 7)


def test_accuracy_of_empty_upper_approximation(alternatives):
    rough_set_calculator = mock.create_autospec(RoughSetCalculator, instance=True)
    rough_set_calculator.calculate_lower_approximation.return_value = frozenset()
    rough_set_calculator.calculate_upper_approximation.return_value = frozenset()
    union = Union(UnionType.AT_LEAST, decision(4), alternatives, rough_set_calculator)

    with pytest.raises(InvalidSizeError):
        union.accuracy_of_approximation


def test_non_reflexive_calculator(alternatives):
    union = Union(
        UnionType.AT_LEAST, decision(2), alternatives, ClassicalDominanceBasedRoughSetCalculator(reflexive=False)
    )

    # D has the same evaluations as C (class 1)
    assert 3 not in union.lower_approximation
    assert union.lower_approximation <= union.objects <= union.upper_approximation


def test_invalid_limiting_decision(alternatives, calculator):
    with pytest.raises(MissingArgumentError):
        Union(UnionType.AT_LEAST, None, alternatives, calculator)

    # condition attribute
    with pytest.raises(InvalidValueError):
        Union(UnionType.AT_LEAST, SimpleDecision(2, 0), alternatives, calculator)

    table = InformationTable(
        pd.DataFrame(
            {
                IdentificationCriterion("id"): ["a", "b"],
                DecisionCriterion("inactive", active=False): [1, 2],
                DecisionCriterion("nominal", preference_type=PreferenceType.NONE): ["x", "y"],
            }
        )
    )
    with pytest.raises(InvalidTypeError):
        Union(UnionType.AT_LEAST, SimpleDecision("a", 0), table, calculator)
    with pytest.raises(InvalidValueError):
        Union(UnionType.AT_LEAST, SimpleDecision(1, 1), table, calculator)
    with pytest.raises(InvalidValueError):
        Union(UnionType.AT_LEAST, SimpleDecision("x", 2, PreferenceType.NONE), table, calculator)
