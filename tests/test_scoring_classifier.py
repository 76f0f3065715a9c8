from unittest import mock

import pandas as pd
import pytest

from drsa.classification_result import SimpleEvaluatedClassificationResult
from drsa.criterion import Criterion, DecisionCriterion
from drsa.decision import SimpleDecision
from drsa.exceptions import (
    InvalidSizeError,
    InvalidTypeError,
    InvalidValueError,
    MissingDecisionsError,
    UnknownRuleSemanticsError,
)
from drsa.information_table import InformationTable
from drsa.rule import Condition, Operator, Rule, RuleSet, RuleSetWithCharacteristics
from drsa.scoring_classifier import ScoringRuleClassifier
from drsa.types import Mode, PreferenceType, ScoreVersion

from conftest import at_least_rule, at_most_rule, make_table


def d(value: int) -> SimpleDecision:
    return SimpleDecision(value, 1)


@pytest.fixture
def score_classifier(rule_set, default_result, learning_table) -> ScoringRuleClassifier:
    return ScoringRuleClassifier(rule_set, default_result, Mode.SCORE, learning_table)


@pytest.fixture
def hybrid_classifier(rule_set, default_result, learning_table) -> ScoringRuleClassifier:
    return ScoringRuleClassifier(rule_set, default_result, Mode.HYBRID, learning_table)


def test_caches(score_classifier):
    assert score_classifier.decisions == (d(1), d(2), d(3))
    assert score_classifier.decision_indices == {1: 0, 2: 1, 3: 2}
    assert score_classifier.decision_distribution.get_count(d(3)) == 4
    assert score_classifier.version == ScoreVersion.COMPLEMENT


def test_decision_loop_parameters(score_classifier, rules):
    assert score_classifier.calculate_decision_loop_parameters(rules[0]) == range(1, 3)
    assert score_classifier.calculate_decision_loop_parameters(rules[3]) == range(0, 2)

    with pytest.raises(UnknownRuleSemanticsError):
        score_classifier.calculate_decision_loop_parameters(
            Rule([Condition(0, Operator.GE, 1)], Condition(1, Operator.EQ, 2))
        )


def test_covering_rules_keep_rule_set_order(score_classifier):
    assert score_classifier.get_indices_of_covering_rules(0, make_table([7])) == [0, 1, 4]
    assert score_classifier.get_indices_of_covering_rules(0, make_table([3])) == [0, 3]


def test_single_rule_score(score_classifier):
    result = score_classifier.classify(0, make_table([4.5]))

    assert result.suggested_decision == d(3)
    assert result.certainty == pytest.approx(4 / 7)
    assert result.decision_scores == pytest.approx({d(2): 2 / 7, d(3): 4 / 7})


def test_single_at_most_rule_score(rules, default_result, learning_table):
    classifier = ScoringRuleClassifier(RuleSet([rules[3]]), default_result, Mode.SCORE, learning_table)
    result = classifier.classify(0, make_table([4]))

    assert result.suggested_decision == d(1)
    assert result.certainty == pytest.approx(0.6)
    assert result.decision_scores[d(2)] == pytest.approx(0.4)


@pytest.mark.parametrize("rule", [at_least_rule(1, 1), at_most_rule(4, 2)])
def test_tie_resolved_to_worse_decision(rule, default_result):
    learning_table = make_table([1, 2, 3, 4], [1, 1, 2, 2])
    classifier = ScoringRuleClassifier(RuleSet([rule]), default_result, Mode.SCORE, learning_table)
    result = classifier.classify(0, make_table([2]))

    assert result.decision_scores[d(1)] == result.decision_scores[d(2)] == pytest.approx(0.5)
    assert result.suggested_decision == d(1)


def test_score_with_many_rules(score_classifier):
    result = score_classifier.classify(0, make_table([3]))

    assert result.suggested_decision == d(2)
    assert result.certainty == pytest.approx(2 / 9)
    assert result.decision_scores == pytest.approx({d(1): -9 / 35, d(2): 2 / 9, d(3): -3 / 7})


@pytest.mark.parametrize(
    "version, expected_d2_score",
    [(ScoreVersion.COMPLEMENT, 0.0), (ScoreVersion.EJOR_2007, 2 / 7)],
)
def test_score_versions(rules, default_result, learning_table, version, expected_d2_score):
    classifier = ScoringRuleClassifier(
        RuleSet([rules[0], rules[4]]), default_result, Mode.SCORE, learning_table, version=version
    )
    result = classifier.classify(0, make_table([7]))

    assert result.suggested_decision == d(3)
    assert result.certainty == pytest.approx(4 / 7)
    assert result.decision_scores[d(2)] == pytest.approx(expected_d2_score)


def test_hybrid_without_conflict(hybrid_classifier):
    result = hybrid_classifier.classify(0, make_table([5]))

    assert result == SimpleEvaluatedClassificationResult(d(3), 1.0)
    assert hybrid_classifier._rule_coverage == {}

    assert hybrid_classifier.classify(0, make_table([3])) == SimpleEvaluatedClassificationResult(d(2), 1.0)


def test_hybrid_with_conflict_equals_score(hybrid_classifier, score_classifier):
    table = make_table([7])
    with mock.patch("drsa.scoring_classifier.BasicRuleCoverageInformation") as coverage_information:
        hybrid_result = hybrid_classifier.classify(0, table)
    # coverage of the learning table is already known to the prudent classifier
    coverage_information.assert_not_called()

    score_result = score_classifier.classify(0, table)

    assert hybrid_result.suggested_decision == score_result.suggested_decision == d(3)
    assert hybrid_result.certainty == pytest.approx(score_result.certainty)
    assert hybrid_result.certainty == pytest.approx(4 / 7)


def test_default_result(rules, default_result, learning_table):
    for mode in Mode:
        classifier = ScoringRuleClassifier(RuleSet([rules[1]]), default_result, mode, learning_table)
        assert classifier.classify(0, make_table([1])) is default_result
    assert classifier.classify_with_score([]) is default_result


def test_rule_set_with_characteristics(rules, default_result, learning_table, score_classifier):
    rule_set = RuleSetWithCharacteristics.from_learning_table(rules, learning_table)
    classifier = ScoringRuleClassifier(rule_set, default_result, Mode.SCORE, learning_table)
    table = make_table([4.5, 3, 7])

    assert classifier.classify_all(table) == score_classifier.classify_all(table)
    assert classifier.predict(table).tolist() == [3, 2, 3]


def test_construction_errors(rule_set, default_result):
    with pytest.raises(InvalidSizeError):
        ScoringRuleClassifier(rule_set, default_result, Mode.SCORE, make_table([], []))

    with pytest.raises(MissingDecisionsError):
        ScoringRuleClassifier(rule_set, default_result, Mode.SCORE, make_table([1, 2]))

    composite = InformationTable(
        pd.DataFrame({Criterion("g"): [1, 2], DecisionCriterion("d1"): [1, 2], DecisionCriterion("d2"): [1, 2]})
    )
    with pytest.raises(InvalidTypeError):
        ScoringRuleClassifier(rule_set, default_result, Mode.SCORE, composite)

    nominal = InformationTable(
        pd.DataFrame({Criterion("g"): [1, 2], DecisionCriterion("d", preference_type=PreferenceType.NONE): [1, 2]})
    )
    with pytest.raises(InvalidValueError):
        ScoringRuleClassifier(rule_set, default_result, Mode.SCORE, nominal)

    with pytest.raises(InvalidValueError):
        ScoringRuleClassifier(rule_set, default_result, Mode.SCORE, make_table([1], [1]), version="ejor")
