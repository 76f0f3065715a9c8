import logging
from enum import IntEnum

import pandas as pd

from drsa.calculator import ClassicalDominanceBasedRoughSetCalculator, VCDominanceBasedRoughSetCalculator
from drsa.classification_result import SimpleClassificationResult
from drsa.criterion import Criterion, DecisionCriterion
from drsa.decision import SimpleDecision
from drsa.information_table import InformationTable
from drsa.measures import EpsilonConsistencyMeasure
from drsa.rule import Condition, Conjunction, Operator, Rule, RuleSet
from drsa.scoring_classifier import ScoringRuleClassifier
from drsa.types import Mode
from drsa.unions import UnionsWithSingleLimitingDecision
from drsa.validation import validate

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")


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


criteria = [
    Criterion("g1"),
    Criterion("g2", is_cost=True),
    DecisionCriterion("class"),
]


data = InformationTable(
    df=pd.DataFrame(
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
        columns=criteria,
    )
)

for calculator in (
    ClassicalDominanceBasedRoughSetCalculator(),
    VCDominanceBasedRoughSetCalculator(EpsilonConsistencyMeasure(), 0.25),
):
    unions = UnionsWithSingleLimitingDecision(data, calculator)
    print(type(calculator).__name__)
    for union in unions.upward_unions + unions.downward_unions:
        print(f"  {union}: lower {sorted(union.lower_approximation)}, upper {sorted(union.upper_approximation)}")
    print(f"  quality of approximation: {unions.quality_of_approximation():.3f}")


def rule(conditions: Conjunction, operator: Operator, decision_class: Result) -> Rule:
    return Rule(conditions, Condition(2, operator, decision_class))


g1_at_least_good = Conjunction() + Condition(0, Operator.GE, G1.GOOD)
g2_at_least_2 = Conjunction() + Condition(1, Operator.GE, 2, criteria[1].preference_type)

rules = RuleSet(
    [
        rule(g1_at_least_good, Operator.GE, Result.C3),
        rule(g2_at_least_2 + Condition(0, Operator.GE, G1.MEDIUM), Operator.GE, Result.C3),
        rule(Conjunction() + Condition(0, Operator.LE, G1.BAD), Operator.LE, Result.C2),
        rule(Conjunction() + Condition(1, Operator.LE, 3, criteria[1].preference_type), Operator.LE, Result.C2),
    ]
)
print(rules)

default_result = SimpleClassificationResult(SimpleDecision(Result.C2, 2))
for mode in Mode:
    classifier = ScoringRuleClassifier(rules, default_result, mode, data)
    print(mode.name, classifier.predict(data).tolist())
    validation_result = validate(classifier, data)
    print(validation_result.confusion_matrix)
