import logging
import math

from . import config
from .classification_result import SimpleClassificationResult, SimpleEvaluatedClassificationResult
from .classifier import BaseClassifier, SimpleOptimizingRuleClassifier
from .decision import Decision, SimpleDecision
from .exceptions import (
    InvalidSizeError,
    InvalidTypeError,
    InvalidValueError,
    MissingDecisionsError,
    UnknownRuleSemanticsError,
)
from .information_table import InformationTable
from .rule import BasicRuleCoverageInformation, Rule, RuleSet, RuleSetWithCharacteristics
from .types import Mode, PreferenceType, RuleSemantics, ScoreVersion
from .utils import calculate_score_quotient, not_null

logger = logging.getLogger(__name__)


class _DetailedRuleCoverageInformation:
    def __init__(self, coverage_information: BasicRuleCoverageInformation, decision_indices: dict) -> None:
        """Learning objects covered by a rule, split by decision class."""
        self.covered_objects = frozenset(coverage_information.covered_objects)
        self.positive_objects = frozenset(coverage_information.positive_objects)
        # covered objects satisfying the decision part of the rule
        self.supporting_objects = self.covered_objects & self.positive_objects

        class_objects: dict[int, set[int]] = {}
        for object_index, decision in coverage_information.decisions_of_covered_objects.items():
            decision_index = decision_indices.get(decision.evaluation)
            if decision_index is not None:
                class_objects.setdefault(decision_index, set()).add(object_index)
        self.class_objects = {index: frozenset(objects) for index, objects in class_objects.items()}

        self._objects_not_in_class: dict[int, frozenset[int]] = {}

    def get_class_objects(self, decision_index: int) -> frozenset[int]:
        return self.class_objects.get(decision_index, frozenset())

    def get_objects_not_in_class(self, decision_index: int) -> frozenset[int]:
        if decision_index not in self._objects_not_in_class:
            self._objects_not_in_class[decision_index] = self.covered_objects - self.get_class_objects(decision_index)
        return self._objects_not_in_class[decision_index]


class _ScoreHistory:
    def __init__(self) -> None:
        """Scores of the considered decisions and the best one seen so far.

        Decisions have to be passed from the worst to the best one: only a strictly
        higher Score replaces the maximum, so ties keep the worse decision.
        """
        self.scores: dict[int, float] = {}
        self.max_score = -math.inf
        self.max_score_decision_index: int | None = None

    def update(self, decision_index: int, score: float) -> None:
        self.scores[decision_index] = score
        if score > self.max_score:
            self.max_score = score
            self.max_score_decision_index = decision_index


class ScoringRuleClassifier(BaseClassifier):
    def __init__(
        self,
        rule_set: RuleSet,
        default_result: SimpleClassificationResult,
        mode: Mode,
        learning_table: InformationTable,
        version: ScoreVersion | None = None,
    ) -> None:
        """Rule classifier choosing the decision with the highest Score.

        ``Score(Cl, z) = Score+(Cl, z) - Score-(Cl, z)``, where ``Score+`` measures
        how well rules suggesting `Cl` and covering `z` fit `Cl` among learning
        objects, and ``Score-`` how well rules covering `z` but not suggesting `Cl`
        fit their own suggestions.

        :param mode: ``SCORE`` always calculates Score; ``HYBRID`` first checks
        if covering rules agree and calculates Score only in case of a conflict
        :param learning_table: table the rules were induced from; all its decisions
        have to be simple, on a gain or cost type attribute
        :param version: formula for ``Score-``, defaults to `config.DEFAULT_SCORE_VERSION`
        """
        super().__init__(rule_set, default_result)
        self.mode = not_null(mode, "Classification mode is null.")
        self.learning_table = not_null(learning_table, "Learning information table is null.")
        self.version = version if version is not None else config.DEFAULT_SCORE_VERSION

        if not isinstance(self.mode, Mode):
            raise InvalidValueError(f"Unsupported classification mode {mode!r}.")
        if not isinstance(self.version, ScoreVersion):
            raise InvalidValueError(f"Unsupported Score version {version!r}.")

        if learning_table.number_of_objects < 1:
            raise InvalidSizeError("Learning information table is empty.")
        if learning_table.decisions is None:
            raise MissingDecisionsError("Learning information table does not contain decisions.")
        for decision in learning_table.decisions:
            if not isinstance(decision, SimpleDecision):
                raise InvalidTypeError(f"Decision {decision!r} of a learning object is not simple.")

        decision_attribute = learning_table.get_attribute(learning_table.decision_attribute_indices[0])
        if decision_attribute.preference_type not in (PreferenceType.GAIN, PreferenceType.COST):
            raise InvalidValueError(f"Decision attribute {decision_attribute!r} is neither gain nor cost type.")

        self.decisions: tuple[Decision, ...] = learning_table.get_ordered_unique_fully_determined_decisions()
        self.decision_indices = {decision.evaluation: index for index, decision in enumerate(self.decisions)}
        self.decision_distribution = learning_table.decision_distribution
        self.number_of_learning_objects = learning_table.number_of_objects

        self._rule_coverage: dict[int, _DetailedRuleCoverageInformation] = {}
        self._probing_classifier: SimpleOptimizingRuleClassifier | None = None
        if self.mode == Mode.HYBRID:
            self._probing_classifier = SimpleOptimizingRuleClassifier(rule_set, default_result, learning_table)

        logger.info(
            "Score classifier: %d rules, %d learning objects, %d decisions, mode %s, version %s",
            len(self.rule_set),
            self.number_of_learning_objects,
            len(self.decisions),
            self.mode.name,
            self.version.name,
        )

    def _get_rule_coverage(self, rule_index: int) -> _DetailedRuleCoverageInformation:
        if rule_index not in self._rule_coverage:
            if isinstance(self.rule_set, RuleSetWithCharacteristics):
                coverage_information = self.rule_set.get_rule_coverage_information(rule_index)
            elif self._probing_classifier is not None:
                coverage_information = self._probing_classifier.get_basic_rule_coverage_information(rule_index)
            else:
                coverage_information = BasicRuleCoverageInformation(
                    self.rule_set.get_rule(rule_index), self.learning_table
                )
            self._rule_coverage[rule_index] = _DetailedRuleCoverageInformation(
                coverage_information, self.decision_indices
            )
            logger.debug("Cached coverage of rule %d", rule_index)
        return self._rule_coverage[rule_index]

    def get_indices_of_covering_rules(self, object_index: int, information_table: InformationTable) -> list[int]:
        return [
            rule_index
            for rule_index, rule in enumerate(self.rule_set)
            if rule.covers(object_index, information_table)
        ]

    def calculate_decision_loop_parameters(self, rule: Rule) -> range:
        """Indices of decisions suggested by a rule, from the worst to the best one."""
        limiting_evaluation = rule.decision.limiting_evaluation
        if limiting_evaluation not in self.decision_indices:
            raise InvalidValueError(f"Limiting evaluation {limiting_evaluation!r} is not a learning decision.")
        limit_index = self.decision_indices[limiting_evaluation]

        if rule.semantics == RuleSemantics.AT_LEAST:
            return range(limit_index, len(self.decisions))
        if rule.semantics == RuleSemantics.AT_MOST:
            return range(0, limit_index + 1)
        raise UnknownRuleSemanticsError(f"Semantics of rule {rule!r} is neither at least nor at most.")

    def _class_count(self, decision_index: int) -> int:
        return self.decision_distribution.get_count(self.decisions[decision_index])

    def _calculate_negative_score(self, decision_index: int, negative_rule_indices: list[int]) -> float:
        covered_objects: set[int] = set()
        numerator_objects: set[int] = set()

        if self.version == ScoreVersion.EJOR_2007:
            positive_objects: set[int] = set()
            for rule_index in negative_rule_indices:
                coverage = self._get_rule_coverage(rule_index)
                numerator_objects |= coverage.supporting_objects
                covered_objects |= coverage.covered_objects
                positive_objects |= coverage.positive_objects
            return calculate_score_quotient(len(numerator_objects), len(covered_objects), len(positive_objects))

        if self.version == ScoreVersion.COMPLEMENT:
            for rule_index in negative_rule_indices:
                coverage = self._get_rule_coverage(rule_index)
                numerator_objects |= coverage.get_objects_not_in_class(decision_index)
                covered_objects |= coverage.covered_objects
            return calculate_score_quotient(
                len(numerator_objects),
                len(covered_objects),
                self.number_of_learning_objects - self._class_count(decision_index),
            )

        raise InvalidValueError(f"Unsupported Score version {self.version!r}.")

    def classify_with_score(self, covering_rule_indices: list[int]) -> SimpleClassificationResult:
        if not covering_rule_indices:
            return self.default_result

        loop_ranges = {
            rule_index: self.calculate_decision_loop_parameters(self.rule_set.get_rule(rule_index))
            for rule_index in covering_rule_indices
        }
        history = _ScoreHistory()

        if len(covering_rule_indices) == 1:
            rule_index = covering_rule_indices[0]
            coverage = self._get_rule_coverage(rule_index)
            for decision_index in loop_ranges[rule_index]:
                history.update(
                    decision_index,
                    calculate_score_quotient(
                        len(coverage.get_class_objects(decision_index)),
                        len(coverage.covered_objects),
                        self._class_count(decision_index),
                    ),
                )
        else:
            candidate_decision_indices = sorted(set().union(*loop_ranges.values()))
            for decision_index in candidate_decision_indices:
                class_objects: set[int] = set()
                covered_objects: set[int] = set()
                negative_rule_indices = []
                for rule_index in covering_rule_indices:
                    if decision_index in loop_ranges[rule_index]:
                        coverage = self._get_rule_coverage(rule_index)
                        class_objects |= coverage.get_class_objects(decision_index)
                        covered_objects |= coverage.covered_objects
                    else:
                        negative_rule_indices.append(rule_index)

                score = calculate_score_quotient(
                    len(class_objects), len(covered_objects), self._class_count(decision_index)
                )
                if negative_rule_indices:
                    score -= self._calculate_negative_score(decision_index, negative_rule_indices)
                history.update(decision_index, score)

        return SimpleEvaluatedClassificationResult(
            self.decisions[history.max_score_decision_index],
            history.max_score,
            {self.decisions[index]: score for index, score in history.scores.items()},
        )

    def classify(self, object_index: int, information_table: InformationTable) -> SimpleClassificationResult:
        if self.mode == Mode.SCORE:
            return self.classify_with_score(self.get_indices_of_covering_rules(object_index, information_table))

        result, covering_rule_indices, conflicting = self._probing_classifier.probe(object_index, information_table)
        if not covering_rule_indices:
            return self.default_result
        if not conflicting:
            return SimpleEvaluatedClassificationResult(result.suggested_decision, 1.0)

        logger.debug("Object %d: covering rules conflict, calculating Score", object_index)
        return self.classify_with_score(covering_rule_indices)
