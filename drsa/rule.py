from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from .decision import Decision, is_at_least_as_good_as, is_at_most_as_good_as, is_equal_to
from .exceptions import InvalidValueError
from .types import PreferenceType, RuleSemantics, TernaryLogicValue
from .utils import not_null

if TYPE_CHECKING:
    from .information_table import InformationTable


class Operator(Enum):
    GE = ">="
    LE = "<="
    EQ = "="


class Condition:
    def __init__(
        self,
        attribute_index: int,
        operator: Operator,
        limiting_evaluation: Any,
        preference_type: PreferenceType = PreferenceType.GAIN,
    ) -> None:
        """Represents a single elementary condition ``a_i <op> value``.

        Operators are preference-aware: ``GE`` means "at least as good as", so on a
        cost attribute it is satisfied by values not greater than the limit.

        :param attribute_index: index of the attribute in an information table
        :param limiting_evaluation: the value to compare the evaluation against
        :param preference_type: preference type of the attribute, defaults to ``GAIN``
        """
        self.attribute_index = attribute_index
        self.operator = operator
        self.limiting_evaluation = limiting_evaluation
        self.preference_type = preference_type

        self.condition_str = f"a{attribute_index} {operator.value} {limiting_evaluation!r}"

    def satisfied_by_evaluation(self, evaluation: Any) -> bool:
        if self.operator == Operator.GE:
            result = is_at_least_as_good_as(evaluation, self.limiting_evaluation, self.preference_type)
        elif self.operator == Operator.LE:
            result = is_at_most_as_good_as(evaluation, self.limiting_evaluation, self.preference_type)
        else:
            result = is_equal_to(evaluation, self.limiting_evaluation)
        return result == TernaryLogicValue.TRUE

    def satisfied_by(self, object_index: int, information_table: "InformationTable") -> bool:
        return self.satisfied_by_evaluation(information_table.get_evaluation(object_index, self.attribute_index))

    def __hash__(self) -> int:
        return hash(self.condition_str)

    def __eq__(self, __value: object) -> bool:
        if not isinstance(__value, Condition):
            return NotImplemented
        return self.condition_str == __value.condition_str and self.preference_type == __value.preference_type

    def __repr__(self) -> str:
        return self.condition_str


class Conjunction:
    def __init__(self, conditions: Iterable[Condition] | None = None):
        """Conjunction of elementary conditions. An empty conjunction covers every object."""
        self.conditions: tuple[Condition, ...] = tuple(conditions) if conditions is not None else ()

    def covers(self, object_index: int, information_table: "InformationTable") -> bool:
        return all(condition.satisfied_by(object_index, information_table) for condition in self.conditions)

    def __add__(self, condition: Condition) -> "Conjunction":
        """Returns a new conjunction extended with `condition`."""
        if condition in self.conditions:
            raise InvalidValueError(f"Condition {condition} already exists in conjunction")
        return Conjunction([*self.conditions, condition])

    def __len__(self) -> int:
        return len(self.conditions)

    def __hash__(self) -> int:
        return hash(frozenset(self.conditions))

    def __eq__(self, __value: object) -> bool:
        if not isinstance(__value, Conjunction):
            return NotImplemented
        return set(self.conditions) == set(__value.conditions)

    def __repr__(self) -> str:
        if not self.conditions:
            return "<empty conjunction>"
        return " and ".join(condition.condition_str for condition in self.conditions)


class Rule:
    def __init__(self, conditions: Conjunction | Iterable[Condition], decision: Condition) -> None:
        """Decision rule ``if <conditions> then <decision>``.

        :param decision: condition on a decision attribute; its operator defines rule semantics
        """
        if not isinstance(conditions, Conjunction):
            conditions = Conjunction(conditions)
        self.conditions = conditions
        self.decision = not_null(decision, "Rule decision is null.")

        self.rule_str = f"if {self.conditions} then {self.decision}"

    @property
    def semantics(self) -> RuleSemantics:
        if self.decision.operator == Operator.GE:
            return RuleSemantics.AT_LEAST
        if self.decision.operator == Operator.LE:
            return RuleSemantics.AT_MOST
        return RuleSemantics.EQUAL

    def covers(self, object_index: int, information_table: "InformationTable") -> bool:
        return self.conditions.covers(object_index, information_table)

    def decisions_matched_by(self, object_index: int, information_table: "InformationTable") -> bool:
        """Check if the decision of an object satisfies the decision part of this rule."""
        return self.decision.satisfied_by(object_index, information_table)

    def __hash__(self) -> int:
        return hash((self.conditions, self.decision))

    def __eq__(self, __value: object) -> bool:
        if not isinstance(__value, Rule):
            return NotImplemented
        return self.decision == __value.decision and self.conditions == __value.conditions

    def __repr__(self) -> str:
        return self.rule_str


class BasicRuleCoverageInformation:
    def __init__(self, rule: Rule, information_table: "InformationTable") -> None:
        """Objects of a (learning) table covered by a rule and objects matching its decision part."""
        self.covered_objects: list[int] = []
        self.decisions_of_covered_objects: dict[int, Decision] = {}
        self.positive_objects: set[int] = set()
        self.number_of_objects = information_table.number_of_objects

        for object_index in range(self.number_of_objects):
            if rule.covers(object_index, information_table):
                self.covered_objects.append(object_index)
                self.decisions_of_covered_objects[object_index] = information_table.get_decision(object_index)
            if rule.decisions_matched_by(object_index, information_table):
                self.positive_objects.add(object_index)

    def __repr__(self) -> str:
        return f"covered: {self.covered_objects}; positive: {sorted(self.positive_objects)}"


class RuleSet:
    def __init__(self, rules: Iterable[Rule]) -> None:
        """Immutable, ordered collection of decision rules."""
        self.rules: tuple[Rule, ...] = tuple(rules)

    def size(self) -> int:
        return len(self.rules)

    def get_rule(self, index: int) -> Rule:
        return self.rules[index]

    def __len__(self) -> int:
        return len(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __repr__(self) -> str:
        return "\n".join(repr(rule) for rule in self.rules)


class RuleSetWithCharacteristics(RuleSet):
    def __init__(self, rules: Iterable[Rule], coverage_informations: Iterable[BasicRuleCoverageInformation]) -> None:
        """Rule set with coverage information precomputed for every rule on the learning table."""
        super().__init__(rules)
        self.coverage_informations = tuple(coverage_informations)
        if len(self.coverage_informations) != len(self.rules):
            raise InvalidValueError("Number of coverage informations does not match number of rules.")

    @classmethod
    def from_learning_table(
        cls, rules: Iterable[Rule], learning_table: "InformationTable"
    ) -> "RuleSetWithCharacteristics":
        rules = tuple(rules)
        return cls(rules, [BasicRuleCoverageInformation(rule, learning_table) for rule in rules])

    def get_rule_coverage_information(self, index: int) -> BasicRuleCoverageInformation:
        return self.coverage_informations[index]
