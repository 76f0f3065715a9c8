from enum import Enum


class TernaryLogicValue(Enum):
    TRUE = "true"
    FALSE = "false"
    UNCOMPARABLE = "uncomparable"


class UnionType(Enum):
    AT_LEAST = "at_least"
    AT_MOST = "at_most"

    def opposite(self) -> "UnionType":
        return UnionType.AT_MOST if self == UnionType.AT_LEAST else UnionType.AT_LEAST


class PreferenceType(Enum):
    GAIN = "gain"
    COST = "cost"
    NONE = "none"


class AttributeType(Enum):
    CONDITION = "condition"
    DECISION = "decision"
    IDENTIFICATION = "identification"


class RuleSemantics(Enum):
    AT_LEAST = "at_least"
    AT_MOST = "at_most"
    EQUAL = "equal"


class MissingEvaluation(Enum):
    """Unknown evaluation of an object.

    ``COMPARABLE`` is treated as satisfying every comparison, ``UNCOMPARABLE``
    makes every comparison yield ``TernaryLogicValue.UNCOMPARABLE``.
    """

    COMPARABLE = "?"
    UNCOMPARABLE = "*"

    def __repr__(self) -> str:
        return self.value


class Mode(Enum):
    SCORE = "score"
    HYBRID = "hybrid"


class ScoreVersion(Enum):
    EJOR_2007 = "ejor_2007"
    COMPLEMENT = "complement"
