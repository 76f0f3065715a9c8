import logging
from typing import TYPE_CHECKING

from .criterion import Criterion
from .decision import Decision
from .exceptions import InvalidSizeError, InvalidTypeError, InvalidValueError
from .information_table import InformationTable
from .types import AttributeType, TernaryLogicValue, UnionType
from .utils import not_null

if TYPE_CHECKING:
    from .calculator import RoughSetCalculator

logger = logging.getLogger(__name__)


class Union:
    def __init__(
        self,
        union_type: UnionType,
        limiting_decision: Decision,
        information_table: InformationTable,
        rough_set_calculator: "RoughSetCalculator",
        include_limiting_decision: bool = True,
    ) -> None:
        """Upward (``AT_LEAST``) or downward (``AT_MOST``) union of decision classes.

        :param limiting_decision: decision bounding the union; every attribute
        contributing to it has to be an active decision criterion, at least one
        of them ordinal
        :param include_limiting_decision: if ``False``, objects having exactly
        the limiting decision do not belong to the union, defaults to ``True``
        """
        self.union_type = not_null(union_type, "Union type is null.")
        self.limiting_decision = not_null(limiting_decision, "Limiting decision is null.")
        self.information_table = not_null(information_table, "Information table is null.")
        self.rough_set_calculator = not_null(rough_set_calculator, "Rough set calculator is null.")
        self.include_limiting_decision = include_limiting_decision

        self._validate_limiting_decision()

        self._objects: frozenset[int] | None = None
        self._neutral_objects: frozenset[int] | None = None
        self._lower_approximation: frozenset[int] | None = None
        self._upper_approximation: frozenset[int] | None = None
        self._positive_region: frozenset[int] | None = None
        self._complementary_union: "Union | None" = None

    def _validate_limiting_decision(self) -> None:
        at_least_one_ordinal = False
        for attribute_index in sorted(self.limiting_decision.attribute_indices):
            attribute = self.information_table.get_attribute(attribute_index)
            if not isinstance(attribute, Criterion):
                raise InvalidTypeError(f"Attribute {attribute!r} is not an evaluation attribute.")
            if not attribute.is_active():
                raise InvalidValueError(f"Attribute {attribute!r} is not active.")
            if attribute.attribute_type != AttributeType.DECISION:
                raise InvalidValueError(f"Attribute {attribute!r} is not a decision attribute.")
            at_least_one_ordinal = at_least_one_ordinal or attribute.is_ordinal

        if not at_least_one_ordinal:
            raise InvalidValueError("Limiting decision does not involve any ordinal attribute.")

    def is_concordant_with_decision(self, decision: Decision) -> TernaryLogicValue:
        """Check if `decision` belongs to this union.

        ``TRUE`` for decisions inside the union, ``FALSE`` for decisions of the
        complementary union and ``UNCOMPARABLE`` for the rest.
        """
        if self.union_type == UnionType.AT_LEAST:
            towards = self.limiting_decision.is_at_most_as_good_as(decision)
            against = self.limiting_decision.is_at_least_as_good_as(decision)
        else:
            towards = self.limiting_decision.is_at_least_as_good_as(decision)
            against = self.limiting_decision.is_at_most_as_good_as(decision)

        if self.include_limiting_decision:
            if towards == TernaryLogicValue.TRUE:
                return TernaryLogicValue.TRUE
            if against == TernaryLogicValue.TRUE:
                return TernaryLogicValue.FALSE
        else:
            if against == TernaryLogicValue.TRUE:
                return TernaryLogicValue.FALSE
            if towards == TernaryLogicValue.TRUE:
                return TernaryLogicValue.TRUE
        return TernaryLogicValue.UNCOMPARABLE

    def is_decision_positive(self, decision: Decision) -> bool:
        return self.is_concordant_with_decision(decision) == TernaryLogicValue.TRUE

    def is_decision_negative(self, decision: Decision) -> bool:
        return self.is_concordant_with_decision(decision) == TernaryLogicValue.FALSE

    def is_decision_neutral(self, decision: Decision) -> bool:
        return self.is_concordant_with_decision(decision) == TernaryLogicValue.UNCOMPARABLE

    def _find_objects(self) -> None:
        objects = set()
        neutral_objects = set()
        for object_index in range(self.information_table.number_of_objects):
            concordance = self.is_concordant_with_decision(self.information_table.get_decision(object_index))
            if concordance == TernaryLogicValue.TRUE:
                objects.add(object_index)
            elif concordance == TernaryLogicValue.UNCOMPARABLE:
                neutral_objects.add(object_index)

        self._objects = frozenset(objects)
        self._neutral_objects = frozenset(neutral_objects)
        logger.debug("%r: %d objects, %d neutral objects", self, len(objects), len(neutral_objects))

    @property
    def objects(self) -> frozenset[int]:
        if self._objects is None:
            self._find_objects()
        return self._objects

    @property
    def neutral_objects(self) -> frozenset[int]:
        if self._neutral_objects is None:
            self._find_objects()
        return self._neutral_objects

    @property
    def complementary_set_size(self) -> int:
        """Number of objects belonging to the complementary union."""
        return self.information_table.number_of_objects - len(self.objects) - len(self.neutral_objects)

    def is_object_positive(self, object_index: int) -> bool:
        return object_index in self.objects

    def is_object_neutral(self, object_index: int) -> bool:
        return object_index in self.neutral_objects

    def is_object_negative(self, object_index: int) -> bool:
        return not self.is_object_positive(object_index) and not self.is_object_neutral(object_index)

    @property
    def lower_approximation(self) -> frozenset[int]:
        if self._lower_approximation is None:
            self._lower_approximation = self.rough_set_calculator.calculate_lower_approximation(self)
            logger.debug("%r: lower approximation calculated", self)
        return self._lower_approximation

    @property
    def upper_approximation(self) -> frozenset[int]:
        if self._upper_approximation is None:
            self._upper_approximation = self.rough_set_calculator.calculate_upper_approximation(self)
            logger.debug("%r: upper approximation calculated", self)
        return self._upper_approximation

    @property
    def boundary(self) -> frozenset[int]:
        return self.upper_approximation - self.lower_approximation

    @property
    def positive_region(self) -> frozenset[int]:
        if self._positive_region is None:
            self._positive_region = self.rough_set_calculator.calculate_positive_region(
                self, self.lower_approximation
            )
        return self._positive_region

    @property
    def negative_region(self) -> frozenset[int]:
        all_objects = frozenset(range(self.information_table.number_of_objects))
        return all_objects - (self.positive_region | self.complementary_union.positive_region)

    @property
    def accuracy_of_approximation(self) -> float:
        upper_approximation_size = len(self.upper_approximation)
        if not upper_approximation_size:
            raise InvalidSizeError(f"Upper approximation of {self!r} is empty.")
        return len(self.lower_approximation) / upper_approximation_size

    @property
    def complementary_union(self) -> "Union":
        if self._complementary_union is None:
            complementary_union = Union(
                self.union_type.opposite(),
                self.limiting_decision,
                self.information_table,
                self.rough_set_calculator,
                not self.include_limiting_decision,
            )
            complementary_union.set_complementary_union(self)
            self.set_complementary_union(complementary_union)
        return self._complementary_union

    def set_complementary_union(self, union: "Union") -> bool:
        """Set the complementary union once. Later calls are ignored and return ``False``."""
        if self._complementary_union is not None:
            return False
        self._complementary_union = union
        return True

    def __repr__(self) -> str:
        sign = ">=" if self.union_type == UnionType.AT_LEAST else "<="
        if not self.include_limiting_decision:
            sign = sign[0]
        return f"Cl{sign}{self.limiting_decision!r}"
