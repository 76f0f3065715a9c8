from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from . import config
from .decision import DecisionDistribution
from .measures import ConsistencyMeasure
from .types import UnionType
from .utils import not_null

if TYPE_CHECKING:
    from .union import Union


class RoughSetCalculator(ABC):
    @abstractmethod
    def calculate_lower_approximation(self, union: "Union") -> frozenset[int]: ...

    @abstractmethod
    def calculate_upper_approximation(self, union: "Union") -> frozenset[int]: ...

    def calculate_positive_region(self, union: "Union", lower_approximation: frozenset[int]) -> frozenset[int]:
        """Objects of the lower approximation together with their dominance cones.

        Cones "towards" the union are taken: positive inverted cones for an
        upward union, negative cones for a downward one.
        """
        cones = union.information_table.dominance_cones
        positive_region = set(lower_approximation)
        for object_index in lower_approximation:
            if union.union_type == UnionType.AT_LEAST:
                positive_region |= cones.positive_inv_cone(object_index)
            else:
                positive_region |= cones.negative_cone(object_index)
        return frozenset(positive_region)


class ClassicalDominanceBasedRoughSetCalculator(RoughSetCalculator):
    def __init__(self, reflexive: bool = config.REFLEXIVE_DOMINANCE) -> None:
        """Classical DRSA: an object is certain when its dominance cone contains no negative decision.

        :param reflexive: if ``False``, an object is not counted in its own cones
        """
        self.reflexive = reflexive

    def _distribution(self, object_index: int, union: "Union", lower: bool) -> DecisionDistribution:
        cones = union.information_table.dominance_cones
        if (union.union_type == UnionType.AT_LEAST) == lower:
            distribution = cones.get_positive_inv_dcone_decision_class_distribution(object_index)
        else:
            distribution = cones.get_negative_dcone_decision_class_distribution(object_index)

        if not self.reflexive:
            distribution = distribution.without_one(union.information_table.get_decision(object_index))
        return distribution

    def calculate_lower_approximation(self, union: "Union") -> frozenset[int]:
        lower_approximation = set()
        for object_index in union.objects:
            distribution = self._distribution(object_index, union, lower=True)
            if not any(union.is_decision_negative(decision) for decision in distribution):
                lower_approximation.add(object_index)
        return frozenset(lower_approximation)

    def calculate_upper_approximation(self, union: "Union") -> frozenset[int]:
        upper_approximation = set(union.objects)
        for object_index in range(union.information_table.number_of_objects):
            if object_index in upper_approximation:
                continue
            distribution = self._distribution(object_index, union, lower=False)
            if any(union.is_decision_positive(decision) for decision in distribution):
                upper_approximation.add(object_index)
        return frozenset(upper_approximation)


class VCDominanceBasedRoughSetCalculator(RoughSetCalculator):
    def __init__(self, consistency_measure: ConsistencyMeasure, threshold: float) -> None:
        """Variable-consistency DRSA.

        :param consistency_measure: measure evaluated for each union object
        :param threshold: value the measure has to reach (``<=`` for cost-type
        measures, ``>=`` for gain-type ones)
        """
        self.consistency_measure = not_null(consistency_measure, "Consistency measure is null.")
        self.threshold = not_null(threshold, "Consistency threshold is null.")

    def calculate_lower_approximation(self, union: "Union") -> frozenset[int]:
        return frozenset(
            object_index
            for object_index in union.objects
            if self.consistency_measure.is_consistency_threshold_reached(object_index, union, self.threshold)
        )

    def calculate_upper_approximation(self, union: "Union") -> frozenset[int]:
        all_objects = frozenset(range(union.information_table.number_of_objects))
        return all_objects - union.complementary_union.lower_approximation
