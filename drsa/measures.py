from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .types import PreferenceType, UnionType

if TYPE_CHECKING:
    from .union import Union


def _cone(object_index: int, union: "Union") -> frozenset[int]:
    cones = union.information_table.dominance_cones
    if union.union_type == UnionType.AT_LEAST:
        return cones.positive_inv_cone(object_index)
    return cones.negative_cone(object_index)


class ConsistencyMeasure(ABC):
    """Measure of how consistent an object is with a union (variable-consistency DRSA)."""

    measure_type: PreferenceType

    @abstractmethod
    def calculate_consistency(self, object_index: int, union: "Union") -> float: ...

    def is_consistency_threshold_reached(self, object_index: int, union: "Union", threshold: float) -> bool:
        consistency = self.calculate_consistency(object_index, union)
        if self.measure_type == PreferenceType.GAIN:
            return consistency >= threshold
        return consistency <= threshold


class EpsilonConsistencyMeasure(ConsistencyMeasure):
    """Share of the complementary union found in the dominance cone of an object; lower is better."""

    measure_type = PreferenceType.COST

    def calculate_consistency(self, object_index: int, union: "Union") -> float:
        complementary_set_size = union.complementary_set_size
        if not complementary_set_size:
            return 0.0
        negative_objects = sum(1 for y in _cone(object_index, union) if union.is_object_negative(y))
        return negative_objects / complementary_set_size


class RoughMembershipMeasure(ConsistencyMeasure):
    """Share of union objects in the dominance cone of an object; higher is better."""

    measure_type = PreferenceType.GAIN

    def calculate_consistency(self, object_index: int, union: "Union") -> float:
        cone = _cone(object_index, union)
        if not cone:
            return 0.0
        return len(cone & union.objects) / len(cone)
