import logging
from abc import ABC, abstractmethod

from . import config
from .calculator import RoughSetCalculator
from .decision import Decision
from .exceptions import InvalidSizeError, MissingDecisionsError
from .information_table import InformationTable
from .types import UnionType
from .union import Union
from .utils import not_null

logger = logging.getLogger(__name__)


class Unions(ABC):
    def __init__(self, information_table: InformationTable, rough_set_calculator: RoughSetCalculator) -> None:
        """Family of upward and downward unions of decision classes of one table."""
        self.information_table = not_null(information_table, "Information table is null.")
        self.rough_set_calculator = not_null(rough_set_calculator, "Rough set calculator is null.")

        self._upward_unions: tuple[Union, ...] | None = None
        self._downward_unions: tuple[Union, ...] | None = None

    @abstractmethod
    def _calculate_upward_unions(self) -> list[Union]: ...

    @abstractmethod
    def _calculate_downward_unions(self) -> list[Union]: ...

    @property
    def upward_unions(self) -> tuple[Union, ...]:
        """Upward unions, from the most to the least restrictive one."""
        if self._upward_unions is None:
            self._upward_unions = tuple(self._calculate_upward_unions())
            logger.debug("Calculated %d upward unions", len(self._upward_unions))
        return self._upward_unions

    @property
    def downward_unions(self) -> tuple[Union, ...]:
        """Downward unions, from the most to the least restrictive one."""
        if self._downward_unions is None:
            self._downward_unions = tuple(self._calculate_downward_unions())
            logger.debug("Calculated %d downward unions", len(self._downward_unions))
        return self._downward_unions

    def _boundary_objects(self) -> set[int]:
        boundary_objects = set()
        for union in self.upward_unions + self.downward_unions:
            boundary_objects |= union.boundary
        return boundary_objects

    def quality_of_approximation(self) -> float:
        """Share of objects that do not belong to the boundary of any union."""
        number_of_objects = self.information_table.number_of_objects
        if not number_of_objects:
            raise InvalidSizeError("Information table is empty.")
        return 1 - len(self._boundary_objects()) / number_of_objects

    def indices_of_consistent_objects(self) -> frozenset[int]:
        return frozenset(range(self.information_table.number_of_objects)) - self._boundary_objects()

    def number_of_consistent_objects(self) -> int:
        return len(self.indices_of_consistent_objects())


class UnionsWithSingleLimitingDecision(Unions):
    def __init__(
        self,
        information_table: InformationTable,
        rough_set_calculator: RoughSetCalculator,
        include_trivial_unions: bool = config.INCLUDE_TRIVIAL_UNIONS,
    ) -> None:
        """One upward and one downward union for every distinct decision of the table.

        :param include_trivial_unions: if ``False``, unions containing all decisions
        (at least the worst one, at most the best one) are skipped, defaults to ``False``
        """
        super().__init__(information_table, rough_set_calculator)
        self.include_trivial_unions = include_trivial_unions

        limiting_decisions = information_table.get_ordered_unique_fully_determined_decisions()
        if limiting_decisions is None:
            raise MissingDecisionsError("Information table does not contain decisions.")
        if not limiting_decisions:
            raise InvalidSizeError("Information table does not contain any fully determined decision.")
        self.limiting_decisions: tuple[Decision, ...] = limiting_decisions

    def _create_unions(self, union_type: UnionType, limiting_decisions: list[Decision]) -> list[Union]:
        # neutral decisions keep a union that contains all limiting decisions non-trivial
        decisions = self.information_table.decision_distribution.decisions
        unions = []
        for limiting_decision in limiting_decisions:
            union = Union(union_type, limiting_decision, self.information_table, self.rough_set_calculator)
            if not self.include_trivial_unions and all(union.is_decision_positive(decision) for decision in decisions):
                logger.debug("Skipping trivial union %r", union)
                continue
            unions.append(union)
        return unions

    def _calculate_upward_unions(self) -> list[Union]:
        return self._create_unions(UnionType.AT_LEAST, list(reversed(self.limiting_decisions)))

    def _calculate_downward_unions(self) -> list[Union]:
        return self._create_unions(UnionType.AT_MOST, list(self.limiting_decisions))

    def get_union(self, union_type: UnionType, limiting_decision: Decision) -> Union | None:
        unions = self.upward_unions if union_type == UnionType.AT_LEAST else self.downward_unions
        for union in unions:
            if union.limiting_decision == limiting_decision:
                return union
        return None
