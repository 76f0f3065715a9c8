from .types import AttributeType, PreferenceType


class BaseCriterion:
    attribute_type = AttributeType.CONDITION

    def __init__(self, name: str, active: bool = True) -> None:
        """Base class for criteria (columns of an information table)."""
        self.name = name
        self.active = active

    def is_active(self) -> bool:
        return self.active

    def __repr__(self) -> str:
        return self.name


class Criterion(BaseCriterion):
    def __init__(
        self,
        name: str,
        is_cost: bool = False,
        active: bool = True,
        preference_type: PreferenceType | None = None,
    ) -> None:
        """Class for evaluation criteria describing objects.

        :param is_cost: if ``True``, smaller values are better, defaults to ``False``
        :param preference_type: overrides `is_cost`; ``PreferenceType.NONE`` makes the
        criterion nominal (compared only for equality)
        """
        super().__init__(name, active)
        if preference_type is None:
            preference_type = PreferenceType.COST if is_cost else PreferenceType.GAIN
        self.preference_type = preference_type

    @property
    def is_cost(self) -> bool:
        return self.preference_type == PreferenceType.COST

    @property
    def is_ordinal(self) -> bool:
        return self.preference_type != PreferenceType.NONE

    def __repr__(self) -> str:
        return f"{self.name}; {self.preference_type.value} attr"


class DecisionCriterion(Criterion):
    attribute_type = AttributeType.DECISION

    def __repr__(self) -> str:
        return f"{self.name}; decision attr"


class IdentificationCriterion(BaseCriterion):
    attribute_type = AttributeType.IDENTIFICATION

    def __repr__(self) -> str:
        return f"{self.name}; id attr"
