from .decision import Decision, SimpleDecision
from .utils import not_null


class SimpleClassificationResult:
    def __init__(self, suggested_decision: SimpleDecision) -> None:
        self.suggested_decision = not_null(suggested_decision, "Suggested decision is null.")

    def __eq__(self, __value: object) -> bool:
        if not isinstance(__value, SimpleClassificationResult):
            return NotImplemented
        return self.suggested_decision == __value.suggested_decision

    def __hash__(self) -> int:
        return hash(self.suggested_decision)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.suggested_decision!r})"


class SimpleEvaluatedClassificationResult(SimpleClassificationResult):
    def __init__(
        self,
        suggested_decision: SimpleDecision,
        certainty: float,
        decision_scores: dict[Decision, float] | None = None,
    ) -> None:
        """Classification result with a certainty of the suggested decision.

        :param decision_scores: Score of every considered decision, if available
        """
        super().__init__(suggested_decision)
        self.certainty = certainty
        self.decision_scores = decision_scores if decision_scores is not None else {}

    def __eq__(self, __value: object) -> bool:
        if not isinstance(__value, SimpleEvaluatedClassificationResult):
            return NotImplemented
        return self.suggested_decision == __value.suggested_decision and self.certainty == __value.certainty

    def __hash__(self) -> int:
        return hash((self.suggested_decision, self.certainty))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.suggested_decision!r}, certainty={self.certainty})"
