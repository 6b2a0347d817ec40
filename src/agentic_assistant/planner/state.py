from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict


class Capability(str, Enum):
    """Capabilities a plan step can be bound to. Values are the names used on the wire."""

    KNOWLEDGE = "KnowledgeAgent"
    WEB_SEARCH = "WebSearchAgent"
    CODE_GENERATION = "CodeGenerationAgent"
    SUMMARIZATION = "SummarizationAgent"
    IMAGE_ANALYSIS = "ImageAnalysisAgent"


CAPABILITY_DESCRIPTIONS = {
    Capability.KNOWLEDGE: "Searches through uploaded documents to answer questions.",
    Capability.WEB_SEARCH: "Searches the web for real-time information.",
    Capability.CODE_GENERATION: "Writes code in various programming languages.",
    Capability.IMAGE_ANALYSIS: "Analyzes an attached image.",
    Capability.SUMMARIZATION: "Summarizes a given text or document.",
}

Role = Literal["user", "assistant"]
PlanSource = Literal["fenced", "raw", "fallback"]


class ConversationTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    text: str
    capability: Optional[str] = None


class PlanStep(BaseModel):
    """One step of a plan.

    `capability` stays a plain string: names the planner invents are carried through
    and rejected by the dispatcher, not here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    capability: str = Field(..., alias="agent")
    prompt_template: str = Field(..., alias="prompt")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class Plan(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: Tuple[PlanStep, ...] = Field(..., min_length=1)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __getitem__(self, index: int) -> PlanStep:
        return self.steps[index]

    @classmethod
    def of(cls, steps: Sequence[PlanStep]) -> "Plan":
        return cls(steps=tuple(steps))

    @classmethod
    def fallback(cls, request: str) -> "Plan":
        """Single web-search step over the raw request."""
        return cls.of([PlanStep(capability=Capability.WEB_SEARCH.value, prompt_template=request)])

    def to_wire(self) -> List[dict]:
        return [s.to_wire() for s in self.steps]


class PlannerGraphState(TypedDict, total=False):
    # Inputs
    request: str
    history: List[ConversationTurn]

    # Outputs
    plan: Plan
    plan_source: PlanSource
