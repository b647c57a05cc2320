from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Dict, Any
from enum import Enum


class WorkflowStepKind(str, Enum):
    PROMOTE = "promote"


class PromoteWorkflowStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment: str
    parallel: bool = False


class WorkflowStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    name: str
    promote: Optional[PromoteWorkflowStep] = None


class Workflow(BaseModel):
    """An ordered promotion pipeline; step order is execution order."""
    name: str
    namespace: str
    steps: List[WorkflowStep] = []

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Workflow":
        return cls.model_validate(record)


class WorkflowCreate(BaseModel):
    name: str
    namespace: Optional[str] = None
    steps: List[WorkflowStep] = []
