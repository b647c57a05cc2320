from pydantic import BaseModel, Field
from typing import Dict, Any
from enum import Enum


class EnvironmentKind(str, Enum):
    PERMANENT = "permanent"
    PREVIEW = "preview"
    TEST = "test"
    EDIT = "edit"
    DEVELOPMENT = "development"


class PromotionStrategy(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"
    NEVER = "never"


class Environment(BaseModel):
    name: str = Field(..., min_length=1, max_length=253)
    namespace: str = ""
    kind: str = EnvironmentKind.PERMANENT.value
    promotion_strategy: str = PromotionStrategy.MANUAL.value
    order: int = 0

    def is_auto_promoted_permanent(self) -> bool:
        """True if this environment belongs in the generated default workflow."""
        return (
            self.promotion_strategy == PromotionStrategy.AUTOMATIC.value
            and self.kind == EnvironmentKind.PERMANENT.value
        )

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Environment":
        return cls.model_validate(record)
