from pydantic import BaseModel
from typing import Dict, Optional


class CredentialSecret(BaseModel):
    """Read-only view of a credential secret owned by the secret store."""
    name: str
    annotations: Dict[str, str] = {}
    labels: Dict[str, str] = {}

    def get_annotation(self, key: str) -> Optional[str]:
        return self.annotations.get(key)

    def get_label(self, key: str) -> Optional[str]:
        return self.labels.get(key)
