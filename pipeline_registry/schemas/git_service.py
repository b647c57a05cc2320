from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from enum import Enum


class GitKind(str, Enum):
    GITHUB = "github"
    GITLAB = "gitlab"
    GITEA = "gitea"
    GERRIT = "gerrit"
    BITBUCKET_SERVER = "bitbucketserver"
    BITBUCKET_CLOUD = "bitbucketcloud"
    FAKE = "fakegit"


# The platform's default git provider needs no GitService record
DEFAULT_GIT_KIND = GitKind.GITHUB.value

# Well-known public hosts and the API dialect they speak
SAAS_GIT_KINDS: Dict[str, str] = {
    "https://github.com": GitKind.GITHUB.value,
    "http://github.com": GitKind.GITHUB.value,
    "https://gitlab.com": GitKind.GITLAB.value,
    "http://gitlab.com": GitKind.GITLAB.value,
    "https://bitbucket.org": GitKind.BITBUCKET_CLOUD.value,
    "http://bitbucket.org": GitKind.BITBUCKET_CLOUD.value,
    "https://fake.git": GitKind.FAKE.value,
    "http://fake.git": GitKind.FAKE.value,
}


class GitService(BaseModel):
    """A durable host URL -> git kind mapping."""
    name: str = Field(..., min_length=1, max_length=253)
    url: str = Field(..., min_length=1)
    kind: str = Field(..., min_length=1)
    display_name: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GitService":
        return cls(
            name=record.get("name"),
            url=record.get("url") or "",
            kind=record.get("kind") or "",
            display_name=record.get("display_name"),
        )


class GitServiceEnsureRequest(BaseModel):
    url: str = ""
    kind: str = ""
    name: Optional[str] = None
    namespace: Optional[str] = None


class GitServiceKindResponse(BaseModel):
    url: str
    kind: str


class GitServiceResponse(BaseModel):
    name: str
    url: str
    kind: str
    display_name: Optional[str] = None
    namespace: str
