"""
Error types raised by the git service and workflow routines.

Store failures are wrapped in RecordStoreError so callers can see which
operation and record failed. A missing record is reported with
RecordNotFoundError, which callers branch on to tell "missing" apart from
any other failure.
"""
from typing import Optional


class PipelineRegistryError(Exception):
    """Base class for all pipeline registry errors."""


class RecordNotFoundError(PipelineRegistryError):
    def __init__(self, kind: str, name: str, namespace: str):
        self.kind = kind
        self.name = name
        self.namespace = namespace
        super().__init__(f"{kind} '{name}' not found in namespace '{namespace}'")


class RecordStoreError(PipelineRegistryError):
    """A list/get/create/update call against the record store failed."""

    def __init__(self, operation: str, kind: str, name: Optional[str] = None, cause: Optional[BaseException] = None):
        self.operation = operation
        self.kind = kind
        self.name = name
        self.cause = cause
        target = f"{kind} with name {name}" if name else kind
        message = f"Failed to {operation} {target}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class GitServiceKindNotFoundError(PipelineRegistryError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"no service kind found for git service '{url}'")


class SecretMissingKindLabelError(PipelineRegistryError):
    def __init__(self, secret_name: str, url: str, label: str):
        self.secret_name = secret_name
        self.url = url
        self.label = label
        super().__init__(
            f"no service kind label '{label}' found on secret '{secret_name}' for git service '{url}'"
        )


class InvalidGitURLError(PipelineRegistryError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"No name supplied and could not parse URL {url} due to {reason}")


class InvalidGitServiceNameError(PipelineRegistryError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"GitService name '{name}' does not contain any valid name characters")
