from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Pipeline Registry"
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # Supabase Configuration (in-memory store is used when unset)
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_KEY: str = ""
    RECORDS_TABLE: str = "records"
    SECRETS_TABLE: str = "secrets"

    # Namespace used when a caller does not supply one
    DEFAULT_NAMESPACE: str = "jx"

    # Git credential secrets
    GIT_CREDENTIALS_SECRET_PREFIX: str = "jenkins-git-"
    SECRET_URL_ANNOTATION: str = "jenkins.io/url"
    SECRET_SERVICE_KIND_LABEL: str = "jenkins.io/service-kind"

    # Workflows
    DEFAULT_WORKFLOW_NAME: str = "default"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
