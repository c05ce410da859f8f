from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Kubernetes settings
    k8s_namespace: str = "jx"
    k8s_in_cluster: bool = False  # Set True when running inside K8s

    # Reconciler settings
    overwrite_steps: bool = False  # Replace stages of the same name instead of trusting the activity
    watch_timeout_seconds: int = 300  # Re-establish the PipelineRun watch after this long
    watch_retry_seconds: int = 5

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

@lru_cache()
def get_settings() -> Settings:
    return Settings()
