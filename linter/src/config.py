from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    lighthouse_dir_name: str = ".lighthouse"
    triggers_file_name: str = "triggers.yaml"
    lint_format: str = "tap"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"

@lru_cache()
def get_settings() -> Settings:
    return Settings()
