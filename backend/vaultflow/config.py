from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Upper bound on waiting for add-vault-config:reply before giving up.
    reply_timeout_seconds: float = 30.0
    # Filename requests wait on a native dialog, so no bound by default.
    filename_timeout_seconds: float | None = None
    max_notifications: int = 50
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_prefix": "VAULTFLOW_"}


settings = Settings()
