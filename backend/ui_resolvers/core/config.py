from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    ENV: str = "prod"
    LOG_LEVEL: str = "INFO"

    ALLOWED_HOSTS: str = "localhost,127.0.0.1,testserver"
    SECURITY_HEADERS_ENABLED: bool = True

    # Files API (pre-signed URL issuer)
    FILES_API_BASE_URL: str = ""
    FILES_API_TOKEN: str | None = None
    FILES_API_TIMEOUT_SECONDS: float = 20.0

    # The files API does not always report expiry; assume 10 minutes and refresh 1 minute early
    FILE_URL_DEFAULT_TTL_SECONDS: int = 600
    FILE_URL_REFRESH_MARGIN_SECONDS: int = 60

settings = Settings()
