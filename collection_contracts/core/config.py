from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "collection-contracts"

    data_api_base: str = "https://www.wixapis.com"
    data_api_key: str | None = None
    site_id: str | None = None

    collections_config_path: str = "collections.config.yaml"
    contracts_dir: str = "contracts"

    fetch_timeout_seconds: float = 10.0

settings = Settings()
