from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    sanity_project_id: str = ""
    sanity_dataset: str = "production"
    sanity_api_version: str = "2021-03-25"
    sanity_token: str = ""  # read token; required to see drafts on private datasets
    sanity_use_cdn: bool = False
    # "raw" keeps drafts.* documents visible so the overlay rule can resolve them
    sanity_perspective: str = "raw"
    http_timeout_seconds: float = 30.0
    default_page_size: int = 50

    def validate_sanity_config(self) -> None:
        """Raise if the Sanity executor cannot be built from this config."""
        if not self.sanity_project_id.strip():
            raise RuntimeError("SANITY_PROJECT_ID is not set")
        if not self.sanity_dataset.strip():
            raise RuntimeError("SANITY_DATASET is not set")
        if self.default_page_size < 1:
            raise RuntimeError("DEFAULT_PAGE_SIZE must be >= 1")


settings = Settings()
