from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Bitrix24 inbound webhook for crm.lead.add; blank means demo mode
    BITRIX_WEBHOOK_URL: str | None = None
    BITRIX_TIMEOUT_SECONDS: float = 10.0
    DEMO_SUBMIT_DELAY_SECONDS: float = 0.7

    SALON_CATALOG_PATH: str | None = None
    SALON_TIMEZONE: str = "Asia/Tbilisi"

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    WIZARD_SESSION_LIMIT: int = 1000

    @property
    def demo_mode(self) -> bool:
        return not (self.BITRIX_WEBHOOK_URL and self.BITRIX_WEBHOOK_URL.strip())


settings = Settings()
