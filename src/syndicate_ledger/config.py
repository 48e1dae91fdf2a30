from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATA_DIR: str = "data"

    CURRENCY_SYMBOL: str = "$"
    THOUSANDS_SEPARATOR: str = "."

    UNKNOWN_PARTNER_LABEL: str = "Unknown"
    GENERAL_FUND_LABEL: str = "General"
    # 庄家自营账户不参与合伙人业绩排行
    HOUSE_PARTNER_ID: Optional[str] = None

    BALANCE_HISTORY_POINTS: int = 50
    REPORT_TITLE: str = "PERFORMANCE REPORT"

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

settings = Settings()
