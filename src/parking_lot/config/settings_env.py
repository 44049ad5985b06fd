from typing import List
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TierSetting(BaseModel):
    max_hours: int
    fee: float


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Development
    DEV_MODE: bool = Field(default=True, description="Enable debug mode")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./parking.db", description="Database connection URL")
    ASYNC_DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./parking.db", description="Async database URL")

    # FastAPI
    FASTAPI_HOST: str = Field(default="localhost", description="FastAPI host")
    FASTAPI_PORT: int = Field(default=8080, description="FastAPI port")

    # Streamlit
    STREAMLIT_PORT: int = Field(default=8501, description="Streamlit port")
    DASHBOARD_REFRESH_SECONDS: int = Field(default=3, description="Dashboard poll interval")

    # Billing
    HOURLY_TIERS: List[TierSetting] = Field(
        default=[
            TierSetting(max_hours=1, fee=50),
            TierSetting(max_hours=3, fee=100),
            TierSetting(max_hours=6, fee=150),
        ],
        description="Hourly tiers, ascending by max_hours",
    )
    DAILY_CAP_FEE: float = Field(default=200, description="Fee beyond the last hourly tier")
    DAY_PASS_FEE: float = Field(default=150, description="Flat day-pass fee collected at entry")
    CURRENCY_SYMBOL: str = Field(default="₹", description="Currency symbol for display")

    # Facility layout used by the seeder
    PARKING_LEVELS: int = Field(default=2, description="Number of levels, 0 is ground")
    SLOTS_PER_LEVEL: int = Field(default=20, description="Slots per level")


# Create settings instance
settings = Settings()
