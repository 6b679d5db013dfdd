"""
Base configuration for Guild Wars 2 API access.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Settings for talking to the Guild Wars 2 API."""
    
    api_base_url: str = "https://api.guildwars2.com/v2"
    
    # Request quota shared by every caller
    requests_per_minute: int = 300
    max_jitter_seconds: float = 1.0
    
    # The quests endpoint accepts at most 200 ids per request
    quest_batch_size: int = 100
    request_timeout: float = 30.0
    
    model_config = SettingsConfigDict(
        env_prefix="GW2_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Ignore extra environment variables
    )
