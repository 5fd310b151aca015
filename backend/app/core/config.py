from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Database
    db_path: str = "./data/swarm.db"
    db_timeout_seconds: float = 30.0
    
    # CORS
    cors_origins: str = "http://localhost:3000"
    
    # Logging
    log_level: str = "INFO"
    
    # Priority list
    top_priorities_default: int = 10
    top_priorities_max: int = 100
    
    # Swarm analysis
    swarm_random_seed: Optional[int] = None
    refresh_ranking_on_reanalysis: bool = False
    
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


settings = Settings()
