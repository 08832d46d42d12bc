"""Application settings loaded from environment variables."""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application configuration settings."""
    
    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3000
    CORS_ORIGINS: str = "*"  # 콤마로 구분
    
    # Storage
    DB_FILE: str = "db.json"
    PUBLIC_DIR: str = "public"
    
    # Token / session
    JWT_SECRET: str = "dev_jwt_secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 30
    SESSION_SECRET: str = "dev_session_secret"
    SESSION_HTTPS_ONLY: bool = False  # HTTPS + trusted proxy 환경에서만 True
    BCRYPT_ROUNDS: int = 8
    
    # Google OAuth
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CLIENT_SECRET: Optional[str] = None
    GOOGLE_CALLBACK_URL: str = "/auth/google/callback"
    GOOGLE_TIMEOUT: float = 10.0
    DASHBOARD_PATH: str = "/dashboard"
    
    # Feature Flags
    ENABLE_CREATE_ADMIN: bool = True  # 운영 환경에서는 끄는 것을 권장
    ENABLE_BACKUPS: bool = True
    
    # Backups
    BACKUP_DIR: str = "backups"
    BACKUP_INTERVAL_HOURS: int = 6
    BACKUP_KEEP: int = 10
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
