from pydantic_settings import BaseSettings
from pathlib import Path
from typing import Optional

# Get the repository root directory (parent of app directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""
    
    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True
    
    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    # GitHub settings
    GITHUB_API_BASE: str = "https://api.github.com"
    GITHUB_USERNAME: str = "rgilks"
    GITHUB_TOKEN: Optional[str] = None
    GITHUB_USER_AGENT: str = "tre-website"
    SCREENSHOT_PROJECT_LIMIT: int = 3
    SCREENSHOT_REQUEST_DELAY: float = 0.1
    
    # Key-value cache binding: "none", "memory", "filesystem" or "s3"
    KV_BACKEND: str = "none"
    KV_CACHE_DIR: str = str(REPO_ROOT / ".cache" / "kv")
    
    # S3 settings (only used if KV_BACKEND = "s3")
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"
    S3_BUCKET: str = "folio-cache"
    S3_PREFIX: str = "kv/"
    
    # Shared secret for the scheduled refresh trigger
    CRON_SECRET: Optional[str] = None
    
    class Config:
        env_file = ".env"

settings = Settings() 
