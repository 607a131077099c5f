"""
Core configuration for the LandHud Lead List API.
Manages environment variables and AWS service settings.
"""
import os
from pydantic_settings import BaseSettings


DEFAULT_LEAD_LIST_WEBHOOK_URL = "https://landhud.app.n8n.cloud/webhook/lead-list-upload"


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # AWS Configuration
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    s3_bucket_name: str = os.getenv("S3_BUCKET_NAME", "lead-lists")
    storage_public_base_url: str = os.getenv("STORAGE_PUBLIC_BASE_URL", "")
    records_table_name: str = os.getenv("RECORDS_TABLE_NAME", "records")

    # External processor (n8n workflow)
    lead_list_webhook_url: str = os.getenv("N8N_LEAD_LIST_WEBHOOK_URL", DEFAULT_LEAD_LIST_WEBHOOK_URL)
    app_url: str = os.getenv("APP_URL", "http://localhost:8000")
    lead_list_callback_secret: str = os.getenv("LEAD_LIST_CALLBACK_SECRET", "")

    # API Configuration
    api_title: str = os.getenv("API_TITLE", "LandHud Lead List API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # File Upload Limits
    max_file_size_mb: int = int(os.getenv("MAX_FILE_SIZE_MB", "50"))

    # Authentication
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret-change-in-production")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")

    @property
    def callback_url(self) -> str:
        """URL the external processor calls back when a lead list is done."""
        return f"{self.app_url.rstrip('/')}/v1/api/lead-lists/webhook"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
