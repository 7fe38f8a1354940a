"""Configuration loader for regdesk with environment-specific support"""

import os
from pathlib import Path

from dotenv import load_dotenv

project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# Configuration dictionary - set once at initialization
config = {
    "database_url": os.getenv("DATABASE_URL", "sqlite:///./regdesk.db"),
    "port": int(os.getenv("PORT", "8000")),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "environment": os.getenv("ENVIRONMENT", "development"),
    # Comma separated list of origins allowed to call the API (dashboard UI)
    "cors_origins": [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ],
    # Run SQLModel.metadata.create_all on startup. Use Alembic in production.
    "auto_create_tables": _as_bool(os.getenv("AUTO_CREATE_TABLES", "true")),
    # The first issued ticket is TICKET_SEQUENCE_START + 1
    "ticket_sequence_start": int(os.getenv("TICKET_SEQUENCE_START", "211549")),
    "export_filename": os.getenv("EXPORT_FILENAME", "registrations"),
    "max_upload_bytes": int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
}
