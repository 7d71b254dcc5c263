# /app/core/config.py

"""
Central runtime configuration for the School Records API.

Every value is read from the environment once, at import time. A local `.env`
file is honoured for development through python-dotenv.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./school_records.db")
    jwt_secret: str = os.getenv("JWT_SECRET", "secret")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_exp_minutes: int = int(os.getenv("JWT_EXP_MINUTES", "480"))
    low_grade_threshold: float = float(os.getenv("LOW_GRADE_THRESHOLD", "70"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    bootstrap_admin_username: str = os.getenv("BOOTSTRAP_ADMIN_USERNAME", "")
    bootstrap_admin_email: str = os.getenv("BOOTSTRAP_ADMIN_EMAIL", "")
    bootstrap_admin_password: str = os.getenv("BOOTSTRAP_ADMIN_PASSWORD", "")


settings = Settings()
