"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import Optional

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    # Clock
    # Hours offset from UTC for the system clock; empty means the machine's local zone
    USER_TIMEZONE_OFFSET: Optional[str] = os.getenv("USER_TIMEZONE_OFFSET") or None

    # Live view
    REFRESH_INTERVAL_SECONDS: str = os.getenv("REFRESH_INTERVAL_SECONDS", "1.0")

    # Reporting
    DEFAULT_WINDOW_DAYS: str = os.getenv("DEFAULT_WINDOW_DAYS", "3")

    @classmethod
    def timezone_offset_hours(cls) -> Optional[float]:
        """Parsed USER_TIMEZONE_OFFSET, or None for the local zone"""
        if cls.USER_TIMEZONE_OFFSET is None:
            return None
        return float(cls.USER_TIMEZONE_OFFSET)

    @classmethod
    def refresh_interval(cls) -> float:
        """Parsed REFRESH_INTERVAL_SECONDS"""
        return float(cls.REFRESH_INTERVAL_SECONDS)

    @classmethod
    def default_window_days(cls) -> int:
        """Parsed DEFAULT_WINDOW_DAYS"""
        return int(cls.DEFAULT_WINDOW_DAYS)

    @classmethod
    def validate(cls) -> bool:
        """Validate that numeric settings can be parsed"""
        invalid = []

        for name, parser in (
            ("USER_TIMEZONE_OFFSET", cls.timezone_offset_hours),
            ("REFRESH_INTERVAL_SECONDS", cls.refresh_interval),
            ("DEFAULT_WINDOW_DAYS", cls.default_window_days),
        ):
            try:
                parser()
            except (TypeError, ValueError):
                invalid.append(name)

        if invalid:
            raise ValueError(
                f"Invalid values for environment variables: {', '.join(invalid)}"
            )

        return True


# Global settings instance
settings = Settings()
