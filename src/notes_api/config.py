import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration loaded from environment variables."""

    service_name: str
    environment: str
    log_level: str
    metrics_namespace: str

    # --- Note Store ---
    notes_file: str | None

    # --- Error Handling Configuration ---
    strict_serialization: bool

    @property
    def uses_notes_file(self) -> bool:
        return bool(self.notes_file)

    @classmethod
    def load_from_env(cls) -> "AppConfig":
        """
        Loads configuration from environment variables, performing validation and type casting.
        Fails fast with a ConfigurationError if anything is invalid.
        """
        try:
            service_name = os.getenv("SERVICE_NAME", "notes-api").strip()
            if not service_name:
                raise ValueError("SERVICE_NAME must not be empty.")

            environment = os.getenv("ENVIRONMENT", "dev").strip()
            if not environment:
                raise ValueError("ENVIRONMENT must not be empty.")

            log_level = os.getenv("LOG_LEVEL", "INFO").upper()
            allowed_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
            if log_level not in allowed_log_levels:
                raise ValueError(
                    f"LOG_LEVEL must be one of {allowed_log_levels}, not '{log_level}'"
                )

            metrics_namespace = os.getenv("METRICS_NAMESPACE", "NotesApi").strip()
            if not metrics_namespace:
                raise ValueError("METRICS_NAMESPACE must not be empty.")

            notes_file = os.getenv("NOTES_FILE") or None

            strict_raw = os.getenv("STRICT_SERIALIZATION", "false").lower()
            if strict_raw not in ("true", "1", "yes", "on", "false", "0", "no", "off"):
                raise ValueError(
                    f"STRICT_SERIALIZATION must be a boolean flag, not '{strict_raw}'"
                )
            strict_serialization = strict_raw in ("true", "1", "yes", "on")

        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for an environment variable: {e}"
            ) from e

        return cls(
            service_name=service_name,
            environment=environment,
            log_level=log_level,
            metrics_namespace=metrics_namespace,
            notes_file=notes_file,
            strict_serialization=strict_serialization,
        )


# --- Singleton Factory Function (Lazy-loaded and Cached) ---
@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Loads the application configuration from environment variables.
    The result is cached, so the environment is only read once per container.
    """
    logger.info("Loading application configuration from environment...")
    return AppConfig.load_from_env()
