"""
Configuration management for skill finder
Loads settings from .env and provides typed access to configuration values
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables (prefer .env values over existing env vars)
load_dotenv(override=True)

# Base directories
BASE_DIR = Path(__file__).parent.parent
LOG_DIR = BASE_DIR / "logs"

REQUIRED_ENV_VARS = (
    "NEO4J_URI",
    "NEO4J_USERNAME",
    "NEO4J_PASSWORD",
)
OPENAI_ENV_VARS = ("OPENAI_API_KEY",)


class Config:
    """Configuration manager for skill finder"""

    def __init__(self):
        self._load_env_config()

    def _resolve_path(self, env_var: str, default: Path) -> Path:
        """Resolve a path from env; treat relative values as repo-root relative."""
        value = os.getenv(env_var)
        if not value:
            return default

        candidate = Path(value)
        if candidate.is_absolute():
            return candidate

        return (BASE_DIR / candidate).resolve()

    def _load_env_config(self):
        """Load configuration from environment variables"""
        # Neo4j
        self.neo4j_uri = os.getenv("NEO4J_URI", "")
        self.neo4j_username = os.getenv("NEO4J_USERNAME", "")
        self.neo4j_password = os.getenv("NEO4J_PASSWORD", "")
        self.neo4j_database = os.getenv("NEO4J_DATABASE", "neo4j")

        # OpenAI
        self.openai_api_key = os.getenv("OPENAI_API_KEY", "")
        self.openai_model = os.getenv("OPENAI_MODEL", "gpt-4o")
        self.openai_temperature = float(os.getenv("OPENAI_TEMPERATURE", "0"))

        # Write skills extracted from a biography back to the graph
        self.persist_extracted_skills = (
            os.getenv("PERSIST_EXTRACTED_SKILLS", "false").lower() == "true"
        )

        # Logging settings
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir = self._resolve_path("LOG_DIR", LOG_DIR)
        self.log_file_retention_days = int(os.getenv("LOG_FILE_RETENTION_DAYS", "30"))

    def validate(self, require_openai: bool = True) -> list[str]:
        """
        Validate required configuration values

        Args:
                require_openai: Also require the OpenAI settings (commands that never call the model skip them)

        Returns:
                List of validation error messages (empty if valid)
        """
        errors = []

        values = {
            "NEO4J_URI": self.neo4j_uri,
            "NEO4J_USERNAME": self.neo4j_username,
            "NEO4J_PASSWORD": self.neo4j_password,
            "OPENAI_API_KEY": self.openai_api_key,
        }
        required = REQUIRED_ENV_VARS + (OPENAI_ENV_VARS if require_openai else ())
        for name in required:
            if not values[name]:
                errors.append(f"Please set the environment variable '{name}'")

        if require_openai and not 0 <= self.openai_temperature <= 2:
            errors.append("OPENAI_TEMPERATURE must be between 0 and 2")

        return errors


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from the environment"""
    global _config
    _config = Config()
    return _config
