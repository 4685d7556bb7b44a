"""
Application settings loader
"""
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

DEFAULT_CONFIG_FILE = "brightwire.yaml"

# Setting name -> environment variables, first match wins
ENV_VARS: Dict[str, tuple] = {
    "host": ("HOST",),
    "port": ("PORT",),
    "cors_origin": ("CORS_ORIGIN",),
    "admin_email": ("ADMIN_EMAIL",),
    "admin_password": ("ADMIN_PASSWORD",),
    "store_backend": ("STORE_BACKEND",),
    "supabase_url": ("SUPABASE_URL", "VITE_SUPABASE_URL"),
    "supabase_key": ("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
    "data_dir": ("BRIGHTWIRE_DATA_DIR",),
    "store_timeout": ("STORE_TIMEOUT",),
    "log_level": ("LOG_LEVEL",),
}

STORE_BACKENDS = ("supabase", "file", "memory")


class ConfigurationError(Exception):
    """Settings are missing or invalid"""


class Settings(BaseModel):
    """Runtime settings"""
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origin: str = "http://localhost:3000"
    admin_email: str = "admin@brightwire.local"
    admin_password: str = "change-me"
    store_backend: str = "supabase"  # supabase, file or memory
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    data_dir: Path = Field(default=Path(".brightwire/submissions"))
    store_timeout: float = 10.0
    log_level: str = "INFO"

    def require_store(self) -> None:
        """Fail unless the configured store backend can be built

        Raises:
            ConfigurationError: Unknown backend, or missing Supabase values
        """
        if self.store_backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"Unknown store backend '{self.store_backend}' "
                f"(expected one of: {', '.join(STORE_BACKENDS)})"
            )
        if self.store_backend == "supabase" and not (self.supabase_url and self.supabase_key):
            raise ConfigurationError(
                "Missing Supabase environment variables: set SUPABASE_URL and SUPABASE_ANON_KEY"
            )


class SettingsLoader:
    """Merge defaults, an optional YAML file and the environment"""

    def __init__(
        self,
        config_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            config_file: YAML file (default: $BRIGHTWIRE_CONFIG or ./brightwire.yaml)
            environ: Environment mapping; when omitted, .env is loaded into os.environ first
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        self.environ = environ

        if config_file is None:
            config_file = Path(environ.get("BRIGHTWIRE_CONFIG", DEFAULT_CONFIG_FILE))
        self.config_file = config_file

    def _load_file(self) -> Dict[str, Any]:
        if not self.config_file.exists():
            return {}

        with open(self.config_file) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_file} must contain a mapping")
        return data

    def _load_environ(self) -> Dict[str, Any]:
        values = {}
        for name, env_names in ENV_VARS.items():
            for env_name in env_names:
                value = self.environ.get(env_name)
                if value:
                    values[name] = value
                    break
        return values

    def load(self) -> Settings:
        """Load settings

        Returns:
            Settings

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        data = self._load_file()
        data.update(self._load_environ())

        try:
            return Settings(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e


def load_settings(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Shortcut for SettingsLoader(...).load()"""
    return SettingsLoader(config_file=config_file, environ=environ).load()
