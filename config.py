import tomllib
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
from dotenv import load_dotenv
from fastapi import Request
import os

CONFIG_DIR = Path.home() / ".vidoverlay"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path
    db_path: Path
    host: str = "127.0.0.1"
    port: int = 8000
    shuffle_options: bool = True
    log_level: str = "INFO"


def _as_bool(value: Any) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _read_config_file() -> Dict[str, Any]:
    """Read ~/.vidoverlay/config.toml, copying the project example if missing."""
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        return tomllib.load(f)


def load_config() -> AppConfig:
    """Build the immutable app config from config.toml plus .env overrides."""
    load_dotenv()  # Load .env for overrides (e.g., VIDOVERLAY_PORT env var)
    config = _read_config_file()
    server_cfg = config.get("server", {})
    overlays_cfg = config.get("overlays", {})
    logging_cfg = config.get("logging", {})
    storage_cfg = config.get("storage", {})

    db_filename = os.getenv("VIDOVERLAY_DB_FILENAME", storage_cfg.get("db_filename", "vidoverlay.db"))
    return AppConfig(
        config_dir=CONFIG_DIR,
        db_path=CONFIG_DIR / db_filename,
        host=os.getenv("VIDOVERLAY_HOST", server_cfg.get("host", "127.0.0.1")),
        port=int(os.getenv("VIDOVERLAY_PORT", server_cfg.get("port", 8000))),
        shuffle_options=_as_bool(
            os.getenv("VIDOVERLAY_SHUFFLE_OPTIONS", overlays_cfg.get("shuffle_options", True))
        ),
        log_level=str(os.getenv("VIDOVERLAY_LOG_LEVEL", logging_cfg.get("level", "INFO"))).upper(),
    )


def get_app_config(request: Request) -> AppConfig:
    """FastAPI dependency returning the config loaded at startup."""
    return request.app.state.config
