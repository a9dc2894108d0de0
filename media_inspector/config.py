import os
import sys
import json
from typing import Any, Dict, Optional
from pydantic import Field
from pydantic_settings import BaseSettings

# ==============================================================================
# CONSTANTS & PATHS
# ==============================================================================

HOME_DIR = os.path.expanduser("~")

# Data Directories
# MEDIA_INSPECTOR_CONFIG_DIR relocates everything (tests, containers)
_CONFIG_DIR_OVERRIDE = "MEDIA_INSPECTOR_CONFIG_DIR"
DEFAULT_CONFIG_DIR = os.path.join(HOME_DIR, ".mediainfo")

CACHE_DIR_NAME = "cache"
CACHE_FILE_NAME = "cache.json"
SETTINGS_FILE_NAME = "settings.json"

# Video and audio extensions picked up during discovery
MEDIA_EXTENSIONS = (
    ".mp4", ".mkv", ".avi", ".mov", ".wmv", ".flv", ".webm", ".m4v", ".mpg", ".mpeg", ".m2v",
    ".3gp", ".3g2", ".mxf", ".ts", ".mts", ".m2ts", ".vob", ".ogv", ".qt", ".rm", ".rmvb", ".asf",
    ".mp3", ".wav", ".flac", ".m4a", ".aac", ".ogg", ".wma", ".opus",
)

# ==============================================================================
# SETTINGS MODEL
# ==============================================================================

class InspectorSettings(BaseSettings):
    """
    Pydantic model for user settings.
    Loads from env vars (MEDIA_INSPECTOR_*) or defaults.
    Values from settings.json are passed in explicitly by ConfigManager.
    """
    ffprobe_bin: str = Field("ffprobe")
    # 0 disables the bounded wait
    probe_timeout_sec: float = Field(300.0, ge=0)

    filename_length: int = Field(65, ge=0)
    default_sort: str = Field("bitrate")
    default_direction: str = Field("desc")

    color: bool = Field(True)

    class Config:
        env_prefix = "MEDIA_INSPECTOR_"
        extra = "ignore"

# ==============================================================================
# CONFIG MANAGER
# ==============================================================================

class ConfigManager:
    def __init__(self, config_dir: Optional[str] = None):
        self.config_dir = config_dir or os.getenv(_CONFIG_DIR_OVERRIDE) or DEFAULT_CONFIG_DIR
        self.settings = self._load_settings()

    def ensure_directories(self) -> None:
        """Create the cache directory. Raises OSError when that is not possible."""
        os.makedirs(self.cache_dir, exist_ok=True)

    def _load_settings(self) -> InspectorSettings:
        file_data: Dict[str, Any] = {}
        if os.path.exists(self.settings_file):
            try:
                with open(self.settings_file, "r", encoding="utf-8") as f:
                    file_data = json.load(f)
                if not isinstance(file_data, dict):
                    raise ValueError("top level must be an object")
            except (OSError, ValueError) as e:
                print(f"⚠️ Warning: Could not read {self.settings_file}: {e}", file=sys.stderr)
                file_data = {}

        # Explicit kwargs win over env vars in BaseSettings, so only pass
        # keys that the environment does not already set.
        overrides = {
            k: v for k, v in file_data.items()
            if f"MEDIA_INSPECTOR_{k.upper()}" not in os.environ
        }
        return InspectorSettings(**overrides)

    @property
    def cache_dir(self) -> str:
        return os.path.join(self.config_dir, CACHE_DIR_NAME)

    @property
    def cache_file(self) -> str:
        return os.path.join(self.cache_dir, CACHE_FILE_NAME)

    @property
    def settings_file(self) -> str:
        return os.path.join(self.config_dir, SETTINGS_FILE_NAME)

    @property
    def probe_timeout(self) -> Optional[float]:
        return self.settings.probe_timeout_sec or None


_config_instance: Optional[ConfigManager] = None

def get_config() -> ConfigManager:
    global _config_instance
    if _config_instance is None:
        _config_instance = ConfigManager()
    return _config_instance
