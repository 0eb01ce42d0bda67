"""Data files and defaults for gerbergen

Tables that are data rather than code (document defaults, the value counts of
the X2 standard attributes) ship as YAML in gerbergen/data/. A file with the
same name in the user data directory takes precedence over the packaged one.
"""

import json
import os
import platform
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .core.coordinates import FormatSpec
from .utils.logging import GerberLogger

DATA_DIR_ENV = "GERBERGEN_DATA_DIR"
APP_DIR_NAME = "gerbergen"

FALLBACK_FORMAT = {"integer_digits": 4, "decimal_digits": 6}


def user_data_dir() -> Path:
    """GERBERGEN_DATA_DIR, or the per-user application config directory"""
    if custom_dir := os.environ.get(DATA_DIR_ENV):
        return Path(custom_dir).expanduser()

    system = platform.system()
    if system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / APP_DIR_NAME


def read_data_file(path: Path) -> Dict[str, Any]:
    """Parse a YAML or JSON data file; unreadable files give {} and a warning"""
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            return json.loads(text)
        # YAML is a superset of JSON, so any other suffix is read as YAML
        return yaml.safe_load(text) or {}
    except (OSError, ValueError, yaml.YAMLError) as e:
        GerberLogger.warning(f"Error loading {path}: {e}")
        return {}


def _list_files(directory: Path) -> List[str]:
    if not directory.is_dir():
        return []
    return sorted(f.name for f in directory.iterdir() if f.is_file())


class DataManager:
    """Looks up data files, user directory first, and caches what it read"""

    def __init__(self):
        self.package_data_dir = Path(__file__).parent / "data"
        self.user_data_dir = user_data_dir()
        self._cache: Dict[str, Dict[str, Any]] = {}

    def resolve(self, filename: str) -> Optional[Path]:
        for directory in (self.user_data_dir, self.package_data_dir):
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def load_data_file(self, filename: str) -> Dict[str, Any]:
        if filename not in self._cache:
            path = self.resolve(filename)
            if path is None:
                GerberLogger.warning(f"Data file {filename} not found, using empty defaults")
                self._cache[filename] = {}
            else:
                self._cache[filename] = read_data_file(path)
        return self._cache[filename]

    def clear_cache(self) -> None:
        self._cache.clear()

    def get_data_info(self) -> Dict[str, Any]:
        return {
            "package_data_dir": str(self.package_data_dir),
            "user_data_dir": str(self.user_data_dir),
            "package_files": _list_files(self.package_data_dir),
            "user_files": _list_files(self.user_data_dir),
        }


_data_manager: Optional[DataManager] = None


def get_data_manager() -> DataManager:
    global _data_manager
    if _data_manager is None:
        _data_manager = DataManager()
    return _data_manager


def reset_data_manager() -> None:
    """Drop the shared DataManager; the next lookup re-reads the environment"""
    global _data_manager
    _data_manager = None


def load_defaults() -> Dict[str, Any]:
    return get_data_manager().load_data_file("defaults.yaml")


def load_standard_attributes() -> Dict[str, Any]:
    return get_data_manager().load_data_file("standard-attributes.yaml")


def default_format_spec() -> FormatSpec:
    """FormatSpec from defaults.yaml, 4.6 leading/absolute when unset"""
    return FormatSpec.from_dict(load_defaults().get("format") or FALLBACK_FORMAT)
