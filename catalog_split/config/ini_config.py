########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path

INI_DEFAULT_NAME = "catalog_split.ini"
INI_ENV_VAR = "CATALOG_SPLIT_INI"


@dataclass(frozen=True)
class AppSettings:
    source_file: Path
    output_dir: Path

    array_key: str
    strict: bool
    max_source_chars: int

    extension: str
    type_name: str
    type_import: str

    write_workers: int
    write_retries: int

    flask_host: str
    flask_port: int
    flask_debug: bool


class IniConfig:
    """
    Adapter around ConfigParser and filesystem resolution.
    Keeps INI handling out of the service code.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv(INI_ENV_VAR) or "").strip()
        # If CATALOG_SPLIT_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    def _cfg_path(self, section: str, key: str) -> Path:
        """
        Reads a filesystem path from INI and resolves it.
        Tries [paths] and [path] interchangeably for convenience.
        Relative paths are taken relative to the INI file.
        """
        sections_to_try = [section]
        if section == "paths":
            sections_to_try.append("path")
        if section == "path":
            sections_to_try.append("paths")

        for sec in sections_to_try:
            if not self._cfg.has_section(sec):
                continue
            raw = (self._cfg.get(sec, key, fallback="") or "").strip()
            if raw:
                p = Path(os.path.expandvars(os.path.expanduser(raw)))
                if not p.is_absolute():
                    p = Path(self._ini_path).resolve().parent / p
                return p.resolve()

        raise FileNotFoundError(f"Missing INI value for {key} in sections: {sections_to_try}")

    def _cfg_str(self, section: str, key: str, default: str) -> str:
        return (self._cfg.get(section, key, fallback=default) or "").strip()

    def load_settings(self) -> AppSettings:
        # Required paths
        source_file = self._cfg_path("paths", "source_file")
        output_dir = self._cfg_path("paths", "output_dir")

        # Extraction
        array_key = self._cfg_str("extraction", "array_key", "manufacturers") or "manufacturers"
        strict = self._cfg.getboolean("extraction", "strict", fallback=True)
        max_source_chars = self._cfg.getint("extraction", "max_source_chars", fallback=5_000_000)

        # Output modules; empty type_name is allowed and drops the annotation
        extension = self._cfg_str("output", "extension", "ts").lstrip(".") or "ts"
        type_name = self._cfg_str("output", "type_name", "Manufacturer")
        type_import = self._cfg_str("output", "type_import", "../productTypes")

        # Execution
        write_workers = self._cfg.getint("execution", "write_workers", fallback=4)
        write_retries = self._cfg.getint("execution", "write_retries", fallback=2)

        # Flask
        flask_host = self._cfg_str("flask", "host", "127.0.0.1") or "127.0.0.1"
        flask_port = self._cfg.getint("flask", "port", fallback=5000)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=False)

        # Validate
        if max_source_chars < 0:
            raise ValueError(f"extraction.max_source_chars must be >= 0, got {max_source_chars}")
        if write_workers < 1:
            raise ValueError(f"execution.write_workers must be >= 1, got {write_workers}")
        if write_retries < 0:
            raise ValueError(f"execution.write_retries must be >= 0, got {write_retries}")

        output_dir.mkdir(parents=True, exist_ok=True)

        return AppSettings(
            source_file=source_file,
            output_dir=output_dir,
            array_key=array_key,
            strict=strict,
            max_source_chars=max_source_chars,
            extension=extension,
            type_name=type_name,
            type_import=type_import,
            write_workers=write_workers,
            write_retries=write_retries,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
        )
