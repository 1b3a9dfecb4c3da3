"""Global configuration — XDG paths, YAML config file, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "frontal"
    return Path.home() / ".config" / "frontal"


@dataclass
class FrontalConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    audit_url: str = "http://localhost:3000/audit"
    audit_timeout: float = 120.0
    fetch_timeout: float = 10.0
    web_host: str = "127.0.0.1"
    web_port: int = 8471
    exclude: list[str] = field(default_factory=list)
    verbose: bool = False

    @classmethod
    def load(cls, path: str | Path | None = None) -> FrontalConfig:
        """Load config: defaults, then the YAML file, then environment variables."""
        config = cls()

        config_file = Path(path) if path else config.config_dir / "config.yaml"
        if path or config_file.is_file():
            config.apply(load_config_file(config_file))

        env_url = os.environ.get("FRONTAL_AUDIT_URL")
        if env_url:
            config.audit_url = env_url

        env_timeout = os.environ.get("FRONTAL_AUDIT_TIMEOUT")
        if env_timeout:
            config.audit_timeout = float(env_timeout)

        env_fetch_timeout = os.environ.get("FRONTAL_FETCH_TIMEOUT")
        if env_fetch_timeout:
            config.fetch_timeout = float(env_fetch_timeout)

        env_port = os.environ.get("FRONTAL_WEB_PORT")
        if env_port:
            config.web_port = int(env_port)

        return config

    def apply(self, data: dict) -> None:
        """Overlay known keys from a parsed config mapping."""
        known = {f.name: f for f in fields(self)}
        for key, value in data.items():
            key = key.replace("-", "_")
            if key not in known or key == "config_dir":
                continue
            current = getattr(self, key)
            if isinstance(current, bool):
                value = bool(value)
            elif isinstance(current, float):
                value = float(value)
            elif isinstance(current, int):
                value = int(value)
            elif isinstance(current, list):
                value = [str(v) for v in (value if isinstance(value, list) else [value])]
            else:
                value = str(value)
            setattr(self, key, value)


def load_config_file(path: str | Path) -> dict:
    """Parse a YAML config file into a mapping."""
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Config YAML must be a mapping")
    return data
