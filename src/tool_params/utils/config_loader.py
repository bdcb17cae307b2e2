from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, TypeVar

import yaml
from dotenv import dotenv_values
from pydantic import ValidationError

from tool_params.utils.config_errors import (
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    MissingEnvironmentVariableError,
)
from tool_params.utils.settings_base import BaseSettings

T = TypeVar("T", bound=BaseSettings)

_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

DEFAULT_CONFIG_ENV_VAR = "TOOL_PARAMS_CONFIG"


class ConfigLoader:
    """
    YAML settings loader.

    Layout assumed (inside config_dir):
      default.yaml
      <env>.yaml        optional overlay, e.g. dev.yaml / prod.yaml
      .env              optional placeholder values

    Base file precedence:
      (1) cli_config_path
      (2) the file named by the config_env_var environment variable
      (3) config_dir/default.yaml

    ${VAR} placeholders are resolved from config_dir/.env first, then os.environ.
    """

    def __init__(self, config_dir: str | Path):
        self.config_dir = Path(config_dir).expanduser().resolve()

    def load(
        self,
        *,
        schema: type[T],
        env: str | None = None,
        cli_config_path: str | None = None,
        config_env_var: str | None = DEFAULT_CONFIG_ENV_VAR,
        use_dotenv: bool = True,
    ) -> T:
        if not self.config_dir.exists():
            raise ConfigFileNotFoundError(f"Config directory not found: {self.config_dir}")

        base_path = self._resolve_base_path(cli_config_path, config_env_var)
        merged = self._read_yaml(base_path)

        if env:
            override_path = self.config_dir / f"{env}.yaml"
            if override_path.exists():
                merged = self._deep_merge(merged, self._read_yaml(override_path))

        dotenv_path = self.config_dir / ".env"
        use_dotenv = use_dotenv and dotenv_path.exists()
        merged = self._expand_vars(merged, dotenv_path if use_dotenv else None)

        try:
            return schema.model_validate(merged)
        except ValidationError as e:
            raise ConfigValidationError(
                f"Invalid tool-params config loaded from '{base_path}'. {e}"
            ) from e

    # ----------------- internal helpers -----------------

    def _resolve_base_path(self, cli_config_path: str | None, config_env_var: str | None) -> Path:
        if cli_config_path:
            p = Path(cli_config_path).expanduser().resolve()
            if not p.exists():
                raise ConfigFileNotFoundError(f"--config file not found: {p}")
            return p

        env_path = os.getenv(config_env_var) if config_env_var else None
        if env_path:
            p = Path(env_path).expanduser().resolve()
            if not p.exists():
                raise ConfigFileNotFoundError(f"{config_env_var} points to missing file: {p}")
            return p

        p = self.config_dir / "default.yaml"
        if not p.exists():
            raise ConfigFileNotFoundError(f"Default config not found: {p}")
        return p

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileNotFoundError(f"Cannot read config file: {path}. {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigParseError(f"Top-level YAML must be a mapping/object: {path}")
        return data

    def _deep_merge(self, base: Any, override: Any) -> Any:
        if isinstance(base, dict) and isinstance(override, dict):
            out = dict(base)
            for k, v in override.items():
                out[k] = self._deep_merge(out[k], v) if k in out else v
            return out
        # lists and scalars: the overlay wins
        return override

    def _expand_vars(self, obj: Any, dotenv_path: Path | None) -> Any:
        dotenv_vars: dict[str, str] = {}
        if dotenv_path:
            dotenv_vars = {k: v for k, v in dotenv_values(dotenv_path).items() if v is not None}

        def resolve(var: str, key_path: str) -> str:
            if var in dotenv_vars:
                return dotenv_vars[var]
            if var in os.environ:
                return os.environ[var]
            raise MissingEnvironmentVariableError(var, key_path)

        def walk(x: Any, path: str) -> Any:
            if isinstance(x, dict):
                return {k: walk(v, f"{path}.{k}") for k, v in x.items()}
            if isinstance(x, list):
                return [walk(v, f"{path}[{i}]") for i, v in enumerate(x)]
            if isinstance(x, str):
                return _VAR_PATTERN.sub(lambda m: resolve(m.group(1), path), x)
            return x

        return walk(obj, "root")
