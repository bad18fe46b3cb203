from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from . import constants
from .constants import PLACEHOLDER_MARKERS
from .errors import SettingsError
from .limits import check_amount_limits, parse_int

ENV_PREFIX = "POOL_BOOTSTRAP_"

# Map canonical env names to alternative aliases that may appear in .env files
ENV_ALIASES: Dict[str, list[str]] = {
    "POOL_BOOTSTRAP_SUI_BIN": ["SUI_BIN", "SUI_CLI"],
    "POOL_BOOTSTRAP_PACKAGE_PATH": ["MOVE_PACKAGE_PATH"],
    "POOL_BOOTSTRAP_CONFIG_PATH": ["FRONTEND_CONFIG_PATH"],
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_env(env_file: Optional[Path] = None) -> Dict[str, str]:
    """Return the process environment layered over the ``.env`` file values."""

    env: Dict[str, str] = {}
    if env_file is not None and env_file.exists():
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(os.environ)
    return env


def is_placeholder(value: str) -> bool:
    upper_value = value.upper()
    return any(marker in upper_value for marker in PLACEHOLDER_MARKERS)


def resolve_env_value(name: str, env: Mapping[str, str]) -> Optional[str]:
    for key in [name] + ENV_ALIASES.get(name, []):
        value = (env.get(key) or "").strip()
        if value and not is_placeholder(value):
            return value
    return None


def _path_setting(env: Mapping[str, str], key: str, default: Path) -> Path:
    value = resolve_env_value(ENV_PREFIX + key, env)
    if not value:
        return default
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (constants.BASE_DIR / path).resolve()
    return path


def _amount_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = resolve_env_value(ENV_PREFIX + key, env)
    if raw is None:
        return default
    value = parse_int(raw)
    if value is None:
        raise SettingsError(f"{ENV_PREFIX + key} is not an integer: {raw!r}")
    error = check_amount_limits(value, ENV_PREFIX + key)
    if error:
        raise SettingsError(error)
    return value


def _flag_setting(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = resolve_env_value(ENV_PREFIX + key, env)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise SettingsError(f"{ENV_PREFIX + key} is not a boolean: {raw!r}")


def _count_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = resolve_env_value(ENV_PREFIX + key, env)
    if raw is None:
        return default
    value = parse_int(raw)
    if value is None:
        raise SettingsError(f"{ENV_PREFIX + key} is not an integer: {raw!r}")
    if value < 0:
        raise SettingsError(f"{ENV_PREFIX + key} must not be negative")
    return value


def _float_setting(env: Mapping[str, str], key: str, default: float) -> float:
    raw = resolve_env_value(ENV_PREFIX + key, env)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise SettingsError(f"{ENV_PREFIX + key} is not a number: {raw!r}") from exc
    if value < 0:
        raise SettingsError(f"{ENV_PREFIX + key} must not be negative")
    return value


@dataclass(frozen=True)
class BootstrapSettings:
    sui_bin: str = constants.SUI_BIN
    package_path: Path = constants.PACKAGE_PATH
    config_path: Path = constants.CONFIG_PATH
    log_file: Path = constants.LOG_FILE
    gas_budget: int = constants.GAS_BUDGET
    merge_gas_budget: int = constants.MERGE_GAS_BUDGET
    split_gas_budget: int = constants.SPLIT_GAS_BUDGET
    mint_amount: int = constants.MINT_AMOUNT
    split_amount: int = constants.SPLIT_AMOUNT
    token_module: str = constants.TOKEN_MODULE
    token_struct: str = constants.TOKEN_STRUCT
    amm_module: str = constants.AMM_MODULE
    consolidate: bool = True
    skip_fetch_deps: bool = False
    strict_config: bool = True
    propagation_attempts: int = constants.PROPAGATION_ATTEMPTS
    propagation_delay: float = constants.PROPAGATION_DELAY

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "BootstrapSettings":
        def text(key: str, default: str) -> str:
            return resolve_env_value(ENV_PREFIX + key, env) or default

        return cls(
            sui_bin=text("SUI_BIN", constants.SUI_BIN),
            package_path=_path_setting(env, "PACKAGE_PATH", constants.PACKAGE_PATH),
            config_path=_path_setting(env, "CONFIG_PATH", constants.CONFIG_PATH),
            log_file=_path_setting(env, "LOG_FILE", constants.LOG_FILE),
            gas_budget=_amount_setting(env, "GAS_BUDGET", constants.GAS_BUDGET),
            merge_gas_budget=_amount_setting(env, "MERGE_GAS_BUDGET", constants.MERGE_GAS_BUDGET),
            split_gas_budget=_amount_setting(env, "SPLIT_GAS_BUDGET", constants.SPLIT_GAS_BUDGET),
            mint_amount=_amount_setting(env, "MINT_AMOUNT", constants.MINT_AMOUNT),
            split_amount=_amount_setting(env, "SPLIT_AMOUNT", constants.SPLIT_AMOUNT),
            token_module=text("TOKEN_MODULE", constants.TOKEN_MODULE),
            token_struct=text("TOKEN_STRUCT", constants.TOKEN_STRUCT),
            amm_module=text("AMM_MODULE", constants.AMM_MODULE),
            consolidate=_flag_setting(env, "CONSOLIDATE", True),
            skip_fetch_deps=_flag_setting(env, "SKIP_FETCH_DEPS", False),
            strict_config=_flag_setting(env, "STRICT_CONFIG", True),
            propagation_attempts=_count_setting(env, "PROPAGATION_ATTEMPTS", constants.PROPAGATION_ATTEMPTS),
            propagation_delay=_float_setting(env, "PROPAGATION_DELAY", constants.PROPAGATION_DELAY),
        )


def load_settings(env_file: Optional[Path] = constants.DEFAULT_ENV_FILE) -> BootstrapSettings:
    return BootstrapSettings.from_env(load_env(env_file))
