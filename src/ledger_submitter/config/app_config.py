import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import toml
from loguru import logger

from ..domain.config_types import SigningIdentity
from ..domain.errors import ConfigError

DEFAULT_ENV_PREFIX = "SUBMITTER__"


@dataclass
class NetworkSettings:
    rpc_url: str
    timeout_seconds: float = 10.0


@dataclass
class ClassifierSettings:
    # Reproduce the historical unreachable fail band (-199..-100 -> unknown).
    legacy_fail_band: bool = False


@dataclass
class StoreSettings:
    path: str = "transactions.json"


@dataclass
class SchedulerSettings:
    interval_seconds: float = 5.0
    log_level: str = "INFO"


@dataclass
class OverrideRecord:
    key: str
    source: str
    old: Any
    new: Any


@dataclass
class AppConfig:
    network: NetworkSettings
    signing: SigningIdentity
    classifier: ClassifierSettings = field(default_factory=ClassifierSettings)
    store: StoreSettings = field(default_factory=StoreSettings)
    scheduler: SchedulerSettings = field(default_factory=SchedulerSettings)
    overrides: List[OverrideRecord] = field(default_factory=list)
    loaded_files: List[str] = field(default_factory=list)

    @classmethod
    def load(
        cls,
        settings_path: Optional[str] = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        environ: Optional[Dict[str, str]] = None,
    ) -> "AppConfig":
        layers: List[Tuple[Dict[str, Any], str]] = []
        loaded_files: List[str] = []

        if settings_path:
            if not os.path.exists(settings_path):
                raise ConfigError(f"settings file not found: {settings_path}")
            with open(settings_path, "r", encoding="utf-8") as f:
                try:
                    data = toml.load(f)
                except toml.TomlDecodeError as exc:
                    raise ConfigError(f"invalid TOML in {settings_path}: {exc}") from exc
            label = os.path.basename(settings_path) or "settings.toml"
            layers.append((data, label))
            loaded_files.append(label)

        env_overrides = _load_env_overrides(env_prefix, os.environ if environ is None else environ)
        if env_overrides:
            layers.append((env_overrides, "env"))

        merged: Dict[str, Any] = {}
        overrides: List[OverrideRecord] = []
        for payload, source in layers:
            _merge_dicts(merged, payload, source, overrides)

        cfg = cls(
            network=_build_network(merged),
            signing=_build_signing(merged),
            classifier=_build_classifier(merged),
            store=_build_store(merged),
            scheduler=_build_scheduler(merged),
            overrides=overrides,
            loaded_files=loaded_files,
        )
        cfg.log_summary()
        return cfg

    def log_summary(self) -> None:
        logger.info(f"CONFIG | files={', '.join(self.loaded_files) or '<none>'}")
        for o in self.overrides:
            # values of secret keys are never logged
            shown = "***" if o.key.endswith("secret") else f"{o.old} -> {o.new}"
            logger.info(f"CONFIG | override | {o.key} from {o.source} | {shown}")
        logger.info(
            f"CONFIG | rpc_url={self.network.rpc_url} | timeout={self.network.timeout_seconds}s | "
            f"account={self.signing.short_address} | legacy_fail_band={self.classifier.legacy_fail_band} | "
            f"store={self.store.path} | interval={self.scheduler.interval_seconds}s"
        )


def _merge_dicts(dst: Dict[str, Any], src: Dict[str, Any], source: str, overrides: List[OverrideRecord], prefix: str = "") -> None:
    for key, value in src.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict) and isinstance(dst.get(key), dict):
            _merge_dicts(dst[key], value, source, overrides, full_key)
        elif isinstance(value, dict):
            dst[key] = value.copy()
        else:
            if key in dst and dst[key] != value:
                overrides.append(OverrideRecord(full_key, source, dst[key], value))
            dst[key] = value


def _load_env_overrides(prefix: str, environ: Dict[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_key, env_val in environ.items():
        if not env_key.startswith(prefix):
            continue
        path_parts = env_key[len(prefix):].lower().split("__")
        _assign_env_override(overrides, path_parts, env_val)
    return overrides


def _assign_env_override(dst: Dict[str, Any], path_parts: List[str], raw_val: str) -> None:
    cur = dst
    for part in path_parts[:-1]:
        if part not in cur or not isinstance(cur[part], dict):
            cur[part] = {}
        cur = cur[part]
    leaf = path_parts[-1]
    # Secrets and addresses stay strings even when they look numeric
    if leaf in {"secret", "address"}:
        cur[leaf] = raw_val
        return
    cur[leaf] = _coerce_env_value(raw_val)


def _coerce_env_value(val: str) -> Any:
    lowered = val.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        return int(val)
    except ValueError:
        pass
    try:
        return float(val)
    except ValueError:
        pass
    return val


def _build_network(cfg: Dict[str, Any]) -> NetworkSettings:
    section = cfg.get("network", {}) or {}
    rpc_url = section.get("rpc_url")
    if not rpc_url:
        raise ConfigError("network.rpc_url is required")
    timeout = _to_float(section.get("timeout_seconds", 10.0), "network.timeout_seconds")
    if timeout <= 0:
        raise ConfigError("network.timeout_seconds must be > 0")
    return NetworkSettings(rpc_url=str(rpc_url), timeout_seconds=timeout)


def _build_signing(cfg: Dict[str, Any]) -> SigningIdentity:
    section = cfg.get("signing", {}) or {}
    try:
        return SigningIdentity(address=str(section.get("address") or ""), secret=str(section.get("secret") or ""))
    except ValueError as exc:
        raise ConfigError(f"signing: {exc}") from exc


def _build_classifier(cfg: Dict[str, Any]) -> ClassifierSettings:
    section = cfg.get("classifier", {}) or {}
    value = section.get("legacy_fail_band", False)
    if not isinstance(value, bool):
        raise ConfigError(f"classifier.legacy_fail_band must be a boolean, got {value!r}")
    return ClassifierSettings(legacy_fail_band=value)


def _build_store(cfg: Dict[str, Any]) -> StoreSettings:
    section = cfg.get("store", {}) or {}
    return StoreSettings(path=str(section.get("path", "transactions.json")))


def _build_scheduler(cfg: Dict[str, Any]) -> SchedulerSettings:
    section = cfg.get("scheduler", {}) or {}
    interval = _to_float(section.get("interval_seconds", 5.0), "scheduler.interval_seconds")
    if interval <= 0:
        raise ConfigError("scheduler.interval_seconds must be > 0")
    return SchedulerSettings(
        interval_seconds=interval,
        log_level=str(section.get("log_level", "INFO")).upper(),
    )


def _to_float(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid numeric value for {label}: {value}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid numeric value for {label}: {value}") from exc
