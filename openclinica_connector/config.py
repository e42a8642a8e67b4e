from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import hashlib
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def password_digest(password: str) -> str:
    """Return the SHA-1 hex digest OpenClinica expects in place of a password."""
    return hashlib.sha1(password.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class ConnectorConfig:
    base_url: str = ""
    username: str = ""
    password_hash: str = ""
    timeout: float = Defaults.TIMEOUT_SECONDS
    verify_tls: bool = Defaults.VERIFY_TLS
    metadata_version_oid: str = Defaults.METADATA_VERSION_OID

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.base_url and not self.base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"base_url must start with http:// or https://, got {self.base_url!r}"
            )

    @property
    def has_credentials(self) -> bool:
        return bool(self.base_url and self.username and self.password_hash)

    @classmethod
    def from_env(cls) -> ConnectorConfig:
        password_hash = os.getenv("OPENCLINICA_PASSWORD_HASH", "").strip()
        if not password_hash:
            raw_password = os.getenv("OPENCLINICA_PASSWORD")
            password_hash = password_digest(raw_password) if raw_password else ""
        raw_verify = os.getenv("OPENCLINICA_VERIFY_TLS")
        return cls(
            base_url=os.getenv("OPENCLINICA_WS_URL", "").strip(),
            username=os.getenv("OPENCLINICA_USERNAME", "").strip(),
            password_hash=password_hash,
            timeout=float(
                os.getenv("OPENCLINICA_TIMEOUT", str(Defaults.TIMEOUT_SECONDS))
            ),
            verify_tls=(
                Defaults.VERIFY_TLS
                if raw_verify is None
                else _coerce_bool(raw_verify, key="OPENCLINICA_VERIFY_TLS")
            ),
            metadata_version_oid=os.getenv(
                "OPENCLINICA_METADATA_VERSION_OID", Defaults.METADATA_VERSION_OID
            ),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> ConnectorConfig:
        config = ConnectorConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: ConnectorConfig
    ) -> ConnectorConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        server = _get_table(data, "server")
        odm = _get_table(data, "odm")
        base_url = base_config.base_url
        if value := server.get("url"):
            base_url = str(value).strip()
        username = base_config.username
        if value := server.get("username"):
            username = str(value).strip()
        password_hash = base_config.password_hash
        if value := server.get("password_hash"):
            password_hash = str(value).strip()
        elif value := server.get("password"):
            password_hash = password_digest(str(value))
        timeout = base_config.timeout
        if (value := server.get("timeout")) is not None:
            timeout = _coerce_float(value, key="server.timeout")
        verify_tls = base_config.verify_tls
        if (value := server.get("verify_tls")) is not None:
            verify_tls = _coerce_bool(value, key="server.verify_tls")
        metadata_version_oid = base_config.metadata_version_oid
        if (value := odm.get("metadata_version_oid")) is not None:
            metadata_version_oid = str(value)
        return ConnectorConfig(
            base_url=base_url,
            username=username,
            password_hash=password_hash,
            timeout=timeout,
            verify_tls=verify_tls,
            metadata_version_oid=metadata_version_oid,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_float(value: object, *, key: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be numeric, got bool")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value)
    raise ValueError(f"{key} must be numeric or string, got {type(value).__name__}")


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")
