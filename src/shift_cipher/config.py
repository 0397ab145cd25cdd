import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from .classical import DEFAULT_SHIFT
from .errors import ConfigurationError
from .utils import DEFAULT_ENCODING, SHIFT_MAX, SHIFT_MIN

CONFIG_PATH = Path.home() / ".shift_cipher.json"

ENV_MAPPING: Dict[str, str] = {
    "shift": "SHIFT_CIPHER_SHIFT",
    "include_digits": "SHIFT_CIPHER_DIGITS",
    "include_punctuation": "SHIFT_CIPHER_PUNCTUATION",
    "encoding": "SHIFT_CIPHER_ENCODING",
}

TRUE_VALUES = {"1", "true", "yes", "on"}


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


def config_path() -> Path:
    override = os.getenv("SHIFT_CIPHER_CONFIG", "")
    return Path(override) if override else CONFIG_PATH


@dataclass
class CipherDefaults:
    shift: int = DEFAULT_SHIFT
    include_digits: bool = False
    include_punctuation: bool = False
    encoding: str = DEFAULT_ENCODING
    history: bool = True

    def to_dict(self) -> Dict[str, Union[int, bool, str]]:
        return {
            "shift": self.shift,
            "include_digits": self.include_digits,
            "include_punctuation": self.include_punctuation,
            "encoding": self.encoding,
            "history": self.history,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "CipherDefaults":
        base = cls()
        shift = data.get("shift", base.shift)
        return cls(
            shift=shift if isinstance(shift, int) and not isinstance(shift, bool) else base.shift,
            include_digits=_as_bool(data.get("include_digits", base.include_digits)),
            include_punctuation=_as_bool(data.get("include_punctuation", base.include_punctuation)),
            encoding=str(data.get("encoding") or base.encoding),
            history=_as_bool(data.get("history", base.history)),
        )


def parse_shift(value: str) -> int:
    """
    Convert user text into a shift amount.

    Accepts an optionally signed base-10 integer within the signed 32-bit range.
    """
    try:
        shift = int(str(value).strip(), 10)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid shift amount ({value}). Expected an integer.") from exc
    if not SHIFT_MIN <= shift <= SHIFT_MAX:
        raise ConfigurationError(
            f"Shift amount ({value}) is out of range [{SHIFT_MIN}, {SHIFT_MAX}]."
        )
    return shift


def _merge_env(defaults: CipherDefaults) -> CipherDefaults:
    for field_name, env_var in ENV_MAPPING.items():
        env_val = os.getenv(env_var, "")
        if not env_val:
            continue
        if field_name == "shift":
            defaults.shift = parse_shift(env_val)
        elif field_name == "encoding":
            defaults.encoding = env_val
        else:
            setattr(defaults, field_name, _as_bool(env_val))
    return defaults


def load_defaults(path: Optional[Path] = None) -> CipherDefaults:
    path = path or config_path()
    defaults = CipherDefaults()
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                defaults = CipherDefaults.from_dict(data)
        except (OSError, ValueError):
            # Malformed file: keep built-in defaults and let the environment apply.
            pass
    return _merge_env(defaults)


def save_defaults(defaults: CipherDefaults, path: Optional[Path] = None) -> None:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(defaults.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
