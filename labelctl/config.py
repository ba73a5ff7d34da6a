import os
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Mapping, Optional

from .utils import parse_duration_to_seconds, split_names

DEFAULT_CONFIG = {
    "base_name": "ZTC-ZP-450-200dpi",
    "extra_names": "zprint,Zebra-ZP-450",
    "watch_dir": os.path.join("~", "Downloads"),
    "label_ext": "zpl",
    "used_ext": "used",
    "timeout_seconds": "60",
    "poll_interval": "1",
    "lpstat_cmd": "lpstat",
    "lpr_cmd": "lpr",
    "cancel_cmd": "cancel",
}

ALLOWED_CONFIG_KEYS = set(DEFAULT_CONFIG.keys())

# config key -> environment variable
ENV_VARS = {
    "base_name": "LABELCTL_BASE_NAME",
    "extra_names": "LABELCTL_EXTRA_NAMES",
    "watch_dir": "LABELCTL_WATCH_DIR",
    "label_ext": "LABELCTL_LABEL_EXT",
    "used_ext": "LABELCTL_USED_EXT",
    "timeout_seconds": "LABELCTL_TIMEOUT",
    "poll_interval": "LABELCTL_POLL_INTERVAL",
    "lpstat_cmd": "LABELCTL_LPSTAT",
    "lpr_cmd": "LABELCTL_LPR",
    "cancel_cmd": "LABELCTL_CANCEL",
}


@dataclass
class Settings:
    base_name: str = DEFAULT_CONFIG["base_name"]
    extra_names: List[str] = field(default_factory=lambda: split_names(DEFAULT_CONFIG["extra_names"]))
    watch_dir: str = os.path.expanduser(DEFAULT_CONFIG["watch_dir"])
    label_ext: str = DEFAULT_CONFIG["label_ext"]
    used_ext: str = DEFAULT_CONFIG["used_ext"]
    timeout_seconds: int = 60
    poll_interval: float = 1.0
    lpstat_cmd: str = DEFAULT_CONFIG["lpstat_cmd"]
    lpr_cmd: str = DEFAULT_CONFIG["lpr_cmd"]
    cancel_cmd: str = DEFAULT_CONFIG["cancel_cmd"]

    def to_dict(self) -> Dict:
        return asdict(self)


def _normalize_ext(value: str, key: str) -> str:
    ext = value.strip().lstrip(".")
    if not ext:
        raise ValueError(f"{key} cannot be empty.")
    return ext


def load_settings(env: Optional[Mapping[str, str]] = None, **overrides) -> Settings:
    """
    Build Settings once at startup: defaults, then LABELCTL_* environment
    variables, then explicit overrides (None values are ignored).
    Raises ValueError on invalid values.
    """
    env = os.environ if env is None else env
    raw = dict(DEFAULT_CONFIG)
    for key, var in ENV_VARS.items():
        if env.get(var):
            raw[key] = env[var]

    for key, value in overrides.items():
        if key not in ALLOWED_CONFIG_KEYS:
            raise ValueError(f"Allowed keys: {', '.join(sorted(ALLOWED_CONFIG_KEYS))}")
        if value is None:
            continue
        if key == "extra_names" and not isinstance(value, str):
            value = ",".join(value)
        raw[key] = str(value)

    base_name = raw["base_name"].strip()
    if not base_name:
        raise ValueError("base_name cannot be empty.")

    try:
        poll_interval = float(raw["poll_interval"])
    except ValueError:
        raise ValueError(f"poll_interval must be a number (got {raw['poll_interval']!r}).")
    if poll_interval <= 0:
        raise ValueError("poll_interval must be > 0 seconds")

    return Settings(
        base_name=base_name,
        extra_names=split_names(raw["extra_names"]),
        watch_dir=os.path.expanduser(raw["watch_dir"]),
        label_ext=_normalize_ext(raw["label_ext"], "label_ext"),
        used_ext=_normalize_ext(raw["used_ext"], "used_ext"),
        timeout_seconds=parse_duration_to_seconds(raw["timeout_seconds"]),
        poll_interval=poll_interval,
        lpstat_cmd=raw["lpstat_cmd"],
        lpr_cmd=raw["lpr_cmd"],
        cancel_cmd=raw["cancel_cmd"],
    )
