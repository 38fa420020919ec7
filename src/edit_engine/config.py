"""Engine settings resolved from keyword arguments or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from edit_engine.runtime.telemetry import ENV_PREFIX

CLIPBOARD_BACKENDS = ("memory", "system")


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Knobs the host may tune without touching engine code."""

    auto_commit: bool = True
    validate_after_dispatch: bool = False
    clipboard: str = "memory"

    def __post_init__(self) -> None:
        if self.clipboard not in CLIPBOARD_BACKENDS:
            raise ValueError(
                f"Unknown clipboard backend '{self.clipboard}', "
                f"expected one of {CLIPBOARD_BACKENDS}"
            )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        source = os.environ if env is None else env
        return cls(
            auto_commit=_flag(source, "AUTO_COMMIT", True),
            validate_after_dispatch=_flag(source, "VALIDATE", False),
            clipboard=source.get(f"{ENV_PREFIX}CLIPBOARD", "memory").strip().lower(),
        )


__all__ = ["EngineSettings", "CLIPBOARD_BACKENDS"]
