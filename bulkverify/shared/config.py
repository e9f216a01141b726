from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

LedgerPolicy = Literal["on_trigger", "on_completion"]

DEFAULT_INSTALL_DIR = r"C:\Program Files (x86)\Steam"


class AppConfig(BaseModel):
    install_dir: str = DEFAULT_INSTALL_DIR
    uri_scheme: str = "steam"
    process_names: List[str] = Field(default_factory=lambda: [
        "steam.exe",
        "steamservice.exe",
        "steamwebhelper.exe",
        "steam",
    ])
    grace_delay_seconds: float = Field(default=10.0, ge=0)
    poll_interval_ms: int = Field(default=1000, gt=0)
    idle_threshold_seconds: float = Field(default=5.0, gt=0)
    timeout_minutes: float = Field(default=30.0, gt=0)
    noise_threshold: float = Field(default=0.01, ge=0)
    # on_trigger records a title as soon as validation is requested,
    # on_completion only once monitoring ends without losing the client.
    ledger_policy: LedgerPolicy = "on_trigger"
    validated_path: Optional[str] = None
    blacklist_path: Optional[str] = None
    sound_enabled: bool = True
    notify_enabled: bool = True

    def to_monitor_config(self) -> dict:
        return {
            "grace_delay_seconds": self.grace_delay_seconds,
            "poll_interval_seconds": self.poll_interval_ms / 1000.0,
            "idle_threshold_seconds": self.idle_threshold_seconds,
            "timeout_seconds": self.timeout_minutes * 60.0,
            "noise_threshold": self.noise_threshold,
        }
