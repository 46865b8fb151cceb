import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from compressor import ALGORITHMS

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")
CONFIG_ENV_VAR = "TEXTCOMP_CONFIG"


@dataclass
class AppConfig:
    default_algorithm: str = "RLE"
    upload_types: List[str] = field(default_factory=lambda: ["pdf", "txt"])
    preview_chars: int = 500
    sample_text: str = "AAAAAAAAAABBBBBBBBBBBCCCCCCCCCCDDDDDDDDDDEEEEEEEEEE"
    output_dir: str = "./compressed"
    log_dir: str = "logs"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.default_algorithm not in ALGORITHMS:
            raise ValueError(
                f"default_algorithm must be one of {', '.join(ALGORITHMS)}, got {self.default_algorithm!r}"
            )
        self.upload_types = [t.lower().lstrip(".") for t in self.upload_types]

    def get_output_path(self) -> Path:
        return Path(self.output_dir)


def _read_yaml(p: Union[str, Path]) -> Dict[str, Any]:
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(p: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load config.yaml (or $TEXTCOMP_CONFIG); a missing file gives the defaults."""
    if p is None:
        p = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    if not Path(p).exists():
        return AppConfig()

    d = _read_yaml(p)
    defaults = AppConfig()
    return AppConfig(
        default_algorithm=d.get("default_algorithm", defaults.default_algorithm),
        upload_types=d.get("upload_types", defaults.upload_types),
        preview_chars=int(d.get("preview_chars", defaults.preview_chars)),
        sample_text=d.get("sample_text", defaults.sample_text),
        output_dir=d.get("output_dir", defaults.output_dir),
        log_dir=d.get("log_dir", defaults.log_dir),
        log_level=str(d.get("log_level", defaults.log_level)).upper(),
    )
