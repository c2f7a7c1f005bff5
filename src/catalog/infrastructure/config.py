"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:

    data_dir: Path
    log_level: str = "WARNING"

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = os.environ.get("CATALOG_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            log_level=os.environ.get("CATALOG_LOG_LEVEL", "WARNING").upper(),
        )
