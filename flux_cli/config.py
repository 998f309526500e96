"""Configuration helpers for the flux publish CLI."""

from __future__ import annotations

import importlib.util
import os
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PRO_PACKAGE = "flux_pro"


def _builtin_source_dir() -> Path:
    return Path(__file__).resolve().parent / "stubs" / "templates" / "flux"


def _default_pro_source_dir() -> Optional[Path]:
    spec = importlib.util.find_spec(PRO_PACKAGE)
    if spec is None or spec.origin is None:
        return None
    return Path(spec.origin).resolve().parent / "stubs" / "templates" / "flux"


@dataclass(frozen=True)
class Settings:
    flux_source_dir: Path
    flux_pro_source_dir: Optional[Path]
    flux_pro_distribution: str
    flux_template_dir: Path
    flux_log_level: str

    @property
    def flux_destination_dir(self) -> Path:
        return self.flux_template_dir / "flux"


def load_settings() -> Settings:
    load_dotenv()

    source_dir = os.getenv("FLUX_SOURCE_DIR")
    pro_source_dir = os.getenv("FLUX_PRO_SOURCE_DIR")

    return Settings(
        flux_source_dir=Path(source_dir) if source_dir else _builtin_source_dir(),
        flux_pro_source_dir=Path(pro_source_dir) if pro_source_dir else _default_pro_source_dir(),
        flux_pro_distribution=os.getenv("FLUX_PRO_DISTRIBUTION", "flux-pro"),
        flux_template_dir=Path(os.getenv("FLUX_TEMPLATE_DIR", "templates")),
        flux_log_level=os.getenv("FLUX_LOG_LEVEL", "WARNING"),
    )


def is_distribution_installed(distribution: str) -> bool:
    try:
        metadata.distribution(distribution)
    except metadata.PackageNotFoundError:
        return False
    return True
