"""
Settings for the planner server.
Uses .env for configuration; every value can also come from the environment.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file (only relevant in production)
load_dotenv()

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration."""

    state_file: Path
    legend_file: Optional[Path]
    export_dir: Path
    pdf_font: Optional[Path]
    host: str
    port: int
    log_level: str


def _optional_path(name: str) -> Optional[Path]:
    value = os.getenv(name, "").strip()
    return Path(value) if value else None


def load_settings() -> Settings:
    """Read settings from the environment."""
    port_raw = os.getenv("PLANNER_PORT", "8000")
    try:
        port = int(port_raw)
    except ValueError:
        logger.error("Invalid PLANNER_PORT %r, falling back to 8000", port_raw)
        port = 8000

    return Settings(
        state_file=Path(os.getenv("PLANNER_STATE_FILE", "planner.yaml")),
        legend_file=_optional_path("PLANNER_LEGEND_FILE"),
        export_dir=Path(os.getenv("PLANNER_EXPORT_DIR", ".")),
        pdf_font=_optional_path("PLANNER_PDF_FONT"),
        host=os.getenv("PLANNER_HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("PLANNER_LOG_LEVEL", "INFO").upper(),
    )
