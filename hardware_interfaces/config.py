"""
Configuration
=============

Global settings shared between the host and the registry.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel


class HardwareConfig(BaseModel):
    """Host-supplied settings (the host's global variables)."""

    debug: bool = False
    developer: bool = False
    base_dir: Optional[Path] = None
    random_placement: bool = True   # False pins new nodes at (0, 0)
    log_level: str = "INFO"

    class Config:
        extra = "allow"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HardwareConfig":
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "HardwareConfig":
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)


def configure_logging(config: HardwareConfig) -> None:
    """Set up root logging; debug mode traces every registry call."""
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
