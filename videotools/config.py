"""Runtime configuration.

Settings live in a pydantic model and can be loaded from a YAML file::

    ffmpeg_path: /opt/ffmpeg/bin/ffmpeg
    temp_dir: /var/tmp/videotools
    timeout: 600
    render:
      video: {codec: libx264, crf: 20, preset: medium}
      audio: {codec: aac, bitrate: 192k}

Every key is optional; omitted keys keep the built-in profiles.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .video.formats import CANONICAL_PROFILE, RENDER_PROFILE, OutputFormat

logger = logging.getLogger("videotools")


class VideoToolsConfig(BaseModel):
    """Engine locations, temp directory and encoding profiles."""
    ffmpeg_path: Optional[str] = None
    ffprobe_path: Optional[str] = None
    temp_dir: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0)
    # Re-encode profile for trim and watermark
    render: OutputFormat = Field(default_factory=lambda: RENDER_PROFILE.model_copy(deep=True))
    # Merge normalization target
    canonical: OutputFormat = Field(default_factory=lambda: CANONICAL_PROFILE.model_copy(deep=True))


def load_config(path: Optional[str | Path] = None) -> VideoToolsConfig:
    """Load configuration from a YAML file.

    A ``None`` path or a missing file yields the defaults.

    Raises:
        ValueError: If the file cannot be parsed or is not a mapping.
        pydantic.ValidationError: If a value has the wrong type.
    """
    if path is None:
        return VideoToolsConfig()

    path = Path(path)
    if not path.exists():
        logger.info("Config file %s not found, using defaults", path)
        return VideoToolsConfig()

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ValueError(f"Failed to read config {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config {path}: top-level must be a mapping")

    return VideoToolsConfig.model_validate(data)
