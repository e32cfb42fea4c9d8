"""Export configuration loaded from config/export.json.

Every key is optional; anything missing keeps its default. Example::

    {
      "page": {"width": 595.28, "height": 841.89, "margin": 50},
      "style": {"title_size": 24, "base_size": 12, "color": [0.18, 0.23, 0.35]},
      "fonts": {"regular": "DejaVuSerif", "regular_path": "fonts/DejaVuSerif.ttf",
                "bold": "DejaVuSerif-Bold", "bold_path": "fonts/DejaVuSerif-Bold.ttf"},
      "product_tag": "BookMind.ai",
      "serializer": "pdf",
      "dpi": 150
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

from bookpress.docs.model import FontSet, PageGeometry, StyleTable
from bookpress.errors import ConfigurationError
from bookpress.log import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "export.json")
SERIALIZERS = ("pdf", "raster", "docx")


def _resolve_path(base: str, relative: Optional[str]) -> Optional[str]:
    if not relative:
        return None
    return os.path.abspath(os.path.join(base, relative))


@dataclass(frozen=True)
class ExportConfig:
    geometry: PageGeometry = field(default_factory=PageGeometry)
    style: StyleTable = field(default_factory=StyleTable)
    fonts: FontSet = field(default_factory=FontSet)
    product_tag: str = "BookMind.ai"
    serializer: str = "pdf"
    dpi: int = 150

    def validate(self) -> "ExportConfig":
        """Reject geometry that cannot hold a single line of the largest text size."""
        validate_geometry(self.geometry, self.style)
        if self.serializer not in SERIALIZERS:
            raise ConfigurationError(
                f"Unknown serializer '{self.serializer}'. Allowed values: {', '.join(SERIALIZERS)}."
            )
        if self.dpi <= 0:
            raise ConfigurationError(f"dpi must be positive, got {self.dpi}")
        return self


def validate_geometry(geometry: PageGeometry, style: StyleTable) -> None:
    if geometry.width <= 0 or geometry.height <= 0 or geometry.margin < 0:
        raise ConfigurationError(
            f"Invalid page geometry: width={geometry.width}, height={geometry.height}, margin={geometry.margin}"
        )
    if geometry.usable_width <= 0:
        raise ConfigurationError(
            f"Margins leave no horizontal room: width={geometry.width}, margin={geometry.margin}"
        )
    if geometry.usable_height < style.largest_size:
        raise ConfigurationError(
            f"Page cannot fit one {style.largest_size}pt line: usable height is {geometry.usable_height}pt"
        )
    if style.base_size <= 0 or style.title_size <= 0 or style.header_floor <= 0:
        raise ConfigurationError("Font sizes must be positive")
    if len(style.marker) != 1:
        raise ConfigurationError(f"Header marker must be a single character, got {style.marker!r}")


def _pick(cls, raw: Dict[str, Any], section: str) -> Dict[str, Any]:
    known = {f.name for f in fields(cls)}
    out: Dict[str, Any] = {}
    for key, value in (raw or {}).items():
        if key in known:
            out[key] = value
        else:
            logger.warning("Ignoring unknown key '%s.%s' in export config", section, key)
    return out


def config_from_mapping(data: Dict[str, Any], base_dir: str = PROJECT_ROOT) -> ExportConfig:
    cfg = ExportConfig()
    page = _pick(PageGeometry, data.get("page") or {}, "page")
    style = _pick(StyleTable, data.get("style") or {}, "style")
    if "color" in style:
        style["color"] = tuple(float(c) for c in style["color"])
    fonts = _pick(FontSet, data.get("fonts") or {}, "fonts")
    for key in ("regular_path", "bold_path"):
        if key in fonts:
            fonts[key] = _resolve_path(base_dir, fonts[key])

    cfg = replace(
        cfg,
        geometry=replace(cfg.geometry, **{k: float(v) for k, v in page.items()}),
        style=replace(cfg.style, **style),
        fonts=replace(cfg.fonts, **fonts),
    )
    for key in ("product_tag", "serializer", "dpi"):
        if key in data:
            cfg = replace(cfg, **{key: data[key]})
    return cfg


def load_config(path: Optional[str] = None) -> ExportConfig:
    """Load config from ``path``, ``$BOOKPRESS_CONFIG`` or config/export.json.

    A missing file gives the defaults. Unreadable JSON is reported and also
    falls back to defaults. The result is always validated.
    """
    config_path = path or os.environ.get("BOOKPRESS_CONFIG") or CONFIG_PATH

    if not os.path.exists(config_path):
        if path:
            raise ConfigurationError(f"Config file not found: {config_path}")
        logger.debug("No export config at %s, using defaults", config_path)
        return ExportConfig().validate()

    try:
        with open(config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file) or {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not load export config from %s: %s", config_path, exc)
        return ExportConfig().validate()

    # Font paths in the default file are relative to the project root,
    # in any other file relative to that file.
    if os.path.abspath(config_path) == CONFIG_PATH:
        base_dir = PROJECT_ROOT
    else:
        base_dir = os.path.dirname(os.path.abspath(config_path))
    return config_from_mapping(data, base_dir=base_dir).validate()
