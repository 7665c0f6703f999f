"""Core layout, crop and panner computations for cropsy."""

from .config import (
    CoreConfigService,
    load_crop_settings,
    load_relay_settings,
    load_runtime_paths,
    read_config,
)
from .crops import auto_crop, convert_crops_to_rect
from .errors import DegenerateLayoutError, InvalidDimensionError, ZeroTravelRangeError
from .formatting import build_crop_values_address, build_panner_arguments, format_count_suffix
from .layout import floor_to_quantum, solve_layout
from .models import (
    DEFAULT_CROP_SETTINGS,
    CropSettings,
    CropValues,
    LayoutDescription,
    PannerParams,
    RectValues,
)
from .panner import ensure_usable_layout, osc_float_value, to_panner_params

__all__ = [
    "auto_crop",
    "build_crop_values_address",
    "build_panner_arguments",
    "convert_crops_to_rect",
    "CoreConfigService",
    "CropSettings",
    "CropValues",
    "DEFAULT_CROP_SETTINGS",
    "DegenerateLayoutError",
    "ensure_usable_layout",
    "floor_to_quantum",
    "format_count_suffix",
    "InvalidDimensionError",
    "LayoutDescription",
    "load_crop_settings",
    "load_relay_settings",
    "load_runtime_paths",
    "osc_float_value",
    "PannerParams",
    "read_config",
    "RectValues",
    "solve_layout",
    "to_panner_params",
    "ZeroTravelRangeError",
]
