"""Pony Bead Color Catalog."""
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ColorDef:
    code: str        # "P", "MB", etc.
    name: str        # "Pink", "Metallic Blue"
    hex: str         # "#FF69B4"
    metallic: bool = False
    roughness: float = 0.4


FALLBACK_HEX = "#808080"
DEFAULT_ROUGHNESS = 0.4

# Standard pony bead colors from the reference sheet
BEAD_COLORS: List[ColorDef] = [
    # Basic colors
    ColorDef("P", "Pink", "#FF69B4", roughness=0.4),
    ColorDef("W", "White", "#FAFAFA", roughness=0.3),
    ColorDef("B", "Black", "#1a1a1a", roughness=0.5),
    ColorDef("G", "Green", "#22C55E", roughness=0.4),
    ColorDef("O", "Orange", "#F97316", roughness=0.4),
    ColorDef("Y", "Yellow", "#FACC15", roughness=0.4),
    ColorDef("T", "Tan", "#D4A574", roughness=0.5),
    ColorDef("Br", "Brown", "#7C4A2D", roughness=0.5),
    ColorDef("R", "Red", "#EF4444", roughness=0.4),
    ColorDef("Bl", "Blue", "#3B82F6", roughness=0.4),

    # Metallic colors
    ColorDef("MS", "Metallic Silver", "#C0C0C0", metallic=True, roughness=0.2),
    ColorDef("MGr", "Metallic Green", "#50C878", metallic=True, roughness=0.2),
    ColorDef("MB", "Metallic Blue", "#4169E1", metallic=True, roughness=0.2),
    ColorDef("MP", "Metallic Purple", "#9370DB", metallic=True, roughness=0.2),
    ColorDef("MG", "Metallic Gold", "#FFD700", metallic=True, roughness=0.15),
    ColorDef("MBL", "Metallic Black", "#2C2C2C", metallic=True, roughness=0.2),

    # Additional useful colors
    ColorDef("LB", "Light Blue", "#87CEEB", roughness=0.4),
    ColorDef("LG", "Light Green", "#90EE90", roughness=0.4),
    ColorDef("LP", "Light Pink", "#FFB6C1", roughness=0.4),
    ColorDef("Gy", "Gray", "#808080", roughness=0.5),
]

_BY_CODE: Dict[str, ColorDef] = {c.code: c for c in BEAD_COLORS}


def get_color_by_code(code: str) -> Optional[ColorDef]:
    return _BY_CODE.get(code)


def get_hex_by_code(code: str) -> str:
    color = get_color_by_code(code)
    return color.hex if color else FALLBACK_HEX


def is_metallic(code: str) -> bool:
    color = get_color_by_code(code)
    return color.metallic if color else False


def get_roughness_by_code(code: str) -> float:
    color = get_color_by_code(code)
    return color.roughness if color else DEFAULT_ROUGHNESS
