"""
Resume templates for the Rendering context.

A Template controls presentation only: section order, bullet glyph, line and
section spacing, and the styling hints handed to rich-document writers. It
never changes how sections are classified.

Presets live in template_presets.yaml (override with
CLARITY_TEMPLATE_PRESETS_PATH) and are loaded with OmegaConf.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

BUNDLED_PRESETS_PATH = Path(__file__).parent / "template_presets.yaml"
TEMPLATE_PRESETS_PATH = Path(os.getenv("CLARITY_TEMPLATE_PRESETS_PATH", str(BUNDLED_PRESETS_PATH)))

# One section_spacing_unit is a sixth of a spacer line
SPACING_UNITS_PER_LINE = 6
# Multipliers above this double-space body lines
DOUBLE_SPACING_THRESHOLD = 1.2


@dataclass(frozen=True)
class Template:
    """
    Presentation settings applied by the assembler.

    Attributes:
        template_id: Stable preset key (e.g., "classic-professional")
        name: Display name
        section_order: Canonical labels in the order sections should appear
        bullet_glyph: Glyph substituted for line-leading bullet markers
        line_spacing_multiplier: Body line height (1.0 = single spaced)
        section_spacing_units: Vertical space between sections
        dividers: Draw a rule under each section heading
        font: Font family hint for rich documents
        heading_size_pt: Heading font size hint
        body_size_pt: Body font size hint
        margin_in: Page margin hint, in inches
    """

    template_id: str = "default"
    name: str = "Default"
    section_order: Tuple[str, ...] = field(default_factory=tuple)
    bullet_glyph: str = "•"
    line_spacing_multiplier: float = 1.0
    section_spacing_units: int = 6
    dividers: bool = False
    font: str = "Calibri"
    heading_size_pt: int = 14
    body_size_pt: int = 11
    margin_in: float = 0.5

    def __post_init__(self):
        if not self.bullet_glyph:
            raise ValueError(f"Template '{self.template_id}' has an empty bullet_glyph")
        if self.line_spacing_multiplier <= 0:
            raise ValueError(
                f"Template '{self.template_id}' line_spacing_multiplier must be positive, "
                f"got {self.line_spacing_multiplier}"
            )
        if self.section_spacing_units < 0:
            raise ValueError(
                f"Template '{self.template_id}' section_spacing_units must be >= 0, "
                f"got {self.section_spacing_units}"
            )

    @property
    def line_gap(self) -> int:
        """Newlines between consecutive body lines in plain text (1 or 2)."""
        return 2 if self.line_spacing_multiplier > DOUBLE_SPACING_THRESHOLD else 1

    @property
    def spacer_lines(self) -> int:
        """Blank lines between sections in plain text (at least 1)."""
        return max(1, self.section_spacing_units // SPACING_UNITS_PER_LINE)

    @classmethod
    def from_dict(cls, data: Dict) -> "Template":
        if "template_id" not in data:
            raise ValueError(f"Template entry is missing 'template_id': {data}")
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Template '{data['template_id']}' has unknown fields: {unknown}")

        values = dict(data)
        if "section_order" in values:
            values["section_order"] = tuple(values["section_order"] or ())
        return cls(**values)


# Original section order, round bullets, single spacing, one spacer line, no dividers
DEFAULT_TEMPLATE = Template()


@lru_cache(maxsize=None)
def load_template_presets(config_path: Path = TEMPLATE_PRESETS_PATH) -> Dict[str, Template]:
    """
    Load template presets from YAML.

    Expected structure:
        default: <template_id>
        templates:
          - template_id: ...
            section_order: [...]

    Args:
        config_path: Path to presets YAML

    Returns:
        Dict of template_id -> Template, in file order

    Raises:
        FileNotFoundError: If config_path does not exist
        ValueError: If the file structure is invalid or ids repeat
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Template presets not found: {config_path}")

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    entries = config.get("templates") if isinstance(config, dict) else None
    if not isinstance(entries, list) or not entries:
        raise ValueError(f"Template presets file has no 'templates' list: {config_path}")

    presets: Dict[str, Template] = {}
    for entry in entries:
        template = Template.from_dict(entry)
        if template.template_id in presets:
            raise ValueError(f"Duplicate template id '{template.template_id}' in {config_path}")
        presets[template.template_id] = template

    default_id = config.get("default")
    if default_id is not None and default_id not in presets:
        raise ValueError(f"Default template '{default_id}' is not defined in {config_path}")

    return presets


def list_templates(config_path: Path = TEMPLATE_PRESETS_PATH) -> List[Template]:
    return list(load_template_presets(config_path).values())


def get_template(template_id: Optional[str], config_path: Path = TEMPLATE_PRESETS_PATH) -> Template:
    """
    Look up a preset by id.

    Args:
        template_id: Preset id, or None for DEFAULT_TEMPLATE
        config_path: Path to presets YAML

    Returns:
        Matching Template

    Raises:
        ValueError: If template_id is not a known preset (message lists valid ids)
    """
    if template_id is None:
        return DEFAULT_TEMPLATE

    presets = load_template_presets(config_path)
    if template_id not in presets:
        raise ValueError(
            f"Unknown template '{template_id}'. Available templates: {', '.join(presets)}"
        )
    return presets[template_id]
