"""Style and rich-text value types attached to cells."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Border:
    """Border line styles and colours for the four sides of a cell."""

    left: str = ""
    left_color: str = ""
    right: str = ""
    right_color: str = ""
    top: str = ""
    top_color: str = ""
    bottom: str = ""
    bottom_color: str = ""


@dataclass
class Fill:
    """A pattern fill with its background and foreground colours."""

    pattern_type: str = ""
    bg_color: str = ""
    fg_color: str = ""


@dataclass
class Font:
    """The font a cell's text is drawn in."""

    size: float = 0.0
    name: str = ""
    family: int = 0
    charset: int = 0
    color: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass
class Alignment:
    """Placement of text within a cell."""

    horizontal: str = ""
    indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False


@dataclass
class Style:
    """The full visual style of a cell."""

    border: Border = field(default_factory=Border)
    fill: Fill = field(default_factory=Fill)
    font: Font = field(default_factory=Font)
    alignment: Alignment = field(default_factory=Alignment)
    apply_border: bool = False
    apply_fill: bool = False
    apply_font: bool = False
    apply_alignment: bool = False


@dataclass
class RichTextColor:
    """A colour given as RGB, a theme index or a palette index, with a tint."""

    rgb: str = ""
    tint: float = 0.0
    theme: Optional[int] = None
    indexed: Optional[int] = None


@dataclass
class RichTextFont:
    """Font settings for one run of rich text."""

    name: str = ""
    size: float = 0.0
    family: int = 0
    charset: int = 0
    color: Optional[RichTextColor] = None
    bold: bool = False
    italic: bool = False
    strike: bool = False
    vert_align: str = ""
    underline: str = ""


@dataclass
class RichTextRun:
    """A piece of text sharing one font."""

    text: str = ""
    font: Optional[RichTextFont] = None