"""
Built-in themes.

Each theme supplies default colors and fonts for nodes, edges and groups.
The table is read-only; pass a different mapping to ``build_graph`` to use
custom themes.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class NodeTheme:
    fill_color: str
    stroke_color: str
    font_color: str
    font_size: int
    font_family: str
    rounded: bool
    shadow: bool


@dataclass(frozen=True)
class EdgeTheme:
    stroke_color: str
    stroke_width: float
    font_color: str
    font_size: int


@dataclass(frozen=True)
class GroupTheme:
    fill_color: str
    stroke_color: str
    font_color: str
    font_size: int
    dashed: bool


@dataclass(frozen=True)
class Theme:
    """A named color/font scheme."""
    name: str
    background: str
    node: NodeTheme
    edge: EdgeTheme
    group: GroupTheme
    palette: tuple[str, ...]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "background": self.background,
            "palette": list(self.palette),
        }


DEFAULT_THEME = "professional"

THEMES: Mapping[str, Theme] = MappingProxyType({
    "professional": Theme(
        name="professional",
        background="#ffffff",
        node=NodeTheme("#dae8fc", "#6c8ebf", "#333333", 12, "Helvetica", rounded=True, shadow=False),
        edge=EdgeTheme("#666666", 1, "#333333", 11),
        group=GroupTheme("#f5f5f5", "#999999", "#333333", 13, dashed=True),
        palette=("#dae8fc", "#d5e8d4", "#fff2cc", "#f8cecc", "#e1d5e7", "#d0cee2"),
    ),
    "colorful": Theme(
        name="colorful",
        background="#ffffff",
        node=NodeTheme("#4FC3F7", "#0288D1", "#ffffff", 12, "Helvetica", rounded=True, shadow=True),
        edge=EdgeTheme("#455A64", 2, "#333333", 11),
        group=GroupTheme("#E3F2FD", "#64B5F6", "#1565C0", 13, dashed=False),
        palette=("#4FC3F7", "#81C784", "#FFD54F", "#E57373", "#BA68C8", "#4DD0E1"),
    ),
    "monochrome": Theme(
        name="monochrome",
        background="#ffffff",
        node=NodeTheme("#f0f0f0", "#333333", "#000000", 12, "Helvetica", rounded=False, shadow=False),
        edge=EdgeTheme("#333333", 1, "#000000", 11),
        group=GroupTheme("#fafafa", "#666666", "#000000", 13, dashed=True),
        palette=("#f0f0f0", "#d9d9d9", "#bfbfbf", "#a6a6a6", "#8c8c8c", "#737373"),
    ),
    "blueprint": Theme(
        name="blueprint",
        background="#1a237e",
        node=NodeTheme("#283593", "#5c6bc0", "#e8eaf6", 12, "Courier New", rounded=False, shadow=False),
        edge=EdgeTheme("#7986cb", 1, "#c5cae9", 11),
        group=GroupTheme("#1a237e", "#5c6bc0", "#c5cae9", 13, dashed=True),
        palette=("#283593", "#1565C0", "#00838F", "#2E7D32", "#F57F17", "#BF360C"),
    ),
    "pastel": Theme(
        name="pastel",
        background="#ffffff",
        node=NodeTheme("#B3E5FC", "#81D4FA", "#37474F", 12, "Helvetica", rounded=True, shadow=False),
        edge=EdgeTheme("#90A4AE", 1, "#546E7A", 11),
        group=GroupTheme("#F3E5F5", "#CE93D8", "#4A148C", 13, dashed=True),
        palette=("#B3E5FC", "#C8E6C9", "#FFF9C4", "#FFCDD2", "#E1BEE7", "#D1C4E9"),
    ),
})


def get_theme(name: str, themes: Mapping[str, Theme] = THEMES) -> Theme:
    """Look up a theme by name, falling back to the default theme."""
    return themes.get(name) or themes.get(DEFAULT_THEME) or THEMES[DEFAULT_THEME]


def list_themes(themes: Mapping[str, Theme] = THEMES) -> list[Theme]:
    return list(themes.values())
