# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from pydantic_extra_types.color import Color

from domview.core import Representation

# High-contrast palette used for domains without an explicit color.
DOMAIN_COLORS: Tuple[str, ...] = (
    "#FF0000",
    "#0066FF",
    "#00CC00",
    "#FF6600",
    "#9900CC",
    "#00CCCC",
    "#CC6600",
    "#FF99CC",
    "#666666",
    "#336699",
)


class Style(BaseModel):
    model_config = ConfigDict(
        title="Base Visualization Style",
        frozen=True,
    )


class CanvasStyle(Style):
    """Settings for exported images"""

    width: int = Field(default=800, gt=0, description="Canvas width in pixels")
    height: int = Field(default=600, gt=0, description="Canvas height in pixels")
    padding: float = Field(
        default=0.05, ge=0, lt=0.5, description="Padding as fraction of canvas size"
    )

    @property
    def dimensions(self) -> tuple[int, int]:
        """Returns canvas dimensions as (width, height)"""
        return (self.width, self.height)


class DisplayOptions(Style):
    """How the structure is drawn, independent of domain coloring."""

    representation: Representation = Field(
        default=Representation.CARTOON, description="Representation of the chain"
    )
    show_side_chains: bool = Field(
        default=False, description="Draw side chain atoms of the selected chain"
    )
    show_ligands: bool = Field(default=True, description="Draw hetero groups")
    show_water: bool = Field(default=False, description="Draw water molecules")
    show_labels: bool = Field(default=False, description="Label each domain")
    background_color: Color = Field(
        default=Color("#FFFFFF"), description="Background color"
    )
    base_color: Color = Field(
        default=Color("gray"), description="Color of residues outside any domain"
    )
    base_opacity: float = Field(
        default=0.8, ge=0, le=1, description="Opacity of residues outside any domain"
    )
    dim_opacity: float = Field(
        default=0.3, ge=0, le=1, description="Opacity of the chain while a domain is highlighted"
    )
    zoom: float = Field(default=1.0, gt=0, description="Initial zoom factor")


class StyleSpec(Style):
    """Appearance applied to an atom selection by a rendering engine."""

    representation: Representation = Representation.CARTOON
    color: Color = Field(default=Color("gray"))
    opacity: float = Field(default=1.0, ge=0, le=1)

    @property
    def visible(self) -> bool:
        return self.opacity > 0

    @classmethod
    def hidden(cls) -> "StyleSpec":
        return cls(opacity=0.0)


class LabelStyle(Style):
    font_size: float = Field(default=12, gt=0)
    font_color: Color = Field(default=Color("#000000"))
    background_color: Color = Field(default=Color("#FFFFFF"))
    background_opacity: float = Field(default=0.8, ge=0, le=1)
    border_color: Color = Field(default=Color("#000000"))
