# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Parser for viewer configuration files in TOML format."""

from pathlib import Path
from typing import Dict, List, Optional, Union

import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_extra_types.color import Color

from domview.core.logger import logger
from domview.style import DOMAIN_COLORS, CanvasStyle, DisplayOptions

from .errors import ConfigFileNotFoundError, ConfigValidationError, InvalidTomlError
from .sources import DEFAULT_MIRROR_DIR, DEFAULT_REMOTE_URL


class SourceSettings(BaseModel):
    """Where structures are fetched from."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    local_mirror: Path = Field(
        default=DEFAULT_MIRROR_DIR, description="Local structure mirror directory"
    )
    local_url: Optional[str] = Field(
        default=None, description="URL template of a local structure API, tried first"
    )
    remote_url: str = Field(
        default=DEFAULT_REMOTE_URL, description="URL template of the fallback source"
    )
    timeout: Optional[float] = Field(
        default=None, gt=0, description="HTTP timeout in seconds; httpx default if unset"
    )


class PaletteSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    colors: List[Color] = Field(
        default_factory=lambda: [Color(c) for c in DOMAIN_COLORS], min_length=1
    )


class ViewerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    sources: SourceSettings = Field(default_factory=SourceSettings)
    display: DisplayOptions = Field(default_factory=DisplayOptions)
    palette: PaletteSettings = Field(default_factory=PaletteSettings)
    canvas: CanvasStyle = Field(default_factory=CanvasStyle)

    @property
    def palette_hex(self) -> List[str]:
        return [color.as_hex() for color in self.palette.colors]


class ConfigParser:
    """Parser for TOML viewer configuration files."""

    KNOWN_SECTIONS = {
        "sources": SourceSettings,
        "display": DisplayOptions,
        "palette": PaletteSettings,
        "canvas": CanvasStyle,
    }

    def __init__(self, file_path: Union[str, Path]):
        """Initialize the config parser.

        Args:
            file_path: Path to the TOML config file

        Raises:
            ConfigFileNotFoundError: If the file doesn't exist
            InvalidTomlError: If the TOML is malformed
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise ConfigFileNotFoundError(str(self.file_path))

        try:
            with open(self.file_path, "r") as f:
                self.raw_data = toml.load(f)
        except toml.TomlDecodeError as e:
            raise InvalidTomlError(f"Invalid TOML format: {e}")

        unknown_sections = [s for s in self.raw_data if s not in self.KNOWN_SECTIONS]
        if unknown_sections:
            logger.warning(
                f"Unknown config sections found and ignored: {', '.join(unknown_sections)}"
            )

    def parse(self) -> ViewerSettings:
        """Parse the known sections into a ViewerSettings instance.

        Sections missing from the file keep their defaults.

        Raises:
            ConfigValidationError: If a section is not a table or fails validation.
        """
        sections: Dict[str, BaseModel] = {}
        for section_name, model in self.KNOWN_SECTIONS.items():
            section_data = self.raw_data.get(section_name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Invalid format for section '{section_name}'. Expected a table, "
                    f"got {type(section_data).__name__}."
                )
            try:
                sections[section_name] = model.model_validate(section_data)
            except ValidationError as e:
                error_msgs = [
                    f"  - {'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ]
                raise ConfigValidationError(
                    f"Invalid settings in section '{section_name}':\n"
                    + "\n".join(error_msgs)
                ) from e

        return ViewerSettings(**sections)
