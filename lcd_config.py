"""Runtime configuration for the asset code pipeline.

Input and output locations are passed into the pipeline explicitly.
The only environment override is the input file path.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from lcd_errors import AssetConfigError

DEFAULT_INPUT_FILE = Path("inputs/test_input.txt")
DEFAULT_OUTPUT_DIR = Path("outputs")
INPUT_FILE_ENV = "LCD_ASSET_INPUT_FILE"


@dataclass(frozen=True)
class PipelineConfig:
    """Validated run configuration.

    Attributes:
        input_file: Text file with one 4-digit identifier per line.
        output_dir: Directory receiving one ``<identifier>.png`` per row.
    """

    input_file: Path = DEFAULT_INPUT_FILE
    output_dir: Path = DEFAULT_OUTPUT_DIR

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Build config from defaults and the input file override.

        Raises:
            AssetConfigError: If the override is set but empty.
        """
        raw_value = os.getenv(INPUT_FILE_ENV)
        if raw_value is None:
            return cls()
        if not raw_value.strip():
            raise AssetConfigError(
                f"Invalid {INPUT_FILE_ENV} value: expected a file path, got an empty string. "
                f"Unset {INPUT_FILE_ENV} to use the default {DEFAULT_INPUT_FILE}."
            )
        return cls(input_file=Path(raw_value).expanduser())
