"""
Configuration dataclasses for the binprobe viewer.
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path

from .exceptions import ConfigError
from .models import MIN_BYTES_PER_LINE, MAX_BYTES_PER_LINE


@dataclass
class ViewerConfig:
    """
    Display settings consumed by the viewer.

    Keys starting with _ in the JSON file are comments and ignored.
    """
    bytes_per_line: int = 32
    display_lsb: bool = False  # show each byte with its bit order reversed
    use_color: bool = False
    row_height: float = 1.0
    visible_rows: int = 25
    export_dir: str = "."

    def __post_init__(self):
        """Validate ranges."""
        if not isinstance(self.bytes_per_line, int) or isinstance(self.bytes_per_line, bool):
            raise ConfigError(f"bytes_per_line must be an integer, got {self.bytes_per_line!r}")
        if not MIN_BYTES_PER_LINE <= self.bytes_per_line <= MAX_BYTES_PER_LINE:
            raise ConfigError(
                f"bytes_per_line must be between {MIN_BYTES_PER_LINE} and {MAX_BYTES_PER_LINE}, "
                f"got {self.bytes_per_line}"
            )
        if not self.row_height > 0:
            raise ConfigError(f"row_height must be positive, got {self.row_height}")
        if self.visible_rows < 1:
            raise ConfigError(f"visible_rows must be at least 1, got {self.visible_rows}")

    @classmethod
    def from_json(cls, path: str | Path) -> 'ViewerConfig':
        """Load ViewerConfig from JSON file (defaults if the file does not exist)."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return cls()
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config in {path} must be a JSON object")

        try:
            return cls(**{k: v for k, v in data.items() if not k.startswith('_')})
        except TypeError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e

    def to_dict(self) -> dict:
        return asdict(self)


def create_default_config(path: str = "binprobe_config.json") -> bool:
    """
    Create a default configuration file if it doesn't exist.

    Returns:
        True if a file was written
    """
    config = {
        "bytes_per_line": 32,
        "_bytes_per_line_comment": f"Bytes per row, {MIN_BYTES_PER_LINE} to {MAX_BYTES_PER_LINE}",
        "display_lsb": False,
        "_display_lsb_comment": "Show each byte with its bit order reversed (least significant bit first)",
        "use_color": False,
        "row_height": 1.0,
        "visible_rows": 25,
        "_visible_rows_comment": "Rows shown by the dump command when no viewport is given",
        "export_dir": ".",
    }

    path_obj = Path(path)
    if path_obj.exists():
        return False

    with open(path_obj, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)
    return True
