"""Application settings and configuration management."""

from pathlib import Path

import pydantic
import yaml
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import CSVConstants, TrackColumns
from .exceptions import ConfigurationError
from .models import ChangePointConfig, DecompositionConfig, PeakDetectionConfig


class Settings(BaseSettings):
    """
    Application settings for Movement Segmenter.

    Settings are loaded in the following order of precedence (highest to lowest):
    1. Values passed in (e.g. from a YAML config file)
    2. Environment variables (e.g., MOVEMENT_SEGMENTER_SPEED_COLUMN,
       MOVEMENT_SEGMENTER_PEAKS__MIN_HEIGHT)
    3. .env file (if found)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVEMENT_SEGMENTER_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # --- File Paths ---
    data_dir: Path = Path("data")  # Default relative path, overridden by config
    track_file: Path | None = None  # Track CSV, usually given on the command line
    output_dir: Path = Path("output")

    # --- Track Columns ---
    speed_column: str = TrackColumns.SPEED
    csv_separator: str = CSVConstants.DEFAULT_SEPARATOR

    # --- Analysis Parameters ---
    # Chosen by inspecting the sub-bands of a representative track
    decomposition: DecompositionConfig = DecompositionConfig()
    peaks: PeakDetectionConfig = PeakDetectionConfig()
    change_points: ChangePointConfig = ChangePointConfig()

    @model_validator(mode="after")
    def check_levels_decomposed(self) -> "Settings":
        """Validate that both analyzed levels exist in the decomposition."""
        levels = self.decomposition.levels
        if self.peaks.level > levels:
            raise ValueError(
                f"peaks.level ({self.peaks.level}) "
                f"exceeds decomposition.levels ({levels})"
            )
        if self.change_points.level > levels:
            raise ValueError(
                f"change_points.level ({self.change_points.level}) "
                f"exceeds decomposition.levels ({levels})"
            )
        return self

    def analysis_parameters(self) -> dict[str, object]:
        """Flat view of the parameters that affect the segmentation."""
        return {
            "wavelet_filter": self.decomposition.wavelet_filter,
            "levels": self.decomposition.levels,
            "peak_level": self.peaks.level,
            "min_peak_height": self.peaks.min_height,
            "min_peak_distance": self.peaks.min_distance,
            "max_peak_count": self.peaks.max_count,
            "change_level": self.change_points.level,
            "change_threshold": self.change_points.threshold,
            "min_segment_length": self.change_points.min_segment_length,
        }


def load_settings(config_file: Path | None = None) -> Settings:
    """Load settings from a YAML file, environment variables, and defaults."""
    try:
        if config_file:
            with open(config_file, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}

            # Resolve data_dir relative to the config file
            data_dir = Path(yaml_settings.get("data_dir", "")).expanduser()
            if not data_dir.is_absolute():
                data_dir = (config_file.parent / data_dir).resolve()
            yaml_settings["data_dir"] = str(data_dir)

            # Join a relative track file with data_dir
            if (
                yaml_settings.get("track_file")
                and not Path(yaml_settings["track_file"]).is_absolute()
            ):
                yaml_settings["track_file"] = str(
                    data_dir / yaml_settings["track_file"]
                )

            if (
                "output_dir" in yaml_settings
                and not Path(yaml_settings["output_dir"]).is_absolute()
            ):
                yaml_settings["output_dir"] = str(
                    (config_file.parent / yaml_settings["output_dir"]).resolve()
                )

            return Settings(**yaml_settings)

        return Settings()

    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to read config file {config_file}: {e}"
        ) from e
    except pydantic.ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
