"""Configuration settings for Particlizer."""

from pathlib import Path

from pydantic import BaseModel, Field


class SamplingConfig(BaseModel):
    """Configuration for edge-biased particle sampling.

    The acceptance probability of an interior candidate pixel is
    ``edge_bias * max(0, 1 - d / r) ** edge_falloff`` where ``d`` is its
    distance to the nearest edge and ``r`` the edge influence radius.
    """

    target_count: int = Field(
        default=5000,
        ge=0,
        description="Number of particles to generate",
    )
    edge_bias: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Scale of the acceptance probability near edges",
    )
    edge_falloff: float = Field(
        default=3.0,
        ge=0.0,
        description="Exponent sharpening the bias toward edges",
    )
    attempts_per_particle: int = Field(
        default=80,
        ge=1,
        description="Rejection sampling budget per requested particle",
    )
    edge_radius_fraction: float = Field(
        default=0.1,
        gt=0.0,
        le=1.0,
        description="Edge influence radius as a fraction of the larger raster side",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed (None = fresh entropy on every run)",
    )


class ImportConfig(BaseModel):
    """Configuration for SVG document import."""

    padding: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Fraction of the target canvas the imported view region may fill",
    )
    curve_segments: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Line segments per flattened Bezier curve",
    )
    ellipse_segments: int = Field(
        default=32,
        ge=3,
        le=360,
        description="Polygon vertices per imported circle or ellipse",
    )
    default_view_width: float = Field(
        default=800.0,
        gt=0.0,
        description="View width used when the document declares none",
    )
    default_view_height: float = Field(
        default=600.0,
        gt=0.0,
        description="View height used when the document declares none",
    )


class CanvasConfig(BaseModel):
    """Raster dimensions used for mask generation and import fitting."""

    width: int = Field(default=800, ge=1, le=16384, description="Canvas width in pixels")
    height: int = Field(default=600, ge=1, le=16384, description="Canvas height in pixels")


class SmoothingConfig(BaseModel):
    """Configuration for freehand path smoothing."""

    iterations: int = Field(
        default=0,
        ge=0,
        le=6,
        description="Chaikin corner-cutting passes applied to finalized paths",
    )


class ExportConfig(BaseModel):
    """Configuration for particle rendering on export."""

    particle_size: float = Field(
        default=1.5,
        gt=0.0,
        le=50.0,
        description="Particle diameter in pixels",
    )
    color: str = Field(default="#ffffff", description="Particle fill color")
    background: str = Field(default="#0a0a0a", description="Canvas background color")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ParticlizerSettings(BaseModel):
    """Main application settings."""

    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    importing: ImportConfig = Field(default_factory=ImportConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ParticlizerSettings:
    """Get default application settings."""
    return ParticlizerSettings()
