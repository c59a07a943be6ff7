"""Particle writer for exporting generated particles.

This module provides the ParticleWriter class, which writes a ParticleSet
as JSON coordinates, an SVG drawing (one circle per particle) or a PNG
image.
"""

import json
from pathlib import Path

import svgwrite
from PIL import Image, ImageDraw

from particlizer.config import ExportConfig
from particlizer.domain import ParticleSet
from particlizer.exceptions import ParticleExportError, UnsupportedFormatError


class ParticleWriter:
    """Writes particle sets to disk.

    Example:
        writer = ParticleWriter(800, 600, ExportConfig(particle_size=2.0))
        writer.write(particles, Path("out.svg"))
    """

    SUFFIX = "-particles"

    def __init__(self, width: int, height: int, config: ExportConfig | None = None) -> None:
        """Initialize the writer.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            config: Rendering settings (default: ExportConfig())
        """
        self.width = width
        self.height = height
        self.config = config if config is not None else ExportConfig()

    @classmethod
    def get_output_path(cls, input_path: Path, extension: str = ".png") -> Path:
        """Generate an output path next to the input.

        Example:
            logo.svg -> logo-particles.png

        Args:
            input_path: Path to the source document
            extension: Output extension including the dot

        Returns:
            Path for the exported particles
        """
        return input_path.parent / f"{input_path.stem}{cls.SUFFIX}{extension}"

    def write(self, particles: ParticleSet, path: Path) -> None:
        """Write particles in the format implied by the file extension.

        Raises:
            UnsupportedFormatError: If the extension is not .json, .svg or .png
            ParticleExportError: If the file cannot be written
        """
        suffix = path.suffix.lower()
        if suffix == ".json":
            self.write_json(particles, path)
        elif suffix == ".svg":
            self.write_svg(particles, path)
        elif suffix == ".png":
            self.write_png(particles, path)
        else:
            raise UnsupportedFormatError(str(path), suffix or "<none>")

    def write_json(self, particles: ParticleSet, path: Path) -> None:
        """Write particle coordinates and canvas size as JSON."""
        data = {"width": self.width, "height": self.height, **particles.to_dict()}
        try:
            path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as e:
            raise ParticleExportError(str(path), str(e)) from e

    def write_svg(self, particles: ParticleSet, path: Path) -> None:
        """Write particles as filled circles on a background rectangle."""
        dwg = svgwrite.Drawing(str(path), profile="tiny", size=(self.width, self.height))
        dwg.viewbox(0, 0, self.width, self.height)
        dwg.add(dwg.rect(insert=(0, 0), size=(self.width, self.height), fill=self.config.background))

        radius = self.config.particle_size / 2
        group = dwg.g(id="particles", fill=self.config.color, stroke="none")
        for p in particles:
            group.add(dwg.circle(center=(round(p.x, 3), round(p.y, 3)), r=radius))
        dwg.add(group)

        try:
            dwg.save()
        except OSError as e:
            raise ParticleExportError(str(path), str(e)) from e

    def write_png(self, particles: ParticleSet, path: Path) -> None:
        """Render particles with Pillow and save a PNG image."""
        image = self.render(particles)
        try:
            image.save(path, format="PNG")
        except OSError as e:
            raise ParticleExportError(str(path), str(e)) from e

    def render(self, particles: ParticleSet) -> Image.Image:
        """Render particles onto an RGB image of the canvas size."""
        image = Image.new("RGB", (self.width, self.height), self.config.background)
        draw = ImageDraw.Draw(image)
        r = self.config.particle_size / 2
        for p in particles:
            draw.ellipse([p.x - r, p.y - r, p.x + r, p.y + r], fill=self.config.color)
        return image
