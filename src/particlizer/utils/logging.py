"""Logging utilities for Particlizer."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class GenerationStats:
    """Statistics from one particle generation cycle."""

    shape_count: int = 0
    skipped_shapes: int = 0
    interior_pixels: int = 0
    requested: int = 0
    edge_count: int = 0
    fallback_count: int = 0
    attempts: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def particle_count(self) -> int:
        """Total particles produced by both sampling phases."""
        return self.edge_count + self.fallback_count

    @property
    def duration_seconds(self) -> float:
        """Calculate generation duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def acceptance_rate(self) -> float:
        """Fraction of rejection-sampling candidates that were accepted."""
        if self.attempts == 0:
            return 0.0
        return self.edge_count / self.attempts


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("particlizer")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class GenerationLogger:
    """Logger for tracking particle generation progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = GenerationStats()

    def reset(self) -> None:
        """Start a fresh statistics record for a new generation cycle."""
        self._stats = GenerationStats()

    def log_generation_start(self, shape_count: int, width: int, height: int, requested: int) -> None:
        """Log start of a generation cycle."""
        self._logger.debug(
            "Generating particles",
            shapes=shape_count,
            width=width,
            height=height,
            requested=requested,
        )
        self._stats.shape_count = shape_count
        self._stats.requested = requested

    def log_shape_skipped(self, index: int, kind: str, reason: str) -> None:
        """Log a shape that contributes nothing to the mask."""
        self._logger.debug("Shape skipped", index=index, kind=kind, reason=reason)
        self._stats.skipped_shapes += 1

    def log_mask(self, interior_pixels: int, duration_ms: float) -> None:
        """Log mask and distance field construction."""
        self._logger.debug(
            "Mask built",
            interior_pixels=interior_pixels,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.interior_pixels = interior_pixels

    def log_sampling(self, edge_count: int, fallback_count: int, attempts: int) -> None:
        """Log the outcome of both sampling phases."""
        self._logger.debug(
            "Sampling finished",
            edge=edge_count,
            fallback=fallback_count,
            attempts=attempts,
        )
        self._stats.edge_count = edge_count
        self._stats.fallback_count = fallback_count
        self._stats.attempts = attempts

    def log_generation_complete(self, duration_ms: float) -> None:
        """Log successful generation."""
        self._logger.info(
            "Particles generated",
            particles=self._stats.particle_count,
            requested=self._stats.requested,
            fallback=self._stats.fallback_count,
            duration_ms=round(duration_ms, 2),
        )
        if self._stats.particle_count < self._stats.requested:
            self._logger.warning(
                "Particle quota not reached",
                particles=self._stats.particle_count,
                requested=self._stats.requested,
            )

    @property
    def stats(self) -> GenerationStats:
        """Get current generation statistics."""
        return self._stats
