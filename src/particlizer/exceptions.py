"""Exception hierarchy for Particlizer."""


class ParticlizerError(Exception):
    """Base exception for all Particlizer errors."""

    pass


class DocumentError(ParticlizerError):
    """Errors related to loading shape documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error reading a vector document or scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class SceneFormatError(DocumentError):
    """Scene file content does not describe a valid shape list."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid scene data: {details}")


class ShapeError(ParticlizerError):
    """Errors related to shape geometry."""

    pass


class ShapeTypeError(ShapeError):
    """Object is not one of the supported shape variants."""

    def __init__(self, obj: object) -> None:
        self.obj = obj
        super().__init__(f"Unsupported shape type: {type(obj).__name__}")


class ExportError(ParticlizerError):
    """Errors related to writing particle output."""

    pass


class ParticleExportError(ExportError):
    """Error writing particles to a file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export particles to '{path}': {reason}")


class UnsupportedFormatError(ExportError):
    """Output file extension has no registered writer."""

    def __init__(self, path: str, suffix: str) -> None:
        self.path = path
        self.suffix = suffix
        super().__init__(f"Unsupported output format '{suffix}' for '{path}'")
