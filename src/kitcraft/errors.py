"""Exceptions raised by kit lifecycle and generation operations."""


class KitcraftError(Exception):
    """Base class for all predictable kitcraft failures.

    The CLI error boundary catches this type and prints the message without
    a stack trace.
    """


class NotFoundError(KitcraftError):
    """A kit (or other named resource) does not exist."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind.capitalize()} '{name}' not found")


class AlreadyExistsError(KitcraftError):
    """A kit name or target directory is already taken."""

    def __init__(self, path: object, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Path already exists: {path}")


class NameExtractionError(KitcraftError):
    """No kit name could be derived from a source reference."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Could not extract kit name from source: {source}")


class ValidationError(KitcraftError):
    """Kit structure, kit metadata or a generation request is invalid."""


class UnsupportedSourceError(KitcraftError):
    """A source reference matches none of the recognized source forms."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        self.source = source
        message = f"Unsupported kit source: {source}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class AcquisitionError(KitcraftError):
    """Copying, cloning or downloading kit content failed."""


class GenerationError(KitcraftError):
    """Walking the template tree or writing the output tree failed."""


class TemplateEvaluationWarning(UserWarning):
    """Expression evaluation of a template failed and was skipped.

    Never raised by the engine. Instances are logged and collected so the
    caller can report them next to an otherwise successful generation.
    """

    def __init__(self, origin: str, detail: str) -> None:
        self.origin = origin
        self.detail = detail
        super().__init__(
            f"Template evaluation failed for {origin}, using literal substitution: {detail}"
        )
