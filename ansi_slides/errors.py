"""
Exceptions raised while rendering documents into terminal slides.
"""


class AnsiSlidesError(Exception):
    """Base class for all errors raised by ansi_slides."""


class UnknownStyle(AnsiSlidesError):
    """A font effect name is missing from the style table."""

    def __init__(self, name):
        super().__init__(f"Unknown font effect {name!r}")
        self.name = name


class UnsupportedNodeVariant(AnsiSlidesError):
    """A node reached dispatch without a rendering rule."""

    def __init__(self, node):
        super().__init__(f"No rendering rule for node type {type(node).__name__!r}")
        self.node = node


class ExternalToolFailure(AnsiSlidesError):
    """An external formatter (banner, highlighter, size query) failed."""

    def __init__(self, tool: str, message: str):
        super().__init__(f"{tool}: {message}")
        self.tool = tool


class IOFailure(AnsiSlidesError):
    """Writing a slide artifact failed."""

    def __init__(self, path, cause: OSError):
        super().__init__(f"Could not write slide {path}: {cause}")
        self.path = path
        self.cause = cause
