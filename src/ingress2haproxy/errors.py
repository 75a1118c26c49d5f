"""Error types raised by the render pipeline.

Each one aborts the current pass. The host keeps the previously
rendered configuration and retries on the next update.
"""

from __future__ import annotations


class RenderError(Exception):
    """Base class for failures surfaced to the host."""


class TemplateLoadError(RenderError):
    """The template file is missing or does not compile.

    Raised at renderer construction; callers treat it as fatal.
    """


class TemplateExecutionError(RenderError):
    """The template raised while rendering a configuration."""


class PostProcessingError(RenderError):
    """Blank-line stripping of the rendered output failed."""


class CredentialFileError(RenderError):
    """A basic auth credential file could not be read.

    Attributes:
        filename: Path of the credential file.
    """

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"cannot read {filename}: {reason}")
        self.filename = filename
        self.reason = reason
