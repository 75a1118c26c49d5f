"""HAProxy configuration renderer.

Renders a RenderConfiguration through a jinja2 template and removes
the blank lines left behind by template control blocks. The template
is compiled once when the renderer is created; a renderer is then kept
for the lifetime of the controller and called on every update.

The template receives the configuration as ``cfg`` and two helpers:

  - empty(value)                      True for '' and for non-strings
  - is_ssl_passthrough(name, backends)  True if name is an SSL
                                        passthrough backend
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path

import jinja2

from ingress2haproxy.errors import (
    PostProcessingError,
    TemplateExecutionError,
    TemplateLoadError,
)
from ingress2haproxy.models.haproxy import RenderConfiguration
from ingress2haproxy.models.ingress import SSLPassthroughBackend

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = Path(__file__).resolve().parent.parent / "templates" / "haproxy.cfg.j2"


def empty(value: object) -> bool:
    """True if value is a zero-length string.

    Anything that is not a string counts as empty.
    """
    if isinstance(value, str):
        return len(value) == 0
    return True


def is_ssl_passthrough(
    backend_name: str,
    passthrough_backends: Sequence[SSLPassthroughBackend],
) -> bool:
    """True if backend_name must receive TLS traffic unterminated."""
    for passthrough in passthrough_backends:
        if passthrough.backend == backend_name:
            logger.info("Found ssl passthrough backend: %s", passthrough)
            return True
    return False


def strip_blank_lines(text: str) -> str:
    """Drop lines made only of whitespace.

    Lines end at "\\n" only. Every other line is kept verbatim,
    including its line ending.

    >>> strip_blank_lines("global\\n\\n    daemon\\n   \\n")
    'global\\n    daemon\\n'
    """
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]] + [pieces[-1]]
    return "".join(line for line in lines if line.strip())


class HAProxyTemplate:
    """A compiled HAProxy template with reusable output buffers.

    Not safe for concurrent use: callers must serialize render() calls
    on a given instance.
    """

    def __init__(self, file: Path | str) -> None:
        path = Path(file)
        self.path = path
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(path.parent)),
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.globals["empty"] = empty
        env.globals["is_ssl_passthrough"] = is_ssl_passthrough
        try:
            self.template = env.get_template(path.name)
        except jinja2.TemplateError as e:
            raise TemplateLoadError(f"Cannot read template file {path}: {e}") from e
        self._raw_config = io.StringIO()
        self._fmt_config = io.StringIO()

    @classmethod
    def default(cls) -> HAProxyTemplate:
        """Renderer for the template shipped with the package."""
        return cls(DEFAULT_TEMPLATE)

    def render(self, config: RenderConfiguration) -> bytes:
        """Render config into HAProxy configuration bytes.

        Raises:
            TemplateExecutionError: If the template fails to render.
            PostProcessingError: If the rendered text cannot be cleaned
                up and encoded. The raw output is not returned.
        """
        for buf in (self._raw_config, self._fmt_config):
            buf.seek(0)
            buf.truncate(0)

        try:
            for chunk in self.template.generate(cfg=config):
                self._raw_config.write(chunk)
        except Exception as e:
            raise TemplateExecutionError(
                f"error rendering {self.path.name}: {e}"
            ) from e

        try:
            self._fmt_config.write(strip_blank_lines(self._raw_config.getvalue()))
            return self._fmt_config.getvalue().encode("utf-8")
        except UnicodeError as e:
            logger.error("Template cleaning has failed: %s", e)
            raise PostProcessingError(f"Template cleaning has failed: {e}") from e
