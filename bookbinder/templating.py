"""Jinja-backed template rendering shared by the page, layout, and TOC stages.

Templates are compiled once and rendered against an include search path that
can differ per page: a page's frontmatter may point at its own include
directory while the rest of the book uses the build default. One Jinja
``Environment`` is kept per distinct search path. The package ``templates``
directory is always appended last so built-in partials such as ``toc.html``
resolve when the book does not ship its own.

Example
-------
>>> renderer = TemplateRenderer()
>>> compiled = renderer.compile("Hello {{ name }}")
>>> renderer.render(compiled, {"name": "book"}, [])
'Hello book'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
from loguru import logger

from .errors import TemplateRenderError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Template

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
# markdown attribute lists (`{#id}`) start with Jinja's default comment marker
COMMENT_START = "{##"
COMMENT_END = "##}"


@dc.dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """Template source that passed a syntax check."""

    source: str
    name: str = "<string>"


class TemplateRenderer:
    """Compile and render Jinja templates against include search paths."""

    def __init__(self, *, default_templates_dir: Path | None = None) -> None:
        self.default_templates_dir = default_templates_dir or DEFAULT_TEMPLATES_DIR
        self._environments: dict[tuple[str, ...], Environment] = {}
        self._templates: dict[tuple[tuple[str, ...], str], Template] = {}

    def compile(self, source: str, *, name: str = "<string>") -> CompiledTemplate:
        """Check ``source`` for syntax errors and wrap it for rendering.

        Raises
        ------
        TemplateRenderError
            If Jinja cannot parse the template.
        """
        try:
            self._environment(()).parse(source)
        except TemplateError as exc:
            msg = f"Template {name} failed to compile: {exc}"
            raise TemplateRenderError(msg) from exc
        return CompiledTemplate(source=source, name=name)

    def render(
        self,
        compiled: CompiledTemplate,
        local_vars: cabc.Mapping[str, typ.Any],
        includes: cabc.Sequence[Path | str],
        *,
        cache: bool = True,
    ) -> str:
        """Render ``compiled`` with ``local_vars``, resolving includes in order.

        Parameters
        ----------
        compiled : CompiledTemplate
            Template returned by :meth:`compile`.
        local_vars : Mapping[str, Any]
            Variables exposed to the template.
        includes : Sequence[Path | str]
            Directories searched, in order, by ``{% include %}`` tags.
        cache : bool, optional
            Keep the built template for later renders of the same source. Pass
            ``False`` for one-off sources such as individual pages.

        Returns
        -------
        str
            Rendered output.

        Raises
        ------
        TemplateRenderError
            If an include is missing or rendering fails.
        """
        key = self._search_key(includes)
        template = self._templates.get((key, compiled.source))
        try:
            if template is None:
                template = self._environment(key).from_string(compiled.source)
                if cache:
                    self._templates[(key, compiled.source)] = template
            return template.render(**local_vars)
        except TemplateError as exc:
            msg = f"Template {compiled.name} failed to render: {exc}"
            raise TemplateRenderError(msg) from exc

    def _search_key(self, includes: cabc.Sequence[Path | str]) -> tuple[str, ...]:
        return tuple(str(Path(path)) for path in includes)

    def _environment(self, key: tuple[str, ...]) -> Environment:
        env = self._environments.get(key)
        if env is None:
            search_path = [*key, str(self.default_templates_dir)]
            logger.debug("creating template environment for {}", search_path)
            env = Environment(
                loader=FileSystemLoader(search_path),
                autoescape=select_autoescape(["html", "xml"], default_for_string=False),
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
                comment_start_string=COMMENT_START,
                comment_end_string=COMMENT_END,
            )
            self._environments[key] = env
        return env


__all__ = ["DEFAULT_TEMPLATES_DIR", "CompiledTemplate", "TemplateRenderer"]
