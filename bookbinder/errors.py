"""Exception hierarchy raised by the bookbinder build pipeline."""

from __future__ import annotations


class BuildError(RuntimeError):
    """Base class for failures raised while assembling or running a build."""


class DuplicateStageError(BuildError):
    """Raised when a stage name is registered twice."""


class UnknownStageError(BuildError):
    """Raised when ``before``/``after`` reference a stage that is not registered."""


class StageContractError(BuildError):
    """Raised when a stage handler does not hand back a stream of files."""


class TemplateRenderError(BuildError):
    """Raised when the template renderer cannot compile or render a template."""


class MalformedDocumentError(BuildError):
    """Raised when a file's contents cannot be parsed into a document tree."""


class FrontmatterError(BuildError):
    """Raised when a page's YAML frontmatter is unreadable or not a mapping."""


class PartAssemblyError(BuildError):
    """Raised when part groupings cannot be placed in the table of contents."""


class PluginLoadError(BuildError):
    """Raised when a configured plugin cannot be imported or registered."""


__all__ = [
    "BuildError",
    "DuplicateStageError",
    "FrontmatterError",
    "MalformedDocumentError",
    "PartAssemblyError",
    "PluginLoadError",
    "StageContractError",
    "TemplateRenderError",
    "UnknownStageError",
]
