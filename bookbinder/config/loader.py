"""Load book configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from loguru import logger
from ruamel.yaml import YAML

from .helpers import _build_format_configs, _expand_files, _optional_path, _path_list
from .models import BookConfig, BookConfigError

DEFAULT_DESTINATION = "build/{format}"
DEFAULT_INCLUDES = "includes"


def load_book_config(path: Path) -> BookConfig:
    """Load the YAML configuration describing a book and its build formats.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example ``book.yaml``).
        Relative paths inside the file resolve against its directory.

    Returns
    -------
    BookConfig
        Parsed configuration with the file listing flattened in build order.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    BookConfigError
        If the top-level structure is not a mapping, no formats are enabled,
        or the file listing is invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_book_config(Path("book.yaml"))  # doctest: +SKIP
    >>> [entry.relative_path for entry in config.files]  # doctest: +SKIP
    ['first-chapter.md', 'second-chapter.md']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise BookConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    root = path.resolve().parent
    source_dir = root / str(raw.get("source", "."))
    if not source_dir.is_dir():
        msg = f"Source directory '{source_dir}' does not exist."
        raise BookConfigError(msg)

    enabled_formats = raw.get("enabled_formats", ["html"])
    if isinstance(enabled_formats, str):
        enabled_formats = [enabled_formats]
    if not enabled_formats:
        msg = "No formats enabled in book configuration."
        raise BookConfigError(msg)

    liquid = raw.get("liquid") or {}
    includes = _path_list(root, liquid.get("includes", DEFAULT_INCLUDES))
    files_raw = raw.get("files")
    if files_raw is not None and not isinstance(files_raw, list):
        msg = "'files' must be a list."
        raise BookConfigError(msg)

    files = _expand_files(source_dir, files_raw)
    if not files:
        msg = f"No source files found under {source_dir}."
        raise BookConfigError(msg)
    logger.debug("loaded {} source files from {}", len(files), path)

    return BookConfig(
        root=root,
        source_dir=source_dir,
        title=str(raw.get("title", "")),
        destination=str(raw.get("destination", DEFAULT_DESTINATION)),
        enabled_formats=[str(name) for name in enabled_formats],
        files=files,
        includes=includes,
        layout=_optional_path(root, raw.get("layout")),
        formats=_build_format_configs(root, raw.get("formats")),
        plugins=[str(name) for name in raw.get("plugins", []) or []],
        pygments_style=str(raw.get("pygments_style", "monokai")),
    )


__all__ = ["load_book_config"]
