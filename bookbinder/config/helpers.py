"""Utility helpers shared by the book configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import BookConfigError, FileEntry, FormatConfig

DEFAULT_FILE_PATTERN = "*.md"


def _optional_path(root: Path, value: object | None) -> Path | None:
    """Return ``value`` resolved against ``root``, or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return root / text if text else None


def _path_list(root: Path, value: object | None) -> list[Path]:
    """Normalize a string or list of strings into paths under ``root``."""
    match value:
        case None:
            return []
        case str() as text:
            return [root / text] if text.strip() else []
        case list() as items:
            return [root / str(item) for item in items if str(item).strip()]
        case _:
            msg = f"Expected a path or list of paths, got {value!r}."
            raise BookConfigError(msg)


def _build_format_configs(
    root: Path, payload: typ.Mapping[str, typ.Any] | None
) -> dict[str, FormatConfig]:
    """Build per-format overrides from the ``formats`` mapping."""
    result: dict[str, FormatConfig] = {}
    for name, entry in (payload or {}).items():
        if not isinstance(entry, dict):
            continue
        destination = entry.get("destination")
        result[str(name)] = FormatConfig(
            layout=_optional_path(root, entry.get("layout")),
            destination=str(destination) if destination else None,
        )
    return result


def _expand_files(
    source_dir: Path,
    listing: list[typ.Any] | None,
    *,
    part: str | None = None,
    parent_part: str | None = None,
) -> list[FileEntry]:
    """Flatten the nested ``files`` listing into ordered file entries.

    Strings name files (or glob patterns) relative to ``source_dir``. Mappings
    with ``label`` and ``files`` open a part; parts may nest, in which case the
    enclosing label becomes each file's ``parent_part``.
    """
    if listing is None:
        listing = [DEFAULT_FILE_PATTERN]
    entries: list[FileEntry] = []
    for item in listing:
        match item:
            case str() as pattern:
                for path in _resolve_pattern(source_dir, pattern):
                    entries.append(
                        FileEntry(
                            path=path,
                            relative_path=path.relative_to(source_dir).as_posix(),
                            part=part,
                            parent_part=parent_part,
                        )
                    )
            case {"label": label, **rest}:
                nested = _expand_files(
                    source_dir,
                    list(rest.get("files") or []),
                    part=str(label),
                    parent_part=part,
                )
                # the part group is created by its first file, so a nested part
                # cannot come before the part's own files
                if nested and nested[0].part != str(label):
                    msg = f"Part '{label}' must list a file before its first sub-part."
                    raise BookConfigError(msg)
                entries.extend(nested)
            case _:
                msg = f"Unsupported entry in 'files': {item!r}."
                raise BookConfigError(msg)
    return entries


def _resolve_pattern(source_dir: Path, pattern: str) -> list[Path]:
    if any(char in pattern for char in "*?["):
        return sorted(path for path in source_dir.glob(pattern) if path.is_file())
    path = source_dir / pattern
    if not path.is_file():
        msg = f"Listed file '{pattern}' does not exist under {source_dir}."
        raise BookConfigError(msg)
    return [path]


__all__ = [
    "DEFAULT_FILE_PATTERN",
    "_build_format_configs",
    "_expand_files",
    "_optional_path",
    "_path_list",
]
