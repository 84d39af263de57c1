"""Build a PreviewConfig from CLI arguments and an optional config file.

Resolves the operating mode, validates the root, and discovers stylesheets.
Looks for flowerstall.toml, flowerstall.yaml or flowerstall.yml in the root.
CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from flowerstall._errors import ConfigError
from flowerstall.config import PreviewConfig

# Stylesheet linked automatically when no --css is given
DEFAULT_STYLESHEET = "custom.css"

_FILE_KEYS = frozenset({"host", "port", "reload_port", "livereload", "css"})


def load_config(
    target: str | Path | None = None,
    *,
    root: str | Path | None = None,
    file: str | Path | None = None,
    css: str | list[str] | tuple[str, ...] | None = None,
    **overrides: object,
) -> tuple[PreviewConfig, list[str]]:
    """Resolve startup options into a PreviewConfig.

    Args:
        target: A document (single-document mode) or a directory
            (directory mode).
        root: Explicit root directory.
        file: Explicit target document, relative to ``root`` when given.
        css: Stylesheets, comma separated or as a sequence.  ``None`` means
            auto-detect ``custom.css`` in the root.
        **overrides: Other PreviewConfig fields (``None`` values are ignored).

    Returns:
        The config and a list of non-fatal warnings for the banner.

    Raises:
        ConfigError: If the root is missing, the modes conflict, or the
            config file is malformed.

    """
    root_path, document = _resolve_mode(target, root, file)

    file_config = _read_config_file(root_path)
    cli = {k: v for k, v in overrides.items() if v is not None}
    if css is not None:
        cli["css"] = css
    merged = {**file_config, **cli}

    unknown = set(merged) - _FILE_KEYS
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    for key in ("port", "reload_port"):
        if key in merged:
            merged[key] = _coerce_port(key, merged[key])
    if "livereload" in merged and not isinstance(merged["livereload"], bool):
        msg = f"livereload must be true or false, got {merged['livereload']!r}"
        raise ConfigError(msg)

    warnings: list[str] = []
    stylesheets = _resolve_stylesheets(root_path, merged.pop("css", None), warnings)

    return (
        PreviewConfig(root=root_path, document=document, stylesheets=stylesheets, **merged),
        warnings,
    )


def _resolve_mode(
    target: str | Path | None,
    root: str | Path | None,
    file: str | Path | None,
) -> tuple[Path, Path | None]:
    """Return ``(root, document)``; ``document`` is None in directory mode."""
    root_path = Path(root).resolve() if root is not None else None

    if target is not None:
        if file is not None:
            msg = "Give either a target or --file, not both"
            raise ConfigError(msg)
        target_path = Path(target)
        if target_path.is_dir():
            resolved = target_path.resolve()
            if root_path is not None and root_path != resolved:
                msg = f"Directory target {target} conflicts with --root {root}"
                raise ConfigError(msg)
            return resolved, None
        file = target_path
        # A positional document is taken relative to the working directory.
        if root_path is not None and not target_path.is_absolute():
            file = target_path.resolve()

    if file is None:
        base = root_path or Path.cwd().resolve()
        _require_directory(base)
        return base, None

    file_path = Path(file)
    if root_path is None:
        document = file_path.resolve().parent / file_path.name
        root_path = document.parent
    else:
        anchored = file_path if file_path.is_absolute() else root_path / file_path
        document = anchored.parent.resolve() / anchored.name
        if not document.is_relative_to(root_path):
            msg = f"Document {file} is not inside root {root_path}"
            raise ConfigError(msg)

    _require_directory(root_path)
    if document.is_dir():
        msg = f"Document {file} is a directory"
        raise ConfigError(msg)
    return root_path, document


def _coerce_port(key: str, value: object) -> int:
    try:
        port = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        port = -1
    if isinstance(value, bool) or not 0 <= port <= 65535:
        msg = f"{key} must be a port number, got {value!r}"
        raise ConfigError(msg)
    return port


def _require_directory(path: Path) -> None:
    if not path.is_dir():
        msg = f"Root directory not found: {path}"
        raise ConfigError(msg)


def _resolve_stylesheets(
    root: Path,
    css: object,
    warnings: list[str],
) -> tuple[Path, ...]:
    """Turn stylesheet references into absolute paths under root.

    Missing files and files outside the root are skipped with a warning.
    With no references, ``custom.css`` in the root is used if present.
    """
    if css is None:
        default = root / DEFAULT_STYLESHEET
        return (default,) if default.is_file() else ()

    if isinstance(css, str):
        refs = [c.strip() for c in css.split(",")]
    elif isinstance(css, list | tuple):
        refs = [str(c).strip() for c in css]
    else:
        msg = f"css must be a string or a list, got {type(css).__name__}"
        raise ConfigError(msg)

    sheets: list[Path] = []
    for ref in filter(None, refs):
        ref_path = Path(ref)
        candidate = ref_path if ref_path.is_absolute() else root / ref_path
        candidate = candidate.parent.resolve() / candidate.name
        if not candidate.is_file():
            warnings.append(f"Stylesheet not found, skipped: {ref}")
            continue
        if not candidate.is_relative_to(root):
            warnings.append(f"Stylesheet outside root, skipped: {ref}")
            continue
        if candidate not in sheets:
            sheets.append(candidate)
    return tuple(sheets)


def _read_config_file(root: Path) -> dict[str, object]:
    """Read flowerstall config from toml/yaml if present. Returns empty dict otherwise."""
    toml_path = root / "flowerstall.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    for name in ("flowerstall.yaml", "flowerstall.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping"
        raise ConfigError(msg)
    return _flatten_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_section(data)


def _flatten_section(data: dict[str, object]) -> dict[str, object]:
    """Extract flowerstall.* keys plus known top-level keys."""
    result: dict[str, object] = {k: v for k, v in data.items() if k in _FILE_KEYS}
    section = data.get("flowerstall")
    if isinstance(section, dict):
        result.update(section)
    return result
