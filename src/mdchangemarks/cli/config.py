#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdchangemarks/cli/config.py
"""Locate and read mdchangemarks configuration files.

Option defaults can come from a dedicated file (``.mdchangemarks.toml``,
``.yaml``/``.yml`` or ``.json``) or from a ``[tool.mdchangemarks]`` table in
``pyproject.toml``. An explicit ``--config`` path wins, then the
``MDCHANGEMARKS_CONFIG`` environment variable, then the first file found
walking up from the current directory, then the home directory.

All loading problems surface as :class:`argparse.ArgumentTypeError`, which the
commands report with the validation exit code.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from mdchangemarks.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION

_PARSE_ERRORS = (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError)


def _parse_file(config_path: Path, label: str, parse: Callable[[Path], Any]) -> Any:
    try:
        return parse(config_path)
    except _PARSE_ERRORS as e:
        raise argparse.ArgumentTypeError(f"Invalid {label} in {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Cannot read {label} file {config_path}: {e}") from e


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _require_mapping(value: Any, what: str, kind: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise argparse.ArgumentTypeError(f"{what} must contain {kind}, got {type(value).__name__}")
    return value


# suffix -> (label, reader, expected top-level kind)
_LOADERS: Dict[str, tuple] = {
    ".toml": ("TOML", _read_toml, "a table"),
    ".json": ("JSON", _read_json, "an object"),
    ".yaml": ("YAML", _read_yaml, "a mapping"),
    ".yml": ("YAML", _read_yaml, "a mapping"),
}


def _pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.mdchangemarks]`` table, or an empty dict if absent.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be parsed or the section is not a table.

    """
    data = _parse_file(pyproject_path, "TOML", _read_toml)
    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    return _require_mapping(section, f"[tool.{PYPROJECT_TOOL_SECTION}] in {pyproject_path}", "a table")


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search ``start_dir`` (default: cwd) and its parents for a config file.

    In each directory the dedicated files are checked first, in
    :data:`~mdchangemarks.constants.CONFIG_FILENAMES` order, then
    ``pyproject.toml``, which only counts when it has a non-empty
    ``[tool.mdchangemarks]`` table. An unparsable ``pyproject.toml`` is
    skipped.
    """
    directory = (start_dir or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        for filename in CONFIG_FILENAMES:
            candidate = candidate_dir / filename
            if candidate.is_file():
                return candidate

        pyproject = candidate_dir / "pyproject.toml"
        if not pyproject.is_file():
            continue
        try:
            has_section = bool(_pyproject_section(pyproject))
        except argparse.ArgumentTypeError:
            continue
        if has_section:
            return pyproject
    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the config file that applies when none was given explicitly.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start the upward search from (default: cwd).

    Returns
    -------
    Path or None
        The nearest config file, a dedicated config file in the home
        directory, or None.

    """
    found = find_config_in_parents(start_dir)
    if found is not None:
        return found
    return next((Path.home() / name for name in CONFIG_FILENAMES if (Path.home() / name).is_file()), None)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load option defaults from a config file.

    Parameters
    ----------
    config_path : Path or str
        A ``.toml``, ``.yaml``/``.yml`` or ``.json`` file, or a
        ``pyproject.toml``.

    Returns
    -------
    dict
        The configuration mapping (empty for an empty YAML file).

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed, of an unsupported
        type, or does not hold a mapping at the top level.

    Examples
    --------
    >>> load_config_file(".mdchangemarks.toml")  # doctest: +SKIP
    {'diff_provider': 'git', 'append_footer': False}

    """
    path = Path(config_path)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {path}")

    if path.name.lower() == "pyproject.toml":
        return _pyproject_section(path)

    suffix = path.suffix.lower()
    if suffix not in _LOADERS:
        raise argparse.ArgumentTypeError(
            f"Unsupported config file format: {suffix or path.name}. Use .toml, .yaml, .yml or .json"
        )
    label, reader, kind = _LOADERS[suffix]
    return _require_mapping(_parse_file(path, label, reader), f"{label} config file {path}", kind)


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load the configuration that applies to this run.

    Parameters
    ----------
    explicit_path : str, optional
        Value of ``--config``.
    env_var_path : str, optional
        Value of ``MDCHANGEMARKS_CONFIG``.

    Returns
    -------
    dict
        The loaded configuration, or an empty dict when there is none.

    Raises
    ------
    argparse.ArgumentTypeError
        If the selected file cannot be loaded.

    """
    chosen = explicit_path or env_var_path or discover_config_file()
    if not chosen:
        return {}
    return load_config_file(chosen)
