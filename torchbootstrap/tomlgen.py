"""Generating and patching Poetry source entries in pyproject.toml."""

from __future__ import annotations

from collections.abc import MutableMapping
from os import PathLike
from pathlib import Path
from typing import Union

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import AoT, InlineTable

from torchbootstrap.errors import BootstrapError, BootstrapIOError, TomlParseError
from torchbootstrap.resolver import TorchSource

PathArg = Union[str, "PathLike[str]"]


def generate_poetry_source_toml(source: TorchSource) -> str:
    """Return a `[[tool.poetry.source]]` snippet for the source."""
    return (
        "\n[[tool.poetry.source]]\n"
        f'name = "{source.source}"\n'
        f'url = "{source.url}"\n'
        'priority = "explicit"\n'
    )


def _sub_table(parent: MutableMapping, key: str, name: str) -> MutableMapping:
    if key not in parent:
        parent[key] = tomlkit.table(is_super_table=True)
    table = parent[key]
    if not isinstance(table, MutableMapping) or isinstance(table, InlineTable):
        raise BootstrapError(f"Failed to get mutable {name} table")
    return table


def insert_source_array(doc: MutableMapping, source: TorchSource) -> bool:
    """Append the source to `tool.poetry.source` unless already present.

    Returns True when an entry was added.
    """
    tool = _sub_table(doc, "tool", "tool")
    poetry = _sub_table(tool, "poetry", "poetry")
    if "source" not in poetry:
        poetry["source"] = tomlkit.aot()
    entries = poetry["source"]
    if not isinstance(entries, AoT):
        raise BootstrapError("Failed to get mutable ArrayOfTables")

    if any(
        tbl.get("name") == source.source and tbl.get("url") == source.url for tbl in entries
    ):
        print(
            f"Source '{source.source}' with URL '{source.url}' already exists in the pyproject.toml."
        )
        return False

    table = tomlkit.table()
    table["name"] = source.source
    table["url"] = source.url
    table["priority"] = "explicit"
    entries.append(table)
    return True


def _patch(input_path: PathArg, output_path: PathArg, source: TorchSource) -> None:
    try:
        content = Path(input_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BootstrapIOError(exc) from exc
    try:
        doc = tomlkit.parse(content)
    except TOMLKitError as exc:
        raise TomlParseError(exc) from exc
    insert_source_array(doc, source)
    try:
        Path(output_path).write_text(tomlkit.dumps(doc), encoding="utf-8")
    except OSError as exc:
        raise BootstrapIOError(exc) from exc


def patch_pyproject(pyproject_path: PathArg, source: TorchSource) -> None:
    """Add the source to a pyproject.toml file in place."""
    _patch(pyproject_path, pyproject_path, source)


def patch_pyproject_to_output(
    input_path: PathArg, output_path: PathArg, source: TorchSource
) -> None:
    """Add the source to a pyproject.toml, writing the result elsewhere."""
    _patch(input_path, output_path, source)