"""Exceptions raised while bootstrapping a torch source."""

from __future__ import annotations


class BootstrapError(Exception):
    """Base error; its text is a short user-facing message."""

    template = "❌ Error: {}"

    def __init__(self, detail: object = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.template.format(self.detail)


class MissingPatchPathError(BootstrapError):
    """No path was given for the pyproject patch option."""

    template = "❌ No path was supplied for `--patch-pyproject`"


class BootstrapIOError(BootstrapError):
    """Reading or writing a file failed."""

    template = "❌ I/O error: {}"


class TomlParseError(BootstrapError):
    """A TOML document could not be parsed."""

    template = "❌ TOML parsing error: {}"


class InvalidPatchError(BootstrapError):
    """A patch operation could not be applied."""

    template = "❌ Invalid patch operation: {}"