"""Choosing the torch wheel source that matches a CUDA version."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from torchbootstrap.errors import BootstrapError

_U32_MAX = 2**32 - 1
_NUMBER = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class TorchSource:
    """A package index serving torch wheels for one CUDA version."""

    cuda: str
    source: str
    url: str


_CPU_FALLBACK = TorchSource(cuda="cpu", source="pypi", url="https://pypi.org/simple")


def _parse_u32(text: str) -> Optional[int]:
    if not _NUMBER.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def parse_version(v: str) -> Optional[Tuple[int, int]]:
    """Parse "major.minor" into a tuple, or return None."""
    parts = v.strip().split(".")
    if len(parts) != 2:
        return None
    major = _parse_u32(parts[0])
    minor = _parse_u32(parts[1])
    if major is None or minor is None:
        return None
    return (major, minor)


def load_sources_from_str(json_str: str) -> list[TorchSource]:
    """Load the list of torch sources from a JSON document."""
    prefix = "Failed to parse embedded cuda_torch_sources.json: "
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise BootstrapError(prefix + str(exc)) from exc
    if not isinstance(data, list):
        raise BootstrapError(prefix + "expected a sequence")
    sources = []
    for entry in data:
        if not isinstance(entry, dict):
            raise BootstrapError(prefix + "expected an object")
        fields = {}
        for name in ("cuda", "source", "url"):
            if name not in entry:
                raise BootstrapError(prefix + f"missing field `{name}`")
            if not isinstance(entry[name], str):
                raise BootstrapError(prefix + f"field `{name}` is not a string")
            fields[name] = entry[name]
        sources.append(TorchSource(**fields))
    return sources


def resolve_best_source(detected_version: str, sources: Iterable[TorchSource]) -> TorchSource:
    """Return the source with the highest CUDA version not above the detected one.

    Falls back to PyPI when nothing matches or the version is unparseable.
    """
    target = parse_version(detected_version)
    if target is None:
        return _CPU_FALLBACK
    best: Optional[TorchSource] = None
    best_version: Optional[Tuple[int, int]] = None
    for src in sources:
        version = parse_version(src.cuda)
        if version is None or version > target:
            continue
        if best_version is not None and best_version >= version:
            continue
        best, best_version = src, version
    return best if best is not None else _CPU_FALLBACK