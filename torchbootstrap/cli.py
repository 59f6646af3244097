"""Command-line entry point: detect CUDA and register the matching torch source."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, Optional, Sequence

from torchbootstrap.errors import BootstrapError, BootstrapIOError
from torchbootstrap.gpu_detection import detect_with_nvidia_smi, fallback_detect_cuda_version
from torchbootstrap.resolver import load_sources_from_str, resolve_best_source
from torchbootstrap.tomlgen import (
    generate_poetry_source_toml,
    patch_pyproject,
    patch_pyproject_to_output,
)

PROGRAM_NAME = "torchbootstrap"
VERSION = "0.1.19"

DEFAULT_SOURCES_FILE = Path(__file__).with_name("cuda_torch_sources.json")

START_DETECTION = "🔍 Running `nvidia-smi` to detect CUDA version..."
CUDA_NOT_FOUND = "❌ Could not detect CUDA version from `nvidia-smi` output."
LOADING_SOURCE_JSON = "📄 Loading torch source mapping from JSON..."
SOURCE_SELECTED = "✅ Selected best matching torch source:"
SELECTED_SOURCE_NAME = "🔗 Source:"
SELECTED_SOURCE_URL = "🌐 URL:"
PRINTED_TOML = "📦 TOML snippet for Poetry:"
SUC_PATCH_PYPROJECT = "✅ Successfully patched `pyproject.toml` with the new source."

Logger = Callable[[str], None]


def make_logger(log_path: Optional[str]) -> Logger:
    """Return a function that prints a message and, if a path is given, appends it there."""

    def log(msg: str) -> None:
        print(msg)
        if log_path is not None:
            with open(log_path, "a", encoding="utf-8") as handle:
                handle.write(msg + "\n")

    return log


def detect_cuda_version(log: Logger) -> str:
    """Detect the CUDA version, falling back to other probes and finally to "cpu"."""
    try:
        return detect_with_nvidia_smi()
    except BootstrapError as exc:
        log(f"❌ {exc.detail}")
    fallback = fallback_detect_cuda_version()
    if fallback is not None:
        log(f"Using fallback CUDA version: {fallback}")
        return fallback
    log("Falling back to CPU installation (no cpu detected). ")
    return "cpu"


def _format_duration(nanos: int) -> str:
    for unit, scale in (("s", 1_000_000_000), ("ms", 1_000_000), ("µs", 1_000)):
        if nanos >= scale:
            return f"{nanos / scale:.2f}{unit}"
    return f"{nanos:.2f}ns"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Detect the CUDA version and register the matching PyTorch wheel source with Poetry.",
    )
    parser.add_argument("--version", action="version", version=f"{PROGRAM_NAME} {VERSION}")
    parser.add_argument("--dry-run", action="store_true")
    parser.add_argument("--print-toml", action="store_true")
    parser.add_argument(
        "--patch-pyproject",
        metavar="PATCH_PYPROJECT",
        nargs="?",
        const="pyproject.toml",
        default=None,
    )
    parser.add_argument("--output", default=None)
    parser.add_argument("--log", default=None)
    parser.add_argument(
        "--sources",
        default=str(DEFAULT_SOURCES_FILE),
        help="JSON file mapping CUDA versions to torch sources",
    )
    return parser


def _read_sources_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BootstrapIOError(exc) from exc


def _run(args: argparse.Namespace) -> None:
    log = make_logger(args.log)
    start = time.perf_counter_ns()
    log(f"{PROGRAM_NAME} v{VERSION}")
    log(START_DETECTION)

    version = detect_cuda_version(log)
    log(f"✅ Detected CUDA version: {version}")

    log(LOADING_SOURCE_JSON)
    sources = load_sources_from_str(_read_sources_text(args.sources))

    selected = resolve_best_source(version, sources)
    log(SOURCE_SELECTED)
    log(f"{SELECTED_SOURCE_NAME} {selected.source}")
    log(f"{SELECTED_SOURCE_URL} {selected.url}")

    if args.print_toml:
        log(f"{PRINTED_TOML}\n{generate_poetry_source_toml(selected)}")

    if args.patch_pyproject is not None:
        try:
            if args.output is not None:
                patch_pyproject_to_output(args.patch_pyproject, args.output, selected)
            else:
                patch_pyproject(args.patch_pyproject, selected)
        except BootstrapError as exc:
            raise BootstrapError(str(exc)) from exc
        if args.output is not None:
            log(f"{SUC_PATCH_PYPROJECT}: {args.output}")
        else:
            log(SUC_PATCH_PYPROJECT)

    log(f"Completed in {_format_duration(time.perf_counter_ns() - start)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; return the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        _run(args)
    except BootstrapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())