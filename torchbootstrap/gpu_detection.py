"""Detecting the installed CUDA version."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Optional

from torchbootstrap.errors import BootstrapError

FAILED_NVIDIA_SMI_RUN = (
    "❌ Unable to execute `nvidia-smi`. Please ensure that NVIDIA drivers are installed "
    "and that `nvidia-smi` is available in your system PATH."
)

CUDA_VERSION_FILE = Path("/usr/local/cuda/version.txt")

_SMI_VERSION = re.compile(r"CUDA Version: (\d+\.\d+)")


def parse_nvidia_smi_output(text: str) -> str:
    """Extract the CUDA version from `nvidia-smi` output."""
    match = _SMI_VERSION.search(text)
    if match is None:
        raise BootstrapError("Failed to find CUDA version in nvidia-smi output")
    return match.group(1)


def _find_version_line(text: str) -> Optional[str]:
    return next((line for line in text.splitlines() if line.startswith("CUDA Version")), None)


def parse_version_txt(text: str) -> Optional[str]:
    """Extract the version from the contents of CUDA's version.txt."""
    line = _find_version_line(text)
    if line is None:
        return None
    words = line.split()
    return words[2] if len(words) > 2 else None


def parse_nvcc_output(text: str) -> Optional[str]:
    """Extract the release number from `nvcc --version` output."""
    for line in text.splitlines():
        if "release" in line:
            part = line.split("release")[1]
            return part.strip().split(",")[0].strip()
    return None


def detect_with_nvidia_smi() -> str:
    """Run `nvidia-smi` and return the CUDA version it reports."""
    try:
        result = subprocess.run(["nvidia-smi"], capture_output=True, check=False)
    except OSError as exc:
        raise BootstrapError(FAILED_NVIDIA_SMI_RUN) from exc
    try:
        stdout = result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BootstrapError("Failed to parse nvidia-smi output as UTF-8") from exc
    return parse_nvidia_smi_output(stdout)


def fallback_detect_cuda_version() -> Optional[str]:
    """Read the version from version.txt or `nvcc --version`; None if neither works."""
    if CUDA_VERSION_FILE.exists():
        try:
            content = CUDA_VERSION_FILE.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            content = None
        if content is not None and _find_version_line(content) is not None:
            return parse_version_txt(content)

    try:
        result = subprocess.run(["nvcc", "--version"], capture_output=True, check=False)
    except OSError:
        return None
    return parse_nvcc_output(result.stdout.decode("utf-8", errors="replace"))