# torchbootstrap

A small command-line tool that finds the CUDA version installed on the
machine and picks the PyTorch wheel index that fits it. It can print a
Poetry snippet for that index, or add it to a project's `pyproject.toml`
as an explicit `[[tool.poetry.source]]`.

## How the CUDA version is found

1. It runs `nvidia-smi` and reads the `CUDA Version: X.Y` text.
2. If that fails, it reads `/usr/local/cuda/version.txt` (the line starting
   with `CUDA Version`) or runs `nvcc --version` and takes the number after
   `release`.
3. If none of these work, the version is taken to be `cpu`.

The source picked is the one with the highest `major.minor` CUDA version
that is not newer than the version found. If none fits, or the version
cannot be read as `major.minor`, the plain PyPI index
(`https://pypi.org/simple`, named `pypi`) is used.

## The source mapping

The mapping from CUDA versions to wheel indexes is read from a JSON file:
a list of objects, each with the string fields `cuda`, `source` and `url`.

```json
[
  {"cuda": "11.8", "source": "pytorch-cu118", "url": "https://download.pytorch.org/whl/cu118"},
  {"cuda": "12.1", "source": "pytorch-cu121", "url": "https://download.pytorch.org/whl/cu121"}
]
```

The package does not ship such a file. By default the command looks for
`cuda_torch_sources.json` next to `torchbootstrap/cli.py`; pass
`--sources PATH` to point it at your own file. If the file cannot be read
or parsed, the command stops with an error.

## Installation

```
pip install torchbootstrap
```

## Usage

Detect the version and show which source would be used:

```
torchbootstrap --sources cuda_torch_sources.json
```

Print the TOML snippet for Poetry:

```
torchbootstrap --sources cuda_torch_sources.json --print-toml
```

Patch `pyproject.toml` in the current directory. Give a path after the
flag to patch another file:

```
torchbootstrap --sources cuda_torch_sources.json --patch-pyproject
torchbootstrap --sources cuda_torch_sources.json --patch-pyproject path/to/pyproject.toml
```

Write the patched file somewhere else and leave the input as it is:

```
torchbootstrap --sources cuda_torch_sources.json --patch-pyproject pyproject.toml --output pyproject.patched.toml
```

Also append every message to a log file:

```
torchbootstrap --sources cuda_torch_sources.json --log bootstrap.log
```

Show the version:

```
torchbootstrap --version
```

If a source with the same name and URL is already under
`tool.poetry.source`, it is not added a second time; a note is printed
instead. The rest of the file keeps its formatting and comments.

On failure the command prints `Error: ...` to standard error and exits
with status 1.

`--dry-run` is accepted but does not change what the command does; use
`--print-toml` without `--patch-pyproject` to see the result without
touching any file.

## Library use

```python
from torchbootstrap.resolver import TorchSource, resolve_best_source
from torchbootstrap.tomlgen import generate_poetry_source_toml, patch_pyproject

sources = [
    TorchSource(cuda="11.8", source="pytorch-cu118", url="https://download.pytorch.org/whl/cu118"),
    TorchSource(cuda="12.1", source="pytorch-cu121", url="https://download.pytorch.org/whl/cu121"),
]
best = resolve_best_source("12.2", sources)
print(generate_poetry_source_toml(best))
patch_pyproject("pyproject.toml", best)
```

Other pieces:

- `torchbootstrap.resolver`: `parse_version`, `load_sources_from_str`.
- `torchbootstrap.gpu_detection`: `detect_with_nvidia_smi`,
  `fallback_detect_cuda_version`, and the text parsers
  `parse_nvidia_smi_output`, `parse_version_txt`, `parse_nvcc_output`.
- `torchbootstrap.tomlgen`: `insert_source_array` for a document already
  loaded with `tomlkit`, and `patch_pyproject_to_output`.
- `torchbootstrap.errors`: `BootstrapError` and its subclasses
  `MissingPatchPathError`, `BootstrapIOError`, `TomlParseError`,
  `InvalidPatchError`.