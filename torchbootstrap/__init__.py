"""Detect CUDA and add the matching PyTorch wheel source to a Poetry project."""

__version__ = "0.1.19"