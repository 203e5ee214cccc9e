"""Memo: personal notes kept as YAML front matter text files."""

__version__ = "0.1.0"
