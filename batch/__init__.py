"""
Batch preprocessing of images listed in a pathfile.

Each image is loaded, run through the preprocessing pipeline and written to
the output directory as <stem>_wb<ext>; the written paths go to a manifest.
"""

from .manifest import (
    add_suffix,
    output_path_for,
    default_manifest_path,
    write_manifest,
    read_manifest,
)
from .runner import BatchResult, run_batch

__all__ = [
    "add_suffix",
    "output_path_for",
    "default_manifest_path",
    "write_manifest",
    "read_manifest",
    "BatchResult",
    "run_batch",
]
