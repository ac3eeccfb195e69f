"""Batch preprocessing: load, transform and write every listed image."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from tqdm import tqdm

from images import Image, ImageDescriptor, ImageLoadError
from preprocessing import PreprocessConfig, build_pipeline

from .manifest import default_manifest_path, output_path_for, write_manifest

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcome of a batch run.

    Attributes:
        output_paths: Paths written, in processing order. Exactly what the
                      manifest lists.
        manifest_path: Where the manifest was written.
        total: Number of descriptors in the batch.
        failed_path: Path that stopped the batch (output path for write
                     failures, source path for read failures), or None.
    """

    output_paths: list[str] = field(default_factory=list)
    manifest_path: Path | None = None
    total: int = 0
    failed_path: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed_path is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def run_batch(
    descs: Sequence[ImageDescriptor],
    output_dir: str | Path,
    manifest_path: str | Path | None = None,
    config: PreprocessConfig | None = None,
    show_progress: bool = True,
) -> BatchResult:
    """Preprocess descs into output_dir and write the manifest.

    The batch is fail-fast: the first image that cannot be read or written
    stops the run and later images are not touched. The manifest is written
    in every case and lists only the images that reached disk.

    Raises:
        ValueError: If config is invalid.
        OSError: If the output directory or the manifest cannot be created.
    """
    if config is None:
        config = PreprocessConfig()
    config = config.normalized()
    config.validate()

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if manifest_path is None:
        manifest_path = default_manifest_path(output_dir)

    pipeline = build_pipeline(config)
    logger.debug("Pipeline steps: %s", ", ".join(pipeline.names) or "none")

    result = BatchResult(total=len(descs))
    try:
        for desc in tqdm(descs, desc="Processing", unit="img", disable=not show_progress):
            try:
                img = Image.load(desc)
            except ImageLoadError as exc:
                logger.error("%s", exc)
                result.failed_path = desc.filename
                break

            img.pixels = pipeline.apply(img.pixels)
            output = output_path_for(desc.filename, output_dir)
            if not img.write(output):
                logger.error("Fail to write image: %s", output)
                result.failed_path = str(output)
                break

            logger.debug("Wrote %s", output)
            result.output_paths.append(str(output))
    finally:
        result.manifest_path = write_manifest(manifest_path, result.output_paths)

    logger.info(
        "Processed %s/%s images. Saved new image paths to: %s",
        len(result.output_paths),
        result.total,
        result.manifest_path,
    )
    return result
