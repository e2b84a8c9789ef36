"""
Parallel processing module for the hashing package.

Fingerprints many image files across a thread pool with progress tracking
and callback support. Every worker runs the same pure pipeline; the only
shared state is the lock-protected cosine table cache.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Callable, Any

from ..config import DEFAULT_WORKERS
from ..errors import PhashError
from ..models import FingerprintResult, TransformConfig
from ..utils.validators import validate_config
from .dependencies import HAS_TQDM, _tqdm_class
from .fingerprint import compute_fingerprint
from .loader import ImageLoadError, load_image
from .transform import CosineTableCache

logger = logging.getLogger(__name__)


def fingerprint_file(
    filepath: str | Path,
    config: TransformConfig,
    cache: Optional[CosineTableCache] = None,
) -> FingerprintResult:
    """
    Load one file and fingerprint it.

    Load and pipeline errors are recorded on the result instead of raised.

    Args:
        filepath: Path to the image file
        config: Validated transform configuration
        cache: Optional caller-owned cosine table cache

    Returns:
        FingerprintResult for the file
    """
    filepath = str(filepath)
    result = FingerprintResult(path=filepath)

    try:
        image = load_image(filepath)
    except (ImageLoadError, PhashError) as e:
        logger.debug(f"Image load failed for {filepath}: {e}")
        result.error = str(e)
        return result

    result.width = image.width
    result.height = image.height
    try:
        result.fingerprint = compute_fingerprint(image, config, cache=cache)
    except PhashError as e:
        logger.debug(f"Fingerprint failed for {filepath}: {e}")
        result.error = str(e)
    finally:
        image.release()

    return result


def fingerprint_files_parallel(
    filepaths: list[str],
    config: TransformConfig,
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    cache: Optional[CosineTableCache] = None,
) -> list[FingerprintResult]:
    """
    Fingerprint multiple image files in parallel.

    Args:
        filepaths: List of image paths
        config: Transform configuration, validated once up front
        max_workers: Number of parallel workers
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar
        cache: Optional caller-owned cosine table cache

    Returns:
        One FingerprintResult per path, in input order

    Raises:
        PhashError: If the configuration is invalid (nothing is processed)
    """
    validate_config(config)
    if not filepaths:
        return []

    results: list[Optional[FingerprintResult]] = [None] * len(filepaths)

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(
            total=len(filepaths),
            desc="Fingerprinting",
            unit="img",
            ncols=80,
        )

    # Batch progress callbacks to reduce overhead (every 100 files or 1 second)
    last_callback_time = time.time()
    callback_batch_size = 100
    callback_interval = 1.0  # seconds

    started = time.time()
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(fingerprint_file, path, config, cache): index
            for index, path in enumerate(filepaths)
        }

        for i, future in enumerate(as_completed(futures)):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                logger.debug(f"Worker failed for {filepaths[index]}: {e}")
                results[index] = FingerprintResult(path=str(filepaths[index]), error=str(e))

            if pbar is not None:
                pbar.update(1)

            if progress_callback:
                current_time = time.time()
                should_callback = (
                    (i + 1) % callback_batch_size == 0 or
                    current_time - last_callback_time >= callback_interval or
                    i == len(filepaths) - 1  # Always callback on last item
                )
                if should_callback:
                    progress_callback(i + 1, len(filepaths))
                    last_callback_time = current_time

    if pbar is not None:
        pbar.close()

    failed = sum(1 for r in results if r is not None and not r.ok)
    logger.debug(
        f"Fingerprinted {len(filepaths) - failed}/{len(filepaths)} files "
        f"in {time.time() - started:.2f}s ({failed} failed)"
    )
    return [r for r in results if r is not None]


__all__ = ['fingerprint_file', 'fingerprint_files_parallel']
