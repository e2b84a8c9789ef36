"""
CLI workflow orchestration for dctphash.

Provides the CLIOrchestrator class that coordinates each command from
argument parsing through output.
"""

from __future__ import annotations

import logging
import sys

from ..errors import PhashError
from ..hashing import (
    compute_fingerprint,
    fingerprint_files_parallel,
    hamming_distance,
    load_image,
    ImageLoadError,
)
from ..user_config import get_user_config
from ..utils.validators import validate_file_accessible, validate_threshold, validate_workers
from .arg_parser import parse_arguments
from .reporting import print_comparison, print_config, print_hash_results


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Parses arguments, resolves the transform configuration from the user
    config plus command-line overrides, and dispatches to one command.
    """

    def __init__(self):
        """Initialize the orchestrator."""
        self.logger = None
        self.args = None
        self.user_config = get_user_config()

    def run(self, argv=None) -> int:
        """
        Execute the CLI workflow.

        Args:
            argv: Argument list (default: sys.argv)

        Returns:
            Exit code (0 for success, 1 for error)
        """
        self.args = parse_arguments(argv)
        self.logger = setup_logging(self.args.verbose)

        handlers = {
            'compare': self._run_compare,
            'hash': self._run_hash,
            'config': self._run_config,
        }

        try:
            return handlers[self.args.command]()
        except (PhashError, ImageLoadError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print("\nInterrupted.", file=sys.stderr)
            return 1

    def _transform_config(self):
        return self.user_config.transform_config(
            transform_size=self.args.transform_size,
            fingerprint_size=self.args.fingerprint_size,
            colorspace=self.args.colorspace,
            transform_method=self.args.transform_method,
        )

    def _run_compare(self) -> int:
        """Fingerprint two images and report their distance."""
        threshold = self.args.threshold
        if threshold is None:
            threshold = self.user_config.similarity_threshold
        is_valid, error = validate_threshold(threshold)
        if not is_valid:
            print(f"Error: {error}", file=sys.stderr)
            return 1
        threshold = int(threshold)

        for path in (self.args.image_a, self.args.image_b):
            is_valid, error = validate_file_accessible(str(path))
            if not is_valid:
                print(f"Error: {path}: {error}", file=sys.stderr)
                return 1

        config = self._transform_config()
        self.logger.debug(f"Using transform config {config.to_dict()}")

        hashes = []
        for path in (self.args.image_a, self.args.image_b):
            image = load_image(path)
            try:
                hashes.append(compute_fingerprint(image, config))
            finally:
                image.release()

        distance = hamming_distance(hashes[0], hashes[1])
        print_comparison(
            str(self.args.image_a),
            str(self.args.image_b),
            hashes[0],
            hashes[1],
            distance,
            threshold,
        )
        return 0

    def _run_hash(self) -> int:
        """Fingerprint every listed image."""
        config = self._transform_config()
        workers = self.args.workers
        if workers is None:
            workers = self.user_config.default_workers
        is_valid, error = validate_workers(workers)
        if not is_valid:
            print(f"Error: {error}", file=sys.stderr)
            return 1
        workers = int(workers)

        paths = [str(p) for p in self.args.images]
        self.logger.debug(f"Fingerprinting {len(paths)} files with {workers} workers")
        results = fingerprint_files_parallel(
            paths,
            config,
            max_workers=workers,
            show_progress=not self.args.no_progress and len(paths) > 1,
        )
        print_hash_results(results)
        return 0 if all(r.ok for r in results) else 1

    def _run_config(self) -> int:
        """Show the effective configuration or write the example file."""
        config = self.user_config
        if self.args.init:
            if config.create_example_config():
                print("Created example configuration file at:")
                print(f"  {config.config_file_path}")
                return 0
            print("Failed to create configuration file.", file=sys.stderr)
            return 1

        try:
            transform_text = str(config.transform_config().to_dict())
        except PhashError as e:
            transform_text = f"invalid ({e})"
        print_config(config, transform_text)
        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
