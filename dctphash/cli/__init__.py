"""
CLI package for dctphash.

Provides the command-line interface for fingerprinting and comparing
images.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .reporting import print_comparison, print_hash_results, print_config


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Argument list (default: sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    orchestrator = CLIOrchestrator()
    return orchestrator.run(argv)


__all__ = [
    # Main entry point
    'main',
    # Core classes
    'CLIOrchestrator',
    # Utilities
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_comparison',
    'print_hash_results',
    'print_config',
]
