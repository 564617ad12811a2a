#!/usr/bin/env python3
"""
Repo-root runner for lazy_file_walker.

Examples:
	python run_file_walker.py --paths Sources Tests -e swift
	python run_file_walker.py --paths ~/src --no-follow-symlinks --summary
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
	"""
	Run the CLI entrypoint with repo-root import behavior.
	"""
	repo_root = Path(__file__).resolve().parent
	if str(repo_root) not in sys.path:
		sys.path.insert(0, str(repo_root))

	from lazy_file_walker.cli import main as cli_main

	cli_main()


if __name__ == "__main__":
	main()
