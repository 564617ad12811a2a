#!/usr/bin/env python3
"""
Command line interface for lazy-file-walker.
"""

# Standard Library
import argparse
import logging
from pathlib import Path
from collections import Counter
import sys

# local repo modules
from .chain import DirectoryAccessError
from .config import AppConfig, find_config_file, load_user_config, parse_exts
from .scanner import iter_files

#============================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse CLI arguments.
	"""
	parser = argparse.ArgumentParser(
		description="List regular files under the given files and directories."
	)
	parser.add_argument(
		"-p",
		"--paths",
		dest="paths",
		nargs="+",
		required=True,
		help="Files and directories to walk (required).",
	)
	link_group = parser.add_mutually_exclusive_group()
	link_group.add_argument(
		"-L",
		"--follow-symlinks",
		dest="follow_symlinks",
		action="store_const",
		const=True,
		help="Follow symbolic links (default).",
	)
	link_group.add_argument(
		"-P",
		"--no-follow-symlinks",
		dest="follow_symlinks",
		action="store_const",
		const=False,
		help="Skip symbolic links.",
	)
	parser.add_argument(
		"-e",
		"--ext",
		dest="extensions",
		action="append",
		help="Include only files with these extensions (repeatable).",
	)
	parser.add_argument(
		"-m",
		"--max-files",
		dest="max_files",
		type=int,
		help="Stop after this many files.",
	)
	parser.add_argument(
		"-c",
		"--config",
		dest="config_path",
		help="Optional JSON or YAML config file.",
	)
	parser.add_argument(
		"--skip-unreadable",
		dest="skip_unreadable",
		action="store_true",
		help="Skip directories that cannot be listed instead of stopping.",
	)
	parser.add_argument(
		"-0",
		"--print0",
		dest="print0",
		action="store_true",
		help="Separate paths with NUL instead of newline.",
	)
	parser.add_argument(
		"-s",
		"--summary",
		dest="summary",
		action="store_true",
		help="Print a file count summary to stderr.",
	)
	parser.add_argument(
		"-v",
		"--verbose",
		dest="verbose",
		action="store_true",
		help="Verbose logging.",
	)
	parser.set_defaults(follow_symlinks=None)
	return parser.parse_args(argv)


#============================================


def build_config(args: argparse.Namespace) -> AppConfig:
	"""
	Build runtime config from args and file.
	"""
	config = AppConfig()
	config.roots = [Path(p).expanduser() for p in args.paths]
	if args.config_path:
		config.config_path = Path(args.config_path).expanduser()
	else:
		config.config_path = find_config_file(Path.cwd())
	if config.config_path:
		user_cfg = load_user_config(config.config_path)
		config.apply_user_config(user_cfg)
	if args.follow_symlinks is not None:
		config.follow_symlinks = args.follow_symlinks
	if args.skip_unreadable:
		config.skip_unreadable_dirs = True
	exts = parse_exts(args.extensions) if args.extensions else None
	if exts:
		config.include_extensions = exts
	if args.max_files:
		config.max_files = args.max_files
	config.print0 = args.print0
	config.summary = args.summary
	config.verbose = args.verbose
	return config


#============================================


def _color(text: str, code: str) -> str:
	if sys.stderr.isatty():
		return f"\033[{code}m{text}\033[0m"
	return text


#============================================


def print_summary(files: list[Path]) -> None:
	"""
	Print file count and the most common extensions to stderr.

	Args:
		files: Paths that were listed.
	"""
	print(f"{_color('[SCAN]', '34')} Found {len(files)} files.", file=sys.stderr)
	if not files:
		return
	ext_counter = Counter(p.suffix.lower().lstrip(".") for p in files)
	top_exts = ext_counter.most_common(8)
	summary = ", ".join(f"{ext}:{count}" for ext, count in top_exts if ext)
	if summary:
		print(f"{_color('[SCAN]', '34')} Top extensions: {summary}", file=sys.stderr)


#============================================


def main(argv: list[str] | None = None) -> None:
	"""
	Entry point for the CLI.
	"""
	args = parse_args(argv)
	if args.verbose:
		logging.basicConfig(level=logging.INFO)
	else:
		logging.basicConfig(level=logging.WARNING)
	config = build_config(args)
	if config.config_path:
		logging.info(f"Using config file {config.config_path}")
	separator = "\0" if config.print0 else "\n"
	listed: list[Path] = []
	try:
		for path in iter_files(config):
			sys.stdout.write(f"{path}{separator}")
			if config.summary:
				listed.append(path)
	except DirectoryAccessError as exc:
		sys.stdout.flush()
		logging.error(str(exc))
		sys.exit(1)
	sys.stdout.flush()
	if config.summary:
		print_summary(listed)


#============================================


if __name__ == "__main__":
	main()
