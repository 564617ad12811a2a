#!/usr/bin/env python3
from __future__ import annotations

# Standard Library
from dataclasses import dataclass, field
from pathlib import Path
import json

# PIP3 modules
import yaml

# local repo modules
from .resolver import is_root

#============================================

CONFIG_FILENAMES = (
	".lazy-file-walker.yaml",
	".lazy-file-walker.yml",
	".lazy-file-walker.json",
)

#============================================


def _default_roots() -> list[Path]:
	return []


#============================================


@dataclass(slots=True)
class AppConfig:
	"""
	Runtime configuration settings.

	Attributes:
		roots: Files and directories to walk, in order.
		follow_symlinks: Dereference symbolic links.
		skip_unreadable_dirs: Skip directories that cannot be listed.
		include_extensions: Optional filter set.
		max_files: Optional limit on emitted paths.
		print0: Separate printed paths with NUL.
		summary: Print a count summary after the listing.
		verbose: Verbose logging.
		config_path: Optional user config path.
	"""
	roots: list[Path] = field(default_factory=_default_roots)
	follow_symlinks: bool = True
	skip_unreadable_dirs: bool = False
	include_extensions: set[str] | None = None
	max_files: int | None = None
	print0: bool = False
	summary: bool = False
	verbose: bool = False
	config_path: Path | None = None

	#============================================
	def normalized_roots(self) -> list[Path]:
		"""
		Expand user roots without following links.

		Returns:
			List of Path objects in the original order.
		"""
		paths: list[Path] = [Path(root).expanduser() for root in self.roots]
		return paths

	#============================================
	def apply_user_config(self, user_cfg: dict) -> None:
		"""
		Overlay values loaded from a config file.

		Args:
			user_cfg: Mapping returned by load_user_config.
		"""
		if "follow_symlinks" in user_cfg:
			self.follow_symlinks = bool(user_cfg["follow_symlinks"])
		if "skip_unreadable_dirs" in user_cfg:
			self.skip_unreadable_dirs = bool(user_cfg["skip_unreadable_dirs"])
		if user_cfg.get("include_extensions"):
			exts = user_cfg["include_extensions"]
			if isinstance(exts, str):
				exts = [exts]
			self.include_extensions = parse_exts(list(exts))
		if user_cfg.get("max_files"):
			self.max_files = int(user_cfg["max_files"])


#============================================
def parse_exts(exts: list[str] | None) -> set[str] | None:
	"""
	Normalize extension filters.

	Args:
		exts: Extensions from CLI.

	Returns:
		Set of lowercase extensions or None.
	"""
	if not exts:
		return None
	cleaned: set[str] = set()
	for ext in exts:
		if ext:
			cleaned.add(ext.lower().lstrip("."))
	if not cleaned:
		return None
	return cleaned


#============================================


def load_user_config(config_path: Path | None) -> dict:
	"""
	Load user configuration from yaml or json.

	Args:
		config_path: Path to config file.

	Returns:
		Dictionary of loaded values or empty dict.

	Raises:
		ValueError: When the file does not hold a mapping.
	"""
	if not config_path:
		return {}
	if not config_path.exists():
		return {}
	with config_path.open("r", encoding="utf-8") as handle:
		if config_path.suffix.lower() in {".yml", ".yaml"}:
			loaded = yaml.safe_load(handle)
		else:
			loaded = json.load(handle)
	if loaded is None:
		return {}
	if not isinstance(loaded, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")
	return loaded


#============================================


def find_config_file(start: Path) -> Path | None:
	"""
	Search start and its parents for a config file.

	Args:
		start: Directory (or file) where the search begins.

	Returns:
		Path of the nearest config file, or None.
	"""
	current = Path(start).expanduser().absolute()
	if not current.is_dir():
		current = current.parent
	while True:
		for name in CONFIG_FILENAMES:
			candidate = current / name
			if candidate.is_file():
				return candidate
		if is_root(current):
			return None
		current = current.parent
