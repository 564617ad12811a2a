#!/usr/bin/env python3
"""
Classify paths and follow symbolic links to their final target.
"""

from __future__ import annotations

# Standard Library
import enum
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

# local repo modules
from .context import DEFAULT_MAX_SYMLINK_HOPS

logger = logging.getLogger(__name__)

#============================================


class FileKind(enum.Enum):
	"""
	File-system type of a path as seen by lstat.
	"""
	REGULAR = "regular"
	DIRECTORY = "directory"
	SYMLINK = "symlink"
	OTHER = "other"


#============================================


@dataclass(frozen=True, slots=True)
class ResolvedPath:
	"""
	Outcome of resolving one candidate path.

	Attributes:
		path: Final path after following links.
		kind: Type of the final path.
		identity: (st_dev, st_ino) of the final path.
	"""
	path: Path
	kind: FileKind
	identity: tuple[int, int]


#============================================
def kind_from_mode(mode: int) -> FileKind:
	"""
	Map an st_mode value to a FileKind.

	Args:
		mode: Mode bits from os.lstat.

	Returns:
		Matching FileKind.
	"""
	if stat.S_ISLNK(mode):
		return FileKind.SYMLINK
	if stat.S_ISDIR(mode):
		return FileKind.DIRECTORY
	if stat.S_ISREG(mode):
		return FileKind.REGULAR
	return FileKind.OTHER


#============================================
def link_target(link: Path) -> Path:
	"""
	Read a symbolic link and anchor relative targets at the link's directory.

	The directory part of the target is resolved with os.path.realpath, so
	".." steps follow the real location of the link, not its spelling. The
	last component is kept as-is and may itself be another link.

	Args:
		link: Path of the symbolic link.

	Returns:
		Target path with a real parent directory.

	Raises:
		OSError: When the link cannot be read.
	"""
	target = os.readlink(link)
	joined = os.path.join(os.path.dirname(link), target)
	head, tail = os.path.split(joined)
	if tail in ("", ".", ".."):
		return Path(os.path.realpath(joined))
	return Path(os.path.realpath(head or os.curdir)) / tail


#============================================
def resolve_path(
	path: Path,
	follow_symlinks: bool = True,
	max_hops: int = DEFAULT_MAX_SYMLINK_HOPS,
) -> ResolvedPath | None:
	"""
	Resolve a candidate path to its final type.

	Args:
		path: Candidate path.
		follow_symlinks: Follow links to their targets when True.
		max_hops: Maximum links followed before giving up.

	Returns:
		ResolvedPath, or None when the path (or a link target) is missing,
		unreadable, or part of a symlink loop.
	"""
	current = Path(path)
	seen: set[Path] = set()
	while True:
		try:
			info = os.lstat(current)
		except OSError as exc:
			logger.debug(f"Skipping {current}: {exc}")
			return None
		kind = kind_from_mode(info.st_mode)
		if kind is not FileKind.SYMLINK or not follow_symlinks:
			return ResolvedPath(current, kind, (info.st_dev, info.st_ino))
		if current in seen or len(seen) >= max_hops:
			logger.debug(f"Skipping {path}: too many levels of symbolic links")
			return None
		seen.add(current)
		try:
			current = link_target(current)
		except OSError as exc:
			logger.debug(f"Skipping {current}: {exc}")
			return None


#============================================
def is_root(path: Path) -> bool:
	"""
	Tell whether a path is a file-system root.

	Args:
		path: Path to test.

	Returns:
		True for "/", a drive root, or the empty path.
	"""
	# Path("") and Path(".") are their own parent, like "/"
	return Path(path).parent == Path(path)
