#!/usr/bin/env python3
"""
File iteration entry points.
"""

from __future__ import annotations

# Standard Library
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

# local repo modules
from .chain import NestedIterator, PathWalker, TraversalState
from .config import AppConfig
from .context import IteratorContext

logger = logging.getLogger(__name__)

#============================================


class FileIterator:
	"""
	Iterate over regular files under a list of files and directories.

	Directories are walked depth-first and hidden entries inside them are
	skipped. Top-level paths keep the caller's order. The iterator is single
	pass: once exhausted or closed it stays empty.
	"""

	#============================================
	def __init__(
		self,
		paths: Iterable[str | os.PathLike],
		follow_symlinks: bool = True,
		context: IteratorContext | None = None,
	) -> None:
		"""
		Args:
			paths: Files and directories to walk.
			follow_symlinks: Follow symbolic links. Ignored when context is given.
			context: Full set of walk settings.
		"""
		if context is None:
			context = IteratorContext(follow_symlinks=follow_symlinks)
		self.context = context
		self.state = TraversalState()
		roots = [Path(p) for p in paths]
		self._nested = NestedIterator(PathWalker(roots, context, self.state))

	#============================================
	def __iter__(self) -> FileIterator:
		return self

	#============================================
	def __next__(self) -> Path:
		return next(self._nested)

	#============================================
	def close(self) -> None:
		"""
		Stop the walk and release open directory handles.
		"""
		self._nested.close()

	#============================================
	def __enter__(self) -> FileIterator:
		return self

	#============================================
	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()


#============================================


def iter_files(config: AppConfig) -> Iterator[Path]:
	"""
	Iterate over files according to config.

	Args:
		config: Application configuration.

	Yields:
		File paths that pass the extension filter, up to max_files.
	"""
	roots = config.normalized_roots()
	for root in roots:
		if not os.path.lexists(root):
			logger.warning(f"Path does not exist: {root}")
	context = IteratorContext(
		follow_symlinks=config.follow_symlinks,
		skip_unreadable_dirs=config.skip_unreadable_dirs,
	)
	count = 0
	with FileIterator(roots, context=context) as files:
		for path in files:
			if config.include_extensions:
				ext = path.suffix.lower().lstrip(".")
				if ext not in config.include_extensions:
					continue
			count += 1
			yield path
			if config.max_files and count >= config.max_files:
				return
