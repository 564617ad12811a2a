#!/usr/bin/env python3
"""
Chained iterators that walk a directory tree depth-first without recursion.

Each PathWalker covers one level of the tree. When it meets a directory it
parks a walker for that subtree and reports that it has nothing more for now;
NestedIterator then switches to the subtree walker, and back to the parent
once the subtree is drained.
"""

from __future__ import annotations

# Standard Library
import logging
import os
from pathlib import Path
from typing import Iterable

# local repo modules
from .context import IteratorContext
from .resolver import FileKind, ResolvedPath, resolve_path

logger = logging.getLogger(__name__)

#============================================


class DirectoryAccessError(RuntimeError):
	"""
	A directory could not be opened or listed.
	"""

	#============================================
	def __init__(self, path: Path, error: OSError) -> None:
		reason = error.strerror or str(error)
		super().__init__(f"Cannot list directory {path}: {reason}")
		self.path = path
		self.error = error


#============================================


class DirectoryEntries:
	"""
	Immediate, non-hidden children of one directory.

	The scandir handle stays open while entries remain and is released on
	exhaustion, close(), or garbage collection.
	"""

	#============================================
	def __init__(self, directory: Path) -> None:
		self._handle = None
		self.directory = Path(directory)
		try:
			self._handle = os.scandir(self.directory)
		except OSError as exc:
			raise DirectoryAccessError(self.directory, exc) from exc

	#============================================
	def __iter__(self) -> DirectoryEntries:
		return self

	#============================================
	def __next__(self) -> Path:
		if self._handle is None:
			raise StopIteration
		try:
			for entry in self._handle:
				if entry.name.startswith("."):
					continue
				return self.directory / entry.name
		except OSError as exc:
			self.close()
			raise DirectoryAccessError(self.directory, exc) from exc
		self.close()
		raise StopIteration

	#============================================
	def close(self) -> None:
		"""
		Release the directory handle.
		"""
		handle = self._handle
		self._handle = None
		if handle is not None:
			handle.close()

	#============================================
	@property
	def closed(self) -> bool:
		return self._handle is None

	#============================================
	def __enter__(self) -> DirectoryEntries:
		return self

	#============================================
	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

	#============================================
	def __del__(self) -> None:
		self.close()


#============================================


class TraversalState:
	"""
	Bookkeeping for one traversal: directories entered and files emitted.

	Both sets hold (st_dev, st_ino) pairs, so one file reached under two
	spellings, or through a link, counts once. Hard links count once too.
	"""

	#============================================
	def __init__(self) -> None:
		self.visited_dirs: set[tuple[int, int]] = set()
		self.emitted: set[tuple[int, int]] = set()

	#============================================
	def enter_directory(self, resolved: ResolvedPath) -> bool:
		"""
		Record a directory as entered.

		Args:
			resolved: Resolved directory.

		Returns:
			False when the directory was already entered.
		"""
		if resolved.identity in self.visited_dirs:
			return False
		self.visited_dirs.add(resolved.identity)
		return True

	#============================================
	def emit(self, resolved: ResolvedPath) -> bool:
		"""
		Record a file as emitted.

		Args:
			resolved: Resolved regular file.

		Returns:
			False when the file was already emitted.
		"""
		if resolved.identity in self.emitted:
			return False
		self.emitted.add(resolved.identity)
		return True


#============================================


class IteratorChain:
	"""
	One link of the traversal chain.
	"""

	#============================================
	def next_path(self) -> Path | None:
		"""
		Produce the next file of this link.

		Returns:
			A path, or None when this link has nothing to produce right now.
		"""
		return None

	#============================================
	def next_iterator(self) -> IteratorChain | None:
		"""
		Link to continue with once next_path() returned None.

		Returns:
			Next link, or None at the end of the chain.
		"""
		return None

	#============================================
	def close(self) -> None:
		"""
		Release resources held by this link.
		"""
		return None


#============================================


class PathWalker(IteratorChain):
	"""
	Walks one list of candidate paths: the caller's roots or a directory's children.
	"""

	#============================================
	def __init__(
		self,
		candidates: Iterable[Path],
		context: IteratorContext,
		state: TraversalState | None = None,
		parent: IteratorChain | None = None,
	) -> None:
		self._source = candidates
		self._candidates = iter(candidates)
		self.context = context
		self.state = state if state is not None else TraversalState()
		self.parent = parent
		self._child: PathWalker | None = None

	#============================================
	def next_path(self) -> Path | None:
		while True:
			candidate = self._next_candidate()
			if candidate is None:
				self.close()
				return None
			resolved = resolve_path(
				candidate,
				follow_symlinks=self.context.follow_symlinks,
				max_hops=self.context.max_symlink_hops,
			)
			if resolved is None:
				continue
			if resolved.kind is FileKind.REGULAR:
				if self.state.emit(resolved):
					return resolved.path
				continue
			if resolved.kind is FileKind.DIRECTORY:
				child = self._descend(resolved)
				if child is not None:
					self._child = child
					return None
				continue
			logger.debug(f"Skipping {candidate}: {resolved.kind.value}")

	#============================================
	def _next_candidate(self) -> Path | None:
		try:
			return next(self._candidates, None)
		except DirectoryAccessError as exc:
			if not self.context.skip_unreadable_dirs:
				raise
			logger.warning(f"Stopped listing unreadable directory {exc.path}: {exc.error}")
			return None

	#============================================
	def next_iterator(self) -> IteratorChain | None:
		if self._child is not None:
			child = self._child
			self._child = None
			return child
		return self.parent

	#============================================
	def close(self) -> None:
		if self._child is not None:
			self._child.close()
			self._child = None
		if isinstance(self._source, DirectoryEntries):
			self._source.close()

	#============================================
	def _descend(self, resolved: ResolvedPath) -> PathWalker | None:
		if not self.state.enter_directory(resolved):
			logger.debug(f"Skipping {resolved.path}: directory already visited")
			return None
		try:
			entries = DirectoryEntries(resolved.path)
		except DirectoryAccessError as exc:
			if not self.context.skip_unreadable_dirs:
				raise
			logger.warning(f"Skipping unreadable directory {resolved.path}: {exc.error}")
			return None
		return PathWalker(entries, self.context, self.state, parent=self)


#============================================


class NestedIterator:
	"""
	Flattens a chain of IteratorChain links into one single-pass iterator.
	"""

	#============================================
	def __init__(self, first: IteratorChain | None) -> None:
		self._current = first

	#============================================
	def __iter__(self) -> NestedIterator:
		return self

	#============================================
	def __next__(self) -> Path:
		try:
			while self._current is not None:
				item = self._current.next_path()
				if item is not None:
					return item
				self._current = self._current.next_iterator()
		except Exception:
			self.close()
			raise
		raise StopIteration

	#============================================
	def close(self) -> None:
		"""
		Close every link still on the chain and end the iteration.
		"""
		link = self._current
		self._current = None
		while link is not None:
			link.close()
			link = link.next_iterator()
