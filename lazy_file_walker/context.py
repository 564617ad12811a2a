#!/usr/bin/env python3
from __future__ import annotations

# Standard Library
from dataclasses import dataclass

#============================================

# Linux MAXSYMLINKS
DEFAULT_MAX_SYMLINK_HOPS = 40

#============================================


@dataclass(frozen=True, slots=True)
class IteratorContext:
	"""
	Read-only settings shared by every walker in one traversal.

	Attributes:
		follow_symlinks: Dereference symbolic links before classifying.
		skip_unreadable_dirs: Skip directories that cannot be listed instead
			of stopping the traversal.
		max_symlink_hops: Links followed for a single candidate before it is
			treated as a loop.
	"""
	follow_symlinks: bool = True
	skip_unreadable_dirs: bool = False
	max_symlink_hops: int = DEFAULT_MAX_SYMLINK_HOPS
