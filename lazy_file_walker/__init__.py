"""
lazy_file_walker
================

Lazy depth-first walker that turns a list of files and directories into a
stream of regular-file paths.
"""

from .chain import DirectoryAccessError
from .scanner import FileIterator, iter_files

__all__ = [
	"DirectoryAccessError",
	"FileIterator",
	"iter_files",
]
