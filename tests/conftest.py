"""
Pytest config to ensure local package imports work without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _add_repo_root_to_path() -> None:
	"""
	Insert the repo root into sys.path for local imports.
	"""
	repo_root = Path(__file__).resolve().parent.parent
	repo_root_str = str(repo_root)
	if repo_root_str not in sys.path:
		sys.path.insert(0, repo_root_str)


_add_repo_root_to_path()


@pytest.fixture
def sample_tree(tmp_path: Path) -> dict[str, Path]:
	"""
	Build the tree:

		fileA.txt
		dirB/fileC.txt
		dirB/dirD/fileE.txt
		dirB/fileF.txt
		dirB/.hidden.txt
		dirB/.cache/secret.txt
	"""
	file_a = tmp_path / "fileA.txt"
	file_a.write_text("a", encoding="utf-8")
	dir_b = tmp_path / "dirB"
	dir_b.mkdir()
	file_c = dir_b / "fileC.txt"
	file_c.write_text("c", encoding="utf-8")
	dir_d = dir_b / "dirD"
	dir_d.mkdir()
	file_e = dir_d / "fileE.txt"
	file_e.write_text("e", encoding="utf-8")
	file_f = dir_b / "fileF.txt"
	file_f.write_text("f", encoding="utf-8")
	(dir_b / ".hidden.txt").write_text("h", encoding="utf-8")
	(dir_b / ".cache").mkdir()
	(dir_b / ".cache" / "secret.txt").write_text("s", encoding="utf-8")
	return {
		"root": tmp_path,
		"fileA": file_a,
		"dirB": dir_b,
		"fileC": file_c,
		"dirD": dir_d,
		"fileE": file_e,
		"fileF": file_f,
	}


@pytest.fixture
def deny_listing(monkeypatch):
	"""
	Make os.scandir fail with EACCES for directories with a given name.
	"""
	import os

	real_scandir = os.scandir

	def _install(name: str) -> None:
		def fake_scandir(path="."):
			if Path(path).name == name:
				raise PermissionError(13, "Permission denied", str(path))
			return real_scandir(path)

		monkeypatch.setattr(os, "scandir", fake_scandir)

	return _install


class _ListingThatFails:
	"""
	Stand-in for a scandir iterator that errors after some entries.
	"""

	def __init__(self, entries: list) -> None:
		self._entries = iter(entries)

	def __iter__(self):
		return self

	def __next__(self):
		entry = next(self._entries, None)
		if entry is None:
			raise OSError(5, "Input/output error")
		return entry

	def close(self) -> None:
		return None


@pytest.fixture
def fail_listing_midway(monkeypatch):
	"""
	Make listing a directory with a given name fail after its first entry.
	"""
	import os

	real_scandir = os.scandir

	def _install(name: str) -> None:
		def fake_scandir(path="."):
			if Path(path).name == name:
				with real_scandir(path) as handle:
					entries = sorted(handle, key=lambda entry: entry.name)[:1]
				return _ListingThatFails(entries)
			return real_scandir(path)

		monkeypatch.setattr(os, "scandir", fake_scandir)

	return _install
