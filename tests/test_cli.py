#!/usr/bin/env python3
"""
Tests for the command line interface.
"""

from pathlib import Path

import pytest

from lazy_file_walker import cli


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch):
	work = tmp_path / "work"
	work.mkdir()
	monkeypatch.chdir(work)
	return work


def test_lists_files(sample_tree, capsys):
	cli.main(["-p", str(sample_tree["fileA"]), str(sample_tree["dirB"])])
	lines = capsys.readouterr().out.splitlines()
	assert lines[0] == str(sample_tree["fileA"])
	assert sorted(lines) == sorted(str(sample_tree[key]) for key in ("fileA", "fileC", "fileE", "fileF"))


def test_extension_filter_and_limit(tmp_path: Path, capsys):
	src = tmp_path / "src"
	src.mkdir()
	(src / "a.swift").write_text("")
	(src / "b.swift").write_text("")
	(src / "notes.md").write_text("")
	cli.main(["-p", str(src), "-e", ".swift"])
	lines = capsys.readouterr().out.splitlines()
	assert sorted(lines) == [str(src / "a.swift"), str(src / "b.swift")]
	cli.main(["-p", str(src), "-e", "swift", "-m", "1"])
	assert len(capsys.readouterr().out.splitlines()) == 1


def test_print0_and_summary(sample_tree, capsys):
	cli.main(["-p", str(sample_tree["dirB"] / "dirD"), "-0", "--summary"])
	captured = capsys.readouterr()
	assert captured.out == f"{sample_tree['fileE']}\0"
	assert "Found 1 files." in captured.err
	assert "txt:1" in captured.err


def test_config_file_from_working_directory(tmp_path: Path, isolated_cwd: Path, capsys):
	src = tmp_path / "src"
	src.mkdir()
	(src / "a.swift").write_text("")
	(src / "b.txt").write_text("")
	(isolated_cwd / ".lazy-file-walker.yaml").write_text("include_extensions: [swift]\n")
	cli.main(["-p", str(src)])
	assert capsys.readouterr().out.splitlines() == [str(src / "a.swift")]


def test_flags_override_config_file(tmp_path: Path, capsys):
	tmp_path = tmp_path.resolve()
	(tmp_path / "real.txt").write_text("r")
	tree = tmp_path / "tree"
	tree.mkdir()
	(tree / "link.txt").symlink_to(tmp_path / "real.txt")
	config_path = tmp_path / "walk.json"
	config_path.write_text('{"follow_symlinks": false}')
	cli.main(["-p", str(tree), "-c", str(config_path)])
	assert capsys.readouterr().out == ""
	cli.main(["-p", str(tree), "-c", str(config_path), "-L"])
	assert capsys.readouterr().out.splitlines() == [str(tmp_path / "real.txt")]


def test_unreadable_directory_exits_with_error(sample_tree, deny_listing, capsys):
	deny_listing("dirD")
	with pytest.raises(SystemExit) as excinfo:
		cli.main(["-p", str(sample_tree["dirB"])])
	assert excinfo.value.code == 1


def test_skip_unreadable_flag(sample_tree, deny_listing, capsys):
	deny_listing("dirD")
	cli.main(["-p", str(sample_tree["dirB"]), "--skip-unreadable"])
	lines = capsys.readouterr().out.splitlines()
	assert sorted(lines) == [str(sample_tree["fileC"]), str(sample_tree["fileF"])]


def test_paths_are_required(capsys):
	with pytest.raises(SystemExit) as excinfo:
		cli.main([])
	assert excinfo.value.code == 2
