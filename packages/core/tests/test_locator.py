"""Tests for target file discovery."""

import os
from unittest.mock import patch

import pytest

from docreview_core.locator import find_target_files


def _touch(root, rel, content="// bal\n"):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return str(path)


class TestFindTargetFiles:
    def test_missing_target_dir_returns_empty(self, tmp_path):
        _touch(tmp_path, "modules/client.bal")
        assert find_target_files(tmp_path) == []

    def test_target_dir_that_is_a_file_returns_empty(self, tmp_path):
        _touch(tmp_path, "ballerina")
        assert find_target_files(tmp_path) == []

    def test_finds_nested_matches_and_skips_others(self, tmp_path):
        foo = _touch(tmp_path, "ballerina/foo/client.bal")
        bar = _touch(tmp_path, "ballerina/bar/client.bal")
        _touch(tmp_path, "ballerina/notes.txt")

        result = find_target_files(tmp_path)

        assert sorted(result) == sorted([foo, bar])

    def test_returns_absolute_paths(self, tmp_path, monkeypatch):
        _touch(tmp_path, "ballerina/client.bal")
        monkeypatch.chdir(tmp_path)

        result = find_target_files(".")

        assert len(result) == 1
        assert os.path.isabs(result[0])

    def test_order_is_depth_first_lexical(self, tmp_path):
        paths = [
            _touch(tmp_path, "ballerina/types.bal"),
            _touch(tmp_path, "ballerina/a/client.bal"),
            _touch(tmp_path, "ballerina/a/deep/listener.bal"),
            _touch(tmp_path, "ballerina/b/client.bal"),
        ]
        assert find_target_files(tmp_path) == paths

    def test_same_name_in_many_directories_listed_each_time(self, tmp_path):
        for d in ("x", "y", "z"):
            _touch(tmp_path, f"ballerina/{d}/client.bal")
        assert len(find_target_files(tmp_path)) == 3

    def test_exact_base_name_match_only(self, tmp_path):
        _touch(tmp_path, "ballerina/client.bal.bak")
        _touch(tmp_path, "ballerina/my_client.bal")
        _touch(tmp_path, "ballerina/Client.bal")
        assert find_target_files(tmp_path) == []

    def test_directory_named_like_target_is_not_a_match(self, tmp_path):
        (tmp_path / "ballerina" / "client.bal").mkdir(parents=True)
        assert find_target_files(tmp_path) == []

    def test_custom_target_dir_and_names(self, tmp_path):
        match = _touch(tmp_path, "connector/utils.bal")
        _touch(tmp_path, "connector/client.bal")
        assert find_target_files(tmp_path, target_dir="connector", target_names=("utils.bal",)) == [match]

    def test_deep_tree_does_not_recurse(self, tmp_path):
        rel = "/".join(["d"] * 60)
        deep = _touch(tmp_path, f"ballerina/{rel}/client.bal")
        assert find_target_files(tmp_path) == [deep]

    def test_listing_error_propagates(self, tmp_path):
        _touch(tmp_path, "ballerina/a/client.bal")
        with patch("docreview_core.locator.os.scandir", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                find_target_files(tmp_path)

    def test_symlinked_directory_is_not_followed(self, tmp_path):
        real = _touch(tmp_path, "ballerina/real/client.bal")
        outside = tmp_path / "outside"
        _touch(tmp_path, "outside/client.bal")
        try:
            os.symlink(outside, tmp_path / "ballerina" / "linked", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported here")

        assert find_target_files(tmp_path) == [real]

    def test_symlink_loop_terminates(self, tmp_path):
        real = _touch(tmp_path, "ballerina/client.bal")
        try:
            os.symlink(tmp_path / "ballerina", tmp_path / "ballerina" / "loop", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported here")

        assert find_target_files(tmp_path) == [real]
