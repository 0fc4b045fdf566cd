"""Tests for the ``create`` CLI command."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest
from click.testing import CliRunner

from torrentsmith.cli.create_torrent import (
    create_torrent,
    default_output_path,
    output_inside_source,
)
from torrentsmith.cli.main import cli
from torrentsmith.core.bencode import decode

pytestmark = [pytest.mark.unit, pytest.mark.cli]


class TestCreateCommand:
    """Successful runs."""

    def test_creates_torrent_for_directory(self, make_tree, pattern_bytes, tmp_path, tracker_url):
        data = pattern_bytes(300000)
        root = make_tree({"data.bin": data})
        output = tmp_path / "out.torrent"
        runner = CliRunner()

        result = runner.invoke(
            cli,
            ["create", str(root), "-t", tracker_url, "-o", str(output), "--piece-size", "128KiB"],
        )

        assert result.exit_code == 0, result.output
        assert "Torrent created successfully" in result.output
        assert "3 pieces of 131072 bytes" in result.output
        torrent = decode(output.read_bytes())
        assert torrent[b"info"][b"name"] == b"payload"
        assert torrent[b"info"][b"piece length"] == 131072
        assert torrent[b"info"][b"files"][0][b"md5sum"] == hashlib.md5(data).hexdigest().upper().encode()
        assert torrent[b"created by"] == b"torrentsmith"

    def test_default_output_next_to_source(self, make_tree, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        runner = CliRunner()

        result = runner.invoke(cli, ["create", str(root), "-t", tracker_url])

        assert result.exit_code == 0, result.output
        assert (root.parent / "payload.torrent").is_file()

    def test_name_comment_and_private(self, make_tree, tmp_path, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        output = tmp_path / "named.torrent"
        runner = CliRunner()

        result = runner.invoke(
            cli,
            [
                "create",
                str(root),
                "--tracker",
                tracker_url,
                "--name",
                "Renamed",
                "--output",
                str(output),
                "--comment",
                "hello",
                "--created-by",
                "me",
                "--private",
            ],
        )

        assert result.exit_code == 0, result.output
        torrent = decode(output.read_bytes())
        assert torrent[b"info"][b"name"] == b"Renamed"
        assert torrent[b"info"][b"private"] == 1
        assert torrent[b"comment"] == b"hello"
        assert torrent[b"created by"] == b"me"

    def test_output_directory_uses_torrent_name(self, make_tree, tmp_path, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        out_dir = tmp_path / "torrents"
        out_dir.mkdir()
        runner = CliRunner()

        result = runner.invoke(cli, ["create", str(root), "-t", tracker_url, "-o", str(out_dir), "-n", "Named"])

        assert result.exit_code == 0, result.output
        assert (out_dir / "Named.torrent").is_file()

    def test_single_file_source(self, make_tree, tmp_path, tracker_url):
        root = make_tree({"movie.mkv": b"frames"})
        output = tmp_path / "movie.torrent"
        runner = CliRunner()

        result = runner.invoke(cli, ["create", str(root / "movie.mkv"), "-t", tracker_url, "-o", str(output)])

        assert result.exit_code == 0, result.output
        info = decode(output.read_bytes())[b"info"]
        assert info[b"length"] == 6
        assert b"files" not in info

    def test_piece_size_from_config_file(self, make_tree, tmp_path, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[create]\npiece_size = "256KiB"\n', encoding="utf-8")
        output = tmp_path / "out.torrent"
        runner = CliRunner()

        result = runner.invoke(cli, ["-c", str(config_file), "create", str(root), "-t", tracker_url, "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert decode(output.read_bytes())[b"info"][b"piece length"] == 262144

    def test_command_runs_without_group(self, make_tree, tmp_path, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        output = tmp_path / "out.torrent"
        runner = CliRunner()

        result = runner.invoke(create_torrent, [str(root), "-t", tracker_url, "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.is_file()

    def test_verbose_logging(self, make_tree, tmp_path, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        output = tmp_path / "out.torrent"
        runner = CliRunner()

        result = runner.invoke(cli, ["-vv", "create", str(root), "-t", tracker_url, "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.is_file()


class TestCreateCommandErrors:
    """Failures are reported and abort the command."""

    def test_tracker_required(self, make_tree):
        root = make_tree({"a.txt": b"abc"})
        result = CliRunner().invoke(cli, ["create", str(root)])

        assert result.exit_code != 0
        assert "--tracker" in result.output

    def test_invalid_tracker(self, make_tree, tmp_path):
        root = make_tree({"a.txt": b"abc"})
        output = tmp_path / "out.torrent"

        result = CliRunner().invoke(cli, ["create", str(root), "-t", "not a url", "-o", str(output)])

        assert result.exit_code != 0
        assert "Error:" in result.output
        assert not output.exists()

    def test_missing_output_directory(self, make_tree, tmp_path, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        output = tmp_path / "missing" / "out.torrent"

        result = CliRunner().invoke(cli, ["create", str(root), "-t", tracker_url, "-o", str(output)])

        assert result.exit_code != 0
        assert "Output directory does not exist" in result.output

    def test_missing_source(self, tmp_path, tracker_url):
        result = CliRunner().invoke(cli, ["create", str(tmp_path / "missing"), "-t", tracker_url])

        assert result.exit_code != 0

    def test_unknown_piece_size_choice(self, make_tree, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        result = CliRunner().invoke(cli, ["create", str(root), "-t", tracker_url, "--piece-size", "3MiB"])

        assert result.exit_code != 0
        assert "--piece-size" in result.output


class TestDefaultOutputLocation:
    """Default output never lands inside or on top of the source."""

    def test_current_directory_source(self, make_tree, tracker_url, monkeypatch):
        root = make_tree({"a.txt": b"abc"})
        monkeypatch.chdir(root)

        result = CliRunner().invoke(cli, ["create", ".", "-t", tracker_url])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in root.iterdir()) == ["a.txt"]
        torrent = decode((root.parent / "payload.torrent").read_bytes())
        assert torrent[b"info"][b"name"] == b"payload"

    def test_torrent_named_source_is_kept(self, make_tree, tracker_url):
        root = make_tree({"data.torrent": b"original payload"})
        source = root / "data.torrent"

        result = CliRunner().invoke(cli, ["create", str(source), "-t", tracker_url])

        assert result.exit_code == 0, result.output
        assert source.read_bytes() == b"original payload"
        info = decode((root / "data.torrent.torrent").read_bytes())[b"info"]
        assert info[b"length"] == len(b"original payload")

    def test_multi_suffix_file_source(self, make_tree, tracker_url):
        root = make_tree({"a.tar.gz": b"archive"})

        result = CliRunner().invoke(cli, ["create", str(root / "a.tar.gz"), "-t", tracker_url])

        assert result.exit_code == 0, result.output
        assert (root / "a.tar.gz.torrent").is_file()
        assert not (root / "a.tar.torrent").exists()

    def test_explicit_output_inside_source_refused(self, make_tree, tracker_url):
        root = make_tree({"a.txt": b"abc"})
        output = root / "nested.torrent"

        result = CliRunner().invoke(cli, ["create", str(root), "-t", tracker_url, "-o", str(output)])

        assert result.exit_code != 0
        assert "would be written into the source" in result.output
        assert not output.exists()

    def test_explicit_output_over_source_file_refused(self, make_tree, tracker_url):
        root = make_tree({"data.bin": b"keep me"})
        source = root / "data.bin"

        result = CliRunner().invoke(cli, ["create", str(source), "-t", tracker_url, "-o", str(source)])

        assert result.exit_code != 0
        assert source.read_bytes() == b"keep me"


class TestDefaultOutputPath:
    """Output path resolution."""

    def test_directory_source(self, make_tree):
        root = make_tree({"a.txt": b"a"}, name="album")
        assert default_output_path(root, "album", None) == root.resolve().parent / "album.torrent"

    def test_relative_current_directory(self, make_tree, monkeypatch):
        root = make_tree({"a.txt": b"a"}, name="album")
        monkeypatch.chdir(root)
        assert default_output_path(Path("."), "album", None) == root.resolve().parent / "album.torrent"

    def test_file_source_keeps_full_name(self, make_tree):
        root = make_tree({"song.flac": b"a"})
        expected = root.resolve() / "song.flac.torrent"
        assert default_output_path(root / "song.flac", "song.flac", None) == expected

    def test_output_directory_uses_name(self, tmp_path):
        assert default_output_path(tmp_path / "src", "t", tmp_path) == tmp_path / "t.torrent"

    def test_explicit_file(self, tmp_path):
        target = tmp_path / "x.torrent"
        assert default_output_path(tmp_path, "t", target) == target


class TestOutputInsideSource:
    """Detection of outputs that would clobber or extend the payload."""

    def test_sibling_is_fine(self, make_tree):
        root = make_tree({"a.txt": b"a"})
        assert not output_inside_source(root, root.parent / "payload.torrent")

    def test_nested_output(self, make_tree):
        root = make_tree({"a.txt": b"a"})
        assert output_inside_source(root, root / "deep" / "x.torrent")

    def test_same_file(self, make_tree):
        root = make_tree({"a.txt": b"a"})
        assert output_inside_source(root / "a.txt", root / "a.txt")

    def test_next_to_file_source(self, make_tree):
        root = make_tree({"a.txt": b"a"})
        assert not output_inside_source(root / "a.txt", root / "a.txt.torrent")
