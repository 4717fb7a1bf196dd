"""Tests for the CLI module."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from vidkit.cli import apply_args, build_parser, confirm_rename, main
from vidkit.exceptions import ProbeError
from vidkit.rename import RenameResult
from vidkit.utils import STATUS_FAIL, STATUS_PREVIEW
from vidkit.utils.config import Config, ProviderType


@pytest.fixture
def config_file(tmp_path: Path, no_env_keys: None) -> Path:
    """A config file with a TMDb key so validation passes."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"tmdb_api_key": "k"}))
    return path


class TestBuildParser:
    """Tests for the argument parser."""

    def test_defaults(self) -> None:
        """Test that no flags are set by default."""
        args = build_parser().parse_args([])
        assert args.paths == []
        assert not args.batch
        assert not args.organize
        assert args.log_level == "info"

    def test_flags(self) -> None:
        """Test flag parsing."""
        args = build_parser().parse_args(
            ["--batch", "--scene-style", "--tv-provider", "tvdb", "--lang", "de", "a.mkv", "dir"]
        )
        assert args.batch and args.scene_style
        assert args.tv_provider == "tvdb"
        assert args.lang == "de"
        assert args.paths == ["a.mkv", "dir"]

    def test_rejects_unknown_provider(self) -> None:
        """Test that provider names are checked."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--movie-provider", "tvmaze"])

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        """Test --version."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert "vidkit 1.0.0" in capsys.readouterr().out


class TestApplyArgs:
    """Tests for overriding config values with flags."""

    def test_overrides(self) -> None:
        """Test that flags win over the config file."""
        cfg = Config(organize_files=True)
        args = build_parser().parse_args(
            [
                "--lowercase",
                "--preview",
                "--separator", "_",
                "--movie-provider", "omdb",
                "--movie-filename-template", "{title}",
                "--tv-directory-template", "TV/{title}",
            ]
        )
        apply_args(cfg, args)
        assert cfg.lowercase and cfg.preview_mode
        assert cfg.separator == "_"
        assert cfg.movie_provider == ProviderType.OMDB
        assert cfg.movie_format == "{title}"
        assert cfg.tv_directory == "TV/{title}"
        assert cfg.organize_files is False

    def test_unset_flags_keep_config(self) -> None:
        """Test that absent flags leave values alone."""
        cfg = Config(language="fr", tv_format="{title}")
        apply_args(cfg, build_parser().parse_args(["--organize"]))
        assert cfg.language == "fr"
        assert cfg.tv_format == "{title}"
        assert cfg.organize_files is True


class TestConfirmRename:
    """Tests for the interactive prompt."""

    @pytest.mark.parametrize(("answer", "expected"), [("y", True), ("Y ", True), ("", False), ("n", False)])
    def test_answers(self, answer: str, expected: bool) -> None:
        """Test that only 'y' confirms."""
        with patch("builtins.input", return_value=answer):
            assert confirm_rename(Path("a.mkv"), Path("b.mkv")) is expected

    def test_eof(self) -> None:
        """Test that a closed stdin declines."""
        with patch("builtins.input", side_effect=EOFError):
            assert confirm_rename(Path("a.mkv"), Path("b.mkv")) is False


class TestMain:
    """Tests for main."""

    def test_no_paths_prints_usage(self, config_file: Path, capsys: pytest.CaptureFixture) -> None:
        """Test that running without paths prints usage."""
        assert main(["--config", str(config_file)]) == 0
        assert "usage: vidkit" in capsys.readouterr().out

    def test_invalid_config_exits_1(self, tmp_path: Path, no_env_keys: None, capsys: pytest.CaptureFixture) -> None:
        """Test that validation errors give exit status 1."""
        assert main(["--config", str(tmp_path / "new.json"), "a.mkv"]) == 1
        assert "TMDb API key is required" in capsys.readouterr().out

    def test_missing_ffprobe(self, config_file: Path) -> None:
        """Test that a missing ffprobe stops the run."""
        with patch("vidkit.cli.system_util.require_binary", side_effect=ProbeError("'ffprobe' not found")):
            assert main(["--config", str(config_file), "a.mkv"]) == 1

    def test_preview_run(self, config_file: Path, tmp_path: Path) -> None:
        """Test that paths are processed with the merged config."""
        result = RenameResult(tmp_path / "a.mkv", STATUS_PREVIEW, target=tmp_path / "A (2000).mkv")
        with (
            patch("vidkit.cli.system_util.require_binary", return_value="/usr/bin/ffprobe"),
            patch("vidkit.cli.process_paths", return_value=[result]) as mock_process,
        ):
            assert main(["--config", str(config_file), "--preview", str(tmp_path / "a.mkv")]) == 0

        paths, cfg = mock_process.call_args.args
        assert paths == [tmp_path / "a.mkv"]
        assert cfg.preview_mode is True
        assert cfg.tmdb_api_key == "k"
        assert mock_process.call_args.kwargs["confirm"] is None

    def test_interactive_run_uses_prompt(self, config_file: Path, tmp_path: Path) -> None:
        """Test that the prompt is used outside batch and preview modes."""
        with (
            patch("vidkit.cli.system_util.require_binary", return_value="/usr/bin/ffprobe"),
            patch("vidkit.cli.process_paths", return_value=[]) as mock_process,
        ):
            main(["--config", str(config_file), str(tmp_path)])
        assert mock_process.call_args.kwargs["confirm"] is confirm_rename

    def test_failures_exit_1(self, config_file: Path, tmp_path: Path) -> None:
        """Test that failed files give exit status 1."""
        result = RenameResult(tmp_path / "a.mkv", STATUS_FAIL, message="error analyzing video")
        with (
            patch("vidkit.cli.system_util.require_binary", return_value="/usr/bin/ffprobe"),
            patch("vidkit.cli.process_paths", return_value=[result]),
        ):
            assert main(["--config", str(config_file), "--batch", str(tmp_path / "a.mkv")]) == 1
