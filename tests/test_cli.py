"""Tests for the methodbench command line."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from methodbench.cli import EXIT_ERROR, EXIT_OK, EXIT_VERDICT_FAILED, build_parser, main


@pytest.fixture(autouse=True)
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run every command in a scratch directory and drop its log handlers afterwards."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    logger = logging.getLogger("methodbench")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == EXIT_ERROR
    assert "usage: methodbench" in capsys.readouterr().out


def test_parser_reads_literals() -> None:
    args = build_parser().parse_args(["check", "m:f", "--arg", "1", "--arg", "'x'", "--expect", "[1, 2]"])
    assert args.arg == [1, "x"]
    assert args.expect == [1, 2]


def test_parser_rejects_non_literal(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["check", "m:f", "--expect", "abc"])
    assert info.value.code == 2
    assert "not a Python literal" in capsys.readouterr().err


class TestCheck:
    def test_passing_check(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["check", "textwrap:dedent", "--arg", "'  a'", "--expect", "'a'"])
        assert code == EXIT_OK
        err = capsys.readouterr().err
        assert 'textwrap.dedent("  a")' in err
        assert "OK" in err

    def test_failing_check(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["check", "methodbench.demo:Sample.return_true", "--expect", "False"])
        assert code == EXIT_VERDICT_FAILED
        assert "FAILED: False != True" in capsys.readouterr().err

    def test_unknown_target(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["check", "methodbench.demo:Nope", "--expect", "1"])
        assert code == EXIT_ERROR
        assert "methodbench: error:" in capsys.readouterr().err

    def test_target_exception_propagates(self) -> None:
        with pytest.raises(ValueError):
            main(["check", "methodbench.demo:Sample.throw_static", "--expect", "None"])


class TestTime:
    def test_reports_mean(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["time", "methodbench.demo:Sample.return_true", "--times", "3"])
        assert code == EXIT_OK
        assert "Sample.return_true(): mean" in capsys.readouterr().err

    def test_coarse_and_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["time", "methodbench.demo:Sample.return_true", "--times", "2", "--coarse", "--verbose"])
        assert code == EXIT_OK
        err = capsys.readouterr().err
        assert "run 2/2:" in err
        assert " ms over 2 run(s)" in err

    def test_invalid_times(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["time", "methodbench.demo:Sample.return_true", "--times", "0"]) == EXIT_ERROR
        assert "positive integer" in capsys.readouterr().err

    def test_failing_target_is_an_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["time", "methodbench.demo:Sample.throw_static", "--times", "2"]) == EXIT_ERROR
        assert "while being timed" in capsys.readouterr().err

    def test_summary_can_be_turned_off(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "methodbench.yaml").write_text("summary: false\npresenter: plain\n")
        code = main(["time", "methodbench.demo:Sample.return_true", "--times", "2", "--verbose"])
        assert code == EXIT_OK
        err = capsys.readouterr().err
        assert "run 2/2:" in err
        assert "mean" not in err

    def test_times_from_settings(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "methodbench.yaml").write_text("times: 4\npresenter: plain\n")
        assert main(["time", "methodbench.demo:Sample.return_true"]) == EXIT_OK
        assert "over 4 run(s)" in capsys.readouterr().err


def test_demo(capsys: pytest.CaptureFixture[str], workdir: Path) -> None:
    (workdir / "methodbench.yaml").write_text("times: 2\n")
    assert main(["demo"]) == EXIT_OK
    err = capsys.readouterr().err
    assert "Testing Sample.get_value()" in err
    assert "FAILED" not in err


def test_log_file_is_written(workdir: Path) -> None:
    main(["check", "methodbench.demo:Sample.return_true", "--expect", "False"])
    log = workdir / ".methodbench" / "methodbench.log"
    assert log.exists()
    assert "check methodbench.demo:Sample.return_true failed" in log.read_text()


def test_bad_config_is_an_error(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / "methodbench.yaml").write_text("presenter: fancy\n")
    assert main(["demo"]) == EXIT_ERROR
    assert "presenter must be one of" in capsys.readouterr().err
