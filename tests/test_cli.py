import os
import tempfile

from click.testing import CliRunner

from pistream.cli import main


PI_100 = "3.1415926535897932384626433832795028841971693993751058209749445923078164062862089986280348253421170679"


def test_run_writes_file():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "pi.txt")
        result = runner.invoke(main, ["run", "4", "100", path, "--executor", "thread", "--preview", "5"])
        assert result.exit_code == 0, result.output
        assert path in result.output
        assert "Execution time:" in result.output
        assert "3.141...70679" in result.output
        with open(path) as f:
            assert f.read() == PI_100 + "\n"


def test_run_accepts_suffix_and_verifies():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "pi.txt")
        result = runner.invoke(main, ["run", "2", "1k", path, "--executor", "thread", "--block-size", "97", "--verify"])
        assert result.exit_code == 0, result.output
        assert "verified 1000 digits" in result.output
        with open(path) as f:
            assert len(f.read()) == 2 + 1000 + 1


def test_run_requires_threads_and_digits():
    result = CliRunner().invoke(main, ["run", "4"])
    assert result.exit_code != 0
    assert "Usage" in result.output


def test_run_rejects_bad_digit_count():
    result = CliRunner().invoke(main, ["run", "4", "12Q"])
    assert result.exit_code != 0
    assert "invalid digit count" in result.output


def test_run_reports_unwritable_output():
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "missing", "pi.txt")
        result = CliRunner().invoke(main, ["run", "1", "10", path, "--executor", "thread"])
    assert result.exit_code == 1
    assert "cannot write" in result.output


def test_preview_and_verify_commands():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "pi.txt")
        with open(path, "w") as f:
            f.write(PI_100 + "\n")
        result = runner.invoke(main, ["preview", path, "--chars", "4"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["3.14", "0679"]
        result = runner.invoke(main, ["verify", path, "--samples", "100"])
        assert result.exit_code == 0
        assert "verified 100 digits" in result.output


def test_run_clamps_negative_counts():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "pi.txt")
        result = runner.invoke(main, ["run", "-3", "10", path, "--executor", "thread"])
        assert result.exit_code == 0, result.output
        with open(path) as f:
            assert f.read() == "3.1415926535\n"
        result = runner.invoke(main, ["run", "2", "-5", path, "--executor", "thread"])
        assert result.exit_code == 0, result.output
        with open(path) as f:
            assert f.read() == "3.1\n"


def test_run_zero_block_size_is_automatic():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "pi.txt")
        result = runner.invoke(main, ["run", "2", "50", path, "--executor", "thread", "--block-size", "0"])
        assert result.exit_code == 0, result.output
        assert "blocks: 1 x 50" in result.output


def test_run_fails_when_writer_cannot_open(monkeypatch):
    import pistream.streaming

    def refuse(path, mode="a"):
        raise PermissionError(path)

    monkeypatch.setattr(pistream.streaming, "StreamingWriter", refuse)
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "pi.txt")
        result = CliRunner().invoke(main, ["run", "1", "20", path, "--executor", "thread"])
    assert result.exit_code == 1
    assert "only 0 of 1 blocks" in result.output
