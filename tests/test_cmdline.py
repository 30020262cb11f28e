import pytest
from click.testing import CliRunner

import logmerge.__main__ as main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def log_files(tmp_path):
    web = tmp_path / "web.log"
    web.write_text(
        "2024-01-15T12:00:00Z web started\n"
        "2024-01-15T12:00:02Z web request\n"
        "  with a continuation line\n"
        "2024-01-15T12:00:04Z web stopped\n"
    )
    db = tmp_path / "db.log"
    db.write_text(
        "2024-01-15 12:00:01 db started\n"
        "2024-01-15 12:00:03 db checkpoint\n"
    )
    return web, db


EXPECTED_MERGE = (
    "2024-01-15T12:00:00Z web started\n"
    "2024-01-15 12:00:01 db started\n"
    "2024-01-15T12:00:02Z web request\n"
    "  with a continuation line\n"
    "2024-01-15 12:00:03 db checkpoint\n"
    "2024-01-15T12:00:04Z web stopped\n"
)


class TestMerge:
    @pytest.mark.parametrize("mode", ["sync", "async"])
    @pytest.mark.parametrize("batch_size", ["1", "2", "5"])
    def test_merge_files(self, runner, log_files, tmp_path, mode, batch_size):
        out = tmp_path / "merged.log"
        result = runner.invoke(
            main.main,
            [
                "merge",
                str(log_files[0]),
                str(log_files[1]),
                "--mode",
                mode,
                "--batch-size",
                batch_size,
                "--check-order",
                "-o",
                str(out),
            ],
        )
        assert result.exit_code == 0, result.output
        assert out.read_text() == EXPECTED_MERGE

    def test_merge_to_stdout(self, runner, log_files):
        result = runner.invoke(
            main.main,
            ["merge", str(log_files[0]), str(log_files[1])],
        )
        assert result.exit_code == 0, result.output
        assert EXPECTED_MERGE in result.output

    def test_null_sink(self, runner, log_files, tmp_path):
        out = tmp_path / "merged.log"
        result = runner.invoke(
            main.main,
            ["merge", str(log_files[0]), "--sink", "null", "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert out.read_text() == ""

    def test_out_of_order_input(self, runner, tmp_path):
        bad = tmp_path / "bad.log"
        bad.write_text("2024-01-02T00:00:00Z late\n2024-01-01T00:00:00Z early\n")
        result = runner.invoke(
            main.main,
            ["merge", str(bad), "--check-order", "-o", str(tmp_path / "o.log")],
        )
        assert result.exit_code == 1
        assert "non-decreasing timestamp order" in result.output

    def test_check_order_from_config(self, runner, tmp_path):
        bad = tmp_path / "bad.log"
        bad.write_text("2024-01-02T00:00:00Z late\n2024-01-01T00:00:00Z early\n")
        out = str(tmp_path / "o.log")

        result = runner.invoke(main.main, ["merge", str(bad), "-o", out])
        assert result.exit_code == 0, result.output

        result = runner.invoke(
            main.main,
            ["-x", "check_order=true", "merge", str(bad), "-o", out],
        )
        assert result.exit_code == 1

        result = runner.invoke(
            main.main,
            ["merge", str(bad), "-o", out],
            env={"LOGMERGE_CHECK_ORDER": "1"},
        )
        assert result.exit_code == 1

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main.main, ["merge", str(tmp_path / "nope.log")])
        assert result.exit_code == 2

    def test_requires_a_file(self, runner):
        result = runner.invoke(main.main, ["merge"])
        assert result.exit_code == 2

    def test_unknown_sink(self, runner, log_files):
        result = runner.invoke(
            main.main,
            ["merge", str(log_files[0]), "--sink", "kafka"],
        )
        assert result.exit_code == 2


class TestSimulate:
    def test_async(self, runner):
        result = runner.invoke(
            main.main,
            [
                "simulate",
                "--sources",
                "3",
                "--entries",
                "20",
                "--mode",
                "async",
                "--batch-size",
                "2",
                "--max-latency",
                "0",
                "--seed",
                "1",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Mode:\t\t\tasync" in result.output
        assert "Logs printed:\t\t60" in result.output
        # One initial fan-out plus ten refills per source.
        assert "Suspensions:\t\t31" in result.output

    def test_sync(self, runner):
        result = runner.invoke(
            main.main,
            ["simulate", "-n", "4", "-e", "5", "--mode", "sync"],
        )
        assert result.exit_code == 0, result.output
        assert "Logs printed:\t\t20" in result.output
        assert "Suspensions:\t\t0" in result.output

    def test_show(self, runner):
        result = runner.invoke(
            main.main,
            [
                "simulate",
                "-n",
                "2",
                "-e",
                "3",
                "--mode",
                "sync",
                "--start",
                "2021-03-04",
                "--show",
            ],
        )
        assert result.exit_code == 0, result.output
        shown = [
            line for line in result.output.splitlines() if line.startswith("2021-")
        ]
        assert len(shown) == 6
        assert sum("source-0 #" in line for line in shown) == 3

    def test_config_from_x(self, runner):
        result = runner.invoke(
            main.main,
            ["-x", "mode=sync", "simulate", "-n", "2", "-e", "2"],
        )
        assert result.exit_code == 0, result.output
        assert "Mode:\t\t\tsync" in result.output

    def test_invalid_start(self, runner):
        result = runner.invoke(main.main, ["simulate", "--start", "yesterday-ish"])
        assert result.exit_code == 2


class TestMainOptions:
    def test_help(self, runner):
        result = runner.invoke(main.main, ["--help"])
        assert result.exit_code == 0
        assert "merge" in result.output
        assert "simulate" in result.output

    @pytest.mark.parametrize("arg", ["batch_size=0", "colour=red", "not-an-arg"])
    def test_invalid_x(self, runner, arg):
        result = runner.invoke(main.main, ["-x", arg, "simulate", "-n", "1", "-e", "1"])
        assert result.exit_code == 2

    def test_log_level(self, runner):
        result = runner.invoke(
            main.main,
            ["--log-level", "debug", "simulate", "-n", "1", "-e", "1", "--mode", "sync"],
        )
        assert result.exit_code == 0, result.output
