import pytest

from philosophers.cli import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.philosophers == 5
    assert args.timescale == 200
    assert args.seed is None
    assert args.cycles is None
    assert args.duration == 5.0


def test_bounded_run_reports_every_philosopher(caplog):
    caplog.set_level("INFO")
    assert main(["-n", "3", "-t", "1", "--cycles", "5", "--duration", "30"]) == 0
    for i in range(3):
        assert f"P{i}: " in caplog.text
        assert "ate 5 times" in caplog.text
    assert "forks free: True" in caplog.text


def test_timed_run_stops_cleanly(caplog):
    caplog.set_level("INFO")
    assert main(["-n", "4", "-t", "5", "--seed", "11", "--duration", "0.2"]) == 0
    assert "forks free: True" in caplog.text


@pytest.mark.parametrize("argv", [["-n", "0"], ["-t", "0"], ["-t", "inf"], ["-t", "nan"], ["--cycles", "0"]])
def test_invalid_settings_exit_with_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "error" in capsys.readouterr().err


def test_verbose_run_logs_each_transition(caplog):
    caplog.set_level("DEBUG", logger="philosophers.cli")
    assert main(["-n", "2", "-t", "1", "--cycles", "1", "--duration", "30", "-v"]) == 0
    assert "P0 -> Thinking" in caplog.text
    assert "P1 -> Eating" in caplog.text
