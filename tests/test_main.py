"""Tests for the command line interface."""

import pytest

import wolframsim.main as cli


@pytest.fixture(autouse=True)
def terminal(monkeypatch):
    monkeypatch.setattr(cli, "get_terminal_size", lambda: (40, 20))


def test_show_single_rule(capsys):
    cli.main(["show", "30", "--rows", "4", "--width", "5"])
    out = capsys.readouterr().out
    assert "||    Rule  30    ||" in out
    assert "# ###\n" in out


def test_show_defaults_from_terminal(capsys):
    cli.main(["show", "90"])
    lines = [l for l in capsys.readouterr().out.split("\n")[4:] if l != ""]
    # 20 rows of terminal minus the banner
    assert len(lines) == 14
    assert len(lines[0]) == 39


def test_show_all_rules(capsys):
    cli.main(["show", "all", "--rows", "2", "--width", "3", "--delay", "0"])
    out = capsys.readouterr().out
    assert "Rule   0" in out
    assert "Rule 255" in out


def test_invalid_rule_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["show", "300", "--rows", "4", "--width", "5"])
    assert exc.value.code == 1
    assert "between 0 and 255" in capsys.readouterr().err


def test_width_exceeding_terminal_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["show", "30", "--rows", "4", "--width", "41"])
    assert exc.value.code == 1
    assert "terminal width" in capsys.readouterr().err


def test_non_positive_rows_exits():
    with pytest.raises(SystemExit) as exc:
        cli.main(["show", "30", "--rows", "0", "--width", "5"])
    assert exc.value.code == 1


def test_short_terminal_exits(monkeypatch, capsys):
    monkeypatch.setattr(cli, "get_terminal_size", lambda: (40, 4))
    with pytest.raises(SystemExit) as exc:
        cli.main(["show", "30"])
    assert exc.value.code == 1
    assert "at least 6" in capsys.readouterr().err


def test_parse_rule():
    assert cli.parse_rule("all") is None
    assert cli.parse_rule("-1") is None
    assert cli.parse_rule("110") == 110


def test_table(capsys):
    cli.main(["table", "110"])
    out = capsys.readouterr().out
    assert "Rule 110: 01101110" in out
    assert "111 -> 0" in out


def test_image(tmp_path, capsys):
    cli.main(["image", "110", "--rows", "8", "--width", "9", "-o", str(tmp_path)])
    assert (tmp_path / "rule_110.png").exists()
    assert "Saved 1 image(s)" in capsys.readouterr().out


def test_log_file(tmp_path, capsys):
    log_path = tmp_path / "sim.log"
    cli.main(["--log", str(log_path), "show", "30", "--rows", "2", "--width", "20"])
    assert "Width 20 is even" in log_path.read_text()


def test_no_command_exits():
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 1


def test_plain_text_scrolls_past_terminal_height(capsys):
    cli.main(["show", "30", "--rows", "30", "--width", "5"])
    assert "||    Rule  30    ||" in capsys.readouterr().out


def test_curses_failure_exits(monkeypatch, capsys):
    def broken(func):
        raise cli.curses.error("setupterm: could not find terminal")

    monkeypatch.setattr(cli.curses, "wrapper", broken)
    with pytest.raises(SystemExit) as exc:
        cli.main(["show", "30", "--color", "--rows", "4", "--width", "5"])
    assert exc.value.code == 1
    assert "terminal error: setupterm" in capsys.readouterr().err
