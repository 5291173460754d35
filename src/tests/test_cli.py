import pytest

from timewindow.cli import main


def test_scales(capsys):
    main(["scales"])
    out = capsys.readouterr().out
    assert "TIME SCALES" in out
    assert "Past 10 Minutes" in out
    assert "Past 2 Months" in out


def test_match_custom(capsys):
    main(["match", "5000"])
    out = capsys.readouterr().out
    assert "Custom" in out
    assert "1h" in out


def test_match_preset(capsys):
    main(["match", "3600"])
    assert "Past 1 Hour" in capsys.readouterr().out


def test_adjust_full_resolution(capsys):
    main(["adjust", "Past 1 Hour"])
    assert "Full resolution available" in capsys.readouterr().out


def test_adjust_low_resolution(capsys):
    main(["adjust", "Past Week", "--ttl-10s", "1d", "--ttl-30m", "90d"])
    out = capsys.readouterr().out
    assert "30m resolution" in out
    assert "30m" in out


def test_adjust_deleted(capsys):
    main(["adjust", "Past 2 Months", "--ttl-10s", "1d", "--ttl-30m", "7d"])
    assert "has been deleted" in capsys.readouterr().out


def test_adjust_unknown_scale(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["adjust", "Past Century"])
    assert exc_info.value.code == 1
    assert "Unknown scale" in capsys.readouterr().out


def test_adjust_inverted_range(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["adjust", "Past 1 Day", "--start", "2024-07-02T00:00", "--end", "2024-07-01T00:00"])
    assert exc_info.value.code == 1


def test_invalid_settings_file(tmp_path, monkeypatch, capsys):
    path = tmp_path / "timewindow.json"
    path.write_text('{"resolution_10s_ttl": "a while"}')
    monkeypatch.setattr("timewindow.settings.SETTINGS_FILE", path)
    with pytest.raises(SystemExit) as exc_info:
        main(["scales"])
    assert exc_info.value.code == 1
    assert "Unknown duration: a while" in capsys.readouterr().out
