import pytest

from hisab import __version__
from hisab.main import build_parser, main


def run_cli(capsys, *argv):
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    captured = capsys.readouterr()
    return exc_info.value.code, captured.out, captured.err


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert __version__ in capsys.readouterr().out


def test_analyze(capsys):
    code, out, _ = run_cli(capsys, "analyze", "2024-03-11")
    assert code == 0
    assert "WAJIB" in out
    assert "1 Ramadhan 1445 AH" in out
    assert "Set aside:   Monday" in out


def test_analyze_with_adjustment(capsys):
    code, out, _ = run_cli(capsys, "analyze", "2024-03-10", "--adjustment", "1")
    assert code == 0
    assert "moon sighting" in out


def test_analyze_bad_date(capsys):
    code, _, err = run_cli(capsys, "analyze", "11/03/2024")
    assert code == 1
    assert "Invalid date value" in err


def test_analyze_out_of_range(capsys):
    code, _, err = run_cli(capsys, "analyze", "1900-01-01")
    assert code == 1
    assert "Cannot convert" in err


def test_prayer(capsys):
    code, out, _ = run_cli(
        capsys, "prayer", "2024-03-11", "--lat", "-6.2088", "--lng", "106.8456"
    )
    assert code == 0
    lines = out.strip().splitlines()
    assert [line.split()[0] for line in lines] == [
        "Imsak",
        "Fajr",
        "Sunrise",
        "Dhuhr",
        "Asr",
        "Maghrib",
        "Isha",
    ]


def test_prayer_polar_error(capsys):
    code, _, err = run_cli(
        capsys, "prayer", "2024-06-21", "--lat", "69.6496", "--lng", "18.956",
        "--preset", "mwl",
    )
    assert code == 1
    assert "Sun never reaches" in err


def test_prayer_invalid_latitude(capsys):
    code, _, err = run_cli(capsys, "prayer", "2024-03-11", "--lat", "95", "--lng", "0")
    assert code == 1
    assert "Invalid latitude" in err


def test_visibility(capsys):
    code, out, _ = run_cli(
        capsys,
        "visibility",
        "2024-03-11T11:08:00Z",
        "--lat",
        "-6.2088",
        "--lng",
        "106.8456",
    )
    assert code == 0
    assert "Crescent meets MABIMS" in out


def test_visibility_bad_instant(capsys):
    code, _, err = run_cli(
        capsys, "visibility", "yesterday", "--lat", "0", "--lng", "0"
    )
    assert code == 1
    assert "Invalid ISO-8601 value" in err


def test_daud(capsys):
    code, out, _ = run_cli(capsys, "daud", "2024-01-01", "--end", "2024-01-07")
    assert code == 0
    assert len(out.strip().splitlines()) == 4


def test_verbose_enables_debug_logging(capsys, caplog):
    with caplog.at_level("DEBUG"):
        code, _, _ = run_cli(capsys, "-v", "analyze", "2024-03-11")
    assert code == 0
    assert any(record.name == "hisab.fiqh.rules" for record in caplog.records)
