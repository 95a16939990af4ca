from roomsdemo.cli import main


def test_preview_with_fixed_offset(capsys):
    assert main(["preview", "--offset", "2", "--count", "3"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "offset 2"
    assert [line.split()[1] for line in out[1:]] == ["Forest", "Countryside", "Cave"]


def test_preview_with_seed_is_reproducible(capsys):
    main(["preview", "--seed", "5", "--count", "4"])
    first = capsys.readouterr().out
    main(["preview", "--seed", "5", "--count", "4"])
    assert capsys.readouterr().out == first


def test_theme_command(capsys):
    assert main(["theme", "25", "--offset", "2"]) == 0
    out = capsys.readouterr().out.strip()
    assert out == "room 25: previous=Cave current=Backwaters next=Desert"


def test_invalid_room_reports_error(capsys):
    assert main(["theme", "0", "--offset", "2"]) == 1
    assert "error:" in capsys.readouterr().err


def test_invalid_offset_reports_error(capsys):
    assert main(["preview", "--offset", "9"]) == 1


def test_malformed_settings_file_reports_error(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("rooms: [unclosed\n", encoding="utf-8")
    assert main(["--settings", str(bad), "preview", "--offset", "2"]) == 1
    assert "error:" in capsys.readouterr().err


def test_wrongly_typed_setting_reports_error(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("rooms:\n  jump_room: abc\n", encoding="utf-8")
    assert main(["--settings", str(bad), "preview", "--offset", "2"]) == 1
    assert "jump_room" in capsys.readouterr().err
