"""Tests for the command line entry point."""

from PIL import Image

import main


def test_filters_command_lists_catalog(capsys) -> None:
    assert main.main(["filters"]) == 0

    out = capsys.readouterr().out
    assert "cherry" in out
    assert "sepia(" in out


def test_instant_booth_writes_strip(tmp_path, capsys) -> None:
    frame = tmp_path / "frame.png"
    Image.new("RGB", (64, 48), (200, 120, 40)).save(frame)

    code = main.main(["booth", str(frame), "--count", "2", "--timer", "1", "--instant", "--output", str(tmp_path)])

    assert code == 0
    strips = list(tmp_path.glob("photobooth-*.png"))
    assert len(strips) == 1
    assert "Strip saved" in capsys.readouterr().out


def test_booth_rejects_out_of_range_count(tmp_path) -> None:
    frame = tmp_path / "frame.png"
    Image.new("RGB", (8, 8)).save(frame)

    assert main.main(["booth", str(frame), "--count", "9", "--instant"]) == 2


def test_frames_command_lists_frames(capsys) -> None:
    assert main.main(["frames"]) == 0

    out = capsys.readouterr().out
    assert "polaroid" in out
    assert "20/20/20/80px" in out
