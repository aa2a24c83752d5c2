import os

import pytest

from exif_report import main as main_module
from exif_report.metadata.service import ExifReadService


@pytest.fixture
def canned_exif(monkeypatch):
    """Replaces the exifread-backed service with a lookup by file name."""
    metadata = {}

    def parse(self, path):
        return metadata.get(os.path.basename(path), {})

    monkeypatch.setattr(ExifReadService, "parse", parse)
    return metadata


def test_single_photo_in_cwd(tmp_path, monkeypatch, capsys, canned_exif):
    (tmp_path / "photo.jpg").write_bytes(b"\xff\xd8")
    canned_exif["photo.jpg"] = {"DateTime": "2021:01:01 00:00:00"}
    monkeypatch.chdir(tmp_path)

    main_module.main(["extract"])

    assert capsys.readouterr().out == (
        "Filename,DateTime,Latitude,Longitude,Altitude\n"
        "photo.jpg,2021:01:01 00:00:00,,,\n"
    )


def test_separator_and_no_directories(photo_tree, monkeypatch, capsys, canned_exif):
    monkeypatch.chdir(photo_tree.parent)

    main_module.main(["extract", "root/", "-s", ";", "--no-directories"])

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Filename;DateTime;Latitude;Longitude;Altitude",
        "deep.jpeg;;;;",
        "mid.tif;;;;",
        "photo.jpg;;;;",
    ]


def test_directories_included_by_default(photo_tree, monkeypatch, capsys, canned_exif):
    monkeypatch.chdir(photo_tree.parent)

    main_module.main(["extract", "root", "--ignore-case", "-w", "1"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Directory1,Directory2,Directory3,Filename,DateTime,Latitude,Longitude,Altitude"
    assert "root,,,IMG_0001.JPG,,,," in lines
    assert "root,a,b,deep.jpeg,,,," in lines
    assert len(lines) == 5


def test_data_error_exits_without_output(photo_tree, monkeypatch, capsys, canned_exif):
    canned_exif["photo.jpg"] = {"GPSInfo": {
        "GPSLatitudeRef": "S", "GPSLatitude": [1, 2, 3],
        "GPSLongitudeRef": "E", "GPSLongitude": [4, 5, 6],
    }}
    monkeypatch.chdir(photo_tree)

    with pytest.raises(SystemExit) as exc:
        main_module.main(["extract"])

    assert exc.value.code == 1
    assert capsys.readouterr().out == ""


def test_keep_going_prints_partial_report(photo_tree, monkeypatch, capsys, canned_exif):
    canned_exif["photo.jpg"] = {"GPSInfo": {
        "GPSLatitudeRef": "N", "GPSLatitude": [1, 2, 3],
        "GPSLongitudeRef": "W", "GPSLongitude": [4, 5, 6],
    }}
    monkeypatch.chdir(photo_tree)

    with pytest.raises(SystemExit) as exc:
        main_module.main(["extract", "--keep-going"])

    assert exc.value.code == 1
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert not any("photo.jpg" in line for line in lines)


def test_missing_path_exits_non_zero(tmp_path, capsys, canned_exif):
    with pytest.raises(SystemExit) as exc:
        main_module.main(["extract", str(tmp_path / "missing")])
    assert exc.value.code == 1
    assert capsys.readouterr().out == ""


def test_empty_separator_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        main_module.main(["extract", "-s", ""])
    assert exc.value.code == 2


def test_command_required():
    with pytest.raises(SystemExit) as exc:
        main_module.parse_args([])
    assert exc.value.code == 2


def test_parse_args_defaults():
    args = main_module.parse_args(["extract"])
    assert args.path == "."
    assert args.separator == ","
    assert args.directories is True
    assert args.keep_going is False
    assert args.ignore_case is False
