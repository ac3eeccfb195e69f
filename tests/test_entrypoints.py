import argparse

import cv2
import numpy as np
import pytest

import add_border
from batch import read_manifest


def test_entrypoint_help():
    with pytest.raises(SystemExit) as excinfo:
        add_border.main(["--help"])

    assert excinfo.value.code == 0


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["paths.txt"],
        ["-o", "out"],
    ],
)
def test_missing_inputs_print_usage_and_exit_zero(argv, capsys):
    assert add_border.main(argv) == 0
    out = capsys.readouterr().out
    assert "No pathfile or output_dir are given" in out
    assert "usage: add_border" in out


def test_bad_bool_value_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        add_border.main(["--border", "maybe", "-o", "out", "paths.txt"])
    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    "value,expected",
    [("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False), ("off", False)],
)
def test_str_to_bool(value, expected):
    assert add_border.str_to_bool(value) is expected


def test_str_to_bool_rejects_garbage():
    with pytest.raises(argparse.ArgumentTypeError):
        add_border.str_to_bool("maybe")


def test_binary_flag_normalizes_config():
    args = add_border.build_parser().parse_args(
        ["--use-threshold", "false", "--binary-image", "true", "-o", "out", "p.txt"]
    )
    config = add_border.config_from_args(args)
    assert config.use_threshold is True
    assert config.binary_image is True


def test_defaults_match_documented_flags():
    args = add_border.build_parser().parse_args(["-o", "out", "p.txt"])
    assert args.border is True
    assert args.use_hist_eq is False
    assert args.use_threshold is False
    assert args.binary_image is False
    assert args.output_pathfile is None


def test_run_success(tmp_path, make_pathfile):
    pathfile, _ = make_pathfile(["a.png", "b.png"])
    out_dir = tmp_path / "out"

    code = add_border.main(
        ["-q", "-o", str(out_dir), "--use-hist-eq", "true", "--use-threshold", "true",
         str(pathfile)]
    )

    assert code == 0
    assert read_manifest(out_dir / "images.txt") == [
        str(out_dir / "a_wb.png"),
        str(out_dir / "b_wb.png"),
    ]


def test_run_without_border_keeps_size(tmp_path, make_pathfile):
    pathfile, _ = make_pathfile(["a.png"], shape=(30, 40))
    out_dir = tmp_path / "out"

    assert add_border.main(["-q", "-o", str(out_dir), "--border", "false", str(pathfile)]) == 0

    written = cv2.imread(str(out_dir / "a_wb.png"), cv2.IMREAD_GRAYSCALE)
    assert written.shape == (30, 40)


def test_custom_output_pathfile(tmp_path, make_pathfile):
    pathfile, _ = make_pathfile(["a.png"])
    manifest = tmp_path / "manifest.txt"

    code = add_border.main(
        ["-q", "-o", str(tmp_path / "out"), "--output-pathfile", str(manifest), str(pathfile)]
    )

    assert code == 0
    assert read_manifest(manifest) == [str(tmp_path / "out" / "a_wb.png")]


def test_write_failure_exits_one(tmp_path, make_pathfile, failing_imwrite):
    pathfile, _ = make_pathfile(["a.png", "b.png", "c.png"])
    out_dir = tmp_path / "out"
    failing_imwrite(fail_on=2)

    assert add_border.main(["-q", "-o", str(out_dir), str(pathfile)]) == 1
    assert read_manifest(out_dir / "images.txt") == [str(out_dir / "a_wb.png")]


def test_missing_pathfile_exits_one(tmp_path):
    assert add_border.main(["-q", "-o", str(tmp_path / "out"), str(tmp_path / "nope.txt")]) == 1


def test_odd_tag_width_exits_one(tmp_path, make_pathfile):
    pathfile, _ = make_pathfile(["a.png"])
    code = add_border.main(["-q", "-o", str(tmp_path / "out"), "--tag-width", "7", str(pathfile)])
    assert code == 1


def test_tag_size_sets_border(tmp_path, make_pathfile):
    pathfile, _ = make_pathfile(["a.png"], shape=(10, 10))
    out_dir = tmp_path / "out"

    add_border.main(
        ["-q", "-o", str(out_dir), "--tag-width", "8", "--tag-height", "4", str(pathfile)]
    )

    written = cv2.imread(str(out_dir / "a_wb.png"), cv2.IMREAD_GRAYSCALE)
    assert written.shape == (14, 18)
    assert written.dtype == np.uint8


def test_output_pathfile_is_directory_exits_one(tmp_path, make_pathfile, caplog):
    pathfile, _ = make_pathfile(["a.png"])
    manifest_dir = tmp_path / "manifest_dir"
    manifest_dir.mkdir()

    code = add_border.main(
        ["-q", "-o", str(tmp_path / "out"), "--output-pathfile", str(manifest_dir),
         str(pathfile)]
    )

    assert code == 1
    assert str(manifest_dir) in caplog.text


def test_output_dir_is_existing_file_exits_one(tmp_path, make_pathfile, caplog):
    pathfile, _ = make_pathfile(["a.png"])
    not_a_dir = tmp_path / "out"
    not_a_dir.write_text("", encoding="utf-8")

    assert add_border.main(["-q", "-o", str(not_a_dir), str(pathfile)]) == 1
    assert str(not_a_dir) in caplog.text
