import PIL.Image
import pytest

import mandel
from mandelbrot.escape import escape_time
from mandelbrot.plane import pixel_to_point
from mandelbrot.renderer import intensity


def test_renders_example_scenario(tmp_path):
    path = tmp_path / "mandel.png"
    bounds = (1000, 750)
    upper_left = complex(-1.20, 0.35)
    lower_right = complex(-1.0, 0.20)

    status = mandel.main([str(path), "1000x750", "-1.20,0.35", "-1,0.20"])

    assert status == 0
    with PIL.Image.open(path) as image:
        assert image.format == "PNG"
        assert image.mode == "L"
        assert image.size == bounds
        data = image.tobytes()

    assert len(data) == bounds[0] * bounds[1]
    for col, row in [(0, 0), (999, 0), (0, 749), (999, 749), (500, 375), (123, 456), (877, 61), (250, 700)]:
        point = pixel_to_point(bounds, (col, row), upper_left, lower_right)
        assert data[row * bounds[0] + col] == intensity(escape_time(point, 255))


def test_scalar_backend_with_options(tmp_path):
    path = tmp_path / "small.bmp"

    status = mandel.main([str(path), "16x12", "-2,1.2", "0.6,-1.2", "--backend", "scalar", "--limit", "32", "--format", "bmp"])

    assert status == 0
    with PIL.Image.open(path) as image:
        assert image.format == "BMP"
        assert image.size == (16, 12)


@pytest.mark.parametrize("argv", [
    [],
    ["out.png"],
    ["out.png", "10x10", "-1,1"],
    ["out.png", "10x10", "-1,1", "1,-1", "extra"],
])
def test_wrong_argument_count(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        mandel.main(argv)

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "Example:" in err
    assert mandel.EXAMPLE_ARGS in err


@pytest.mark.parametrize("argv, message", [
    (["out.png", "10y10", "-1,1", "1,-1"], "image dimensions"),
    (["out.png", "0x10", "-1,1", "1,-1"], "image dimensions"),
    (["out.png", "10x10", "-1;1", "1,-1"], "upper left corner point"),
    (["out.png", "10x10", "-1,1", "1,-1x"], "lower right corner point"),
    (["out.png", "10x10", "-1,1", "1,-1", "--limit", "300"], "--limit"),
])
def test_parse_errors_name_the_argument(tmp_path, argv, message, capsys):
    argv = [str(tmp_path / argv[0]), *argv[1:]]
    with pytest.raises(SystemExit) as excinfo:
        mandel.main(argv)

    assert excinfo.value.code == 1
    assert message in capsys.readouterr().err
    assert not (tmp_path / "out.png").exists()


def test_write_failure(tmp_path, capsys):
    path = tmp_path / "missing" / "out.png"

    status = mandel.main([str(path), "4x4", "-1,1", "1,-1"])

    assert status == 2
    assert "error writing image file" in capsys.readouterr().err


def test_verbose_logging(tmp_path, capsys):
    status = mandel.main([str(tmp_path / "out.png"), "4x3", "-1,1", "1,-1", "-v"])

    assert status == 0
    out = capsys.readouterr().out
    assert "TensorFlow version" in out
    assert "Rendered in" in out
