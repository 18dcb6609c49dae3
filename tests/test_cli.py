import io

import pytest
from PIL import Image

from cursorkit.ani import AniFile
from cursorkit.cli import (
    build_animation,
    dump_cursor,
    encode_image,
    get_image,
    hue_rotate,
    main,
)
from cursorkit.cur import CursorFile, CursorFrame


def _sample(size=(16, 16)):
    image = Image.new("RGBA", size, (200, 30, 60, 255))
    image.putpixel((0, 0), (10, 220, 40, 128))
    image.putpixel((1, 0), (0, 0, 0, 0))
    return image


def _png_bytes(size):
    buffer = io.BytesIO()
    Image.new("RGBA", size, (1, 2, 3, 4)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_get_image_loads_file(tmp_path):
    path = tmp_path / "cursor.png"
    _sample((12, 10)).save(path)
    image = get_image(path)
    assert image.size == (12, 10)
    assert image.getpixel((0, 0)) == (10, 220, 40, 128)


def test_get_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_image(tmp_path / "missing.png")


def test_hue_rotate_zero_is_identity():
    image = _sample()
    rotated = hue_rotate(image, 0)
    assert list(rotated.getdata()) == list(image.getdata())


def test_hue_rotate_keeps_grey_and_alpha():
    image = Image.new("RGBA", (4, 4), (120, 120, 120, 77))
    rotated = hue_rotate(image, 75)
    for r, g, b, a in rotated.getdata():
        assert a == 77
        assert abs(r - 120) <= 1 and abs(g - 120) <= 1 and abs(b - 120) <= 1


def test_hue_rotate_changes_colour_and_full_turn_returns():
    image = _sample()
    half = hue_rotate(image, 180)
    assert half.getpixel((5, 5))[:3] != image.getpixel((5, 5))[:3]
    full = hue_rotate(image, 360)
    for before, after in zip(image.getdata(), full.getdata()):
        assert all(abs(x - y) <= 1 for x, y in zip(before, after))


def test_hue_rotate_rgb_stays_rgb():
    image = Image.new("RGB", (3, 3), (255, 0, 0))
    rotated = hue_rotate(image, 120)
    assert rotated.mode == "RGB"
    assert rotated.size == (3, 3)


def test_encode_image_produces_ico():
    data = encode_image(_sample((32, 32)))
    assert data[:4] == b"\x00\x00\x01\x00"
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == "ICO"
        assert decoded.size == (32, 32)


def test_encode_image_rejects_oversized():
    with pytest.raises(ValueError):
        encode_image(Image.new("RGBA", (300, 20)))


def test_build_animation_defaults():
    animation = build_animation(_sample())
    assert len(animation.frames) == 14
    assert animation.sequence == list(range(14))
    assert animation.header.width == 16
    assert animation.header.height == 16
    for frame in animation.frames:
        assert (frame.hotspot_x, frame.hotspot_y) == (8, 9)
        assert frame.duration == 100


def test_build_animation_first_frame_matches_source():
    image = _sample()
    animation = build_animation(image, steps=3, step_degrees=30, hotspot=(1, 2), duration=5)
    assert len(animation.frames) == 3
    with Image.open(io.BytesIO(animation.frames[0].image_data)) as decoded:
        assert list(decoded.convert("RGBA").getdata()) == list(image.getdata())


def test_build_animation_round_trip():
    animation = build_animation(_sample(), steps=4)
    buffer = io.BytesIO()
    animation.encode(buffer)
    buffer.seek(0)
    decoded = AniFile.decode(buffer)
    assert len(decoded.frames) == 4
    assert [f.image_data for f in decoded.frames] == [
        f.image_data for f in animation.frames
    ]
    assert all((f.width, f.height) == (16, 16) for f in decoded.frames)


def test_dump_cursor_writes_frames(tmp_path):
    small = _png_bytes((16, 16))
    large = _png_bytes((32, 32))
    cursor = CursorFile(
        [CursorFrame(16, 16, 3, 4, small), CursorFrame(32, 32, 5, 6, large)]
    )
    source = tmp_path / "output.cur"
    with open(source, "wb") as stream:
        cursor.encode(stream)

    outdir = tmp_path / "frames"
    result = dump_cursor(source, outdir)
    assert len(result.frames) == 2
    assert (outdir / "test 16x16.png").read_bytes() == small
    assert (outdir / "test 32x32.png").read_bytes() == large


def test_main_animate_creates_file(tmp_path):
    source = tmp_path / "cursor.png"
    _sample().save(source)
    target = tmp_path / "final.ani"
    status = main(["animate", "--input", str(source), "--output", str(target), "--steps", "3"])
    assert status == 0
    with open(target, "rb") as stream:
        decoded = AniFile.decode(stream)
    assert len(decoded.frames) == 3
    assert decoded.header.num_frames == 3


def test_main_animate_refuses_existing_output(tmp_path):
    source = tmp_path / "cursor.png"
    _sample().save(source)
    target = tmp_path / "final.ani"
    target.write_bytes(b"keep")
    status = main(["animate", "--input", str(source), "--output", str(target)])
    assert status == 1
    assert target.read_bytes() == b"keep"


def test_main_dump_prints_summary(tmp_path, capsys):
    cursor = CursorFile.single(CursorFrame(16, 16, 3, 4, _png_bytes((16, 16))))
    source = tmp_path / "output.cur"
    with open(source, "wb") as stream:
        cursor.encode(stream)
    status = main(["dump", "--input", str(source), "--outdir", str(tmp_path / "out")])
    assert status == 0
    out = capsys.readouterr().out
    assert out == str(cursor)
    assert (tmp_path / "out" / "test 16x16.png").exists()


def test_main_dump_bad_file(tmp_path):
    source = tmp_path / "bad.cur"
    source.write_bytes(b"\x00\x00\x01\x00\x01\x00")
    status = main(["dump", "--input", str(source), "--outdir", str(tmp_path / "out")])
    assert status == 1