import pytest
from PIL import Image

from docinbox.adapters.thumbnails_pillow import UNIFORM_ASPECT, PillowThumbnailRenderer
from docinbox.domain.errors import ThumbnailError
from docinbox.ports.thumbnail_port import ThumbnailStyle


def _source_png(tmp_path, size=(120, 80)) -> str:
    path = tmp_path / "page.png"
    Image.new("RGB", size, (20, 40, 60)).save(path, format="PNG")
    return str(path)


def test_uniform_thumbnail_written_to_temp_destination(tmp_path) -> None:
    dest = tmp_path / "x.png.tmp"

    PillowThumbnailRenderer().render(_source_png(tmp_path), str(dest), 60, ThumbnailStyle.UNIFORM)

    with Image.open(dest) as image:
        assert image.format == "PNG"
        assert image.size == (60, int(60 * UNIFORM_ASPECT))
        assert image.getpixel((0, 0)) == (210, 210, 210)


def test_plain_thumbnail_keeps_aspect_ratio(tmp_path) -> None:
    dest = tmp_path / "plain.png.tmp"

    PillowThumbnailRenderer().render(_source_png(tmp_path), str(dest), 30, ThumbnailStyle.PLAIN)

    with Image.open(dest) as image:
        assert image.size == (30, 20)


def test_unreadable_image_raises_thumbnail_error(tmp_path) -> None:
    source = tmp_path / "broken.png"
    source.write_bytes(b"not an image")

    with pytest.raises(ThumbnailError):
        PillowThumbnailRenderer().render(
            str(source), str(tmp_path / "out.png.tmp"), 60, ThumbnailStyle.UNIFORM
        )
    assert not (tmp_path / "out.png.tmp").exists()
