from io import BytesIO

import pytest
from PIL import Image

from storefront.errors import ValidationError
from storefront.services.images import ImageStorage


def png_bytes(size=(4, 4)):
    buf = BytesIO()
    Image.new("RGB", size, (200, 40, 40)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def images(tmp_path):
    return ImageStorage(tmp_path / "images", "http://testserver/", max_bytes=1024 * 1024)


def test_save_writes_file_and_returns_public_url(images):
    url = images.save("dish.PNG", png_bytes())

    assert url.startswith("http://testserver/images/menu-image-")
    assert url.endswith(".png")
    name = url.rsplit("/", 1)[1]
    assert (images.images_dir / name).read_bytes() == png_bytes()


def test_two_saves_get_distinct_names(images):
    assert images.save("a.png", png_bytes()) != images.save("a.png", png_bytes())


@pytest.mark.parametrize("filename", ["menu.pdf", "script.js", "noext", None])
def test_rejects_non_image_extensions(images, filename):
    with pytest.raises(ValidationError, match="Only image files"):
        images.save(filename, png_bytes())


def test_rejects_content_that_is_not_an_image(images):
    with pytest.raises(ValidationError, match="not a valid image"):
        images.save("fake.jpg", b"plain text")


def test_rejects_oversized_upload(tmp_path):
    storage = ImageStorage(tmp_path, "http://testserver", max_bytes=10)
    with pytest.raises(ValidationError, match="size limit"):
        storage.save("big.png", png_bytes())


class RecordingFile:
    def __init__(self, content):
        self.buf = BytesIO(content)
        self.requested = []

    def read(self, size=-1):
        self.requested.append(size)
        return self.buf.read(size)


def test_read_upload_stops_one_byte_past_the_limit(tmp_path):
    storage = ImageStorage(tmp_path, "http://testserver", max_bytes=100)
    upload = RecordingFile(b"x" * 10_000)

    content = storage.read_upload(upload)

    assert upload.requested == [101]
    assert len(content) == 101
    with pytest.raises(ValidationError, match="size limit"):
        storage.save("big.png", content)


def test_read_upload_returns_small_files_whole(tmp_path):
    storage = ImageStorage(tmp_path, "http://testserver", max_bytes=1024 * 1024)
    assert storage.read_upload(BytesIO(png_bytes())) == png_bytes()
