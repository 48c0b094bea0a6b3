import os

from gamestore.application.services.image_storage import ImageStorage


def test_store_creates_directory_and_writes_bytes(tmp_path):
    upload_dir = tmp_path / "nested" / "uploads"
    storage = ImageStorage(str(upload_dir))

    image = storage.store(b"abc", "box-art.JPG")

    assert upload_dir.is_dir()
    assert image.filename.endswith(".jpg")
    assert image.url == f"/uploads/{image.filename}"
    with open(image.path, "rb") as f:
        assert f.read() == b"abc"


def test_store_without_extension(tmp_path):
    image = ImageStorage(str(tmp_path)).store(b"abc", "cover")
    assert "." not in image.filename


def test_rapid_uploads_never_collide(tmp_path):
    storage = ImageStorage(str(tmp_path))
    names = {storage.store(b"x", "cover.png").filename for _ in range(50)}
    assert len(names) == 50
    assert len(os.listdir(tmp_path)) == 50


def test_custom_url_prefix(tmp_path):
    image = ImageStorage(str(tmp_path), url_prefix="/static/img/").store(b"x", "a.gif")
    assert image.url == f"/static/img/{image.filename}"


def test_discard_removes_file_and_tolerates_missing(tmp_path):
    storage = ImageStorage(str(tmp_path))
    image = storage.store(b"x", "a.png")

    storage.discard(image)
    assert not os.path.exists(image.path)
    storage.discard(image)
