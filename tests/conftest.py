import os

import pytest


class FakeService:
    """
    Stands in for the EXIF decoder. Returns canned metadata keyed by file
    name and raises for names listed in `broken`.
    """

    def __init__(self, metadata=None, broken=()):
        self.metadata = metadata or {}
        self.broken = set(broken)
        self.calls = []

    def parse(self, path):
        self.calls.append(path)
        name = os.path.basename(path)
        if name in self.broken:
            raise ValueError(f"corrupt file {name}")
        return self.metadata.get(name, {})


@pytest.fixture
def fake_service():
    """Returns the FakeService class so tests can configure their own instance."""
    return FakeService


@pytest.fixture
def photo_tree(tmp_path):
    """
    root/
      photo.jpg
      notes.txt
      IMG_0001.JPG
      a/
        mid.tif
        b/
          deep.jpeg
          readme.md
    """
    root = tmp_path / "root"
    deep = root / "a" / "b"
    deep.mkdir(parents=True)

    (root / "photo.jpg").write_bytes(b"\xff\xd8jpeg")
    (root / "notes.txt").write_text("not an image")
    (root / "IMG_0001.JPG").write_bytes(b"\xff\xd8jpeg")
    (root / "a" / "mid.tif").write_bytes(b"II*\x00tiff")
    (deep / "deep.jpeg").write_bytes(b"\xff\xd8jpeg")
    (deep / "readme.md").write_text("# readme")
    return root
