"""Post image upload tests."""

import pytest

from blog_api.api import images


@pytest.fixture
def images_dir(tmp_path, monkeypatch):
    """Point uploads at a temporary directory."""
    directory = tmp_path / "images"
    monkeypatch.setattr(images.settings, "images_dir", str(directory))
    return directory


def test_upload_requires_authentication(client, images_dir):
    """Test that anonymous uploads are rejected with the error envelope."""
    response = client.put(
        "/post-image", files={"image": ("pic.png", b"\x89PNG", "image/png")}
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated!", "data": None}


def test_upload_png(client, auth_headers, images_dir):
    """Test storing an accepted image."""
    response = client.put(
        "/post-image",
        headers=auth_headers,
        files={"image": ("pic.png", b"\x89PNG", "image/png")},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "File stored."
    assert data["filePath"].startswith("images/")
    assert data["filePath"].endswith("-pic.png")
    stored = images_dir / data["filePath"].split("/", 1)[1]
    assert stored.read_bytes() == b"\x89PNG"


def test_gif_is_dropped_not_rejected(client, auth_headers, images_dir):
    """Test that unsupported types look like no file at all."""
    response = client.put(
        "/post-image",
        headers=auth_headers,
        files={"image": ("anim.gif", b"GIF89a", "image/gif")},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "No image provided!"}
    assert not images_dir.exists() or not any(images_dir.iterdir())


def test_no_file(client, auth_headers, images_dir):
    """Test an upload request without a file."""
    response = client.put("/post-image", headers=auth_headers, data={"oldPath": "images/x.png"})
    assert response.status_code == 200
    assert response.json() == {"message": "No image provided!"}


def test_old_image_replaced(client, auth_headers, images_dir):
    """Test that the previous image is deleted once the new one is stored."""
    images_dir.mkdir()
    old = images_dir / "old.jpg"
    old.write_bytes(b"old")

    response = client.put(
        "/post-image",
        headers=auth_headers,
        data={"oldPath": "images/old.jpg"},
        files={"image": ("new.jpg", b"new", "image/jpeg")},
    )
    assert response.status_code == 201
    assert not old.exists()


def test_old_path_outside_images_dir_ignored(client, auth_headers, images_dir, tmp_path):
    """Test that oldPath cannot delete files elsewhere."""
    outside = tmp_path / "keep.txt"
    outside.write_text("keep")

    response = client.put(
        "/post-image",
        headers=auth_headers,
        data={"oldPath": "images/../keep.txt"},
        files={"image": ("new.png", b"new", "image/png")},
    )
    assert response.status_code == 201
    assert outside.exists()


def test_malformed_upload_uses_error_envelope(client, auth_headers, images_dir):
    """Test that request validation errors use the message/data envelope."""
    response = client.put("/post-image", headers=auth_headers, data={"image": "not a file"})
    assert response.status_code == 422
    body = response.json()
    assert body["message"] == "Invalid input."
    assert isinstance(body["data"], list)
    assert "detail" not in body
