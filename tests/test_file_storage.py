import pytest

from recruitment.config import settings
from recruitment.services.file_storage import (
    UploadRejected,
    discard_upload,
    path_for_url,
    save_upload,
    validate_upload,
)


def test_validate_sanitizes_name():
    assert validate_upload(b"data", "../../etc/My CV.PDF") == "etc_My_CV.PDF"


@pytest.mark.parametrize(
    "content, name, status",
    [
        (b"", "cv.pdf", 400),
        (b"x", None, 400),
        (b"x", "script.sh", 400),
        (b"x", "noextension", 400),
    ],
)
def test_validate_rejections(content, name, status):
    with pytest.raises(UploadRejected) as exc:
        validate_upload(content, name)
    assert exc.value.status_code == status


def test_oversized_upload_is_413(monkeypatch):
    monkeypatch.setattr(settings, "max_upload_mb", 1)
    with pytest.raises(UploadRejected) as exc:
        validate_upload(b"x" * (1024 * 1024 + 1), "cv.pdf")
    assert exc.value.status_code == 413
    assert exc.value.message == "File too large. Max allowed is 1MB."


def test_save_and_discard(upload_dir):
    url, original = save_upload(b"%PDF", "cover letter.pdf", "applications/u1", label="cover_letter")
    assert original == "cover letter.pdf"
    assert url.startswith("/uploads/applications/u1/")
    assert url.endswith("-cover_letter-cover_letter.pdf")

    path = path_for_url(url)
    assert path.read_bytes() == b"%PDF"
    assert path.parent == upload_dir / "applications" / "u1"

    discard_upload(url)
    assert not path.exists()
    discard_upload(url)


def test_foreign_urls_are_ignored(upload_dir):
    assert path_for_url("https://cdn.example.com/cv.pdf") is None
    discard_upload("https://cdn.example.com/cv.pdf")
