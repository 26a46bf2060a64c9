import pytest

from flashdeck.core.exceptions import NotFoundError, StorageError, ValidationError
from flashdeck.services.media_service import MediaStore
from flashdeck.utils.validation import require_text, validate_image_upload


@pytest.mark.unit
class TestMediaStore:
    """Filesystem media store"""

    def test_generated_names_are_unique_and_keep_extension(self):
        names = {MediaStore.generate_filename("Photo.JPG") for _ in range(50)}
        assert len(names) == 50
        assert all(n.startswith("flashcard-") and n.endswith(".jpg") for n in names)

    def test_name_without_extension(self):
        assert "." not in MediaStore.generate_filename(None)

    def test_save_and_delete(self, tmp_path):
        media = MediaStore(tmp_path / "uploads")

        filename = media.save(b"data", "a.png")

        assert media.exists(filename)
        assert (tmp_path / "uploads" / filename).read_bytes() == b"data"
        assert media.delete(filename) is True
        assert not media.exists(filename)

    def test_deleting_missing_file_is_not_an_error(self, media_store):
        assert media_store.delete("flashcard-1-abc.png") is False

    @pytest.mark.parametrize("name", ["", "..", "../etc/passwd", "a/b.png", "a\\b.png"])
    def test_path_for_rejects_escapes(self, media_store, name):
        with pytest.raises(NotFoundError):
            media_store.path_for(name)

    def test_delete_ignores_invalid_names(self, media_store):
        assert media_store.delete("../outside.png") is False

    def test_write_failure_is_a_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        media = MediaStore(blocker)

        with pytest.raises(StorageError):
            media.save(b"data", "a.png")

    def test_delete_failure_is_a_storage_error(self, media_store, monkeypatch):
        filename = media_store.save(b"data", "a.png")

        def refuse(self, missing_ok=False):
            raise PermissionError("read-only")

        monkeypatch.setattr("pathlib.Path.unlink", refuse)
        with pytest.raises(StorageError):
            media_store.delete(filename)


@pytest.mark.unit
class TestValidation:
    """Input checks shared by the services"""

    def test_require_text(self):
        require_text("a", "b", message="fine")
        with pytest.raises(ValidationError, match="missing"):
            require_text("a", " ", message="missing")

    @pytest.mark.parametrize(
        "content_type, size",
        [(None, 10), ("text/plain", 10), ("application/octet-stream", 10), ("image/png", 11), ("image/png", 0)],
    )
    def test_rejected_uploads(self, content_type, size):
        with pytest.raises(ValidationError):
            validate_image_upload(content_type, size, max_bytes=10)

    def test_accepted_upload(self):
        validate_image_upload("image/webp", 10, max_bytes=10)
