"""
Name: Event Use Case Tests

Responsibilities:
  - Cover selection among uploaded files
  - Gallery append on update, file cleanup when storage or the store fails
  - Media removal on delete
"""

from datetime import date
from unittest.mock import patch

import pytest

from portal.application.usecases.events import (
    CreateEventUseCase,
    DeleteEventUseCase,
    EventInput,
    GetEventUseCase,
    ListEventsUseCase,
    UpdateEventUseCase,
    pick_cover,
)
from portal.application.usecases.results import ServiceErrorCode
from portal.crosscutting.exceptions import DatabaseError, StorageError
from portal.domain.services import MediaUpload
from portal.identity.users import Claims, UserRole
from portal.infrastructure.repositories import InMemoryEventRepository

pytestmark = pytest.mark.unit

ADMIN = Claims(user_id=2, email="a@example.com", role=UserRole.ADMIN, branch="NYC")


class FakeStorage:
    """Records saves/deletes; fails on filenames listed in `broken`."""

    def __init__(self, broken: tuple[str, ...] = ()) -> None:
        self.saved: list[str] = []
        self.deleted: list[str] = []
        self._broken = broken

    def save(self, upload: MediaUpload) -> str:
        if upload.filename in self._broken:
            raise StorageError("disk full")
        url = f"/uploads/{len(self.saved) + 1}-{upload.filename}"
        self.saved.append(url)
        return url

    def delete(self, url: str) -> None:
        self.deleted.append(url)


class BrokenEventRepository(InMemoryEventRepository):
    """Store whose inserts fail after the files were already saved."""

    def create_event(self, event, images):
        raise DatabaseError("connection reset")


def _upload(name: str) -> MediaUpload:
    return MediaUpload(filename=name, content=b"data", content_type="image/png")


def _input(**overrides) -> EventInput:
    base = dict(title="Party", description="Yearly party", event_date=date(2025, 12, 20))
    base.update(overrides)
    return EventInput(**base)


@pytest.fixture
def repo():
    return InMemoryEventRepository()


class TestPickCover:
    @pytest.mark.parametrize(
        "index, expected", [(None, "a"), (1, "b"), (5, "a"), (-1, "a")]
    )
    def test_index(self, index, expected):
        assert pick_cover(["a", "b"], index) == expected

    def test_no_urls(self):
        assert pick_cover([], 0) is None


class TestCreate:
    def test_cover_from_uploads(self, repo):
        storage = FakeStorage()

        event = CreateEventUseCase(repo, storage, max_images=5).execute(
            ADMIN, _input(uploads=[_upload("a.png"), _upload("b.mp4")], cover_index=1)
        ).value

        assert event.images == storage.saved
        assert event.image_url == storage.saved[1]
        assert event.image_type == "video"
        assert event.created_by == ADMIN.user_id

    def test_legacy_image_url_without_uploads(self, repo):
        event = CreateEventUseCase(repo, FakeStorage(), max_images=5).execute(
            ADMIN, _input(image_url="https://cdn.example.com/x.jpg")
        ).value

        assert event.image_url == "https://cdn.example.com/x.jpg"
        assert event.images == ["https://cdn.example.com/x.jpg"]
        assert event.image_type == "image"

    def test_too_many_files(self, repo):
        storage = FakeStorage()

        result = CreateEventUseCase(repo, storage, max_images=1).execute(
            ADMIN, _input(uploads=[_upload("a.png"), _upload("b.png")])
        )

        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert storage.saved == []

    def test_required_fields(self, repo):
        result = CreateEventUseCase(repo, FakeStorage(), max_images=5).execute(
            ADMIN, _input(event_date=None)
        )

        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_failed_upload_cleans_up_saved_files(self, repo):
        storage = FakeStorage(broken=("b.png",))

        with pytest.raises(StorageError):
            CreateEventUseCase(repo, storage, max_images=5).execute(
                ADMIN, _input(uploads=[_upload("a.png"), _upload("b.png")])
            )

        assert storage.deleted == storage.saved
        assert ListEventsUseCase(repo).execute().value == []

    def test_failed_store_write_discards_saved_files(self):
        storage = FakeStorage()

        with pytest.raises(DatabaseError):
            CreateEventUseCase(BrokenEventRepository(), storage, max_images=5).execute(
                ADMIN, _input(uploads=[_upload("a.png"), _upload("b.png")])
            )

        assert len(storage.saved) == 2
        assert storage.deleted == storage.saved


class TestUpdateDelete:
    def test_update_appends_gallery(self, repo):
        storage = FakeStorage()
        created = CreateEventUseCase(repo, storage, max_images=5).execute(
            ADMIN, _input(uploads=[_upload("a.png")])
        ).value

        updated = UpdateEventUseCase(repo, storage, max_images=5).execute(
            created.id, EventInput(title="Party 2", uploads=[_upload("b.png")], cover_index=0)
        ).value

        assert updated.title == "Party 2"
        assert updated.description == "Yearly party"
        assert updated.images == storage.saved
        assert updated.image_url == storage.saved[1]

    def test_update_rejects_blank_title(self, repo):
        created = CreateEventUseCase(repo, FakeStorage(), max_images=5).execute(
            ADMIN, _input()
        ).value

        result = UpdateEventUseCase(repo, FakeStorage(), max_images=5).execute(
            created.id, EventInput(title="  ")
        )

        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_update_missing(self, repo):
        result = UpdateEventUseCase(repo, FakeStorage(), max_images=5).execute(
            42, EventInput(title="x")
        )

        assert result.error.code == ServiceErrorCode.NOT_FOUND

    def test_delete_removes_media(self, repo):
        storage = FakeStorage()
        created = CreateEventUseCase(repo, storage, max_images=5).execute(
            ADMIN, _input(uploads=[_upload("a.png"), _upload("b.png")])
        ).value

        assert DeleteEventUseCase(repo, storage).execute(created.id).ok
        assert storage.deleted == storage.saved
        assert GetEventUseCase(repo).execute(created.id).error.code == ServiceErrorCode.NOT_FOUND

    def test_listing_newest_event_first(self, repo):
        create = CreateEventUseCase(repo, FakeStorage(), max_images=5)
        create.execute(ADMIN, _input(title="Old", event_date=date(2025, 1, 1)))
        create.execute(ADMIN, _input(title="New", event_date=date(2025, 9, 1)))

        assert [e.title for e in ListEventsUseCase(repo).execute().value] == ["New", "Old"]

    def test_failed_update_write_discards_new_files(self, repo):
        storage = FakeStorage()
        created = CreateEventUseCase(repo, storage, max_images=5).execute(
            ADMIN, _input(uploads=[_upload("a.png")])
        ).value

        with patch.object(
            repo, "update_event", side_effect=DatabaseError("connection reset")
        ):
            with pytest.raises(DatabaseError):
                UpdateEventUseCase(repo, storage, max_images=5).execute(
                    created.id, EventInput(uploads=[_upload("b.png")])
                )

        assert storage.deleted == [storage.saved[1]]
        assert repo.get_event(created.id).images == [storage.saved[0]]
