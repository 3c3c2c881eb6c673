"""Preview video activation tests."""

import pytest

from storefront.schemas.content import PreviewVideo
from storefront.services.data_service import DataService, VideoNotFoundError
from storefront.storage.document_store import VIDEO_COLLECTION
from storefront.storage.local_cache import LocalCacheStore


def _active_ids(videos: list[PreviewVideo]) -> list[str]:
    return [video.id for video in videos if video.is_active]


def test_saving_active_video_deactivates_others_locally(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    service.save_preview_video(PreviewVideo(url="https://cdn.example.com/a.mp4", is_active=True))
    second = service.save_preview_video(PreviewVideo(url="https://cdn.example.com/b.mp4", is_active=True))

    videos = service.get_videos()

    assert videos[0].id == second.id
    assert _active_ids(videos) == [second.id]
    assert service.get_active_preview_video().id == second.id


def test_activate_switches_single_active_video_remotely(local_cache: LocalCacheStore, remote_store) -> None:
    service = DataService(local_cache, remote_store)
    first = service.save_preview_video(PreviewVideo(url="https://cdn.example.com/a.mp4", is_active=True))
    second = service.save_preview_video(PreviewVideo(url="https://cdn.example.com/b.mp4", is_active=True))
    assert remote_store.collections[VIDEO_COLLECTION][first.id]["isActive"] is False

    activated = service.activate_preview_video(first.id)

    assert activated.id == first.id
    collection, updates = remote_store.batch_calls[-1]
    assert collection == VIDEO_COLLECTION
    assert updates == {first.id: {"isActive": True}, second.id: {"isActive": False}}
    assert _active_ids(service.get_videos()) == [first.id]
    assert service.get_active_preview_video().id == first.id


def test_activate_unknown_video_raises(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)

    with pytest.raises(VideoNotFoundError):
        service.activate_preview_video("vid_missing")


def test_active_lookup_falls_back_to_local_cache(local_cache: LocalCacheStore, remote_store) -> None:
    service = DataService(local_cache, remote_store)
    saved = service.save_preview_video(PreviewVideo(url="https://cdn.example.com/a.mp4", is_active=True))
    remote_store.available = False

    assert service.get_active_preview_video().id == saved.id


def test_no_active_video_after_delete(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    saved = service.save_preview_video(PreviewVideo(url="https://cdn.example.com/a.mp4", is_active=True))

    service.delete_preview_video(saved.id)

    assert service.get_active_preview_video() is None
    assert service.get_videos() == []
