"""Announcement and preview video endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from storefront.api.deps import get_current_admin, get_data_service
from storefront.schemas.auth import AdminUser
from storefront.schemas.content import Announcement, PreviewVideo
from storefront.services.data_service import DataService, VideoNotFoundError

router: APIRouter = APIRouter()


@router.get("/announcements", response_model=list[Announcement])
def list_active_announcements(data_service: DataService = Depends(get_data_service)) -> list[Announcement]:
    """Announcements shown in the storefront rotation."""
    return data_service.get_active_announcements()


@router.get("/announcements/all", response_model=list[Announcement])
def list_announcements(
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> list[Announcement]:
    return data_service.get_announcements()


@router.post("/announcements", response_model=Announcement, status_code=status.HTTP_201_CREATED)
def create_announcement(
    payload: Announcement,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> Announcement:
    if not payload.content.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Announcement content is required")
    return data_service.save_announcement(payload.model_copy(update={"id": ""}))


@router.put("/announcements/{announcement_id}", response_model=Announcement)
def update_announcement(
    announcement_id: str,
    payload: Announcement,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> Announcement:
    return data_service.save_announcement(payload.model_copy(update={"id": announcement_id}))


@router.delete("/announcements/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_announcement(
    announcement_id: str,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> Response:
    data_service.delete_announcement(announcement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/videos/active", response_model=PreviewVideo | None)
def get_active_video(data_service: DataService = Depends(get_data_service)) -> PreviewVideo | None:
    return data_service.get_active_preview_video()


@router.get("/videos", response_model=list[PreviewVideo])
def list_videos(
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> list[PreviewVideo]:
    return data_service.get_videos()


@router.post("/videos", response_model=PreviewVideo, status_code=status.HTTP_201_CREATED)
def create_video(
    payload: PreviewVideo,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> PreviewVideo:
    if not payload.url.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Video URL is required")
    return data_service.save_preview_video(payload.model_copy(update={"id": ""}))


@router.put("/videos/{video_id}", response_model=PreviewVideo)
def update_video(
    video_id: str,
    payload: PreviewVideo,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> PreviewVideo:
    return data_service.save_preview_video(payload.model_copy(update={"id": video_id}))


@router.post("/videos/{video_id}/activate", response_model=PreviewVideo)
def activate_video(
    video_id: str,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> PreviewVideo:
    try:
        return data_service.activate_preview_video(video_id)
    except VideoNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Video not found") from exc


@router.delete("/videos/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_video(
    video_id: str,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> Response:
    data_service.delete_preview_video(video_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
