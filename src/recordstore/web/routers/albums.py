from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from recordstore.core.modules.album.models import Album
from recordstore.web.deps import AppDep, AuthTokenDep
from recordstore.web.openapi import SERVER_ERROR_RESPONSES, ClientErrorResponse, DataResponse

router = APIRouter(tags=["albums"], responses=SERVER_ERROR_RESPONSES)


class AlbumRequest(BaseModel):
    """Album fields. On update, omitted fields are cleared."""

    title: str | None = Field(None, description="Album title")
    performer: str | None = Field(None, description="Performing artist")
    cost: float | None = Field(None, description="Price")


@router.get(
    "/albums",
    summary="List albums",
    description="Get every album in the catalog.",
    operation_id="listAlbums",
)
async def list_albums(app: AppDep) -> DataResponse[list[Album]]:
    return DataResponse(data=await app.get_albums())


@router.get(
    "/albums/{album_id}",
    summary="Get album",
    description="Get an album by ID. An unknown ID yields a null data payload.",
    operation_id="getAlbum",
    responses={400: {"model": ClientErrorResponse, "description": "Malformed album ID"}},
)
async def get_album(album_id: UUID, app: AppDep) -> DataResponse[Album | None]:
    return DataResponse(data=await app.get_album(album_id))


@router.post(
    "/albums",
    summary="Create album",
    description="Add an album to the catalog. The body may be omitted.",
    operation_id="createAlbum",
    responses={
        400: {"model": ClientErrorResponse, "description": "Invalid request"},
        401: {"description": "Not authenticated"},
    },
)
async def create_album(
    app: AppDep, auth_token: AuthTokenDep, album_data: AlbumRequest | None = None
) -> DataResponse[Album]:
    # No body means an album with every field empty
    album_data = album_data or AlbumRequest()
    album = await app.create_album(auth_token, album_data.title, album_data.performer, album_data.cost)
    return DataResponse(data=album)


@router.put(
    "/albums/{album_id}",
    summary="Replace album",
    description="Replace all album fields. Fields missing from the request are cleared.",
    operation_id="replaceAlbum",
    responses={
        400: {"model": ClientErrorResponse, "description": "Invalid request"},
        401: {"description": "Not authenticated"},
    },
)
async def replace_album(
    album_id: UUID, album_data: AlbumRequest, app: AppDep, auth_token: AuthTokenDep
) -> DataResponse[Album | None]:
    album = await app.replace_album(auth_token, album_id, album_data.title, album_data.performer, album_data.cost)
    return DataResponse(data=album)


@router.delete(
    "/albums/{album_id}",
    summary="Delete album",
    description="Remove an album from the catalog.",
    operation_id="deleteAlbum",
    status_code=204,
    responses={
        204: {"description": "Album deleted (or did not exist)"},
        401: {"description": "Not authenticated"},
    },
)
async def delete_album(album_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_album(auth_token, album_id)
