from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from recordstore.core.modules.purchase.models import PurchaseView
from recordstore.web.deps import AppDep, AuthTokenDep
from recordstore.web.openapi import SERVER_ERROR_RESPONSES, ClientErrorResponse, DataResponse

router = APIRouter(tags=["purchases"], responses=SERVER_ERROR_RESPONSES)


class CreatePurchaseRequest(BaseModel):
    """Purchase references. Both are required; absence is reported with a specific message."""

    user: UUID | None = Field(None, description="ID of the buying user")
    album: UUID | None = Field(None, description="ID of the purchased album")

    @field_validator("user", "album", mode="before")
    @classmethod
    def blank_as_missing(cls, value: object) -> object:
        """Treat empty strings like an absent reference."""
        return None if value == "" else value


@router.post(
    "/purchases",
    summary="Create purchase",
    description="Record a purchase and return it with the user and album expanded.",
    operation_id="createPurchase",
    responses={
        400: {"model": ClientErrorResponse, "description": "user or album missing"},
        401: {"description": "Not authenticated"},
    },
)
async def create_purchase(
    purchase_data: CreatePurchaseRequest, app: AppDep, auth_token: AuthTokenDep
) -> DataResponse[PurchaseView]:
    purchase = await app.create_purchase(auth_token, purchase_data.user, purchase_data.album)
    return DataResponse(data=purchase)
