# backend/storefront/schemas/common.py

from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class PaymentSettings(BaseModel):
    venmo_username: str
    venmo_qr_code_url: str = ""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class PaymentSettingsResponse(BaseModel):
    success: bool = True
    message: str | None = None
    settings: PaymentSettings


class BackupInfo(BaseModel):
    id: str
    name: str
    created_at: datetime
    size: int

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class BackupCreatedResponse(BaseModel):
    success: bool = True
    message: str
    backup_id: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class BackupListResponse(BaseModel):
    success: bool = True
    backups: list[BackupInfo]


class ImageUploadResponse(BaseModel):
    success: bool = True
    image_url: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ImagesUploadResponse(BaseModel):
    success: bool = True
    image_urls: list[str]

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
