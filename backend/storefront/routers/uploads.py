# backend/storefront/routers/uploads.py

from fastapi import APIRouter, Depends, File, UploadFile

from ..auth import require_admin
from ..config import Settings
from ..dependencies import get_image_storage, get_settings
from ..errors import ValidationError
from ..schemas.common import ImagesUploadResponse, ImageUploadResponse
from ..services.images import ImageStorage

router = APIRouter(prefix="/upload", tags=["uploads"], dependencies=[Depends(require_admin)])


@router.post("/image", response_model=ImageUploadResponse)
def upload_image(
    image: UploadFile = File(...),
    storage: ImageStorage = Depends(get_image_storage),
):
    url = storage.save(image.filename, storage.read_upload(image.file))
    return ImageUploadResponse(image_url=url)


@router.post("/images", response_model=ImagesUploadResponse)
def upload_images(
    images: list[UploadFile] = File(...),
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_settings),
):
    if len(images) > settings.max_images_per_upload:
        raise ValidationError(
            f"At most {settings.max_images_per_upload} images can be uploaded at once"
        )
    urls = [storage.save(img.filename, storage.read_upload(img.file)) for img in images]
    return ImagesUploadResponse(image_urls=urls)
