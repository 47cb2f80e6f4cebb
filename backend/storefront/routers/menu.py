# backend/storefront/routers/menu.py

from fastapi import APIRouter, Depends, File, UploadFile, status

from ..auth import require_admin
from ..dependencies import get_menu_importer, get_menu_repository
from ..errors import ValidationError
from ..schemas.common import MessageResponse
from ..schemas.menu import (
    CategoriesResponse,
    MenuItemIn,
    MenuItemResponse,
    MenuItemsResponse,
)
from ..services.menu import MenuRepository
from ..services.menu_import import MenuImporter

router = APIRouter(prefix="/menu", tags=["menu"])

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/items", response_model=MenuItemsResponse)
def list_menu_items(menu: MenuRepository = Depends(get_menu_repository)):
    return MenuItemsResponse(items=menu.list_items())


@router.get("/items/{id}", response_model=MenuItemResponse)
def get_menu_item(id: int, menu: MenuRepository = Depends(get_menu_repository)):
    return MenuItemResponse(item=menu.get_item(id))


@router.get("/categories", response_model=CategoriesResponse)
def list_categories(menu: MenuRepository = Depends(get_menu_repository)):
    return CategoriesResponse(categories=menu.categories())


@router.get("/categories/{category}", response_model=MenuItemsResponse)
def list_items_in_category(
    category: str,
    menu: MenuRepository = Depends(get_menu_repository),
):
    return MenuItemsResponse(items=menu.items_in_category(category))


@router.post(
    "/items",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def add_menu_item(data: MenuItemIn, menu: MenuRepository = Depends(get_menu_repository)):
    return MenuItemResponse(message="Menu item added successfully", item=menu.add_item(data))


@router.put(
    "/items/{id}",
    response_model=MenuItemResponse,
    dependencies=[Depends(require_admin)],
)
def update_menu_item(
    id: int,
    data: MenuItemIn,
    menu: MenuRepository = Depends(get_menu_repository),
):
    return MenuItemResponse(
        message="Menu item updated successfully", item=menu.update_item(id, data)
    )


@router.delete(
    "/items/{id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_menu_item(id: int, menu: MenuRepository = Depends(get_menu_repository)):
    menu.delete_item(id)
    return MessageResponse(message="Menu item deleted successfully")


@router.post("/sync", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def sync_menu(importer: MenuImporter = Depends(get_menu_importer)):
    count = importer.sync_google_sheet()
    return MessageResponse(message=f"Successfully synced {count} menu items from Google Sheets")


@router.post("/upload", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def upload_menu(
    menuFile: UploadFile = File(...),
    importer: MenuImporter = Depends(get_menu_importer),
):
    filename = (menuFile.filename or "").lower()
    if menuFile.content_type != XLSX_CONTENT_TYPE and not filename.endswith(".xlsx"):
        raise ValidationError("Only Excel (.xlsx) files are allowed")

    count = importer.import_excel(menuFile.file.read())
    return MessageResponse(message=f"Successfully processed {count} menu items from Excel")
