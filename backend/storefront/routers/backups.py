# backend/storefront/routers/backups.py

from fastapi import APIRouter, Depends

from ..auth import require_admin
from ..dependencies import get_backup_service
from ..schemas.common import BackupCreatedResponse, BackupListResponse, MessageResponse
from ..services.backups import BackupService

router = APIRouter(tags=["backups"], dependencies=[Depends(require_admin)])


@router.post("/backup", response_model=BackupCreatedResponse)
def create_backup(backups: BackupService = Depends(get_backup_service)):
    return BackupCreatedResponse(
        message="Backup created successfully", backup_id=backups.create()
    )


@router.get("/backups", response_model=BackupListResponse)
def list_backups(backups: BackupService = Depends(get_backup_service)):
    return BackupListResponse(backups=backups.list_backups())


@router.post("/restore/{backup_id}", response_model=MessageResponse)
def restore_backup(backup_id: str, backups: BackupService = Depends(get_backup_service)):
    backups.restore(backup_id)
    return MessageResponse(message="Backup restored successfully")


@router.delete("/backup/{backup_id}", response_model=MessageResponse)
def delete_backup(backup_id: str, backups: BackupService = Depends(get_backup_service)):
    backups.delete(backup_id)
    return MessageResponse(message="Backup deleted successfully")
