# backend/storefront/routers/payment_settings.py

from fastapi import APIRouter, Depends

from ..auth import require_admin
from ..dependencies import get_payment_settings_repository
from ..schemas.common import PaymentSettings, PaymentSettingsResponse
from ..services.payment_settings import PaymentSettingsRepository

router = APIRouter(prefix="/payment-settings", tags=["payment_settings"])


@router.get("", response_model=PaymentSettingsResponse)
def get_payment_settings(
    repo: PaymentSettingsRepository = Depends(get_payment_settings_repository),
):
    return PaymentSettingsResponse(settings=repo.get())


@router.put("", response_model=PaymentSettingsResponse, dependencies=[Depends(require_admin)])
def update_payment_settings(
    data: PaymentSettings,
    repo: PaymentSettingsRepository = Depends(get_payment_settings_repository),
):
    return PaymentSettingsResponse(
        message="Payment settings updated successfully", settings=repo.update(data)
    )
