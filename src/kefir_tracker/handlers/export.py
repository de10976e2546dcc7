"""
Module: export.py
Description: CSV export endpoint (GET /export.csv).
"""

import time

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from kefir_tracker.auth.identity import UserContext
from kefir_tracker.handlers.dependencies import ensure_user, get_export_service, get_metrics_client
from kefir_tracker.services.export import ExportService
from kefir_tracker.utils.metrics import MetricsClient

router = APIRouter(tags=["export"])


@router.get("/export.csv")
async def export_csv(
    user: UserContext = Depends(ensure_user),
    service: ExportService = Depends(get_export_service),
    metrics_client: MetricsClient = Depends(get_metrics_client)
) -> Response:
    """Download everything the caller owns as a CSV attachment."""
    content = await service.export_user_data(user.user_id)
    metrics_client.export_generated(len(content.encode('utf-8')))

    filename = f"kefir-data-{int(time.time() * 1000)}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
