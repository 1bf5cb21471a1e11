from fastapi import APIRouter
from fastapi.responses import Response

from ..services import EXCEL_MEDIA_TYPE, export_filename, export_to_excel
from .deps import get_nav_service

router = APIRouter(prefix="/api/nav")


@router.get("")
def get_all():
    """Current records from every source; empty when nothing could be fetched."""
    service = get_nav_service()
    return [record.to_dict() for record in service.get_all_navs()]


@router.get("/sources")
def get_sources():
    service = get_nav_service()
    return service.get_source_summary()


@router.get("/download")
def download_excel():
    service = get_nav_service()
    content = export_to_excel(service.get_all_navs())
    filename = export_filename()
    return Response(
        content=content,
        media_type=EXCEL_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
