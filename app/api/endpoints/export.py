from fastapi import APIRouter, Depends, Response
from app.api.deps import get_context
from app.core.context import AppContext
from app.services.export_service import build_source_archive

router = APIRouter()

@router.get("/download-zip")
def download_zip(context: AppContext = Depends(get_context)):
    """Download the project source as a zip archive."""
    settings = context.settings
    content = build_source_archive(
        settings.EXPORT_ROOT,
        settings.export_include_dirs_list,
        settings.export_include_files_list,
    )
    return Response(
        content=content,
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={settings.EXPORT_ARCHIVE_NAME}"},
    )
