"""FastAPI router for the index page, uploads and downloads."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse
from starlette.datastructures import UploadFile

from minidrive.preview.renderer import render_index

from .paths import UnsafePathError
from .schemas import guess_media_type
from .service import FileStorageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


def get_storage(request: Request) -> FileStorageService:
    """Storage service attached to the running application."""
    return request.app.state.storage


@router.get("/", response_class=HTMLResponse)
def index(storage: FileStorageService = Depends(get_storage)):
    """Index page with upload forms and a preview of every stored file."""
    return HTMLResponse(render_index(storage.list_files()))


@router.post("/", response_class=PlainTextResponse)
async def upload_files(request: Request, storage: FileStorageService = Depends(get_storage)):
    """Store every file part of a multipart form.

    The declared filename of each part is used as its path below the
    storage root, so folder uploads keep their structure.

    Raises:
        HTTPException 400: If a declared filename escapes the storage root
        HTTPException 500: If the form cannot be parsed, has no files,
            or writing fails
    """
    max_files = request.app.state.config.storage.max_files_per_upload
    try:
        form = await request.form(max_files=max_files)
    except Exception as e:
        logger.error(f"Upload parse failed: {e}")
        raise HTTPException(status_code=500, detail="Upload error")

    try:
        uploads = [
            (value.filename, value.file)
            for _, value in form.multi_items()
            if isinstance(value, UploadFile) and value.filename
        ]
        if not uploads:
            logger.error("Upload parse failed: no file parts in form")
            raise HTTPException(status_code=500, detail="Upload error")

        try:
            stored = await run_in_threadpool(storage.save_uploads, uploads)
        except UnsafePathError as e:
            raise HTTPException(status_code=400, detail=f"Rejected upload: {e}")
        except OSError as e:
            logger.error(f"File upload failed: {e}")
            raise HTTPException(status_code=500, detail="Upload failed")
    finally:
        await form.close()

    for item in stored:
        logger.info(f"Uploaded: {item.relative_path} ({item.size_bytes} bytes)")

    if len(stored) == 1:
        return PlainTextResponse("File uploaded successfully!")
    return PlainTextResponse(f"{len(stored)} files uploaded successfully!")


@router.get("/uploads/{file_path:path}")
def download_file(file_path: str, storage: FileStorageService = Depends(get_storage)):
    """Stream a stored file.

    Raises:
        HTTPException 404: If the path is unsafe or no regular file exists
    """
    resolved = storage.resolve_download(file_path)
    if resolved is None:
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(path=resolved, media_type=guess_media_type(resolved.name))
