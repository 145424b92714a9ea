import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from starlette.datastructures import FormData

from app.api.deps import get_app_settings, get_storage, get_store
from app.core.config import UPLOAD_FIELD, Settings
from app.core.errors import MissingFileError
from app.db.store import DocumentStore
from app.models.document import Document, ErrorResponse, UploadResponse
from app.services.cdn import CloudinaryStorage
from app.services.naming import make_public_id

log = logging.getLogger("app.upload")

router = APIRouter(tags=["upload"])


def _text_field(form: FormData, name: str) -> Optional[str]:
    # read from the raw form: an empty value stays "", only an absent one is None
    value = form.get(name)
    return value if isinstance(value, str) else None


@router.post(
    "/upload",
    status_code=201,
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload(
    request: Request,
    file: Optional[UploadFile] = File(None, alias=UPLOAD_FIELD),
    settings: Settings = Depends(get_app_settings),
    store: DocumentStore = Depends(get_store),
    storage: CloudinaryStorage = Depends(get_storage),
):
    form = await request.form()
    voornaam = _text_field(form, "voornaam")
    familienaam = _text_field(form, "familienaam")
    log.info("Upload voornaam=%s familienaam=%s", voornaam, familienaam)
    if file is None or not file.filename:
        raise MissingFileError()

    public_id = make_public_id(voornaam, familienaam)
    # the row is only written once Cloudinary has accepted the bytes
    stored = await storage.upload_stream(
        file.file,
        folder=settings.cloudinary_folder,
        public_id=public_id,
        overwrite=True,
    )
    row = await store.add(voornaam, familienaam, stored.secure_url)
    log.info("Document %s opgeslagen als %s: %s", row["id"], stored.public_id, stored.secure_url)

    return UploadResponse(message="Upload succesvol!", document=Document.model_validate(row))
