# app/services/cdn.py
import logging
from typing import BinaryIO, Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.core.errors import StorageError

log = logging.getLogger("app.cdn")


class UploadResult(BaseModel):
    public_id: Optional[str] = None
    secure_url: str


class CloudinaryStorage:
    """
    Cloudinary account bound to explicit credentials.

    Credentials travel with every call instead of going through
    ``cloudinary.config()``, so two storages never share state.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
    ):
        self._credentials = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
        }

    async def upload_stream(
        self,
        stream: BinaryIO,
        *,
        folder: str,
        public_id: str,
        overwrite: bool = True,
    ) -> UploadResult:
        """
        Hand the inbound file object straight to the SDK and wait for the
        stored object's URL. The SDK call blocks, so it runs in the threadpool.
        """
        log.info("Cloudinary upload folder=%s public_id=%s", folder, public_id)
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                stream,
                folder=folder,
                public_id=public_id,
                overwrite=overwrite,
                resource_type="auto",
                **self._credentials,
            )
        except (CloudinaryError, ValueError) as exc:
            # ValueError: the SDK refuses to sign without cloud_name/api_key/api_secret
            log.error("Cloudinary fout: %s", exc)
            raise StorageError() from exc

        secure_url = (result or {}).get("secure_url")
        if not secure_url:
            log.error("Cloudinary antwoord zonder secure_url: %r", result)
            raise StorageError()
        return UploadResult(public_id=result.get("public_id"), secure_url=secure_url)
