from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.db.store import DocumentStore
from app.models.document import DocumentList, ErrorResponse

router = APIRouter(tags=["documents"])


@router.get("/documents", response_model=DocumentList, responses={500: {"model": ErrorResponse}})
async def list_documents(store: DocumentStore = Depends(get_store)):
    """All documents, newest first."""
    return await store.list_newest_first()
