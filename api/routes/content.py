# api/routes/content.py

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_content_locator, require_content
from core.config import Settings, get_settings
from core.content import ContentLocator, stream_content
from core.sa.models import Product, ProductType

router = APIRouter(prefix="/content", tags=["content"])


@router.get("/ebook/{product_id}")
async def stream_ebook(
    product: Product = Depends(require_content(ProductType.EBOOK)),
    locator: ContentLocator = Depends(get_content_locator),
    settings: Settings = Depends(get_settings),
):
    """
    Stream an owned e-book in full.

    Returns 404 when the product is missing, is not an e-book, or its file is
    gone, and 401 when the caller does not own it.
    """
    handle = await locator.locate(product.file_path)
    return await stream_content(handle, chunk_size=settings.stream_chunk_size)


@router.get("/audio/{product_id}")
async def stream_audio(
    request: Request,
    product: Product = Depends(require_content(ProductType.AUDIOBOOK)),
    locator: ContentLocator = Depends(get_content_locator),
    settings: Settings = Depends(get_settings),
):
    """
    Stream an owned audiobook, honouring ``Range: bytes=<start>-<end>``.

    Returns 206 with Content-Range for a valid range, 416 for a malformed or
    out-of-bounds one, and 200 with the whole file when no range is sent.
    """
    handle = await locator.locate(product.file_path)
    return await stream_content(
        handle,
        request.headers.get("range"),
        allow_ranges=True,
        chunk_size=settings.stream_chunk_size,
    )
