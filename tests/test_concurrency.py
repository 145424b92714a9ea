import asyncio

import httpx
import pytest

from app.main import create_app

from conftest import create_schema


@pytest.mark.asyncio
async def test_concurrent_uploads_get_distinct_ids_and_urls(settings, fake_cloudinary):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        await create_schema(app.state.store)
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            responses = await asyncio.gather(
                *(
                    ac.post(
                        "/upload",
                        data={"voornaam": f"Jan{i}", "familienaam": "Bakker"},
                        files={"file": (f"{i}.pdf", b"%PDF-" + str(i).encode(), "application/pdf")},
                    )
                    for i in range(5)
                )
            )
            listing = (await ac.get("/documents")).json()

    assert [r.status_code for r in responses] == [201] * 5
    docs = [r.json()["document"] for r in responses]
    assert len({d["id"] for d in docs}) == 5
    assert len({d["url"] for d in docs}) == 5
    assert sorted(d["id"] for d in listing) == sorted(d["id"] for d in docs)
    assert len(fake_cloudinary.objects) == 5
