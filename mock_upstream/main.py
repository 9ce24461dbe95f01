import asyncio
from collections import Counter

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse

app = FastAPI()
app.state.hits = Counter()


@app.get("/pages/{name}", response_class=PlainTextResponse)
async def page(name: str, request: Request, delay: float = 0.0, size: int = 1024):
    request.app.state.hits[name] += 1
    if delay:
        await asyncio.sleep(delay)
    return PlainTextResponse("x" * size)


@app.get("/status/{code}")
async def status(code: int, request: Request):
    request.app.state.hits[f"status/{code}"] += 1
    raise HTTPException(status_code=code, detail=f"Mock upstream returned {code}")


@app.get("/hits")
async def hits(request: Request) -> dict[str, int]:
    return dict(request.app.state.hits)
