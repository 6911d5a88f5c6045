from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pricefeed import __version__
from pricefeed.api.routes import router
from pricefeed.utils.logger import get_logger

log = get_logger(__name__)

app = FastAPI(
    title="pricefeed",
    description="Current price, 7-point history and stats for dollar, 18k gold and Emami coin",
    version=__version__,
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(router, tags=["Prices"])
