"""Sticker Sheet -- HTTP API.

Holds a single in-memory sticker sheet. Images travel as base64-encoded
PNG strings in JSON bodies; the render endpoint streams raw PNG bytes.

Launch:
    python -m src.server
    # or: uvicorn src.server:app --reload
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import threading

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from PIL import Image
from pydantic import BaseModel, Field

from src.app.errors import AppError, ImageReadError
from src.app.logging import setup_logging
from src.app.settings import Settings, load_settings
from src.image.png import PNG
from src.sticker.sheet import NO_SLOT, StickerSheet

logger = logging.getLogger(__name__)

app = FastAPI(title="Sticker Sheet")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Application state
# ---------------------------------------------------------------------------

class NoSheetError(AppError):
    """No sheet has been created yet"""


class AppState:
    """The sheet plus the lock that serializes every access to it.

    Sync routes run on FastAPI's threadpool, so each method holds the lock
    for the whole sheet operation.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or load_settings()
        self.sheet: StickerSheet | None = None
        self.lock = threading.Lock()

    def _require_sheet(self) -> StickerSheet:
        if self.sheet is None:
            raise NoSheetError("No sticker sheet yet; POST /api/sheet first")
        return self.sheet

    def new_sheet(self, picture: PNG, max_stickers: int | None) -> dict:
        if max_stickers is None:
            max_stickers = self.settings.max_stickers
        sheet = StickerSheet(picture, max_stickers, background=self.settings.background_pixel())
        with self.lock:
            self.sheet = sheet
            logger.info("New sheet %r", sheet)
            return self._payload()

    def add_sticker(self, sticker: PNG, x: int, y: int) -> int:
        with self.lock:
            return self._require_sheet().add_sticker(sticker, x, y)

    def get_sticker(self, index: int) -> str | None:
        with self.lock:
            sticker = self._require_sheet().get_sticker(index)
            return _image_to_base64(sticker) if sticker is not None else None

    def remove_sticker(self, index: int) -> dict:
        with self.lock:
            self._require_sheet().remove_sticker(index)
            return self._payload()

    def translate(self, index: int, x: int, y: int) -> dict | None:
        with self.lock:
            if not self._require_sheet().translate(index, x, y):
                return None
            return self._payload()

    def change_max_stickers(self, max_stickers: int) -> dict:
        with self.lock:
            self._require_sheet().change_max_stickers(max_stickers)
            return self._payload()

    def render(self) -> PNG:
        with self.lock:
            return self._require_sheet().render()

    def get_state_payload(self) -> dict:
        with self.lock:
            return self._payload()

    def _payload(self) -> dict:
        sheet = self._require_sheet()
        base_w, base_h = sheet.base_size
        slots = []
        for index in sheet.occupied():
            x, y = sheet.position(index)
            sticker = sheet.get_sticker(index)
            slots.append({
                "index": index,
                "x": x,
                "y": y,
                "width": sticker.width,
                "height": sticker.height,
            })
        return {
            "base": {"width": base_w, "height": base_h},
            "max_stickers": sheet.max_stickers,
            "sticker_count": sheet.sticker_count,
            "background": self.settings.background,
            "stickers": slots,
        }

    def export(self) -> str:
        out = self.render()
        self.settings.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.settings.output_dir / "sheet.png"
        out.write_to_file(path)
        return str(path)


state = AppState()


def _image_to_base64(img: PNG) -> str:
    buf = io.BytesIO()
    img.to_pil().save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def _image_from_base64(data: str) -> PNG:
    try:
        raw = base64.b64decode(data, validate=True)
        with Image.open(io.BytesIO(raw)) as im:
            return PNG.from_pil(im)
    except (binascii.Error, OSError) as e:
        raise ImageReadError(f"Cannot decode image: {e}") from e


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class SheetRequest(BaseModel):
    image: str
    max_stickers: int | None = Field(default=None, ge=0)

class StickerRequest(BaseModel):
    image: str
    x: int = Field(ge=0)
    y: int = Field(ge=0)

class TranslateRequest(BaseModel):
    x: int = Field(ge=0)
    y: int = Field(ge=0)

class CapacityRequest(BaseModel):
    max_stickers: int = Field(ge=0)


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------

@app.exception_handler(AppError)
async def _app_error(request, exc: AppError):
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.post("/api/sheet")
def api_new_sheet(req: SheetRequest):
    return JSONResponse(state.new_sheet(_image_from_base64(req.image), req.max_stickers))


@app.get("/api/state")
def api_state():
    return JSONResponse(state.get_state_payload())


@app.post("/api/stickers")
def api_add_sticker(req: StickerRequest):
    index = state.add_sticker(_image_from_base64(req.image), req.x, req.y)
    if index == NO_SLOT:
        return JSONResponse({"error": "All sticker slots are in use"}, status_code=409)
    return JSONResponse({"index": index})


@app.get("/api/stickers/{index}")
def api_get_sticker(index: int):
    b64 = state.get_sticker(index)
    if b64 is None:
        return JSONResponse({"error": "No sticker at index"}, status_code=404)
    return JSONResponse({"index": index, "image": b64})


@app.delete("/api/stickers/{index}")
def api_remove_sticker(index: int):
    return JSONResponse(state.remove_sticker(index))


@app.post("/api/stickers/{index}/translate")
def api_translate(index: int, req: TranslateRequest):
    payload = state.translate(index, req.x, req.y)
    if payload is None:
        return JSONResponse({"error": "No sticker at index"}, status_code=404)
    return JSONResponse(payload)


@app.post("/api/capacity")
def api_capacity(req: CapacityRequest):
    return JSONResponse(state.change_max_stickers(req.max_stickers))


@app.get("/api/render")
def api_render():
    out = state.render()
    buf = io.BytesIO()
    out.to_pil().save(buf, format="PNG")
    buf.seek(0)
    return StreamingResponse(buf, media_type="image/png")


@app.post("/api/export")
def api_export():
    path = state.export()
    return JSONResponse({"path": path})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn
    setup_logging(state.settings.log_level)
    print(f"Starting server at http://{state.settings.host}:{state.settings.port}")
    uvicorn.run(app, host=state.settings.host, port=state.settings.port)
