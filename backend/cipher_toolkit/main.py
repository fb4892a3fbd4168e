from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from fastapi.middleware.cors import CORSMiddleware
from .schemas import CipherRequest, TransformRequest, TransformResponse, AlgorithmInfo
from .errors import CipherError
from . import registry
import pandas as pd
import io
import os
import time
from typing import List
import logging

# Configure logging
logger = logging.getLogger("uvicorn")

# Limits and CORS, overridable from the environment
MAX_TEXT_LENGTH = int(os.getenv("CIPHER_MAX_TEXT_LENGTH", "10000"))
MAX_GRID_CELLS = int(os.getenv("CIPHER_MAX_GRID_CELLS", "100000"))
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("CIPHER_ALLOWED_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(title="Classical Cipher Toolkit")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)

# --- Helpers ---

def _check_text_length(text: str):
    if len(text) > MAX_TEXT_LENGTH:
        raise HTTPException(status_code=413, detail=f"Text too long. Maximum length is {MAX_TEXT_LENGTH} characters.")

def _grid_cells(req: CipherRequest) -> int:
    """Cells a transposition key makes the engine build and render"""
    cells = len(req.mask or '')
    if req.rows is not None and req.cols is not None:
        cells = max(cells, req.rows * req.cols)
    if req.rails is not None:
        # the rail pattern is one row per touched rail, one column per character
        cells = max(cells, min(req.rails, len(req.text)) * len(req.text))
    return cells

def _check_grid_size(req: CipherRequest):
    cells = _grid_cells(req)
    if cells > MAX_GRID_CELLS:
        raise HTTPException(status_code=413, detail=f"Key grid too large ({cells} cells). Maximum is {MAX_GRID_CELLS} cells.")

def _transform(req: CipherRequest, encrypt: bool) -> TransformResponse:
    _check_text_length(req.text)
    _check_grid_size(req)
    mode = "encrypt" if encrypt else "decrypt"
    try:
        start_time = time.time()
        result, steps = registry.run(req.algorithm, req.text, encrypt=encrypt, **req.key_params())
        elapsed = (time.time() - start_time) * 1000
        logger.info(f"🔐 {req.algorithm} {mode}: {len(req.text)} chars, {len(steps)} steps in {elapsed:.2f}ms")
    except CipherError as e:
        logger.error(f"❌ {req.algorithm} {mode} failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return TransformResponse(algorithm=req.algorithm, encrypt=encrypt, result=result, steps=steps)

# --- Routes ---

@app.get("/")
def read_root():
    return {"name": app.title, "algorithms": len(registry.ALGORITHMS)}

@app.get("/algorithms", response_model=List[AlgorithmInfo])
def get_algorithms():
    return registry.list_algorithms()

@app.get("/presets")
def get_presets():
    return registry.PRESETS

@app.post("/encrypt", response_model=TransformResponse)
def encrypt_text(req: CipherRequest):
    return _transform(req, encrypt=True)

@app.post("/decrypt", response_model=TransformResponse)
def decrypt_text(req: CipherRequest):
    return _transform(req, encrypt=False)

@app.post("/transform", response_model=TransformResponse)
def transform_text(req: TransformRequest):
    return _transform(req, encrypt=req.encrypt)

@app.post("/export-steps")
def export_steps(req: TransformRequest):
    response = _transform(req, encrypt=req.encrypt)

    df_steps = pd.DataFrame({"Step": range(1, len(response.steps) + 1), "Description": response.steps})
    df_summary = pd.DataFrame([
        ("Algorithm", registry.get_algorithm(req.algorithm).name),
        ("Mode", "Encrypt" if req.encrypt else "Decrypt"),
        ("Input", req.text),
        ("Result", response.result),
    ], columns=["Field", "Value"])

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        df_summary.to_excel(writer, sheet_name='Summary', index=False)
        df_steps.to_excel(writer, sheet_name='Steps', index=False)

    output.seek(0)
    logger.info(f"📊 Exported {len(response.steps)} steps for {req.algorithm}")

    headers = {
        'Content-Disposition': f'attachment; filename="{req.algorithm}_steps.xlsx"'
    }
    return StreamingResponse(output, headers=headers, media_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')
