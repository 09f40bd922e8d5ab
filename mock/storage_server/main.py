from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Storage Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/storage_stub") if os.path.exists("/storage_stub") else Path(__file__).resolve().parents[2] / "storage_stub"


def _load(house_id: str, resource: str):
    file = DATA_DIR / f"{resource}_{house_id}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="house not found")
    return JSONResponse(content=json.loads(file.read_text()))


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/houses/{house_id}/transactions")
def get_transactions(house_id: str):
    return _load(house_id, "transactions")

@app.get("/houses/{house_id}/cards")
def get_cards(house_id: str):
    return _load(house_id, "cards")
