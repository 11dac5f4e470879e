from typing import Dict
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response

app = FastAPI(title="Mock Ledger KVS", version="1.0.0")
# store id -> key -> raw JSON value
STORES: Dict[str, Dict[str, bytes]] = {}

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/kvs/{store_id}/entry")
def get_entry(store_id: str, key: str):
    value = STORES.get(store_id, {}).get(key)
    if value is None:
        raise HTTPException(status_code=404, detail="key not found")
    return Response(content=value, media_type="application/json")

@app.put("/kvs/{store_id}/entry", status_code=204)
async def put_entry(store_id: str, key: str, request: Request):
    STORES.setdefault(store_id, {})[key] = await request.body()
    return Response(status_code=204)
