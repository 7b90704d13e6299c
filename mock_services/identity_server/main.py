from fastapi import FastAPI, Header, HTTPException
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Identity Server", version="1.0.0")
# Support both local development and Docker
TOKENS_FILE = Path(os.environ.get("IDENTITY_TOKENS_FILE", Path(__file__).resolve().parent / "tokens.json"))

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/v1/tokens/verify")
def verify_token(authorization: str = Header(default="")):
    scheme, _, token = authorization.partition(" ")
    tokens = json.loads(TOKENS_FILE.read_text())
    if scheme.lower() != "bearer" or token not in tokens:
        raise HTTPException(status_code=401, detail="invalid token")
    return tokens[token]
