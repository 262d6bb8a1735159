from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

app = FastAPI(title="Solana Wallet Tracker")


@app.get("/", response_class=PlainTextResponse)
def index():
    return "Bot is running!"


@app.get("/health")
def health():
    return {"status": "ok"}
