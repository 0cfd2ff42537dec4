"""Application entry point."""
import logging

from fastapi import FastAPI

from routes import game, roles

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(title="Mafia Role Allocator")
app.include_router(roles.router)
app.include_router(game.router)


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
