# api/main.py
from fastapi import FastAPI
from api.routes import artists, health, migration

app = FastAPI(title="Canonical Artist Reconciler API", version="0.1.0")

app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(migration.router, prefix="/api/v1", tags=["migration"])
app.include_router(artists.router, prefix="/api/v1", tags=["artists"])

@app.get("/")
async def root():
    return {"message": "Canonical Artist Reconciler API"}
