from fastapi import FastAPI, Depends
from app.models.weather_model import CacheStatus
from app.repos.weather_repo import WeatherCache
from app.routes.weather_route import router as weather_router, get_weather_cache

app = FastAPI(title="Portfolio Weather")
app.include_router(weather_router)

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to the Portfolio Weather API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "weather": "/api/weather",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check(cache: WeatherCache = Depends(get_weather_cache)):
    status: CacheStatus = cache.status()
    return {"status": "ok", "service": "Portfolio Weather", "cache": status.model_dump()}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
