"""FastAPI server exposing the outfit engine."""

from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Query

from fitted_app.app import FittedApp
from fitted_app.logging_config import configure_logging
from logic.validation import GenerateOutfitsRequest, ReadinessRequest

configure_logging()

fitted_app = FittedApp()
app = FastAPI(title="Fitted Outfit Engine", version="0.1.0")


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "fitted-outfit-engine",
        "environment": fitted_app.config.environment or "local",
    }


@app.post("/outfits/generate")
def generate_outfits(request: GenerateOutfitsRequest) -> dict:
    """Rank outfits from the submitted wardrobe; an empty list is a valid answer."""

    response = fitted_app.generate(request.model_dump(exclude_unset=True))
    if response.get("status") != "ok":
        raise HTTPException(status_code=400, detail=response.get("message", "generation failed"))
    return response


@app.post("/wardrobe/readiness")
def wardrobe_readiness(request: ReadinessRequest) -> dict:
    """Report whether the wardrobe meets the minimum for recommendations."""

    return fitted_app.readiness(request.model_dump())


@app.get("/weather")
def current_weather(lat: float = Query(...), lon: float = Query(...)) -> dict:
    """Current conditions for a coordinate pair, imperial units."""

    try:
        weather = fitted_app.current_weather(lat, lon)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"status": "ok", "weather": asdict(weather)}


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
