"""
Happy Food Backend - FastAPI Application
Main entry point for food match and mood effect lookups
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import APP_NAME, APP_VERSION, CORS_ORIGINS, LOG_LEVEL
from core.matcher import build_matcher

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title="Happy Food API",
    description="Food match confidence and mood effects - Powered by USDA FoodData Central",
    version=APP_VERSION
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Process-wide matcher; owns the one rate limiter shared by all requests
matcher = build_matcher()


# Request Models
class FoodRequest(BaseModel):
    food: str


# API Endpoints
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{APP_NAME} API is running",
        "version": APP_VERSION,
        "backend": "USDA FoodData Central",
        "rate_limit_remaining": matcher.client.rate_limiter.remaining()
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    report = await matcher.health_check()
    return report.to_dict()


@app.post("/foods/validate")
async def validate_food(request: FoodRequest):
    """Validate and normalize a food query without searching"""
    return matcher.validate(request.food).to_dict()


@app.post("/foods/search")
async def search_food_matches(request: FoodRequest):
    """
    First step: find the best matches for a food name so the user can
    confirm which one they meant.
    """
    outcome = await matcher.find_matches(request.food)
    return outcome.to_dict()


@app.post("/foods/mood-effects")
async def food_mood_effects(request: FoodRequest):
    """Second step: nutrients and mood effects of a confirmed food"""
    outcome = await matcher.get_mood_effects(request.food)
    return outcome.to_dict()


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info(
        "%s Backend v%s started - %d foods in local table",
        APP_NAME, APP_VERSION, len(matcher.store)
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
