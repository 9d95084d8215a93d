import logging
from fastapi import FastAPI, Request, status
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from core.config import settings
from core.errors import RecipeServiceError
from core.middleware import api_gateway
from core.rate_limit import build_rate_limiter
from db.database import create_db_and_tables
from routers.recipes import router as recipes_router
from contextlib import asynccontextmanager

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

INDEX_PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>Recipe Cost Calculator</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body>
    <h1>Recipe Cost Calculator API</h1>
    <p>API is running. Use the endpoints below:</p>
    <ul>
        <li>GET /api/recipes - Get all recipes</li>
        <li>POST /api/recipes - Create recipe</li>
        <li>GET /api/recipes/:id - Get recipe</li>
        <li>PUT /api/recipes/:id - Update recipe</li>
        <li>DELETE /api/recipes/:id - Delete recipe</li>
        <li>GET /api/recipes/:id/cost - Get recipe cost breakdown</li>
        <li>GET /api/recipes/cost/summary - Get cost summary for all recipes</li>
    </ul>
</body>
</html>
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    logger.info("Recipe cost API started")
    yield


app = FastAPI(
    title="Recipe Cost API",
    description="API for managing manufacturing recipes and their costs",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.rate_limiter = build_rate_limiter()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Added last so it wraps every other layer
app.middleware("http")(api_gateway)


@app.exception_handler(RecipeServiceError)
async def recipe_error_handler(request: Request, exc: RecipeServiceError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods are both reported as missing routes
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse({"error": "Route not found"}, status_code=status.HTTP_404_NOT_FOUND)
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index():
    return INDEX_PAGE


# Recipe routes
app.include_router(recipes_router, prefix="/api/recipes", tags=["recipes"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
