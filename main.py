from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List, Optional
import logging
import uvicorn

from config import Config
from app.services.data_loader import DataLoader
from app.services.errors import NotFoundError
from app.services.route_analysis import RouteAnalyzer, DEFAULT_SORT_KEY
from app.models.schemas import Destination, GlobalStats, Month, PopularDestination, ErrorResponse

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=Config.API_TITLE,
    description=Config.API_DESCRIPTION,
    version=Config.API_VERSION
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global instances; both are stateless, fixtures are re-read per request
data_loader = DataLoader()
route_analyzer = RouteAnalyzer(data_loader)

ENDPOINTS = {
    "destinations": "/api/destinations",
    "airlines": "/api/airlines",
    "popular_destinations": "/api/popular-destinations",
    "search_routes": "/api/routes?destination=&month=&sort=&limit=",
    "route_detail": "/api/routes/{airline_code}/{destination_code}",
    "stats": "/api/stats",
    "months": "/api/months",
    "airport_detail": "/api/airports/{code}",
}

NOT_FOUND = {404: {"model": ErrorResponse}}

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": exc.message})

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.on_event("startup")
async def startup_event():
    """Report configuration and fixture availability on startup"""
    logger.info("=" * 80)
    logger.info("AIR ROUTE ADVISOR - STARTING UP")
    logger.info("=" * 80)
    logger.info(f"Data directory: {Config.DATA_DIR}")

    missing = Config.missing_data_files()
    for path in missing:
        logger.warning(f"Missing fixture {path}; it will be served as an empty collection")
    if not missing:
        logger.info(f"All {len(Config.fixture_files())} fixture files present")

    logger.info(f"API ready - listening on http://{Config.HOST}:{Config.PORT}")
    for name, path in ENDPOINTS.items():
        logger.info(f"  GET {path} ({name})")

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "name": Config.API_TITLE,
        "version": Config.API_VERSION,
        "description": Config.API_DESCRIPTION,
        "endpoints": {"documentation": "/docs", **ENDPOINTS}
    }

@app.get("/api/destinations", response_model=List[Destination])
def get_destinations():
    """Get every airport served by at least one route"""
    return route_analyzer.get_destinations()

@app.get("/api/airlines")
def get_airlines():
    """Get airline list with resolved display names"""
    return route_analyzer.get_airlines()

@app.get("/api/popular-destinations", response_model=List[PopularDestination])
def get_popular_destinations():
    """Get destinations ranked by total flight count"""
    return route_analyzer.get_popular_destinations()

@app.get("/api/routes")
def search_routes(
    destination: Optional[str] = None,
    month: Optional[str] = None,
    sort: str = DEFAULT_SORT_KEY,
    limit: str = str(Config.DEFAULT_ROUTE_LIMIT)
):
    """Search routes by destination code or name, optionally scoped to a month"""
    return route_analyzer.search_routes(
        destination=destination,
        month=month,
        sort=sort,
        limit=limit
    )

@app.get("/api/routes/{airline_code}/{destination_code}", responses=NOT_FOUND)
def get_route_detail(airline_code: str, destination_code: str):
    """Get route detail with airline, monthly, flight and weather data"""
    return route_analyzer.get_route_detail(airline_code, destination_code)

@app.get("/api/stats", response_model=GlobalStats)
def get_stats():
    """Get global statistics"""
    return route_analyzer.get_stats()

@app.get("/api/months", response_model=List[Month])
def get_months():
    """Get the twelve calendar months"""
    return route_analyzer.get_months()

@app.get("/api/airports/{code}", responses=NOT_FOUND)
def get_airport_detail(code: str):
    """Get airport detail with route counts and recent weather"""
    return route_analyzer.get_airport_detail(code)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": Config.API_VERSION
    }

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=Config.RELOAD
    )
