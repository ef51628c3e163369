from pydantic import BaseModel, Field
from typing import Optional

class Destination(BaseModel):
    code: str = Field(..., description="Destination airport code")
    name: str = Field(..., description="Airport display name")
    city: str = Field(..., description="City display name")

class PopularDestination(BaseModel):
    code: str
    flight_count: int = Field(0, description="Total flights across all airlines")
    airline_count: int = Field(0, description="Number of routes serving the destination")
    avg_safety_score: Optional[float] = None
    avg_comfort_score: Optional[float] = None
    composite_score: Optional[float] = Field(None, description="0.6 * avg safety + 0.4 * avg comfort")
    airport_name: str
    city: str

class Month(BaseModel):
    id: int = Field(..., ge=1, le=12)
    name: str

class GlobalStats(BaseModel):
    totalRoutes: int
    totalAirlines: int
    totalFlights: int
    avgSafetyScore: float
    avgComfortScore: float
    avgCompositeScore: float
    onTimeRate: float = Field(..., ge=0, le=100)

class ErrorResponse(BaseModel):
    error: str
