from fastapi import APIRouter, Depends, Request

from ..core.auth import authenticate
from ..core.errors import UpstreamError
from ..core.pipeline import pipeline
from ..core.validation import validate_weather
from ..schemas.weather import WeatherOut, WeatherRequest
from ..services.weather import WeatherClient, WeatherError

router = APIRouter(tags=["weather"])


def get_weather_client(request: Request) -> WeatherClient:
    return request.app.state.weather_client


@router.post("/weatherMe", response_model=WeatherOut, dependencies=pipeline(validate_weather, authenticate))
async def weather_me(
    data: WeatherRequest = Depends(validate_weather),
    weather: WeatherClient = Depends(get_weather_client),
):
    """Current temperature for a city"""
    try:
        return await weather.current(data.city)
    except WeatherError as e:
        raise UpstreamError(str(e))
