from pydantic import BaseModel, ConfigDict, Field


class WeatherRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    city: str = Field(..., min_length=1, max_length=100)


class WeatherOut(BaseModel):
    city: str
    temp: float
