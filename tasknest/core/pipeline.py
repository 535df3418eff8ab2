from typing import Callable, List
from fastapi import Depends
from fastapi.params import Depends as DependsParam


def pipeline(*steps: Callable) -> List[DependsParam]:
    """
    Ordered request interceptors for a route.

    Each step either returns (the request continues to the next step) or
    raises an ``AppError`` (the request ends with that error's response).
    FastAPI resolves route-level dependencies in list order, ahead of the
    handler's own parameters, and caches each step's result for the request
    so handlers can depend on the same step again to read its value.
    """
    return [Depends(step) for step in steps]
