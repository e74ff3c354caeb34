from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    success: int
    failures: Tuple[int, ...] = field(default_factory=tuple)


SCHOLARSHIPS = {
    "list": Route("GET", "/api/scholarships", 200),
    "get": Route("GET", "/api/scholarships/:id", 200, (404,)),
    "create": Route("POST", "/api/scholarships", 201, (400,)),
    "update": Route("PUT", "/api/scholarships/:id", 200, (400, 404)),
    "delete": Route("DELETE", "/api/scholarships/:id", 204, (404,)),
}

DASHBOARD = Route("GET", "/api/dashboard", 200)


def build_url(path: str, params: Optional[Mapping[str, Union[str, int]]] = None) -> str:
    """Substitute each literal ``:name`` token in ``path`` with ``str(value)``."""
    url = path
    for key, value in (params or {}).items():
        token = f":{key}"
        if token in url:
            url = url.replace(token, str(value), 1)
    return url
