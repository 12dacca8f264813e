"""Small helpers shared by the session and discovery layers."""

from .callbacks import invoke
from .urls import with_query, make_url_pair, build_query_params

__all__ = [
    "invoke",
    "with_query",
    "make_url_pair",
    "build_query_params",
]
