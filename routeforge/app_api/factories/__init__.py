from .build_app import build_routeforge_app

__all__ = ["build_routeforge_app"]
