from .menu_router import MenuRouterMiddleware


__all__ = [
    'MenuRouterMiddleware',
]
