class MenuError(Exception):
    """Base exception for menu building and routing."""


class InvalidButtonError(MenuError, ValueError):
    """Raised when a button is constructed with a missing type or inconsistent fields."""


class InvalidMenuError(MenuError, ValueError):
    """Raised when a menu is constructed without an id."""


class MenuNotFoundError(MenuError, LookupError):
    """Menu id is not present in the registry."""

    def __init__(self, menu_id: str | None):
        self.menu_id = menu_id
        super().__init__(f'Menu with ID {menu_id} does not exist.')
