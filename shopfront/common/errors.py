class ShopfrontError(Exception):
    """Base class for errors raised by the shopfront stores."""


class UserAlreadyExistsError(ShopfrontError):
    def __init__(self, email: str) -> None:
        super().__init__("User with this email already exists")
        self.email = email
