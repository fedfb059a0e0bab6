"""Domain errors raised by the store layer and mapped to HTTP responses in main."""


class StoreError(Exception):
    """Base class for store-level conditions the API reports to clients."""


class DuplicateUsernameError(StoreError):
    def __init__(self, username: str):
        super().__init__(f"username already exists: {username}")
        self.username = username
