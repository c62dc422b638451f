class StorageError(Exception):
    pass


class UnknownEmail(StorageError):
    def __init__(self, email=None):
        self.email = email
        super().__init__("unknown email address" if email is None else f"unknown email address: {email}")


class InvalidState(StorageError):
    def __init__(self, state=None):
        self.state = state
        super().__init__(f"invalid state: {state!r}")


class InvalidIdentity(StorageError):
    def __init__(self, identity=None):
        self.identity = identity
        super().__init__(f"bad userid {identity!r}")
