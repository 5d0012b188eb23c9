class StoryloomError(Exception):
    """Base class for errors raised by the engine outside of normal play."""


class WorldDefinitionError(StoryloomError):
    """The world data is inconsistent (unknown exit target, missing start...)."""


class ConfigError(StoryloomError):
    pass


class UnknownVerbError(StoryloomError):
    def __init__(self, verb):
        super().__init__(f"No handler registered for verb '{verb}'")
        self.verb = verb
