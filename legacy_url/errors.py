__all__ = ('URLError',
           'EmptyURLError',
           'InvalidCharacterError',
           'MissingSchemeError',
           'MissingHostError',
           'InvalidHostError',
           'InvalidPortError')


class URLError(ValueError):
    pass


class EmptyURLError(URLError):
    pass


class InvalidCharacterError(URLError):
    pass


class MissingSchemeError(URLError):
    pass


class MissingHostError(URLError):
    pass


class InvalidHostError(URLError):
    pass


class InvalidPortError(URLError):
    pass
