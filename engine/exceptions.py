# engine/exceptions.py

class ForecastError(Exception):
    pass


class InsufficientData(ForecastError):
    pass


class InvalidParameter(ForecastError, ValueError):
    pass
