class NotFoundError(Exception):
    """Raised when a requested route or airport key has no fixture record"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RouteNotFoundError(NotFoundError):
    def __init__(self, airline_code: str, destination_code: str):
        super().__init__("Route not found")
        self.airline_code = airline_code
        self.destination_code = destination_code


class AirportNotFoundError(NotFoundError):
    def __init__(self, airport_code: str):
        super().__init__("Airport not found")
        self.airport_code = airport_code
