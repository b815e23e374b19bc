class CapacityError(ValueError):
    """Active persons outnumber the assignable seats."""
    def __init__(self, persons: int, seats: int):
        self.persons = persons
        self.seats = seats
        super().__init__(
            f"Cannot generate: {persons} active persons but only {seats} assignable seats."
        )


class ProjectEditError(ValueError):
    """A project edit was rejected because of invalid input."""
    def __init__(self, message="Invalid project edit."):
        super().__init__(message)


class NotFoundError(KeyError):
    """Entity id not found in the store."""
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")
