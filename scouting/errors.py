class StoreError(Exception):
    """Base class for failures raised by the entity store."""


class DuplicateEntityError(StoreError):
    """A second row for an at-most-one relation (e.g. metrics per player)."""

    def __init__(self, family: str, field: str, value: int):
        self.family = family
        self.field = field
        self.value = value
        super().__init__(f"{family} already exists for {field}={value}")


class DanglingReferenceError(StoreError):
    """A stored foreign key no longer resolves to a parent row."""

    def __init__(self, family: str, field: str, value: int):
        self.family = family
        self.field = field
        self.value = value
        super().__init__(f"{family} references missing {field}={value}")
