class SubjectError(Exception):
    """Base exception for subject-related errors."""

    pass


class InvalidArgument(SubjectError, ValueError):
    """Raised when a setter is given a value the field does not accept.

    The subject is left untouched; the previous value is retained.
    """

    def __init__(self, field: str, value: object, reason: str = "invalid value"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {value!r} ({reason})")
