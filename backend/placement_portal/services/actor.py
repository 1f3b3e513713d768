from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, as carried by the bearer token."""
    id: str
    email: str
    role: str

    @property
    def is_student(self) -> bool:
        return self.role == "student"

    @property
    def is_faculty(self) -> bool:
        return self.role == "faculty"
