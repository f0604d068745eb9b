"""Driver class for people waiting to be assigned a vehicle."""


class Driver:
    """A driver in the available-driver queue."""

    def __init__(self, driver_id: str, name: str, experience_years: int, location: str):
        if experience_years < 0:
            raise ValueError(
                f"Years of experience cannot be negative, got {experience_years}"
            )
        self.driver_id = driver_id
        self.name = name
        self.experience_years = int(experience_years)
        self.location = location

    def __repr__(self) -> str:
        return f"Driver({self.driver_id!r}, {self.name!r})"
