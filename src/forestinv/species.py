"""
Species and tree status types.

Usage:
    from forestinv.species import Species, TreeStatus

    df = Species(code="DF", common_name="Douglas Fir")
    print(df)  # "Douglas Fir (DF)"

    status = TreeStatus.from_string("l")  # TreeStatus.LIVE
"""

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import InvalidDataError


@dataclass(frozen=True)
class Species:
    """A tree species.

    Two species are the same species when their codes match; the common
    name is descriptive only and does not take part in equality or hashing.

    Attributes:
        code: Species code (e.g., "DF", "PSME")
        common_name: Common name (e.g., "Douglas Fir")
    """
    code: str
    common_name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.common_name} ({self.code})"


class TreeStatus(str, Enum):
    """
    Status of a measured tree.

    Only LIVE trees contribute to standing-stock metrics. DEAD and CUT
    trees record mortality and harvest; INGROWTH records regeneration.
    """

    LIVE = "Live"
    DEAD = "Dead"
    CUT = "Cut"
    INGROWTH = "Ingrowth"

    @classmethod
    def from_string(cls, value: str) -> "TreeStatus":
        """
        Parse a status name or its single-letter abbreviation.

        Args:
            value: Case-insensitive status string ("live", "L", "Dead", ...)

        Returns:
            The corresponding TreeStatus member

        Raises:
            InvalidDataError: If the string is not a known status
        """
        normalized = str(value).strip().lower()
        for member in cls:
            if normalized in (member.value.lower(), member.value[0].lower()):
                return member
        raise InvalidDataError("tree status", f"unknown status '{value}'")

    def __str__(self) -> str:
        """Return the status name."""
        return self.value


__all__ = [
    "Species",
    "TreeStatus",
]
