# cost_basis_engine/core/enums/cost_method.py

from enum import Enum

class CostBasisMethod(str, Enum):
    """
    Defines the supported lot disposal methods.
    Values match the identifiers used by the accounting front end.
    """
    FIFO = "FIFO"
    LIFO = "LIFO"
    HIFO = "HIFO"
    SPECIFIC_ID = "SpecificID"
    AVG_COST = "AvgCost"

    @classmethod
    def list(cls):
        """Returns a list of all method values."""
        return list(map(lambda c: c.value, cls))

    @classmethod
    def is_valid(cls, method_str: str) -> bool:
        """Checks if a given string is a supported cost basis method."""
        return method_str in cls.list()
