"""Value model: kinds, the Value wrapper, and its ordering relation."""

from json_value.model.kinds import Kind
from json_value.model.ordering import Ordering, compare
from json_value.model.value import Value

__all__ = ["Kind", "Ordering", "Value", "compare"]
