"""Domain Types — resource naming and identifier types shared by stores and handlers.

Invariants:
    - ID_FIELD is the single wire key carrying a record's identifier
    - ResourceNames derives every response key from one singular/plural pair
    - ListingStyle values serialize to string (settings and logs)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType


Record = dict[str, Any]

ID_FIELD = "_id"

MemoryId = NewType("MemoryId", int)
ObjectIdHex = NewType("ObjectIdHex", str)   # 24 lowercase hex chars


class ProductsBackend(str, Enum):
    """Where product records live."""
    DATABASE = "database"
    MEMORY = "memory"


class ListingStyle(str, Enum):
    """How GET on a collection frames its result."""
    BARE = "bare"           # plain JSON array, empty is fine
    ENVELOPE = "envelope"   # {success, total<Plural>, <plural>}, empty is 404


@dataclass(frozen=True)
class ResourceNames:
    """Naming for one resource type, e.g. product/products."""
    singular: str
    plural: str

    @property
    def title(self) -> str:
        return self.singular.capitalize()

    @property
    def updated_key(self) -> str:
        return f"updated{self.title}"

    @property
    def edited_key(self) -> str:
        return f"edited{self.title}"

    @property
    def deleted_key(self) -> str:
        return f"deleted{self.title}"

    @property
    def total_key(self) -> str:
        return f"total{self.plural.capitalize()}"


PRODUCTS = ResourceNames("product", "products")
USERS = ResourceNames("user", "users")
