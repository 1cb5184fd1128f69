"""Domain layer: the ULID value type and its range-checked constructors.

String-level helpers live in :mod:`ulidkit.domain.ids`; they depend on the
codec and are not re-exported here to keep this package import-cycle free.
"""

from ulidkit.domain.constructors import from_parts, from_timestamp
from ulidkit.domain.ulid import ZERO, Ulid

__all__ = ["ZERO", "Ulid", "from_parts", "from_timestamp"]
