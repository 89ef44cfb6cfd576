"""ProductFilter: a query descriptor for catalog search.

Not persisted.  Its ``cache_key()`` is the identity used to memoize
search and count results, so it must be canonical: equal filters give
equal keys, different filters never share one.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class ProductFilter:
    name: str | None = None
    category_id: UUID | None = None

    @property
    def has_name(self) -> bool:
        return self.name is not None and bool(self.name.strip())

    @property
    def has_category(self) -> bool:
        return self.category_id is not None

    @property
    def name_pattern(self) -> str | None:
        """Trimmed name substring, or None when the name does not filter."""
        return self.name.strip() if self.has_name else None

    def cache_key(self) -> str:
        # JSON with sorted keys: escaping keeps arbitrary names unambiguous.
        return json.dumps(
            {
                "category_id": str(self.category_id) if self.has_category else None,
                "name": self.name_pattern,
            },
            sort_keys=True,
            separators=(",", ":"),
        )
