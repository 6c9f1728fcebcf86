from uuid import UUID

import attrs


@attrs.define
class Room:
    id: UUID
    tenant_id: UUID
    name: str
    max_occupancy: int
    active: bool = True

    def fits(self, party_size: int | None) -> bool:
        return party_size is None or party_size <= self.max_occupancy
