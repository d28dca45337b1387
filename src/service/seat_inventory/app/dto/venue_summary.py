import attrs


@attrs.define(frozen=True)
class VenueSummary:
    id: int
    name: str
    capacity: int
    seat_count: int
