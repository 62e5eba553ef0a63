from dataclasses import dataclass


@dataclass
class Vehicle:
    """
    Read-only view of a vehicle as the booking core sees it.
    The per-day rate is the flat listed price; there are no discounts or surcharges.
    """
    vehicle_id: str
    brand: str
    model: str
    type: str  # "car" | "motorbike" | "truck"
    daily_rate: float

    @property
    def name(self) -> str:
        return f"{self.brand} {self.model}".strip()

    def to_dict(self) -> dict:
        return {
            "id": self.vehicle_id,
            "name": self.name,
            "brand": self.brand,
            "model": self.model,
            "type": self.type,
            "dailyRate": self.daily_rate,
        }
