from __future__ import annotations

from .model import Office

DEFAULT_OFFICES = (
    Office(office_id="office-1", name="Siddhii Vinayak Towers", latitude=22.99417, longitude=72.49939),
    Office(office_id="office-2", name="Matrix Corporate Road", latitude=23.008349, longitude=72.506866),
)
