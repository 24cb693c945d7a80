"""Scale-tagged tonnages.

The engine works in plain tonnes. Plant reports in China quote annual output in
万吨 (ten-thousand tonnes), so every tonnage carries its scale and conversion
happens only through ``Tonnage.to``.
"""

from dataclasses import dataclass
from enum import Enum


class Scale(Enum):
    TONNES = 1.0
    TEN_THOUSAND_TONNES = 10_000.0

    @property
    def suffix(self):
        return "t" if self is Scale.TONNES else "万t"


@dataclass(frozen=True)
class Tonnage:
    value: float
    scale: Scale = Scale.TONNES

    @property
    def tonnes(self):
        return self.value * self.scale.value

    def to(self, scale):
        """Return the same quantity expressed in another scale"""
        if scale is self.scale:
            return self
        return Tonnage(self.tonnes / scale.value, scale)

    def __mul__(self, factor):
        if isinstance(factor, Tonnage):
            raise TypeError("Cannot multiply two tonnages together")
        return Tonnage(self.value * factor, self.scale)

    __rmul__ = __mul__

