"""Query parameter primitives shared by all builders."""

from dataclasses import dataclass
from enum import StrEnum

Params = list[tuple[str, str]]
"""Ordered ``(key, value)`` pairs. Keys may repeat."""

DEFAULT_COUNTRY = "world"


class ApiVersion(StrEnum):
    """Supported API versions.

    ``ApiVersion("v0")`` parses a version string; unknown strings raise
    ``ValueError``.
    """

    V0 = "v0"
    V2 = "v2"


@dataclass(frozen=True)
class Locale:
    """Country code and optional language code.

    The country code is a lowercase ISO 3166-1 code or ``world``; the
    language code is a lowercase ISO 639-1 code. An empty country code
    gives the default locale.
    """

    cc: str = DEFAULT_COUNTRY
    lc: str | None = None

    def __post_init__(self) -> None:
        if not self.cc:
            object.__setattr__(self, "cc", DEFAULT_COUNTRY)
            object.__setattr__(self, "lc", None)
        elif self.lc == "":
            object.__setattr__(self, "lc", None)

    @classmethod
    def parse(cls, value: str) -> "Locale":
        """Parse ``"{cc}"`` or ``"{cc}-{lc}"``."""
        cc, _, rest = value.partition("-")
        lc = rest.split("-")[0]
        return cls(cc=cc, lc=lc or None)

    def params(self) -> Params:
        """Render as ``cc``/``lc`` query parameters."""
        pairs: Params = [("cc", self.cc)]
        if self.lc is not None:
            pairs.append(("lc", self.lc))
        return pairs

    def __str__(self) -> str:
        if self.lc is None:
            return self.cc
        return f"{self.cc}-{self.lc}"
