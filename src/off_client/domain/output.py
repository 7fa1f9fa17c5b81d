"""Request-wide output options."""

from collections.abc import Collection, Sequence
from dataclasses import dataclass, replace

from off_client.domain.params import Locale, Params


@dataclass(frozen=True)
class OutputOptions:
    """Locale, pagination, field selection and cache bypass.

    ``None`` values are left out of the rendered parameters. Not every
    endpoint supports every option; callers pass ``allowed`` to
    ``params`` to keep the supported subset.
    """

    locale: Locale | None = None
    page: int | None = None
    page_size: int | None = None
    fields: str | None = None
    nocache: bool | None = None

    def __post_init__(self) -> None:
        if self.fields == "":
            object.__setattr__(self, "fields", None)

    def with_locale(self, locale: Locale | str | None) -> "OutputOptions":
        if isinstance(locale, str):
            locale = Locale.parse(locale) if locale else None
        return replace(self, locale=locale)

    def with_page(self, page: int | None) -> "OutputOptions":
        return replace(self, page=page)

    def with_page_size(self, page_size: int | None) -> "OutputOptions":
        return replace(self, page_size=page_size)

    def with_pagination(self, page: int, page_size: int) -> "OutputOptions":
        return replace(self, page=page, page_size=page_size)

    def with_fields(self, fields: str | Sequence[str] | None) -> "OutputOptions":
        """Set the returned fields. An empty value unsets them."""
        if fields is not None and not isinstance(fields, str):
            fields = ",".join(fields)
        return replace(self, fields=fields or None)

    def with_nocache(self, nocache: bool | None) -> "OutputOptions":
        return replace(self, nocache=nocache)

    def params(self, allowed: Collection[str] | None = None) -> Params:
        """Render as ``cc, lc, page, page_size, fields, nocache`` pairs."""
        pairs: Params = []
        if self.locale is not None:
            pairs.extend(self.locale.params())
        if self.page is not None:
            pairs.append(("page", str(self.page)))
        if self.page_size is not None:
            pairs.append(("page_size", str(self.page_size)))
        if self.fields is not None:
            pairs.append(("fields", self.fields))
        if self.nocache:
            pairs.append(("nocache", "true"))
        if allowed is None:
            return pairs
        return [(key, value) for key, value in pairs if key in allowed]
