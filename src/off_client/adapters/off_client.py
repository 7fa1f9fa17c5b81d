"""Open Food Facts HTTP client."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from off_client.config import Settings
from off_client.domain.output import OutputOptions
from off_client.domain.params import ApiVersion, Locale, Params
from off_client.errors import UnsupportedOperationError
from off_client.services.assembler import assemble_params
from off_client.services.search import SearchParams, search_builder

_logger = logging.getLogger(__name__)

# Output keys each endpoint accepts. Country and language are selected
# through the subdomain, so cc/lc are never sent as query parameters.
_FACET_KEYS = ("page", "page_size", "fields", "nocache")
_PRODUCTS_BY_KEYS = ("page", "page_size", "fields")
_PRODUCT_KEYS = ("fields",)
_SEARCH_KEYS = ("page", "page_size", "fields")


class OffClient(Protocol):
    """Interface for Open Food Facts read operations.

    All methods return the raw response; decoding is left to the caller.
    """

    version: ApiVersion

    def search_builder(self) -> SearchParams:
        """Return an empty search builder for the client's version."""

    async def taxonomy(self, taxonomy: str) -> httpx.Response:
        """Fetch a static taxonomy file."""

    async def facet(
        self, facet: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """Fetch a facet listing such as ``brands``."""

    async def categories(self, output: OutputOptions | None = None) -> httpx.Response:
        """Fetch all categories."""

    async def nutrients(self, output: OutputOptions | None = None) -> httpx.Response:
        """Fetch the nutrient list for a country."""

    async def products_by(
        self, what: str, value_id: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """Fetch products for a facet value or category."""

    async def product(
        self, barcode: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """Fetch a product by barcode."""

    async def search(
        self, search: SearchParams, output: OutputOptions | None = None
    ) -> httpx.Response:
        """Run a product search."""

    async def search_by_barcode(
        self, barcodes: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """Search by a comma-separated barcode list."""


@dataclass
class HttpxOffClient(OffClient):
    """HTTPX-backed Open Food Facts client."""

    version: ApiVersion
    http_client: httpx.AsyncClient
    locale: Locale = field(default_factory=Locale)
    base_domain: str = "openfoodfacts.org"
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls,
        version: ApiVersion | str,
        locale: Locale | None = None,
        user_agent: str | None = None,
        base_domain: str = "openfoodfacts.org",
        timeout_seconds: float = 15,
    ) -> "HttpxOffClient":
        """Create a client with a managed httpx session."""
        headers = {"User-Agent": user_agent} if user_agent else None
        return cls(
            version=ApiVersion(version),
            http_client=httpx.AsyncClient(headers=headers),
            locale=locale or Locale(),
            base_domain=base_domain,
            timeout_seconds=timeout_seconds,
        )

    def search_builder(self) -> SearchParams:
        """Return an empty search builder for this client's version."""
        return search_builder(self.version)

    async def taxonomy(self, taxonomy: str) -> httpx.Response:
        """``GET /data/taxonomies/{taxonomy}.json``, always on ``world``."""
        url = f"{self.base_url(Locale())}data/taxonomies/{taxonomy}.json"
        return await self._get(url)

    async def facet(
        self, facet: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """``GET /{facet}.json``.

        The facet name may be given in English or localized, e.g.
        ``additives`` or ``additifs``.
        """
        url = f"{self.base_url(_locale_of(output))}{facet}.json"
        return await self._get(url, assemble_params(None, output, _FACET_KEYS))

    async def categories(self, output: OutputOptions | None = None) -> httpx.Response:
        """``GET /categories.json``. Only the locale is used."""
        return await self._get(f"{self.base_url(_locale_of(output))}categories.json")

    async def nutrients(self, output: OutputOptions | None = None) -> httpx.Response:
        """``GET /cgi/nutrients.pl``. Only the locale is used."""
        return await self._get(f"{self.cgi_url(_locale_of(output))}nutrients.pl")

    async def products_by(
        self, what: str, value_id: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """``GET /{what}/{value_id}.json``.

        ``what`` is the singular facet name or ``category``, in English or
        localized; ``value_id`` is an id returned by ``facet`` or
        ``categories``.
        """
        url = f"{self.base_url(_locale_of(output))}{what}/{value_id}.json"
        return await self._get(url, assemble_params(None, output, _PRODUCTS_BY_KEYS))

    async def product(
        self, barcode: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """``GET /api/{version}/product/{barcode}``."""
        url = f"{self.api_url(_locale_of(output))}product/{barcode}"
        return await self._get(url, assemble_params(None, output, _PRODUCT_KEYS))

    async def search(
        self, search: SearchParams, output: OutputOptions | None = None
    ) -> httpx.Response:
        """Search products with a builder matching the client version."""
        if search.version != self.version:
            raise UnsupportedOperationError(
                "search",
                self.version,
                f"{search.version} search parameters sent to a {self.version} client",
            )
        params = assemble_params(search, output, _SEARCH_KEYS)
        return await self._get(self.search_url(_locale_of(output)), params)

    async def search_by_barcode(
        self, barcodes: str, output: OutputOptions | None = None
    ) -> httpx.Response:
        """Search by a comma-separated barcode list. V2 only."""
        if self.version is not ApiVersion.V2:
            raise UnsupportedOperationError("search_by_barcode", self.version)
        params: Params = [("code", barcodes)]
        params.extend(assemble_params(None, output, _PRODUCT_KEYS))
        return await self._get(self.search_url(_locale_of(output)), params)

    def base_url(self, locale: Locale | None = None) -> str:
        """Return ``https://{locale}.{domain}/``, defaulting to the client locale."""
        return f"https://{locale or self.locale}.{self.base_domain}/"

    def cgi_url(self, locale: Locale | None = None) -> str:
        return f"{self.base_url(locale)}cgi/"

    def api_url(self, locale: Locale | None = None) -> str:
        return f"{self.base_url(locale)}api/{self.version}/"

    def search_url(self, locale: Locale | None = None) -> str:
        if self.version is ApiVersion.V0:
            return f"{self.cgi_url(locale)}search.pl"
        return f"{self.api_url(locale)}search"

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, url: str, params: Params | None = None) -> httpx.Response:
        _logger.debug("GET %s params=%s", url, len(params or []))
        return await self.http_client.get(
            url, params=params or None, timeout=self.timeout_seconds
        )


def _locale_of(output: OutputOptions | None) -> Locale | None:
    return output.locale if output is not None else None


def build_client(settings: Settings | None = None) -> HttpxOffClient:
    """Create a client from settings."""
    resolved = settings or Settings()
    return HttpxOffClient.create(
        version=resolved.api_version,
        locale=resolved.default_locale(),
        user_agent=resolved.user_agent,
        base_domain=resolved.base_domain,
        timeout_seconds=resolved.timeout_seconds,
    )
