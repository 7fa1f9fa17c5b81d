"""Combines search and output parameters into the final query."""

from collections.abc import Collection

from off_client.domain.output import OutputOptions
from off_client.domain.params import Params
from off_client.services.search import SearchParams


def assemble_params(
    search: SearchParams | None,
    output: OutputOptions | None = None,
    allowed: Collection[str] | None = None,
) -> Params:
    """Return search pairs followed by output pairs, unchanged otherwise.

    ``allowed`` restricts the output options to the keys an endpoint
    supports; it never filters search pairs.
    """
    params: Params = search.params() if search is not None else []
    if output is not None:
        params.extend(output.params(allowed))
    return params
