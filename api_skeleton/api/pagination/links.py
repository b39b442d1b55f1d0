"""URI construction for pagination and resource links."""

from starlette.datastructures import URL

from api_skeleton.api.constants import PAGE_NUMBER_PARAM, PAGE_SIZE_PARAM


def public_url(url: URL | str, base_url: str | None = None) -> URL:
    """Return ``url`` with its scheme and host taken from ``base_url``.

    Args:
        url: URL as seen by the application.
        base_url: Public ``scheme://host[:port]``, or None to keep ``url``.

    Returns:
        URL: The URL clients should use.
    """
    url = URL(str(url))
    if not base_url:
        return url
    public = URL(base_url)
    return url.replace(scheme=public.scheme, netloc=public.netloc)


class PageLinkBuilder:
    """Builds page links from the URL of the current request.

    The path and every non-pagination query parameter of ``url`` are kept;
    ``page[number]`` and ``page[size]`` are rewritten for the target page.

    Args:
        url: The URL of the request being paginated.
        base_url: Optional public ``scheme://host[:port]`` replacing the one
            in ``url``, for deployments behind a proxy.
    """

    def __init__(self, url: URL | str, base_url: str | None = None) -> None:
        self.url = public_url(url, base_url)

    def __call__(self, page_number: int, page_size: int) -> str:
        return self.link(page_number, page_size)

    def link(self, page_number: int, page_size: int) -> str:
        """Return the absolute URI of ``page_number`` at ``page_size``."""
        return str(
            self.url.include_query_params(
                **{PAGE_NUMBER_PARAM: page_number, PAGE_SIZE_PARAM: page_size}
            )
        )

    def self_link(self) -> str:
        """Return the request URL itself."""
        return str(self.url)
