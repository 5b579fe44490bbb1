"""httpx logo fetcher — implements the LogoFetcher port."""

from __future__ import annotations

import base64
import ipaddress
import logging

import httpx

from repo_stats.domain.exceptions import BadgeRenderError

logger = logging.getLogger(__name__)

_DEFAULT_MEDIA_TYPE = "image/svg+xml"
MAX_REDIRECTS = 5


class HttpxLogoFetcher:
    """Downloads logos over HTTP(S) so they can be inlined into the SVG.

    Every hop, redirects included, must point at a public host: ``localhost``
    names and literal loopback, private, link-local or reserved addresses are
    refused.  Host names are not resolved here, so a public name that resolves
    to an internal address is only stopped by network egress rules.
    """

    def __init__(self, client: httpx.AsyncClient, max_bytes: int = 1024 * 1024) -> None:
        self._client = client
        self._max_bytes = max_bytes

    async def fetch_data_url(self, logo: str) -> str:
        """GET *logo* → ``data:<media type>;base64,<payload>``."""
        if not logo.startswith(("https://", "http://")):
            raise BadgeRenderError(
                f"Invalid logo '{logo}'. Expected an http(s) URL or a data URL."
            )

        resp = await self._get_following_redirects(logo)

        if resp.status_code != 200:
            raise BadgeRenderError(
                f"Error fetching logo {logo}: HTTP {resp.status_code}"
            )
        if len(resp.content) > self._max_bytes:
            raise BadgeRenderError(
                f"Logo {logo} is larger than {self._max_bytes} bytes."
            )

        media_type = resp.headers.get("content-type", _DEFAULT_MEDIA_TYPE).split(";")[0].strip()
        payload = base64.b64encode(resp.content).decode("ascii")
        logger.debug("Embedded logo %s (%d bytes)", logo, len(resp.content))
        return f"data:{media_type or _DEFAULT_MEDIA_TYPE};base64,{payload}"

    async def _get_following_redirects(self, logo: str) -> httpx.Response:
        url = httpx.URL(logo)
        for _ in range(MAX_REDIRECTS + 1):
            _check_public_host(logo, url)
            try:
                resp = await self._client.get(url, follow_redirects=False)
            except httpx.HTTPError as exc:
                raise BadgeRenderError(f"Error fetching logo {logo}: {exc}") from exc
            if not resp.is_redirect:
                return resp
            url = url.join(resp.headers["location"])
        raise BadgeRenderError(f"Error fetching logo {logo}: too many redirects")


def _check_public_host(logo: str, url: httpx.URL) -> None:
    host = url.host.lower().rstrip(".")
    if url.scheme not in ("http", "https") or not host:
        raise BadgeRenderError(f"Invalid logo '{logo}'. Expected an http(s) URL or a data URL.")
    if host == "localhost" or host.endswith(".localhost"):
        raise BadgeRenderError(f"Logo host {host} is not allowed.")
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return
    if not address.is_global:
        raise BadgeRenderError(f"Logo host {host} is not allowed.")
