import logging
from typing import Optional
from urllib.parse import quote

import httpx

from lengthen_cli.utils import Config, SubmissionParams, SubmitResult

logger = logging.getLogger(__name__)

LENGTHEN_PATH = "/lengthen"
LENGTHENED_PATH = "/lengthened/"

# Left unescaped by JavaScript's encodeURIComponent, on top of what quote() keeps.
_URI_COMPONENT_SAFE = "!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_query_path(params: SubmissionParams) -> str:
    """Only the target URL is encoded; delay and duration go out as typed."""
    return (
        f"{LENGTHEN_PATH}?url={encode_uri_component(params.url)}"
        f"&delay={params.delay}&duration={params.duration}"
    )


class HttpClient:
    def __init__(self, cfg: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cfg = cfg
        self.origin = cfg.origin
        self._client = httpx.AsyncClient(
            base_url=self.origin,
            timeout=cfg.timeout,
            verify=cfg.verify_tls,
            follow_redirects=True,
            transport=transport,
        )

    def result_url(self, short_code: str) -> str:
        return self.origin + LENGTHENED_PATH + short_code

    async def lengthen(self, params: SubmissionParams) -> SubmitResult:
        try:
            path = build_query_path(params)
            logger.debug("GET %s%s", self.origin, path)
            resp = await self._client.get(path)
        except (httpx.RequestError, httpx.InvalidURL, UnicodeError) as e:
            logger.debug("Request failed: %r", e)
            return SubmitResult.transport_error(repr(e))

        logger.debug("Response status %s: %s", resp.status_code, resp.text)
        if resp.status_code == httpx.codes.OK:
            return SubmitResult.success(resp.text)
        return SubmitResult.application_error(resp.status_code)

    async def aclose(self):
        await self._client.aclose()
