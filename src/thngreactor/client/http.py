import json
import aiohttp

from urllib.parse import quote

from .base import EntityClient, EntityClientRegistry
from .exceptions import RemoteOperationError
from . import logger, config

DEBUG_ENTITY_CLIENT = config.DEBUG_ENTITY_CLIENT


@EntityClientRegistry.register('http')
class HttpEntityClient(EntityClient):
    ''' Entity API over HTTP.

        - create action:   POST {api_url}/thngs/{thng_id}/actions/{action_type}
        - update property: PUT  {api_url}/thngs/{thng_id}/properties
    '''

    def __init__(self, api_url=None, api_key=None):
        self._api_url = (api_url or config.ENTITY_API_URL).rstrip('/')
        self._api_key = api_key or config.ENTITY_API_KEY

    @property
    def api_url(self):
        return self._api_url

    def headers(self):
        hdr = {"accept": "application/json", "content-type": "application/json"}
        if self._api_key:
            hdr["authorization"] = self._api_key

        return hdr

    async def request(self, method, path, body):
        url = f"{self._api_url}/{path}"
        DEBUG_ENTITY_CLIENT and logger.debug("REQUEST [%s %s] => %s", method, url, body)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.request(method, url, json=body, headers=self.headers()) as resp:
                    content = await resp.text()
                    if resp.status >= 400:
                        raise RemoteOperationError(
                            "R00.004",
                            f"Entity API responded [{resp.status}] to [{method} {url}]",
                            {"status": resp.status, "response": content}
                        )

                    return json.loads(content) if content else None
        except aiohttp.ClientError as e:
            raise RemoteOperationError(
                "R00.004",
                f"Entity API request [{method} {url}] failed: {e}"
            ) from e

    async def create_action(self, thng_id, action_type, body):
        return await self.request(
            "POST",
            f"thngs/{quote(thng_id, safe='')}/actions/{quote(action_type, safe='')}",
            body
        )

    async def update_property(self, thng_id, body):
        return await self.request("PUT", f"thngs/{quote(thng_id, safe='')}/properties", body)
