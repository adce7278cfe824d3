"""requests.Session construction, including local source address binding."""
import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)


class SourceAddressAdapter(HTTPAdapter):
    """HTTPAdapter whose connections originate from a fixed local IP address."""

    def __init__(self, source_address: str, **kwargs):
        self.source_address = (source_address, 0)
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["source_address"] = self.source_address
        super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        proxy_kwargs["source_address"] = self.source_address
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def make_session(bind_address: Optional[str] = None, pool_maxsize: int = 10) -> requests.Session:
    """Build the session shared by every fetch of the process.

    `pool_maxsize` should be at least the number of concurrent requests so
    connections are reused instead of discarded.
    """
    session = requests.Session()
    pool_maxsize = max(int(pool_maxsize), 1)
    if bind_address:
        logger.info("Binding outgoing connections to %s", bind_address)
        adapter = SourceAddressAdapter(bind_address, pool_maxsize=pool_maxsize)
    else:
        adapter = HTTPAdapter(pool_maxsize=pool_maxsize)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session
