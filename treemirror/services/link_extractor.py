import logging
from typing import Callable, List, Optional, Union

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


class LinkExtractor:
    """Pull raw href values out of a directory listing page.

    Hrefs are returned in document order without resolving, filtering or
    de-duplicating them; that is the listing builder's job.
    """

    def __init__(
        self,
        soup_factory: Optional[Callable[[Union[bytes, str]], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract_hrefs(self, html: Union[bytes, str]) -> List[str]:
        if not html:
            return []
        soup = self._soup_factory(html)
        return [a.get("href") for a in soup.find_all("a", href=True)]
