"""Network functions for retrieving reports
"""

from typing import Optional

import requests
from requests import adapters

import junitguard
from junitguard import config


RequestException = requests.exceptions.RequestException

# The User-Agent: header to use
USER_AGENT = f'junitguard/{junitguard.__version__}'

# Block size to download
CHUNK_SIZE = 0x10000


class ResponseTooLarge(Exception):
    """The response body was larger than permitted."""


class Session(requests.Session):
    """Set up a requests session with a standard configuration"""

    def __init__(self, total: Optional[int] = None, backoff_factor: Optional[float] = None,
                 status_forcelist: Optional[list[int]] = None):
        super().__init__()
        if total is None:
            total = config.get('http_retries')
        if backoff_factor is None:
            backoff_factor = config.get('http_backoff_factor')
        if not status_forcelist:
            status_forcelist = [429, 500, 502, 503, 504]

        retry_strategy = adapters.Retry(
            total=total, backoff_factor=backoff_factor, status_forcelist=status_forcelist,
            allowed_methods=['HEAD', 'GET', 'OPTIONS'])
        adapter = adapters.HTTPAdapter(max_retries=retry_strategy)
        self.mount('https://', adapter)
        self.mount('http://', adapter)
        self.headers['User-Agent'] = USER_AGENT


def get_text(session: requests.Session, url: str, max_size: int) -> str:
    """Download a document as text, refusing to read more than max_size bytes.

    The body is streamed so an oversized response is abandoned without reading it all.
    """
    with session.get(url, stream=True, timeout=config.get('http_timeout')) as resp:
        resp.raise_for_status()
        body = bytearray()
        for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
            body += chunk
            if len(body) > max_size:
                raise ResponseTooLarge(f'Response exceeds maximum size of {max_size} bytes')
        # requests assumes ISO-8859-1 for text/* without a charset, but XML defaults to UTF-8
        if 'charset' in resp.headers.get('Content-Type', '') and resp.encoding:
            encoding = resp.encoding
        else:
            encoding = 'utf-8'
    try:
        return body.decode(encoding, errors='replace')
    except LookupError:
        # Unknown charset name given by the server
        return body.decode('utf-8', errors='replace')
