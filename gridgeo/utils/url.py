from typing import List


def multiurljoin(urls: List[str]) -> str:
    """
    Join a base URL and path segments into a single URL.

    Each component is separated by exactly one forward slash. Unlike
    `urllib.parse.urljoin`, the base path is always kept and no trailing slash
    is added, so the result can be used as a REST endpoint directly.

    Args:
        urls: The URL components to join, base first.
            Example: ['https://api.os.uk/search/names/v1', 'find']

    Returns:
        The joined URL. Example: 'https://api.os.uk/search/names/v1/find'

    Examples:
        >>> multiurljoin(['https://example.com/sepa/ffims/v1/', '/areas', 'location'])
        'https://example.com/sepa/ffims/v1/areas/location'
    """
    if not urls:
        raise ValueError("at least one url component is required")

    head, *tail = urls
    parts = [head.rstrip("/")] + [u.strip("/") for u in tail if u.strip("/")]
    return "/".join(parts)
