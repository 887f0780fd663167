"""Flat query string decoding.

Every inbound URI form shares this decoder, so the same query yields the
same params whichever scheme delivered it.
"""

from urllib.parse import unquote_plus


def parse_query(query: str) -> dict[str, str]:
    """Decode *query* into a flat ``{name: value}`` mapping.

    Pairs without a name are ignored, a name without ``=`` maps to ``""``,
    and a repeated name keeps its last value. No nesting: ``a[b]=1``
    yields the key ``"a[b]"``.

    ::

        parse_query("ref=push&utm_source=ios")  # {"ref": "push", "utm_source": "ios"}
        parse_query("q=hello+world%21")         # {"q": "hello world!"}
    """
    params: dict[str, str] = {}
    if not query:
        return params
    for pair in query.split("&"):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        if not name:
            continue
        params[unquote_plus(name)] = unquote_plus(value)
    return params
