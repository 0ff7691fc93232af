"""RFC 8288 `link` header for paginated list responses.

    <http://host/api/v1/products?page=0&size=10>; rel="first", ...

first/prev are emitted when not on the first page, next/last when
not on the last one.
"""

from fastapi import Request

from tienda.schemas.page import PageResponse


def _page_url(request: Request, page: int, size: int) -> str:
    return str(request.url.include_query_params(page=page, size=size))


def link_header(request: Request, result: PageResponse) -> str:
    page, size = result.page_number, result.page_size
    last = max(result.total_pages - 1, 0)
    links = []
    if page < last:
        links.append(f'<{_page_url(request, page + 1, size)}>; rel="next"')
    if page > 0:
        links.append(f'<{_page_url(request, min(page - 1, last), size)}>; rel="prev"')
        links.append(f'<{_page_url(request, 0, size)}>; rel="first"')
    if page < last:
        links.append(f'<{_page_url(request, last, size)}>; rel="last"')
    return ", ".join(links)
