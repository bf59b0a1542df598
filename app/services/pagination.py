"""
Заголовки пагинации для списочных ответов.

Формирует счетчики X-Page-Number, X-Page-Size, X-Total-Count и
заголовок Link (RFC 5988) со ссылками first, last, prev, next.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from app.schemas.pagination import PageMeta


@dataclass(frozen=True)
class PaginationHeaders:
    """
    Результат построения заголовков пагинации.

    Attributes:
        counters: Счетчики страницы
        link: Значение заголовка Link или None
    """

    counters: Dict[str, str] = field(default_factory=dict)
    link: Optional[str] = None

    def as_dict(self) -> Dict[str, str]:
        headers = dict(self.counters)
        if self.link:
            headers["Link"] = self.link
        return headers


def _page_url(request_url: str, page: int, size: int) -> str:
    """Заменить page и size в URL, остальные параметры остаются как есть."""
    parts = urlsplit(request_url)
    query = [
        pair
        for pair in parts.query.split("&")
        if pair and pair.split("=", 1)[0] not in ("page", "size")
    ]
    query.append(f"size={size}")
    query.append(f"page={page}")
    return urlunsplit(parts._replace(query="&".join(query)))


def build_link_header(meta: PageMeta, request_url: str) -> str:
    """
    Построить значение заголовка Link.

    Порядок отношений фиксирован: first, last, prev, next.
    prev и next присутствуют только если такие страницы существуют.
    """
    relations: List[Tuple[int, str]] = [
        (0, "first"),
        (max(meta.total_pages - 1, 0), "last"),
    ]
    if meta.has_previous:
        relations.append((meta.page - 1, "prev"))
    if meta.has_next:
        relations.append((meta.page + 1, "next"))

    return ", ".join(
        f'<{_page_url(request_url, page, meta.page_size)}>; rel="{rel}"'
        for page, rel in relations
    )


def build_pagination_headers(meta: PageMeta, request_url: str) -> PaginationHeaders:
    """
    Построить заголовки пагинации.

    Args:
        meta: Метаданные страницы
        request_url: Полный URL текущего запроса

    Returns:
        PaginationHeaders: Счетчики и, если есть страницы, заголовок Link
    """
    counters = {
        "X-Page-Number": str(meta.page),
        "X-Page-Size": str(meta.page_size),
        "X-Total-Count": str(meta.total),
    }
    link = build_link_header(meta, request_url) if meta.total_pages > 0 else None
    return PaginationHeaders(counters=counters, link=link or None)
