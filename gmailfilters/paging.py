from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional


def paginate_gmail_messages(
    svc, *, query: Optional[str] = None, label_ids: Optional[List[str]] = None, page_size: int = 500
) -> Iterator[List[str]]:
    """Yield one list of message IDs per page of Gmail messages.list.

    ``svc`` is the bound resource ``service.users().messages()``.
    """
    token: Optional[str] = None
    while True:
        kwargs: Dict = {"userId": "me", "maxResults": page_size}
        if query:
            kwargs["q"] = query
        if label_ids:
            kwargs["labelIds"] = label_ids
        if token:
            kwargs["pageToken"] = token
        resp: Dict = svc.list(**kwargs).execute()
        ids = [m.get("id") for m in resp.get("messages", []) if m.get("id")]
        if ids:
            yield ids
        token = resp.get("nextPageToken")
        if not token:
            break


def gather_pages(pages: Iterable[List[str]], *, max_pages: Optional[int] = None) -> List[str]:
    out: List[str] = []
    for count, ids in enumerate(pages, start=1):
        out.extend(ids)
        if max_pages and count >= max_pages:
            break
    return out


def chunked(seq: Iterable[str], size: int) -> Iterator[List[str]]:
    """Yield lists of up to `size` items from `seq`."""
    buf: List[str] = []
    for item in seq:
        buf.append(item)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf
