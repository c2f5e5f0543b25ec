from typing import Dict, Type

from .base import SourceAdapter
from .html_table import HtmlTableAdapter
from .json_list import JsonListAdapter
from .keyed_json import KeyedJsonAdapter
from .post_json import PostJsonAdapter

ADAPTER_KINDS: Dict[str, Type[SourceAdapter]] = {
    JsonListAdapter.kind: JsonListAdapter,
    PostJsonAdapter.kind: PostJsonAdapter,
    KeyedJsonAdapter.kind: KeyedJsonAdapter,
    HtmlTableAdapter.kind: HtmlTableAdapter,
}

__all__ = [
    "ADAPTER_KINDS",
    "SourceAdapter",
    "HtmlTableAdapter",
    "JsonListAdapter",
    "KeyedJsonAdapter",
    "PostJsonAdapter",
]
