from ._body import QueryBody
from ._conditions import OPERATORS, ConditionTranslator
from ._models import RegexpFlag, SearchHits, SearchResponse, TotalHits
from .abstract_query import AbstractQuery
from .builder import Builder
from .bulk import Bulk
from .collection import Collection
from .index import Index
from .iterators import SearchResponseIterator
from .pagination import Pagination

__all__ = [
    "AbstractQuery",
    "Builder",
    "Bulk",
    "Collection",
    "ConditionTranslator",
    "Index",
    "OPERATORS",
    "Pagination",
    "QueryBody",
    "RegexpFlag",
    "SearchHits",
    "SearchResponse",
    "SearchResponseIterator",
    "TotalHits",
]
