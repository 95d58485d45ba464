from localshortener.dao.base import UrlRecordBaseDAO
from localshortener.dao.memory import UrlRecordMemoryDAO
from localshortener.dao.redis import UrlRecordRedisDAO


__all__ = [
    'UrlRecordBaseDAO',
    'UrlRecordMemoryDAO',
    'UrlRecordRedisDAO',
]
