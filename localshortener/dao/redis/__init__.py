from localshortener.dao.redis.redis_key_schema import RedisKeySchema
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.url_record_redis_dao import UrlRecordRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'UrlRecordRedisDAO',
]
