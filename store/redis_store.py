"""
Redis store — keeps analyses in Redis so several API processes can share them.

Layout:
    codescan:analysis:<id>   → JSON document for one analysis
    codescan:analysis_ids    → list of ids in insertion order (RPUSH)

create() writes the document and appends the id in one MULTI/EXEC block.
update() is an optimistic transaction: WATCH the document, read it, merge,
then MULTI/SET/EXEC. If another client wrote the key in between, EXEC fails
and redis-py retries the whole read-merge-write, so updates to the same id
serialize without a server-side lock.
"""

import json
import uuid
from datetime import datetime
from typing import Any, Optional

from redis import Redis
from redis.client import Pipeline

from analyzer.types import AnalysisResult
from models.enums import AnalysisStatus, Language
from store.base import (
    AbstractAnalysisStore,
    AnalysisRecord,
    check_update_fields,
    merge_update,
)


class RedisAnalysisStore(AbstractAnalysisStore):

    backend_name = "redis"

    KEY_PREFIX = "codescan:analysis:"
    IDS_KEY = "codescan:analysis_ids"

    def __init__(self, redis_client: Redis, **kwargs):
        super().__init__(**kwargs)
        self._redis = redis_client

    def _key(self, analysis_id: str) -> str:
        return f"{self.KEY_PREFIX}{analysis_id}"

    def create(self, filename: str, language: Language | str, code: str) -> AnalysisRecord:
        record = AnalysisRecord(
            id=str(uuid.uuid4()),
            filename=filename,
            language=Language(language),
            code=code,
            created_at=self._clock(),
        )
        pipe = self._redis.pipeline(transaction=True)
        pipe.set(self._key(record.id), _dumps(record))
        pipe.rpush(self.IDS_KEY, record.id)
        pipe.execute()
        return record

    def get(self, analysis_id: str) -> Optional[AnalysisRecord]:
        raw = self._redis.get(self._key(analysis_id))
        return _loads(raw) if raw is not None else None

    def list_all(self) -> list[AnalysisRecord]:
        ids = [_decode(i) for i in self._redis.lrange(self.IDS_KEY, 0, -1)]
        if not ids:
            return []
        docs = self._redis.mget([self._key(i) for i in ids])
        records = [_loads(raw) for raw in docs if raw is not None]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def update(self, analysis_id: str, **fields: Any) -> Optional[AnalysisRecord]:
        check_update_fields(fields)
        key = self._key(analysis_id)

        def _apply(pipe: Pipeline) -> Optional[AnalysisRecord]:
            raw = pipe.get(key)  # immediate mode while WATCHing
            if raw is None:
                return None
            current = _loads(raw)
            updated = merge_update(current, dict(fields))
            if updated is current:
                return current
            pipe.multi()
            pipe.set(key, _dumps(updated))
            return updated

        return self._redis.transaction(_apply, key, value_from_callable=True)

    def count(self) -> int:
        return self._redis.llen(self.IDS_KEY)

    def close(self) -> None:
        self._redis.close()


def _decode(value) -> str:
    return value.decode() if isinstance(value, bytes) else value


def _dumps(record: AnalysisRecord) -> str:
    return json.dumps({
        "id": record.id,
        "filename": record.filename,
        "language": record.language.value,
        "code": record.code,
        "created_at": record.created_at.isoformat(),
        "status": record.status.value,
        "results": record.results.to_dict() if record.results is not None else None,
        "duration": record.duration,
        "error": record.error,
    })


def _loads(raw) -> AnalysisRecord:
    data = json.loads(raw)
    return AnalysisRecord(
        id=data["id"],
        filename=data["filename"],
        language=Language(data["language"]),
        code=data["code"],
        created_at=datetime.fromisoformat(data["created_at"]),
        status=AnalysisStatus(data["status"]),
        results=AnalysisResult.from_dict(data["results"]) if data["results"] else None,
        duration=data["duration"],
        error=data["error"],
    )
