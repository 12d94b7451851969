from __future__ import annotations

import asyncio
from typing import Any, Optional

from botocore.exceptions import ClientError

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class S3KVNamespace:
    """Key-value binding backed by one S3 object per key."""

    def __init__(self, client: Any, bucket: str, prefix: str = "") -> None:
        self._client = client
        self._bucket = bucket
        self._prefix = prefix

    def object_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _get(self, key: str) -> Optional[str]:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=self.object_key(key))
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code in _MISSING_KEY_CODES:
                return None
            raise
        return response["Body"].read().decode("utf-8")

    def _put(self, key: str, value: str) -> None:
        self._client.put_object(
            Bucket=self._bucket,
            Key=self.object_key(key),
            Body=value.encode("utf-8"),
            ContentType="text/plain; charset=utf-8",
        )

    def _delete(self, key: str) -> None:
        # S3 deletes are idempotent; a missing object is not an error
        self._client.delete_object(Bucket=self._bucket, Key=self.object_key(key))

    # boto3 is blocking, keep it off the event loop
    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def put(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._put, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)
