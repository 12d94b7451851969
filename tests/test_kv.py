"""
Tests for the key-value bindings.
"""
import io
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from app.services.cache.kv import FileKVNamespace, InMemoryKVNamespace
from app.services.cache.s3_gateway import S3KVNamespace


class TestInMemoryKVNamespace:
    @pytest.mark.asyncio
    async def test_put_get_delete(self):
        kv = InMemoryKVNamespace()
        assert await kv.get("k") is None

        await kv.put("k", "v")
        assert await kv.get("k") == "v"

        await kv.delete("k")
        await kv.delete("k")
        assert await kv.get("k") is None


class TestFileKVNamespace:
    @pytest.mark.asyncio
    async def test_values_persist_across_instances(self, tmp_path):
        kv = FileKVNamespace(tmp_path / "kv")
        await kv.put("github_projects", '[{"id": "1"}]')

        reopened = FileKVNamespace(tmp_path / "kv")
        assert await reopened.get("github_projects") == '[{"id": "1"}]'

    @pytest.mark.asyncio
    async def test_missing_key_and_delete(self, tmp_path):
        kv = FileKVNamespace(tmp_path)
        assert await kv.get("absent") is None

        await kv.put("present", "1")
        await kv.delete("present")
        await kv.delete("present")
        assert await kv.get("present") is None

    def test_keys_cannot_escape_root(self, tmp_path):
        kv = FileKVNamespace(tmp_path)
        assert kv.path_for("../outside").parent == tmp_path


class TestS3KVNamespace:
    def _client_error(self, code):
        return ClientError({"Error": {"Code": code, "Message": code}}, "GetObject")

    @pytest.mark.asyncio
    async def test_get_reads_object_body(self):
        s3_client = Mock()
        s3_client.get_object.return_value = {"Body": io.BytesIO(b"12345")}
        kv = S3KVNamespace(s3_client, "bucket", "kv/")

        assert await kv.get("github_projects_timestamp") == "12345"
        s3_client.get_object.assert_called_once_with(Bucket="bucket", Key="kv/github_projects_timestamp")

    @pytest.mark.asyncio
    async def test_missing_object_is_none(self):
        s3_client = Mock()
        s3_client.get_object.side_effect = self._client_error("NoSuchKey")
        kv = S3KVNamespace(s3_client, "bucket")

        assert await kv.get("absent") is None

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        s3_client = Mock()
        s3_client.get_object.side_effect = self._client_error("AccessDenied")
        kv = S3KVNamespace(s3_client, "bucket")

        with pytest.raises(ClientError):
            await kv.get("github_projects")

    @pytest.mark.asyncio
    async def test_put_and_delete(self):
        s3_client = Mock()
        kv = S3KVNamespace(s3_client, "bucket", "kv/")

        await kv.put("screenshot_cache", "{}")
        await kv.delete("screenshot_cache")

        put_kwargs = s3_client.put_object.call_args.kwargs
        assert put_kwargs["Key"] == "kv/screenshot_cache"
        assert put_kwargs["Body"] == b"{}"
        s3_client.delete_object.assert_called_once_with(Bucket="bucket", Key="kv/screenshot_cache")
