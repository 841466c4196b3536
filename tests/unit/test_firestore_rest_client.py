"""Firestore REST client tests against httpx.MockTransport (no network)."""

import json
from datetime import UTC, datetime, timedelta, timezone
from types import SimpleNamespace

import httpx
import pytest

from cowconnect.infrastructure.firebase._rest_client import (
    DESCENDING,
    CommitPreconditionError,
    FirestoreRESTClient,
)
from cowconnect.infrastructure.firebase._rest_encoding import (
    ArrayRemove,
    ArrayUnion,
    decode_document,
    encode_document,
    split_transforms,
)

PREFIX = "projects/demo/databases/(default)/documents"


def _client(handler) -> tuple[FirestoreRESTClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(record))
    creds = SimpleNamespace(valid=True, token="test-token")
    return FirestoreRESTClient("demo", creds, http_client=http), seen


class TestEncoding:
    def test_encode_scalars_and_nested(self) -> None:
        fields = encode_document(
            {"n": None, "b": True, "i": 3, "f": 1.5, "s": "x", "l": ("a",), "m": {"k": 1}}
        )["fields"]
        assert fields["n"] == {"nullValue": None}
        assert fields["b"] == {"booleanValue": True}
        assert fields["i"] == {"integerValue": "3"}
        assert fields["f"] == {"doubleValue": 1.5}
        assert fields["l"] == {"arrayValue": {"values": [{"stringValue": "a"}]}}
        assert fields["m"] == {"mapValue": {"fields": {"k": {"integerValue": "1"}}}}

    def test_aware_datetime_is_written_in_utc(self) -> None:
        ist = timezone(timedelta(hours=5, minutes=30))
        fields = encode_document({"t": datetime(2025, 1, 1, 5, 30, tzinfo=ist)})["fields"]
        assert fields["t"] == {"timestampValue": "2025-01-01T00:00:00.000000Z"}

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(TypeError):
            encode_document({"x": object()})

    def test_decode_nanosecond_timestamp(self) -> None:
        data = decode_document({"t": {"timestampValue": "2025-03-01T09:30:00.123456789Z"}})
        assert data["t"] == datetime(2025, 3, 1, 9, 30, 0, 123456, tzinfo=UTC)

    def test_decode_empty(self) -> None:
        assert decode_document(None) == {}

    def test_split_transforms(self) -> None:
        plain, transforms = split_transforms(
            {"posts": ArrayUnion(["p1"]), "old": ArrayRemove(["p0"]), "name": "x"}
        )
        assert plain == {"name": "x"}
        assert transforms == [
            {"fieldPath": "posts", "appendMissingElements": {"values": [{"stringValue": "p1"}]}},
            {"fieldPath": "old", "removeAllFromArray": {"values": [{"stringValue": "p0"}]}},
        ]


class TestWriteBatch:
    async def test_commit_sends_all_writes_with_preconditions(self) -> None:
        client, seen = _client(lambda r: httpx.Response(200, json={"writeResults": []}))
        batch = client.batch()
        batch.create(client.collection("posts").document("p1"), {"content": "hi"})
        batch.update(
            client.collection("farmers").document("f1"),
            {"posts": ArrayUnion(["p1"]), "updatedAt": datetime(2025, 1, 1, tzinfo=UTC)},
        )
        batch.delete(client.collection("posts").document("p0"))
        assert len(batch) == 3

        await batch.commit()

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url).endswith(f"{PREFIX}:commit")
        assert request.headers["Authorization"] == "Bearer test-token"
        create, update, delete = json.loads(request.content)["writes"]
        assert create["update"]["name"] == f"{PREFIX}/posts/p1"
        assert create["currentDocument"] == {"exists": False}
        assert update["updateMask"] == {"fieldPaths": ["updatedAt"]}
        assert update["currentDocument"] == {"exists": True}
        assert update["updateTransforms"][0]["fieldPath"] == "posts"
        assert delete == {"delete": f"{PREFIX}/posts/p0", "currentDocument": {"exists": True}}

    async def test_failed_precondition_raises(self) -> None:
        client, _ = _client(lambda r: httpx.Response(404, json={"error": {"code": 404}}))
        batch = client.batch()
        batch.update(client.collection("experts").document("gone"), {"x": 1})
        with pytest.raises(CommitPreconditionError):
            await batch.commit()

    async def test_server_error_raises_http_error(self) -> None:
        client, _ = _client(lambda r: httpx.Response(500, json={}))
        batch = client.batch()
        batch.delete(client.collection("posts").document("p1"))
        with pytest.raises(httpx.HTTPStatusError):
            await batch.commit()

    async def test_empty_batch_sends_nothing(self) -> None:
        client, seen = _client(lambda r: httpx.Response(200, json={}))
        assert await client.batch().commit() == {}
        assert seen == []


class TestReads:
    async def test_get_missing_document_returns_none(self) -> None:
        client, _ = _client(lambda r: httpx.Response(404))
        assert await client.collection("posts").document("nope").get() is None

    async def test_get_decodes_fields(self) -> None:
        body = {
            "name": f"{PREFIX}/posts/p1",
            "fields": {"content": {"stringValue": "hello"}, "filters": {"arrayValue": {}}},
        }
        client, _ = _client(lambda r: httpx.Response(200, json=body))
        snapshot = await client.collection("posts").document("p1").get()
        assert snapshot.id == "p1"
        assert snapshot.to_dict() == {"content": "hello", "filters": []}

    async def test_query_builds_structured_query_and_decodes_results(self) -> None:
        results = [
            {"readTime": "2025-03-01T00:00:00Z"},
            {
                "document": {
                    "name": f"{PREFIX}/posts/p2",
                    "fields": {"ownerRole": {"stringValue": "doctor"}},
                }
            },
        ]
        client, seen = _client(lambda r: httpx.Response(200, json=results))

        query = (
            client.collection("posts")
            .order_by("createdAt", DESCENDING)
            .limit(10)
            .where("filters", "array-contains-any", ["health", "dairy"])
            .where("ownerRole", "==", "doctor")
        )
        docs = [doc async for doc in query.stream()]

        assert [d.id for d in docs] == ["p2"]
        assert str(seen[0].url).endswith(f"{PREFIX}:runQuery")
        structured = json.loads(seen[0].content)["structuredQuery"]
        assert structured["from"] == [{"collectionId": "posts"}]
        assert structured["orderBy"] == [
            {"field": {"fieldPath": "createdAt"}, "direction": "DESCENDING"}
        ]
        assert structured["limit"] == 10
        composite = structured["where"]["compositeFilter"]
        assert composite["op"] == "AND"
        ops = [f["fieldFilter"]["op"] for f in composite["filters"]]
        assert ops == ["ARRAY_CONTAINS_ANY", "EQUAL"]

    async def test_single_filter_is_not_composite(self) -> None:
        client, _ = _client(lambda r: httpx.Response(200, json=[]))
        query = client.collection("workshops").where(
            "dateFrom", ">=", datetime(2025, 1, 1, tzinfo=UTC)
        )
        structured = query.to_structured_query()
        assert structured["where"]["fieldFilter"]["op"] == "GREATER_THAN_OR_EQUAL"
        assert structured["where"]["fieldFilter"]["value"] == {
            "timestampValue": "2025-01-01T00:00:00.000000Z"
        }

    async def test_collection_limit_starts_an_unfiltered_query(self) -> None:
        client, _ = _client(lambda r: httpx.Response(200, json=[]))
        structured = client.collection("posts").limit(5).to_structured_query()
        assert structured == {"from": [{"collectionId": "posts"}], "limit": 5}

    async def test_document_reference_only_reads(self) -> None:
        client, _ = _client(lambda r: httpx.Response(200, json={}))
        ref = client.collection("posts").document("p1")
        assert ref.path == f"{PREFIX}/posts/p1"
        for name in ("set", "update", "delete"):
            assert not hasattr(ref, name)

    async def test_injected_http_client_is_not_closed(self) -> None:
        client, _ = _client(lambda r: httpx.Response(200, json={}))
        await client.aclose()
        assert not client._http.is_closed
