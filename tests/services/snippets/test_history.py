import pytest

from javapad.config import StorageSettings
from javapad.services.identity import ANONYMOUS_PRINCIPAL, Identity
from javapad.services.snippets import (
    InMemorySnippetStore,
    JsonFileSnippetStore,
    SnippetHistory,
    create_snippet_store,
)


class TestIdentity:
    @pytest.mark.parametrize("principal", [None, "", "   ", ANONYMOUS_PRINCIPAL])
    def test_unauthenticated(self, principal):
        assert Identity(principal).is_authenticated is False

    def test_authenticated(self):
        assert Identity("rdmx6-jaaaa-aaaaa-aaadq-cai").is_authenticated is True

    def test_anonymous_factory(self):
        assert Identity.anonymous().is_authenticated is False


class TestSnippetHistory:
    @pytest.mark.asyncio
    async def test_authenticated_caller_round_trip(self):
        history = SnippetHistory(InMemorySnippetStore(), Identity("alice"))

        snippet_id = await history.submit("class Main {}")

        assert snippet_id is not None
        assert [s.id for s in await history.list()] == [snippet_id]
        assert (await history.get(snippet_id)).code == "class Main {}"
        assert await history.set_output(snippet_id, "ok") is True
        assert (await history.get(snippet_id)).output == "ok"
        assert [s.id for s in await history.search("main")] == [snippet_id]
        assert await history.delete(snippet_id) is True
        assert await history.list() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identity", [Identity.anonymous(), Identity(ANONYMOUS_PRINCIPAL)])
    async def test_anonymous_caller_gets_empty_results(self, identity):
        store = InMemorySnippetStore()
        existing = await store.submit(ANONYMOUS_PRINCIPAL, "left behind")
        history = SnippetHistory(store, identity)

        assert await history.submit("class Main {}") is None
        assert await history.list() == []
        assert await history.get(existing) is None
        assert await history.search("left") == []
        assert await history.delete(existing) is False
        assert await history.set_output(existing, "x") is False
        assert await history.clear() == 0
        assert len(await store.list(ANONYMOUS_PRINCIPAL)) == 1

    @pytest.mark.asyncio
    async def test_history_is_scoped_to_identity(self):
        store = InMemorySnippetStore()
        await SnippetHistory(store, Identity("alice")).submit("alice code")

        assert await SnippetHistory(store, Identity("bob")).list() == []


class TestStoreFactory:
    def test_memory(self):
        assert isinstance(create_snippet_store(StorageSettings(snippet_store="memory")), InMemorySnippetStore)
        assert isinstance(create_snippet_store(StorageSettings(snippet_store="")), InMemorySnippetStore)

    def test_json_path(self, tmp_path):
        path = tmp_path / "history.json"
        store = create_snippet_store(StorageSettings(snippet_store=str(path)))
        assert isinstance(store, JsonFileSnippetStore)
        assert store.path == path
