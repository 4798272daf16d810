"""
Tests for the variable source adapter.

The adapter must never let a lookup failure escape: missing ids and
failing lookups are dropped, a failing batch yields nothing.
"""

import asyncio

import pytest
from tokenexport.model import Alias, Mode, Variable, VariableCollection
from tokenexport.serialization import InMemoryVariableSource
from tokenexport.source import VariableSourceAdapter, remap_collection

M = "m1"


def build_source():
    variables = [
        Variable(id="v1", name="spacing/small", values_by_mode={M: 4}),
        Variable(id="v2", name="spacing/medium", values_by_mode={M: 8}),
    ]
    collection = VariableCollection(
        id="c1",
        name="Spacing",
        default_mode_id=M,
        modes=[Mode(mode_id=M, name="Default")],
        variable_ids=["v1", "missing", "v2"],
    )
    return InMemoryVariableSource([collection], variables), collection


class FlakyVariableSource(InMemoryVariableSource):
    """Raises for selected variable ids."""

    def __init__(self, collections, variables, failing_ids):
        super().__init__(collections, variables)
        self.failing_ids = set(failing_ids)

    async def get_variable_by_id(self, variable_id):
        await asyncio.sleep(0)
        if variable_id in self.failing_ids:
            raise RuntimeError(f"lookup failed for {variable_id}")
        return await super().get_variable_by_id(variable_id)


class BrokenVariableSource(InMemoryVariableSource):
    """Fails outside the per-variable lookups."""

    async def list_collections(self):
        raise RuntimeError("host unavailable")

    async def get_collection_by_id(self, collection_id):
        raise RuntimeError("host unavailable")

    def get_variable_by_id(self, variable_id):
        raise RuntimeError("host unavailable")


class TestFetchVariables:

    @pytest.mark.asyncio
    async def test_missing_ids_are_dropped(self):
        source, collection = build_source()
        variables = await VariableSourceAdapter(source).fetch_variables(collection)
        assert [v.id for v in variables] == ["v1", "v2"]

    @pytest.mark.asyncio
    async def test_failing_lookup_is_dropped(self):
        _, collection = build_source()
        base, _ = build_source()
        source = FlakyVariableSource(base.collections.values(), base.variables.values(), ["v1"])
        variables = await VariableSourceAdapter(source).fetch_variables(collection)
        assert [v.id for v in variables] == ["v2"]

    @pytest.mark.asyncio
    async def test_batch_failure_yields_empty_list(self):
        _, collection = build_source()
        source = BrokenVariableSource([collection], [])
        variables = await VariableSourceAdapter(source).fetch_variables(collection)
        assert variables == []

    @pytest.mark.asyncio
    async def test_lookups_run_concurrently(self):
        """Every lookup starts before any of them finishes."""
        events = []

        class TracingSource(InMemoryVariableSource):
            async def get_variable_by_id(self, variable_id):
                events.append(("start", variable_id))
                await asyncio.sleep(0)
                events.append(("end", variable_id))
                return await super().get_variable_by_id(variable_id)

        base, collection = build_source()
        source = TracingSource(base.collections.values(), base.variables.values())
        await VariableSourceAdapter(source).fetch_variables(collection)
        starts = [i for i, e in enumerate(events) if e[0] == "start"]
        ends = [i for i, e in enumerate(events) if e[0] == "end"]
        assert max(starts) < min(ends)


class TestCollections:

    @pytest.mark.asyncio
    async def test_list_collections(self):
        source, collection = build_source()
        collections = await VariableSourceAdapter(source).list_collections()
        assert collections == [collection]
        assert collections[0] is not collection

    @pytest.mark.asyncio
    async def test_list_collections_failure(self):
        source = BrokenVariableSource([], [])
        assert await VariableSourceAdapter(source).list_collections() == []

    @pytest.mark.asyncio
    async def test_get_collection_failure(self):
        source = BrokenVariableSource([], [])
        assert await VariableSourceAdapter(source).get_collection("c1") is None

    def test_remap_collection_copies_lists(self):
        _, collection = build_source()
        copy = remap_collection(collection)
        copy.variable_ids.append("extra")
        assert "extra" not in collection.variable_ids


class TestAliasTargets:

    @pytest.mark.asyncio
    async def test_fetches_targets_outside_batch(self):
        primitive = Variable(id="p1", name="palette/red", values_by_mode={"p": 1})
        deeper = Variable(id="p0", name="palette/base", values_by_mode={"p": 0})
        middle = Variable(id="p2", name="palette/alias", values_by_mode={"p": Alias("p0")})
        themed = [
            Variable(id="t1", name="color/brand", values_by_mode={M: Alias("p1")}),
            Variable(id="t2", name="color/other", values_by_mode={M: Alias("p2")}),
        ]
        source = InMemoryVariableSource([], [primitive, deeper, middle] + themed)
        lookup = await VariableSourceAdapter(source).fetch_alias_targets(themed)
        assert set(lookup) == {"t1", "t2", "p1", "p2", "p0"}

    @pytest.mark.asyncio
    async def test_unknown_targets_are_left_out(self):
        themed = [Variable(id="t1", name="color/brand", values_by_mode={M: Alias("gone")})]
        source = InMemoryVariableSource([], themed)
        lookup = await VariableSourceAdapter(source).fetch_alias_targets(themed)
        assert set(lookup) == {"t1"}
