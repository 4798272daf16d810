"""
Variable Source Adapter: the boundary with the host's variable store.

The host store is injected as a VariableSource. The adapter batches
lookups concurrently and turns every lookup failure into absence:

    - a variable id that resolves to None is dropped
    - a variable lookup that raises is logged and dropped
    - a failure of the whole batch yields an empty list

Nothing is cached; each call hits the source again.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from tokenexport.model import Alias, Variable, VariableCollection


logger = logging.getLogger(__name__)


class VariableSource(ABC):
    """
    Read-only host data source.

    Implementations must allow get_variable_by_id to be awaited
    concurrently.
    """

    @abstractmethod
    async def list_collections(self) -> List[VariableCollection]:
        ...

    @abstractmethod
    async def get_collection_by_id(self, collection_id: str) -> Optional[VariableCollection]:
        ...

    @abstractmethod
    async def get_variable_by_id(self, variable_id: str) -> Optional[Variable]:
        ...


def remap_collection(collection: VariableCollection) -> VariableCollection:
    """Detached copy of a collection snapshot."""
    return VariableCollection(
        id=collection.id,
        name=collection.name,
        default_mode_id=collection.default_mode_id,
        modes=list(collection.modes),
        variable_ids=list(collection.variable_ids),
    )


class VariableSourceAdapter:
    """Fetches collections and variables from a VariableSource."""

    def __init__(self, source: VariableSource):
        self.source = source

    async def list_collections(self) -> List[VariableCollection]:
        try:
            collections = await self.source.list_collections()
        except Exception:
            logger.exception("Failed to fetch variable collections")
            return []
        return [remap_collection(c) for c in collections]

    async def get_collection(self, collection_id: str) -> Optional[VariableCollection]:
        try:
            return await self.source.get_collection_by_id(collection_id)
        except Exception:
            logger.exception("Failed to fetch variable collection %s", collection_id)
            return None

    async def fetch_by_ids(self, variable_ids: Iterable[str]) -> List[Variable]:
        """
        Fetch variables concurrently, in id order, dropping absent ones.

        Waits until every lookup has settled before returning.
        """
        ids = list(variable_ids)
        try:
            results = await asyncio.gather(
                *(self.source.get_variable_by_id(variable_id) for variable_id in ids),
                return_exceptions=True,
            )
        except Exception:
            logger.exception("Error fetching tokens")
            return []

        variables: List[Variable] = []
        for variable_id, result in zip(ids, results):
            if isinstance(result, BaseException):
                logger.warning("Failed to fetch variable %s: %s", variable_id, result)
            elif result is None:
                logger.debug("Variable %s not found", variable_id)
            else:
                variables.append(result)
        return variables

    async def fetch_variables(self, collection: VariableCollection) -> List[Variable]:
        """Fetch every variable referenced by a collection."""
        return await self.fetch_by_ids(collection.variable_ids)

    async def fetch_alias_targets(self, variables: List[Variable]) -> Dict[str, Variable]:
        """
        Build an id -> Variable lookup that includes alias targets.

        Targets outside the given variables (other collections) are fetched
        batch by batch until no new ids turn up. Ids that cannot be fetched
        are left out; the resolver reports them.
        """
        lookup: Dict[str, Variable] = {v.id: v for v in variables}
        attempted = set(lookup)
        pending = _alias_ids(variables) - attempted

        while pending:
            attempted |= pending
            fetched = await self.fetch_by_ids(sorted(pending))
            for variable in fetched:
                lookup[variable.id] = variable
            pending = _alias_ids(fetched) - attempted

        return lookup


def _alias_ids(variables: Iterable[Variable]) -> set:
    return {
        value.id
        for variable in variables
        for value in variable.values_by_mode.values()
        if isinstance(value, Alias)
    }


__all__ = [
    "VariableSource",
    "VariableSourceAdapter",
    "remap_collection",
]
