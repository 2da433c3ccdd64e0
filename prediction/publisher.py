"""
Publicador do último conjunto de alertas
"""
from types import MappingProxyType
from typing import Mapping

from .collision import CollisionWarning

EMPTY_WARNINGS: Mapping[str, CollisionWarning] = MappingProxyType({})


class WarningsPublisher:
    """
    Guarda o snapshot de alertas mais recente.

    publish() troca a referência de uma vez; o snapshot publicado é
    somente-leitura e nunca é alterado, então current() não precisa de lock.
    """

    def __init__(self):
        self._snapshot: Mapping[str, CollisionWarning] = EMPTY_WARNINGS

    def publish(self, snapshot: Mapping[str, CollisionWarning]) -> None:
        self._snapshot = MappingProxyType(dict(snapshot))

    def clear(self) -> None:
        self._snapshot = EMPTY_WARNINGS

    def current(self) -> Mapping[str, CollisionWarning]:
        return self._snapshot

    def count(self) -> int:
        return len(self._snapshot)
