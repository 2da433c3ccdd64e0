"""
Interfaces base do servidor de prevenção de colisões
"""
from typing import Protocol, List, Mapping, Optional, Sequence, Union

from .modes import SystemMode
from .registry import Agent


class AgentStore(Protocol):
    """Interface para o registro de agentes"""

    def upsert(self, agent_id: str, agent_data: Union[Agent, Mapping]) -> Agent:
        """Substitui o estado do agente"""
        ...

    def get(self, agent_id: str) -> Optional[Agent]:
        """Retorna o agente ou None"""
        ...

    def restore(self, agent_id: str, previous: Optional[Agent], expected: Agent) -> bool:
        """Desfaz um upsert que ainda não foi sobrescrito"""
        ...

    def all_agents(self) -> List[Agent]:
        """Snapshot de todos os agentes"""
        ...

    def remove_all(self) -> None:
        """Remove todos os agentes"""
        ...


class CollisionEngine(Protocol):
    """Interface para detecção de risco entre pares"""

    def detect(
        self,
        agents: Sequence[Agent],
        system_mode: SystemMode,
        reaction_multiplier: float
    ) -> Mapping:
        """Calcula o conjunto de alertas"""
        ...


class WarningsSource(Protocol):
    """Interface para quem publica o conjunto de alertas"""

    def publish(self, snapshot: Mapping) -> None:
        """Troca o snapshot atual"""
        ...

    def current(self) -> Mapping:
        """Último snapshot publicado"""
        ...

    def clear(self) -> None:
        """Publica o conjunto vazio"""
        ...
