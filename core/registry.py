"""
Registro concorrente do último estado de cada agente
"""
import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Agent:
    """Último estado reportado de um dispositivo"""
    id: str
    vehicle_type: str
    velocity: float
    x: Optional[float] = None
    y: Optional[float] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    last_update_time: float = 0.0

    @property
    def is_bike(self) -> bool:
        return self.vehicle_type == "BIKE"

    @property
    def planar_position(self) -> Tuple[Optional[float], Optional[float]]:
        return (self.x, self.y)

    @property
    def geo_position(self) -> Tuple[Optional[float], Optional[float]]:
        return (self.lat, self.lng)

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Agent":
        """Cria Agent a partir de campos crus (já validados)"""
        return cls(
            id=data["id"],
            vehicle_type=data["vehicle_type"],
            velocity=float(data["velocity"]),
            x=_optional_float(data.get("x")),
            y=_optional_float(data.get("y")),
            lat=_optional_float(data.get("lat")),
            lng=_optional_float(data.get("lng")),
        )

    def to_dict(self) -> Dict:
        """Formato de saída (timestamp em milissegundos)"""
        data = {
            "id": self.id,
            "vehicle_type": self.vehicle_type,
            "velocity": self.velocity,
        }
        for key in ("x", "y", "lat", "lng"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        data["timestamp"] = int(self.last_update_time * 1000)
        return data


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)


class DeviceRegistry:
    """
    Armazena no máximo um Agent por id (upsert com substituição total).

    Escritas são serializadas por um lock e publicam um novo dicionário
    (copy-on-write). Leitores pegam a referência atual sem lock, então
    all_agents() nunca bloqueia upserts e nunca vê um Agent incompleto.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Args:
            clock: Relógio usado para carimbar last_update_time
        """
        self._clock = clock
        self._write_lock = threading.Lock()
        self._agents: Dict[str, Agent] = {}

    def upsert(self, agent_id: str, agent_data: Union[Agent, Mapping]) -> Agent:
        """
        Substitui (ou cria) o agente. Timestamp do cliente é descartado.

        Returns:
            O Agent publicado
        """
        if isinstance(agent_data, Agent):
            agent = replace(agent_data, id=agent_id)
        else:
            agent = Agent.from_mapping({**agent_data, "id": agent_id})

        with self._write_lock:
            agent = replace(agent, last_update_time=self._clock())
            agents = dict(self._agents)
            agents[agent_id] = agent
            self._agents = agents

        logger.debug("Upserted agent %s", agent_id)
        return agent

    def restore(self, agent_id: str, previous: Optional[Agent], expected: Agent) -> bool:
        """
        Desfaz um upsert: volta à entrada anterior (ou remove se era nova).

        Só age se a entrada atual ainda for `expected`, para não apagar
        uma escrita concorrente mais recente.

        Returns:
            True se a entrada foi restaurada
        """
        with self._write_lock:
            if self._agents.get(agent_id) is not expected:
                return False
            agents = dict(self._agents)
            if previous is None:
                del agents[agent_id]
            else:
                agents[agent_id] = previous
            self._agents = agents

        logger.debug("Restored agent %s", agent_id)
        return True

    def get(self, agent_id: str) -> Optional[Agent]:
        return self._agents.get(agent_id)

    def all_agents(self) -> List[Agent]:
        """Snapshot no instante da chamada (ordem não significativa)"""
        return list(self._agents.values())

    def remove_all(self) -> None:
        with self._write_lock:
            self._agents = {}
        logger.info("Registry cleared")

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: str) -> bool:
        return agent_id in self._agents
