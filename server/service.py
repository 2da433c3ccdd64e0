"""
Serviço central: registro + modos + detecção + publicação
"""
import contextlib
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from core.base import AgentStore, CollisionEngine, WarningsSource
from core.config import SystemConfig
from core.errors import AgentValidationError, DetectionPreconditionError
from core.modes import ControlMode, ModeController, SystemMode
from core.registry import Agent, DeviceRegistry
from prediction.collision import CollisionDetector, CollisionWarning
from prediction.publisher import WarningsPublisher
from .schemas import AgentReport
from .simulation import DemoFleet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusSnapshot:
    """Resumo do estado do servidor"""
    system_mode: SystemMode
    control_mode: ControlMode
    agent_count: int
    active_warning_count: int

    def to_dict(self) -> Dict:
        return {
            "server": "running",
            "system_mode": self.system_mode.value,
            "control_mode": self.control_mode.value,
            "device_count": self.agent_count,
            "active_warnings": self.active_warning_count
        }


class CollisionService:
    """
    Fachada exposta à camada de transporte.

    Toda mutação (ingestão, troca de modo, reset, simulação) termina
    recalculando os alertas sobre o registro naquele instante. Leitores só
    leem o snapshot publicado e nunca disparam cálculo.

    Sem serialize_recompute, dois recálculos concorrentes podem observar um
    registro produzido pela mutação do outro: os alertas são eventualmente
    consistentes e podem refletir por um instante uma visão antiga.
    """

    def __init__(
        self,
        config: SystemConfig = None,
        registry: AgentStore = None,
        modes: ModeController = None,
        detector: CollisionEngine = None,
        publisher: WarningsSource = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            config: Configuração do sistema (usa defaults se None)
            registry, modes, detector, publisher: Componentes injetáveis
            clock: Relógio do registro (só usado se registry for None)
        """
        if config is None:
            config = SystemConfig()

        self.config = config
        self.registry = registry if registry is not None else DeviceRegistry(clock=clock)
        self.modes = modes if modes is not None else ModeController(
            system_mode=config.modes.system_mode,
            control_mode=config.modes.control_mode
        )
        self.detector = detector if detector is not None else CollisionDetector(config.physics)
        self.publisher = publisher if publisher is not None else WarningsPublisher()
        self.demo = DemoFleet(config.demo)

        if config.service.serialize_recompute:
            self._mutation_lock = threading.RLock()
        else:
            self._mutation_lock = None

    def _mutation(self):
        if self._mutation_lock is None:
            return contextlib.nullcontext()
        return self._mutation_lock

    # ─── Mutações ───

    def ingest_agent(self, raw_fields) -> Agent:
        """
        Valida e armazena um relatório, depois recalcula os alertas

        Returns:
            Agent aceito (com last_update_time do registro)

        Raises:
            AgentValidationError: relatório incompleto ou com tipo errado
            DetectionPreconditionError: agente armazenado inconsistente
        """
        report = self._validate(raw_fields)

        with self._mutation():
            previous = self.registry.get(report.id)
            agent = self.registry.upsert(report.id, report.model_dump())
            try:
                self.recompute()
            except DetectionPreconditionError:
                self.registry.restore(report.id, previous, agent)
                raise

        return agent

    def _validate(self, raw_fields) -> AgentReport:
        if not isinstance(raw_fields, Mapping):
            raise AgentValidationError("agent report must be a JSON object")

        try:
            report = AgentReport.model_validate(dict(raw_fields))
        except ValidationError as e:
            logger.info("Rejected agent report: %s", e.errors(include_url=False))
            raise AgentValidationError(_summarize(e), errors=e.errors(include_url=False)) from e

        # O detector exige as coordenadas do modo atual
        mode = self.modes.current_system_mode()
        if mode == SystemMode.INDOOR and not report.has_planar:
            raise AgentValidationError(f"agent '{report.id}' needs x/y in INDOOR mode")
        if mode == SystemMode.OUTDOOR and not report.has_geo:
            raise AgentValidationError(f"agent '{report.id}' needs lat/lng in OUTDOOR mode")

        return report

    def set_modes(
        self,
        system_mode: Optional[str] = None,
        control_mode: Optional[str] = None
    ) -> Tuple[SystemMode, ControlMode]:
        """
        Aplica os modos informados (valores inválidos são ignorados)

        Se a detecção falhar nos novos modos, os modos anteriores voltam.

        Returns:
            (system_mode, control_mode) em vigor após a chamada
        """
        with self._mutation():
            before = self.modes.settings()
            if system_mode is not None:
                self.modes.set_system_mode(system_mode)
            if control_mode is not None:
                self.modes.set_control_mode(control_mode)
            after = self.modes.settings()
            try:
                self.recompute()
            except DetectionPreconditionError:
                if after is not before:
                    self.modes.restore(before, after)
                raise

        settings = self.modes.settings()
        return settings.system_mode, settings.control_mode

    def reset_all(self) -> None:
        """Limpa registro e alertas"""
        with self._mutation():
            self.registry.remove_all()
            self.publisher.clear()

    def simulate(self, count: Optional[int] = None) -> List[Agent]:
        """Substitui o registro por uma frota de demonstração"""
        reports = self.demo.generate(count)

        with self._mutation():
            self.registry.remove_all()
            agents = [self.registry.upsert(report["id"], report) for report in reports]
            self.recompute()

        logger.info("Injected %d demo devices", len(agents))
        return agents

    def recompute(self) -> Mapping[str, CollisionWarning]:
        """
        Roda a detecção sobre o estado atual e publica o resultado

        Em caso de erro o snapshot anterior continua publicado.
        """
        settings = self.modes.settings()
        agents = self.registry.all_agents()

        try:
            warnings = self.detector.detect(
                agents,
                settings.system_mode,
                settings.reaction_multiplier
            )
        except DetectionPreconditionError as e:
            logger.error("Detection pass failed: %s", e)
            raise

        self.publisher.publish(warnings)
        return self.publisher.current()

    # ─── Leituras ───

    def list_agents(self) -> List[Agent]:
        return self.registry.all_agents()

    def current_warnings(self) -> Tuple[Mapping[str, CollisionWarning], int]:
        snapshot = self.publisher.current()
        return snapshot, len(snapshot)

    def warning_for(self, agent_id: str) -> Optional[CollisionWarning]:
        return self.publisher.current().get(agent_id)

    def status_snapshot(self) -> StatusSnapshot:
        settings = self.modes.settings()
        return StatusSnapshot(
            system_mode=settings.system_mode,
            control_mode=settings.control_mode,
            agent_count=len(self.registry.all_agents()),
            active_warning_count=len(self.publisher.current())
        )


def _summarize(error: ValidationError) -> str:
    """Mensagem curta a partir dos erros do pydantic"""
    parts = []
    for item in error.errors(include_url=False):
        location = ".".join(str(p) for p in item.get("loc", ())) or "body"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)
