"""
Controlador dos modos globais (métrica de distância e latência de controle)
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)


class SystemMode(str, Enum):
    """Seleciona a métrica de distância"""
    INDOOR = "INDOOR"    # plano (x, y)
    OUTDOOR = "OUTDOOR"  # geográfico (lat, lng)


class ControlMode(str, Enum):
    """Seleciona o multiplicador do tempo de reação"""
    HUMAN = "HUMAN"
    ADAS = "ADAS"
    AUTONOMOUS = "AUTONOMOUS"

    @property
    def reaction_multiplier(self) -> float:
        return _REACTION_MULTIPLIERS[self]


_REACTION_MULTIPLIERS = {
    ControlMode.HUMAN: 1.0,
    ControlMode.ADAS: 0.6,
    ControlMode.AUTONOMOUS: 0.3,
}


@dataclass(frozen=True)
class ModeSettings:
    """Par de modos lido de uma única escrita"""
    system_mode: SystemMode = SystemMode.INDOOR
    control_mode: ControlMode = ControlMode.HUMAN

    @property
    def reaction_multiplier(self) -> float:
        return self.control_mode.reaction_multiplier


def parse_system_mode(value: Union[str, SystemMode, None]) -> Optional[SystemMode]:
    """Converte texto (case-insensitive) em SystemMode; None se inválido"""
    return _parse(SystemMode, value)


def parse_control_mode(value: Union[str, ControlMode, None]) -> Optional[ControlMode]:
    """Converte texto (case-insensitive) em ControlMode; None se inválido"""
    return _parse(ControlMode, value)


def _parse(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip().upper())
    except ValueError:
        return None


class ModeController:
    """
    Guarda os modos do processo.

    O estado é um ModeSettings imutável trocado por referência, então um
    leitor sempre vê o valor anterior ou o novo, nunca uma mistura.
    Valores não reconhecidos são ignorados em silêncio (retornam False).
    """

    def __init__(
        self,
        system_mode: Union[str, SystemMode] = SystemMode.INDOOR,
        control_mode: Union[str, ControlMode] = ControlMode.HUMAN
    ):
        self._lock = threading.Lock()
        self._settings = ModeSettings(
            system_mode=parse_system_mode(system_mode) or SystemMode.INDOOR,
            control_mode=parse_control_mode(control_mode) or ControlMode.HUMAN
        )

    def set_system_mode(self, value: Union[str, SystemMode]) -> bool:
        mode = parse_system_mode(value)
        if mode is None:
            logger.debug("Ignoring unrecognized system mode %r", value)
            return False

        with self._lock:
            self._settings = ModeSettings(mode, self._settings.control_mode)
        logger.info("System mode set to %s", mode.value)
        return True

    def set_control_mode(self, value: Union[str, ControlMode]) -> bool:
        mode = parse_control_mode(value)
        if mode is None:
            logger.debug("Ignoring unrecognized control mode %r", value)
            return False

        with self._lock:
            self._settings = ModeSettings(self._settings.system_mode, mode)
        logger.info("Control mode set to %s", mode.value)
        return True

    def restore(self, previous: ModeSettings, expected: ModeSettings) -> bool:
        """Volta a `previous` se ninguém trocou os modos depois de `expected`"""
        with self._lock:
            if self._settings is not expected:
                return False
            self._settings = previous
        logger.info(
            "Modes restored to %s / %s",
            previous.system_mode.value,
            previous.control_mode.value
        )
        return True

    def settings(self) -> ModeSettings:
        return self._settings

    def current_system_mode(self) -> SystemMode:
        return self._settings.system_mode

    def current_control_mode(self) -> ControlMode:
        return self._settings.control_mode

    def reaction_time_multiplier(self) -> float:
        return self._settings.reaction_multiplier
