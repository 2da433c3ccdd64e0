"""
Configurações centralizadas do servidor de prevenção de colisões
"""
from dataclasses import dataclass, field
from typing import List, Literal, Optional


@dataclass
class PhysicsConfig:
    """Constantes físicas usadas pelo detector de colisão"""
    # Abaixo disso os dois agentes são considerados parados
    low_speed_threshold: float = 5.0

    # Multiplicado pelo modo de controle (HUMAN=1.0, ADAS=0.6, AUTONOMOUS=0.3)
    base_reaction_time: float = 1.0

    bike_deceleration: float = 6.0
    default_deceleration: float = 7.0

    # Aproximação linear de metros por grau (só vale em escala local)
    meters_per_degree: float = 111000.0

    rounding_digits: int = 2


@dataclass
class ModeDefaults:
    """Modos iniciais do processo"""
    system_mode: Literal["INDOOR", "OUTDOOR"] = "INDOOR"
    control_mode: Literal["HUMAN", "ADAS", "AUTONOMOUS"] = "HUMAN"


@dataclass
class ServiceConfig:
    """Configurações do serviço central"""
    # False: cada mutação recalcula sobre o estado do registro naquele momento
    # (consistência eventual). True: mutação + recálculo numa única seção crítica.
    serialize_recompute: bool = False


@dataclass
class DemoConfig:
    """Configurações da injeção de dados de demonstração"""
    device_count: int = 5
    seed: Optional[int] = None


@dataclass
class ServerConfig:
    """Configurações do servidor HTTP"""
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "info"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class ReporterConfig:
    """Configurações do cliente de telemetria"""
    base_url: str = "http://localhost:5000"
    interval: float = 1.0
    timeout: float = 5.0


@dataclass
class SystemConfig:
    """Configuração completa do sistema"""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    modes: ModeDefaults = field(default_factory=ModeDefaults)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    reporter: ReporterConfig = field(default_factory=ReporterConfig)

    enable_logging: bool = True
    log_file: str = "system.log"
